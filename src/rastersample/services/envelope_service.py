# src/rastersample/services/envelope_service.py
from __future__ import annotations

from dataclasses import dataclass

import shapely
from shapely.geometry import Polygon, box

from ..ports.raster_coverage import RasterCoveragePort
from .crs_service import CRSService


@dataclass(frozen=True)
class EnvelopeService:
    """Envolvente del raster como polígono shapely con SRID (shapely.get_srid)."""
    crs: CRSService

    def envelope(self, raster: RasterCoveragePort) -> Polygon:
        srid = self.crs.srid(raster)
        minx, miny, maxx, maxy = raster.grid_geometry.envelope()
        # extensiones degeneradas producen un polígono de área cero, no un error
        return shapely.set_srid(box(minx, miny, maxx, maxy), srid)


__all__ = ["EnvelopeService"]

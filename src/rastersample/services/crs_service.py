# src/rastersample/services/crs_service.py
from __future__ import annotations

"""
Resolución de CRS -> SRID entero y re-etiquetado de rasters.

SRID 0 = sin sistema de referencia (espacio cartesiano de ingeniería).
Un código ausente en la autoridad NO es error: se normaliza a 0.
Las fallas de la autoridad (CRSResolutionError) se propagan tal cual.
"""

from dataclasses import dataclass

from ..contracts.geo import CRSRef
from ..ports.crs_authority import CRSAuthorityPort
from ..ports.raster_coverage import RasterCoveragePort

UNDEFINED_SRID = 0


@dataclass(frozen=True)
class CRSService:
    authority: CRSAuthorityPort
    lenient: bool = True

    def srid(self, raster: RasterCoveragePort) -> int:
        crs = raster.crs
        # CRS por defecto (raster sin CRS): no consultar a la autoridad
        if crs.is_wildcard():
            return UNDEFINED_SRID
        code = self.authority.lookup_epsg(crs, lenient=self.lenient)
        return int(code) if code is not None else UNDEFINED_SRID

    def crs_for_srid(self, srid: int) -> CRSRef:
        if srid == UNDEFINED_SRID:
            return CRSRef.cartesian()
        return self.authority.decode(srid)

    def set_srid(self, raster: RasterCoveragePort, srid: int) -> RasterCoveragePort:
        """Mismos píxeles y misma extensión; sólo cambia el CRS asociado."""
        return raster.with_crs(self.crs_for_srid(int(srid)))


__all__ = ["CRSService", "UNDEFINED_SRID"]

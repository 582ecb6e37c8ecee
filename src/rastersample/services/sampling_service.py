# src/rastersample/services/sampling_service.py
from __future__ import annotations

"""
Muestreo puntual de rasters (vecino más cercano, sin interpolación).

Semántica de fallas:
  • banda fuera de [1, num_bands]   -> lista de None (suave, se valida una vez)
  • punto None                      -> None para ese punto
  • geometría que no es punto       -> InvalidGeometryError (aborta el lote)
  • punto fuera de la grilla        -> None para ese punto
  • valor igual a un centinela      -> None para ese punto
  • falla de transformación         -> GridTransformError (aborta el lote)

La asimetría banda-inválida (None) vs geometría-inválida (error) es intencional:
sondear bandas es habitual; pasar una línea es siempre un bug del llamador.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from ..contracts.errors import InvalidGeometryError
from ..contracts.sampling import Found, OUT_OF_EXTENT, PixelLookup, is_nodata
from ..ports.grid_geometry import GridGeometryPort
from ..ports.raster_coverage import RasterCoveragePort


def ensure_point(geometry: BaseGeometry) -> Point:
    if isinstance(geometry, Point):
        return geometry
    raise InvalidGeometryError(
        "Se intentó obtener el valor de un píxel con una geometría "
        f"{getattr(geometry, 'geom_type', type(geometry).__name__)}; se requiere Point."
    )


@dataclass(frozen=True)
class PixelSamplingService:

    def num_bands(self, raster: RasterCoveragePort) -> int:
        return raster.num_bands

    def valid_band(self, raster: RasterCoveragePort, band: int) -> bool:
        return 1 <= band <= raster.num_bands

    # ---------- lectura por celda ----------
    @staticmethod
    def _lookup(raster: RasterCoveragePort, grid: GridGeometryPort, point: Point, band: int) -> PixelLookup:
        if point.is_empty or not (math.isfinite(point.x) and math.isfinite(point.y)):
            return OUT_OF_EXTENT
        col, row = grid.world_to_grid(point.x, point.y)
        if not grid.contains(col, row):
            return OUT_OF_EXTENT
        return Found(raster.read_pixel(col, row)[band - 1])

    def lookup(self, raster: RasterCoveragePort, point: BaseGeometry, band: int) -> PixelLookup:
        """Valor crudo (sin filtro no-data) en la celda del punto, u OutOfExtent.

        A diferencia de `values`, aquí la banda debe ser válida (ValueError si no).
        """
        if not self.valid_band(raster, band):
            raise ValueError(f"Banda {band} fuera de rango [1, {raster.num_bands}]")
        return self._lookup(raster, raster.grid_geometry, ensure_point(point), band)

    # ---------- API pública ----------
    def value(self, raster: RasterCoveragePort, point: Optional[BaseGeometry], band: int) -> Optional[float]:
        return self.values(raster, [point], band)[0]

    def values(
        self,
        raster: RasterCoveragePort,
        points: Iterable[Optional[BaseGeometry]],
        band: int,
    ) -> List[Optional[float]]:
        points = list(points)
        if not self.valid_band(raster, band):
            return [None] * len(points)

        grid = raster.grid_geometry
        sentinels = raster.nodata_values(band)

        out: List[Optional[float]] = []
        for geom in points:
            if geom is None:
                out.append(None)
                continue
            hit = self._lookup(raster, grid, ensure_point(geom), band)
            if isinstance(hit, Found) and not is_nodata(hit.value, sentinels):
                out.append(hit.value)
            else:
                out.append(None)
        return out


__all__ = ["PixelSamplingService", "ensure_point"]

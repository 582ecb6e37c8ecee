# src/rastersample/ports/raster_coverage.py
from __future__ import annotations

from typing import Protocol, runtime_checkable, Sequence, Tuple
from ..contracts.geo import CRSRef
from .grid_geometry import GridGeometryPort

@runtime_checkable
class RasterCoveragePort(Protocol):
    """
    Cobertura raster de sólo lectura consumida por los servicios.
    Bandas 1-based desde el punto de vista del llamador.
    """
    @property
    def crs(self) -> CRSRef: ...
    @property
    def num_bands(self) -> int: ...
    @property
    def grid_geometry(self) -> GridGeometryPort: ...

    def nodata_values(self, band: int) -> Tuple[float, ...]: ...
    def read_pixel(self, col: int, row: int) -> Sequence[float]: ...
    # mismo contenido y extensión, sólo cambia la etiqueta de CRS
    def with_crs(self, crs: CRSRef) -> "RasterCoveragePort": ...

__all__ = ["RasterCoveragePort"]

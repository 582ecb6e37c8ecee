# src/rastersample/ports/raster_read.py
from __future__ import annotations

from typing import Protocol, runtime_checkable
from ..contracts.geo import GeoRaster

URI = str

@runtime_checkable
class RasterReaderPort(Protocol):
    """
    Lector de raster genérico (GeoTIFF/COG, etc.).
    Reglas: read() devuelve GeoRaster con TODAS las bandas y no-data por banda.
    """
    def read(self, uri: URI) -> GeoRaster: ...

__all__ = ["RasterReaderPort", "URI"]

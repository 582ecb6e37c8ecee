# src/rastersample/ports/grid_geometry.py
from __future__ import annotations

from typing import Protocol, runtime_checkable, Tuple
from ..contracts.geo import Bounds

@runtime_checkable
class GridGeometryPort(Protocol):
    """
    Mapeo mundo -> grilla de un raster.
    Reglas:
      - world_to_grid() devuelve (col, row) enteros de la celda que contiene el punto;
        puede devolver celdas fuera de la grilla (no valida rangos).
      - contains() es el chequeo explícito de rango de píxeles.
      - Transformaciones mal definidas lanzan GridTransformError.
    """
    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]: ...
    def contains(self, col: int, row: int) -> bool: ...
    def envelope(self) -> Bounds: ...

__all__ = ["GridGeometryPort"]

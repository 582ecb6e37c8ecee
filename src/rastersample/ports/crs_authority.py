# src/rastersample/ports/crs_authority.py
from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable
from ..contracts.geo import CRSRef

@runtime_checkable
class CRSAuthorityPort(Protocol):
    """
    Servicio de autoridad de CRS (base EPSG).
    Reglas:
      - lookup_epsg() devuelve None si no hay código registrado (no es error).
      - decode() lanza CRSResolutionError si el código no existe.
      - Fallas del subsistema (base de datos ausente, WKT ilegible) -> CRSResolutionError.
    """
    def lookup_epsg(self, crs: CRSRef, *, lenient: bool = True) -> Optional[int]: ...
    def decode(self, code: int) -> CRSRef: ...

__all__ = ["CRSAuthorityPort"]

# src/rastersample/adapters/rasterio_crs_authority.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from rasterio.crs import CRS
from rasterio.errors import CRSError

from ..contracts.errors import CRSResolutionError
from ..contracts.geo import CRSRef
from ..ports.crs_authority import CRSAuthorityPort

logger = logging.getLogger(__name__)

STRICT_CONFIDENCE = 100


@dataclass(frozen=True)
class RasterioCRSAuthority(CRSAuthorityPort):
    """Autoridad EPSG sobre `rasterio.crs.CRS` (base PROJ).

    Modo leniente: acepta coincidencias con confianza >= `min_confidence`.
    Modo estricto: sólo coincidencias exactas (confianza 100).
    """
    min_confidence: int = 70

    def _to_rasterio(self, crs: CRSRef) -> CRS:
        try:
            if crs.wkt:
                return CRS.from_wkt(crs.wkt)
            return CRS.from_epsg(int(crs.epsg))  # type: ignore[arg-type]
        except CRSError as e:
            raise CRSResolutionError(f"CRS ilegible para la autoridad: {crs.to_wkt()[:80]}") from e

    def lookup_epsg(self, crs: CRSRef, *, lenient: bool = True) -> Optional[int]:
        if crs.wkt is None and crs.epsg is None:
            # ingeniería sin definición: no existe código registrado
            return None
        rcrs = self._to_rasterio(crs)
        threshold = self.min_confidence if lenient else STRICT_CONFIDENCE
        try:
            code = rcrs.to_epsg(confidence_threshold=threshold)
        except CRSError as e:
            raise CRSResolutionError("Falla consultando la base EPSG") from e
        logger.debug("lookup_epsg(lenient=%s, threshold=%d) -> %s", lenient, threshold, code)
        return int(code) if code is not None else None

    def decode(self, code: int) -> CRSRef:
        if int(code) <= 0:
            raise CRSResolutionError(f"Código EPSG inválido: {code}")
        try:
            rcrs = CRS.from_epsg(int(code))
            wkt = rcrs.to_wkt()
        except CRSError as e:
            raise CRSResolutionError(f"EPSG:{code} no se pudo resolver") from e
        return CRSRef(wkt=wkt, epsg=int(code))


__all__ = ["RasterioCRSAuthority", "STRICT_CONFIDENCE"]

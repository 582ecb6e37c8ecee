# src/rastersample/contracts/geo.py

from __future__ import annotations
import math
from dataclasses import dataclass, field, replace
from typing import Any, Literal, NamedTuple, Tuple, Optional

import numpy as np
import numpy.typing as npt

from .errors import GridTransformError

GeoTransform = Tuple[float, float, float, float, float, float]
DTypeStr = Literal["uint8","uint16","int16","uint32","int32","float32","float64"]

class Bounds(NamedTuple):
    minx: float; miny: float; maxx: float; maxy: float

# ---------- CRS (puro dominio, sin GDAL) ----------
@dataclass(frozen=True)
class CRSRef:
    """
    Referencia a un CRS.
    - `engineering`: CRS cartesiano sin referencia terrestre.
    - `wildcard`: marca el CRS "por defecto" asignado cuando el raster no trae
      ninguno (distinto de un cartesiano elegido a propósito).
    """
    wkt: Optional[str] = None
    epsg: Optional[int] = None
    engineering: bool = False
    wildcard: bool = False

    @staticmethod
    def from_epsg(code: int) -> "CRSRef":
        return CRSRef(epsg=int(code))

    @staticmethod
    def from_wkt(wkt: str) -> "CRSRef":
        return CRSRef(wkt=wkt)

    @staticmethod
    def undefined() -> "CRSRef":
        return CRSRef(engineering=True, wildcard=True)

    @staticmethod
    def cartesian() -> "CRSRef":
        return CRSRef(engineering=True)

    def is_wildcard(self) -> bool:
        return self.engineering and self.wildcard

    def to_wkt(self) -> str:
        """
        Devuelve una representación de texto del CRS.
        - Si hay WKT, retorna el WKT tal cual.
        - Si no hay WKT pero sí EPSG, retorna 'EPSG:<code>'.
        - Si es de ingeniería sin WKT, retorna 'ENGINEERING'.
        """
        if self.wkt:
            return self.wkt
        if self.epsg is not None:
            return f"EPSG:{int(self.epsg)}"
        if self.engineering:
            return "ENGINEERING"
        raise ValueError("CRSRef vacío: no hay WKT ni EPSG.")

# ---------- GeoTransform helpers (afines a GDAL pero sin dependencia) ----------
def geotransform_bounds(gt: GeoTransform, width: int, height: int) -> Bounds:
    corners = [pixel_to_world(c, r, gt) for c, r in ((0, 0), (width, 0), (0, height), (width, height))]
    xs = [x for x, _ in corners]
    ys = [y for _, y in corners]
    return Bounds(min(xs), min(ys), max(xs), max(ys))

def pixel_to_world(col: float, row: float, gt: GeoTransform) -> Tuple[float, float]:
    x0, px, rx, y0, ry, py = gt
    x = x0 + col * px + row * rx
    y = y0 + col * ry + row * py
    return x, y

def world_to_pixel(x: float, y: float, gt: GeoTransform) -> Tuple[float, float]:
    x0, px, rx, y0, ry, py = gt
    det = px * py - rx * ry
    # tolerancia relativa a la escala del píxel (rasters con celdas muy pequeñas son válidos)
    scale = max(abs(px), abs(rx)) * max(abs(ry), abs(py))
    if scale == 0.0 or abs(det) <= 1e-12 * scale:
        raise GridTransformError("GeoTransform no invertible (det≈0).")
    inv00 =  py / det; inv01 = -rx / det
    inv10 = -ry / det; inv11 =  px / det
    dx = x - x0; dy = y - y0
    col = inv00 * dx + inv01 * dy
    row = inv10 * dx + inv11 * dy
    return col, row

# ---------- Geometría de grilla ----------
@dataclass(frozen=True)
class AffineGridGeometry:
    """Mapeo mundo -> grilla para un geotransform estilo GDAL.

    `world_to_grid` redondea hacia la celda que contiene el punto (floor):
    el borde superior-izquierdo de cada celda es inclusivo.
    """
    transform: GeoTransform
    width: int
    height: int

    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]:
        col, row = world_to_pixel(x, y, self.transform)
        return int(math.floor(col)), int(math.floor(row))

    def contains(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def envelope(self) -> Bounds:
        return geotransform_bounds(self.transform, self.width, self.height)

# ---------- Perfil y Raster (puro dominio) ----------
@dataclass(frozen=True)
class GeoProfile:
    count: int
    dtype: DTypeStr
    width: int
    height: int
    transform: GeoTransform
    crs: CRSRef = field(default_factory=CRSRef.undefined)
    nodata: Optional[float] = None
    band_nodata: Tuple[Tuple[float, ...], ...] = ()

    def __post_init__(self):
        if self.band_nodata and len(self.band_nodata) != self.count:
            raise ValueError(
                f"band_nodata tiene {len(self.band_nodata)} entradas; se esperaban {self.count}"
            )

    def nodata_values(self, band: int) -> Tuple[float, ...]:
        """Centinelas no-data de la banda `band` (1-based)."""
        if self.band_nodata:
            return tuple(self.band_nodata[band - 1])
        if self.nodata is not None:
            return (float(self.nodata),)
        return ()

    def with_crs(self, crs: CRSRef) -> "GeoProfile":
        return replace(self, crs=crs)

@dataclass(frozen=True)
class GeoRaster:
    """Cobertura raster en memoria. Datos 2D (una banda) o 3D (bandas, filas, columnas)."""
    data: "npt.NDArray[Any]"  # type: ignore[valid-type]
    profile: GeoProfile

    def __post_init__(self):
        if self.data.ndim not in (2, 3):
            raise ValueError(f"Se esperaba array 2D o 3D; ndim={self.data.ndim}")
        if self.shape[-2:] != (self.profile.height, self.profile.width):
            raise ValueError(
                f"shape {self.shape} no coincide con perfil {self.profile.height}x{self.profile.width}"
            )
        bands = 1 if self.data.ndim == 2 else self.shape[0]
        if bands != self.profile.count:
            raise ValueError(f"count={self.profile.count} pero los datos traen {bands} bandas")
        # Bloquea mutaciones accidentales sobre los datos
        self.data.setflags(write=False)

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.data.shape  # type: ignore[no-any-return]

    # ---------- RasterCoveragePort ----------
    @property
    def crs(self) -> CRSRef:
        return self.profile.crs

    @property
    def num_bands(self) -> int:
        return self.profile.count

    @property
    def grid_geometry(self) -> AffineGridGeometry:
        return AffineGridGeometry(self.profile.transform, self.profile.width, self.profile.height)

    def nodata_values(self, band: int) -> Tuple[float, ...]:
        return self.profile.nodata_values(band)

    def read_pixel(self, col: int, row: int) -> Tuple[float, ...]:
        """Todas las bandas en (col, row) como float. IndexError fuera de la grilla."""
        if not (0 <= col < self.profile.width and 0 <= row < self.profile.height):
            raise IndexError(f"Celda ({col}, {row}) fuera de la grilla")
        stack = self.data[np.newaxis] if self.data.ndim == 2 else self.data
        return tuple(float(v) for v in stack[:, row, col])

    def with_crs(self, crs: CRSRef) -> "GeoRaster":
        return GeoRaster(self.data, self.profile.with_crs(crs))

def pretty_bounds(b: Bounds, ndigits: int = 3) -> str:
    return (f"Bounds(minx={b.minx:.{ndigits}f}, miny={b.miny:.{ndigits}f}, "
            f"maxx={b.maxx:.{ndigits}f}, maxy={b.maxy:.{ndigits}f})")

__all__ = [
    "GeoTransform","Bounds","CRSRef","GeoProfile","GeoRaster","AffineGridGeometry",
    "geotransform_bounds","pixel_to_world","world_to_pixel",
    "pretty_bounds","DTypeStr",
]

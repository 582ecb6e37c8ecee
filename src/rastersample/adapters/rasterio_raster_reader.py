# src/rastersample/adapters/rasterio_raster_reader.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import logging
import numpy as np

import rasterio
from rasterio.errors import CRSError
from rasterio.transform import Affine

from ..contracts.errors import CRSResolutionError
from ..contracts.geo import GeoRaster, GeoProfile, CRSRef, GeoTransform, DTypeStr
from ..ports.raster_read import RasterReaderPort

logger = logging.getLogger(__name__)

_DTYPE_MAP = {
    np.dtype("uint8"): "uint8",
    np.dtype("uint16"): "uint16",
    np.dtype("int16"): "int16",
    np.dtype("uint32"): "uint32",
    np.dtype("int32"): "int32",
    np.dtype("float32"): "float32",
    np.dtype("float64"): "float64",
}


def _np_to_dtype_str(dt: np.dtype) -> DTypeStr:
    try:
        return _DTYPE_MAP[np.dtype(dt)]  # type: ignore[return-value]
    except KeyError as e:  # pragma: no cover
        raise ValueError(f"dtype {dt} no soportado") from e


def _affine_to_gt(a: Affine) -> GeoTransform:
    return (a.c, a.a, a.b, a.f, a.d, a.e)


def _rasterio_crs_to_crsref(crs_obj) -> CRSRef:
    """rasterio CRS -> CRSRef. Sin CRS -> CRS indefinido (wildcard)."""
    if not crs_obj:
        return CRSRef.undefined()
    try:
        epsg = crs_obj.to_epsg(confidence_threshold=100)
        wkt = crs_obj.to_wkt()
    except CRSError as e:
        raise CRSResolutionError("CRS del raster no identificable en la base EPSG") from e
    return CRSRef(wkt=wkt, epsg=int(epsg) if epsg is not None else None)


def _band_nodata(nodatavals) -> Tuple[Tuple[float, ...], ...]:
    # rasterio reporta None por banda cuando no hay no-data declarado
    return tuple(() if v is None else (float(v),) for v in nodatavals)


@dataclass(frozen=True)
class RasterioRasterReader(RasterReaderPort):
    """Lector de raster sobre rasterio.

    Regla: `read()` devuelve un GeoRaster con todas las bandas en forma
    (bandas, filas, columnas) y los centinelas no-data de cada banda.
    """

    def _profile(self, ds) -> GeoProfile:
        dtype0 = np.dtype(ds.dtypes[0]) if ds.dtypes and ds.dtypes[0] else np.dtype("float32")
        return GeoProfile(
            count=ds.count,
            dtype=_np_to_dtype_str(dtype0),
            width=ds.width,
            height=ds.height,
            transform=_affine_to_gt(ds.transform),
            crs=_rasterio_crs_to_crsref(ds.crs),
            nodata=float(ds.nodata) if ds.nodata is not None else None,
            band_nodata=_band_nodata(ds.nodatavals),
        )

    # --------------- RasterReaderPort ---------------
    def read(self, uri: str) -> GeoRaster:
        logger.debug("Leyendo raster %s", uri)
        with rasterio.open(uri) as ds:
            arr = ds.read()
            return GeoRaster(arr, self._profile(ds))


__all__ = ["RasterioRasterReader"]

# tests/integration/adapters/test_rasterio_adapters.py
import re

import numpy as np
import pytest
from pathlib import Path

pytest.importorskip("rasterio")
from rasterio.crs import CRS
from rasterio.errors import CRSError
from shapely.geometry import Point

from rastersample.adapters.rasterio_crs_authority import RasterioCRSAuthority
from rastersample.adapters.rasterio_raster_reader import RasterioRasterReader, _rasterio_crs_to_crsref
from rastersample.contracts.errors import CRSResolutionError
from rastersample.contracts.geo import CRSRef
from rastersample.services.crs_service import CRSService
from rastersample.services.sampling_service import PixelSamplingService
from tests.factories import make_example_raster, write_tiny_tif

pytestmark = [pytest.mark.gdal, pytest.mark.integration]


def test_reader_profile_and_nodata(tmp_path: Path):
    path = write_tiny_tif(tmp_path / "tiny.tif", count=2)
    r = RasterioRasterReader().read(str(path))
    assert r.num_bands == 2
    assert r.profile.transform == (0.0, 1.0, 0.0, 10.0, 0.0, -1.0)
    assert r.nodata_values(1) == (-9999.0,)
    assert r.nodata_values(2) == (-9999.0,)
    assert r.crs.epsg == 32719


def test_reader_without_crs_is_undefined(tmp_path: Path):
    path = write_tiny_tif(tmp_path / "nocrs.tif", crs=None, nodata=None)
    r = RasterioRasterReader().read(str(path))
    assert r.crs.is_wildcard()
    assert r.nodata_values(1) == ()
    assert CRSService(RasterioCRSAuthority()).srid(r) == 0


def test_sampling_from_geotiff(tmp_path: Path):
    r = RasterioRasterReader().read(str(write_tiny_tif(tmp_path / "tiny.tif")))
    out = PixelSamplingService().values(r, [Point(0.5, 0.5), Point(5.5, 5.5), Point(100, 100)], 1)
    assert out == [5.0, None, None]


def test_authority_lookup_and_decode():
    auth = RasterioCRSAuthority()
    ref = auth.decode(4326)
    assert ref.epsg == 4326 and ref.wkt
    assert auth.lookup_epsg(CRSRef.from_wkt(ref.wkt)) == 4326
    assert auth.lookup_epsg(CRSRef.from_wkt(ref.wkt), lenient=False) == 4326
    assert auth.lookup_epsg(CRSRef.cartesian()) is None


def test_authority_decode_failures():
    auth = RasterioCRSAuthority()
    with pytest.raises(CRSResolutionError):
        auth.decode(0)
    with pytest.raises(CRSResolutionError):
        auth.decode(-4326)
    with pytest.raises(CRSResolutionError):
        auth.decode(999999)


def test_authority_unreadable_wkt():
    with pytest.raises(CRSResolutionError):
        RasterioCRSAuthority().lookup_epsg(CRSRef.from_wkt("NOT A CRS"))


def test_set_srid_roundtrip_with_rasterio(tmp_path: Path):
    svc = CRSService(RasterioCRSAuthority())
    r = RasterioRasterReader().read(str(write_tiny_tif(tmp_path / "tiny.tif")))
    assert svc.srid(r) == 32719
    r2 = svc.set_srid(r, 3857)
    assert svc.srid(r2) == 3857
    assert np.array_equal(r2.data, r.data)
    assert svc.srid(svc.set_srid(r, 0)) == 0


def _utm19s_wkt1() -> str:
    return CRS.from_epsg(32719).to_wkt(version="WKT1_GDAL")


def _strip_top_authority(wkt: str) -> str:
    # sólo el AUTHORITY final (el del PROJCS); los internos se conservan
    return wkt.rsplit(',AUTHORITY["EPSG","32719"]', 1)[0] + "]"


def test_equivalent_wkt_without_code_lenient_only():
    # mismos parámetros, otro nombre y sin código: equivalente (confianza 70)
    wkt = _strip_top_authority(_utm19s_wkt1()).replace(
        'PROJCS["WGS 84 / UTM zone 19S"', 'PROJCS["utm sur huso 19"', 1
    )
    ref = CRSRef.from_wkt(wkt)
    auth = RasterioCRSAuthority()
    assert auth.lookup_epsg(ref) == 32719
    assert auth.lookup_epsg(ref, lenient=False) is None
    r = make_example_raster(crs=ref)
    assert CRSService(auth).srid(r) == 32719
    assert CRSService(auth, lenient=False).srid(r) == 0


def test_lookalike_non_equivalent_crs_is_srid_zero():
    # mismo nombre, otro meridiano central y falso este: NO es EPSG:32719
    wkt = _strip_top_authority(_utm19s_wkt1())
    wkt = re.sub(r'PARAMETER\["central_meridian",[^\]]+\]', 'PARAMETER["central_meridian",0]', wkt)
    wkt = re.sub(r'PARAMETER\["false_easting",[^\]]+\]', 'PARAMETER["false_easting",0]', wkt)
    ref = CRSRef.from_wkt(wkt)
    assert RasterioCRSAuthority().lookup_epsg(ref) is None
    assert CRSService(RasterioCRSAuthority()).srid(make_example_raster(crs=ref)) == 0


def test_default_lenient_confidence_requires_equivalence():
    assert RasterioCRSAuthority().min_confidence == 70


def test_reader_wraps_crs_errors():
    class _BrokenCRS:
        def __bool__(self):
            return True

        def to_epsg(self, confidence_threshold=70):
            raise CRSError("proj.db inaccesible")

        def to_wkt(self):
            return "PROJCS[...]"

    with pytest.raises(CRSResolutionError):
        _rasterio_crs_to_crsref(_BrokenCRS())

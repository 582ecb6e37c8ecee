# src/rastersample/composition/di.py
from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Optional

import yaml

from ..adapters.rasterio_crs_authority import RasterioCRSAuthority
from ..adapters.rasterio_raster_reader import RasterioRasterReader
from ..config import Settings, get_settings
from ..ports.crs_authority import CRSAuthorityPort
from ..services.crs_service import CRSService
from ..services.envelope_service import EnvelopeService
from ..services.sampling_service import PixelSamplingService


class Services(NamedTuple):
    reader: RasterioRasterReader
    crs: CRSService
    envelope: EnvelopeService
    sampling: PixelSamplingService


def load_settings_from_yaml(path: Path) -> Settings:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return Settings(**data)


def build_settings(config_path: Optional[Path] = None) -> Settings:
    if config_path is None:
        return get_settings()
    return load_settings_from_yaml(config_path.expanduser().resolve())


def build_services(settings: Settings, authority: Optional[CRSAuthorityPort] = None) -> Services:
    if authority is None:
        authority = RasterioCRSAuthority(min_confidence=settings.epsg_min_confidence)
    crs = CRSService(authority=authority, lenient=settings.lenient_epsg_lookup)
    return Services(
        reader=RasterioRasterReader(),
        crs=crs,
        envelope=EnvelopeService(crs=crs),
        sampling=PixelSamplingService(),
    )

# src/rastersample/contracts/sampling.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Union


@dataclass(frozen=True)
class Found:
    """Valor leído en la celda (aún sin filtrar no-data)."""
    value: float


@dataclass(frozen=True)
class OutOfExtent:
    """El punto cae fuera de la grilla del raster."""


OUT_OF_EXTENT = OutOfExtent()

PixelLookup = Union[Found, OutOfExtent]


def same_sample(a: float, b: float) -> bool:
    """
    Igualdad exacta de doubles con orden total:
    NaN == NaN, 0.0 != -0.0, el resto por igualdad exacta (sin tolerancia).
    """
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)


def is_nodata(value: float, sentinels: Iterable[float]) -> bool:
    return any(same_sample(value, s) for s in sentinels)


__all__ = ["Found", "OutOfExtent", "OUT_OF_EXTENT", "PixelLookup", "same_sample", "is_nodata"]

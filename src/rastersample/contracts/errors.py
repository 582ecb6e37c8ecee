# src/rastersample/contracts/errors.py
from __future__ import annotations


class InvalidGeometryError(ValueError):
    """Geometría de tipo incorrecto para la operación (p.ej. línea donde se espera punto)."""


class CRSResolutionError(RuntimeError):
    """El servicio de autoridad no pudo resolver/consultar un CRS."""


class GridTransformError(RuntimeError):
    """Falla al transformar coordenadas de mundo a grilla."""


__all__ = ["InvalidGeometryError", "CRSResolutionError", "GridTransformError"]

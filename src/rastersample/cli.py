# src/rastersample/cli.py
from __future__ import annotations

"""
CLI de muestreo puntual de rasters.

Comandos:
  - srid: SRID normalizado del raster (0 = sin CRS).
  - num-bands: cantidad de bandas.
  - envelope: envolvente como WKT + SRID.
  - value: valores de una banda en una lista de puntos (JSON, null = sin dato).

Ejemplos rápidos:
  python -m rastersample.cli srid ./dem.tif
  python -m rastersample.cli value ./dem.tif --band 1 -p 350000,6300000 -p 351000,6301000
  python -m rastersample.cli value ./dem.tif --wkt "POINT (350000 6300000)"
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from shapely import wkt as shapely_wkt
from shapely.errors import ShapelyError
from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry
import shapely
from rasterio.errors import RasterioIOError

from .composition.di import Services, build_services, build_settings
from .contracts.errors import CRSResolutionError, GridTransformError, InvalidGeometryError
from .contracts.geo import pretty_bounds

logger = logging.getLogger(__name__)

# ----------------------
# Utilidades locales
# ----------------------

def _parse_point(item: str) -> Point:
    try:
        x, y = (float(v) for v in item.split(","))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Punto inválido '{item}'. Usa -p X,Y") from e
    return Point(x, y)


def _collect_geometries(args: argparse.Namespace) -> List[BaseGeometry]:
    geoms: List[BaseGeometry] = list(args.point or [])
    for text in args.wkt or []:
        try:
            geoms.append(shapely_wkt.loads(text))
        except ShapelyError as e:
            raise argparse.ArgumentTypeError(f"WKT inválido: {text}") from e
    if not geoms:
        raise argparse.ArgumentTypeError("Debes indicar al menos un punto con -p X,Y o --wkt")
    return geoms


# ----------------------
# Comandos
# ----------------------

def cmd_srid(svc: Services, args: argparse.Namespace) -> int:
    raster = svc.reader.read(str(args.raster))
    print(svc.crs.srid(raster))
    return 0


def cmd_num_bands(svc: Services, args: argparse.Namespace) -> int:
    raster = svc.reader.read(str(args.raster))
    print(svc.sampling.num_bands(raster))
    return 0


def cmd_envelope(svc: Services, args: argparse.Namespace) -> int:
    raster = svc.reader.read(str(args.raster))
    env = svc.envelope.envelope(raster)
    logger.debug("envelope %s", pretty_bounds(raster.grid_geometry.envelope()))
    print(json.dumps({"srid": int(shapely.get_srid(env)), "wkt": env.wkt}))
    return 0


def cmd_value(svc: Services, args: argparse.Namespace) -> int:
    raster = svc.reader.read(str(args.raster))
    geoms = _collect_geometries(args)
    out = svc.sampling.values(raster, geoms, args.band)
    print(json.dumps(out))
    return 0


def build_parser(default_band: int = 1) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rastersample", description="Muestreo puntual de rasters")
    p.add_argument("--config", type=Path, default=None, help="settings.yaml (opcional)")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("srid", help="SRID del raster (0 = indefinido)")
    s.add_argument("raster", type=Path)
    s.set_defaults(func=cmd_srid)

    s = sub.add_parser("num-bands", help="Cantidad de bandas")
    s.add_argument("raster", type=Path)
    s.set_defaults(func=cmd_num_bands)

    s = sub.add_parser("envelope", help="Envolvente como WKT")
    s.add_argument("raster", type=Path)
    s.set_defaults(func=cmd_envelope)

    s = sub.add_parser("value", help="Valores de banda en puntos")
    s.add_argument("raster", type=Path)
    s.add_argument("--band", "-b", type=int, default=default_band)
    s.add_argument("--point", "-p", type=_parse_point, action="append", help="X,Y (repetible)")
    s.add_argument("--wkt", action="append", help="Geometría WKT (repetible)")
    s.set_defaults(func=cmd_value)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    # pre-parse sólo para --config, así la banda por defecto sale de Settings
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=Path, default=None)
    known, _ = pre.parse_known_args(argv)
    settings = build_settings(known.config)

    logging.basicConfig(level=settings.log_level_no(), format="%(levelname)s %(name)s: %(message)s")

    parser = build_parser(default_band=settings.default_band)
    args = parser.parse_args(argv)
    svc = build_services(settings)
    try:
        return args.func(svc, args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except (InvalidGeometryError, CRSResolutionError, GridTransformError, RasterioIOError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

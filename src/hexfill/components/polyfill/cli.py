"""Command-line access to the polygon-to-hex pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import orjson

from hexfill.components.polyfill.pipeline import PolyfillConfig, compute_hexes, prepare_polygon
from hexfill.components.polyfill.settings import PolyfillSettings
from hexfill.core.errors import HexfillError
from hexfill.core.schemas import PolygonFormat, PolygonRequest, Viewport

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_LEVEL = logging.INFO

_EXIT_SUCCESS = 0
_EXIT_FAILURE = 1

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cover a WKT or GeoJSON polygon with H3 cells.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_input_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--format",
            choices=[fmt.value for fmt in PolygonFormat],
            default=PolygonFormat.WKT.value,
            help="Input format (default: wkt).",
        )
        source = p.add_mutually_exclusive_group(required=True)
        source.add_argument("--input", help="Polygon text.")
        source.add_argument("--file", type=Path, help="File holding the polygon text.")
        p.add_argument("--name", default="polygon", help="Name reported in messages.")
        p.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout.")

    prepare_parser = sub.add_parser("prepare", help="Print the canonical GeoJSON of a polygon.")
    add_input_args(prepare_parser)

    hexes_parser = sub.add_parser("hexes", help="Print {cell_id: boundary GeoJSON} for a polygon.")
    add_input_args(hexes_parser)
    hexes_parser.add_argument("--resolution", type=int, default=None, help="H3 resolution (0-15).")
    hexes_parser.add_argument(
        "--viewport",
        default=None,
        help="Clip to SW_LAT,SW_LNG,NE_LAT,NE_LNG before tiling.",
    )
    hexes_parser.add_argument("--max-cells", type=int, default=None, help="Cell ceiling override.")

    return parser.parse_args(argv)


def _parse_viewport(raw: str) -> Viewport:
    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError("--viewport expects SW_LAT,SW_LNG,NE_LAT,NE_LNG")
    try:
        sw_lat, sw_lng, ne_lat, ne_lng = (float(part) for part in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid viewport: {raw}") from exc
    return Viewport.from_corners(sw_lat, sw_lng, ne_lat, ne_lng)


def _read_polygon(args: argparse.Namespace) -> PolygonRequest:
    text = args.file.read_text(encoding="utf-8") if args.file else args.input
    return PolygonRequest(name=args.name, raw_input=text, source_format=PolygonFormat(args.format))


def _write(payload: object, output: Optional[Path]) -> None:
    data = orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    if output is None:
        sys.stdout.write(data.decode("utf-8") + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    logger.info("Wrote %s", output)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else _LOG_LEVEL, format=_LOG_FORMAT)

    try:
        polygon = _read_polygon(args)
        if args.command == "prepare":
            prepare_polygon(polygon)
            _write(orjson.loads(polygon.raw_geojson), args.output)
            return _EXIT_SUCCESS

        settings = PolyfillSettings()
        if args.max_cells is not None:
            settings = settings.model_copy(update={"max_cells": args.max_cells})
        resolution = args.resolution if args.resolution is not None else settings.default_resolution
        viewport = _parse_viewport(args.viewport) if args.viewport else None
        cells = compute_hexes(polygon, resolution, viewport, PolyfillConfig.from_settings(settings))
        _write(cells, args.output)
        return _EXIT_SUCCESS
    except (HexfillError, argparse.ArgumentTypeError, OSError, UnicodeDecodeError) as exc:
        print(str(exc), file=sys.stderr)
        return _EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())

"""Launch the hexfill HTTP service under uvicorn."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from hexfill.services.hexfill.app import create_app
from hexfill.services.hexfill.settings import HexfillServiceSettings

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_LEVELS = ("debug", "info", "warning", "error")

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve polygon-to-hex requests over HTTP.")
    parser.add_argument("--host", default=None, help="Bind address (default from HEXFILL_HOST).")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default from HEXFILL_PORT).")
    parser.add_argument("--max-cells", type=int, default=None, help="Cell ceiling for every request.")
    parser.add_argument("--log-level", choices=_LOG_LEVELS, default="info")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=_LOG_FORMAT)

    settings = HexfillServiceSettings()
    if args.host is not None:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port
    if args.max_cells is not None:
        settings.polyfill.max_cells = args.max_cells

    logger.info(
        "Starting hexfill service on %s:%d (max %d cells)",
        settings.host,
        settings.port,
        settings.polyfill.max_cells,
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=args.log_level)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Server startup script"""

import argparse
import uvicorn
import logging
import sys
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from config import Settings, get_settings, validate_settings
from main import create_app

logger = logging.getLogger(__name__)

def parse_args(argv=None, settings: Optional[Settings] = None) -> argparse.Namespace:
    settings = settings or get_settings()
    parser = argparse.ArgumentParser(
        prog="serveit",
        description="Serve a directory over HTTP (with directory listings)",
    )
    parser.add_argument(
        "-i", "--interface",
        default=settings.interface,
        help=f"Interface address to bind (default: {settings.interface}).",
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=settings.port,
        help=f"Port to bind (default: {settings.port}).",
    )
    parser.add_argument(
        "-d", "--dir",
        default=settings.root_dir,
        help="Directory to serve (default: current working directory).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["critical", "error", "warning", "info", "debug"],
        help=f"Logging level (default: {settings.log_level}).",
    )
    return parser.parse_args(argv)

def resolve_root(directory=None) -> str:
    """Canonical absolute path of the directory to serve; raises OSError if missing"""
    path = Path(directory).expanduser() if directory else Path(os.getcwd())
    return str(path.resolve(strict=True))

def main(argv=None):
    """Start the server"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    args = parse_args(argv, settings)
    logging.getLogger().setLevel(args.log_level.upper())

    try:
        root = resolve_root(args.dir)
    except OSError as e:
        logger.error(f"Cannot canonicalize dir: {e}")
        sys.exit(1)

    try:
        validate_settings(args.interface, args.port)
    except ValueError as e:
        logger.error(f"Invalid interface/port: {e}")
        sys.exit(1)

    logger.info(f"Serving: {root}")
    logger.info(f"Listening on: http://{args.interface}:{args.port}")

    try:
        uvicorn.run(create_app(root), host=args.interface, port=args.port, log_level=args.log_level)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception as e:
        logger.error(f"Server failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()

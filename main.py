#!/usr/bin/env python3
"""
Leadflow - lead intake and eligibility API for JV Overseas.

Main entry point for the application.
"""

import argparse
import asyncio
import sys

from loguru import logger

from leadflow.core.config import get_settings
from leadflow.core.logger import setup_structured_logging


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Leadflow lead intake API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Bind port (default: 5000)")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR); defaults to LOG_LEVEL",
    )
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Write plain text log files instead of JSON lines",
    )
    return parser.parse_args(argv)


async def run_server(host: str, port: int, log_level: str) -> None:
    """
    Run the API under uvicorn until interrupted.

    Args:
        host: Bind address
        port: Bind port
        log_level: Uvicorn log level
    """
    import uvicorn

    from web.app import create_app

    app = create_app()
    config = uvicorn.Config(app, host=host, port=port, log_level=log_level.lower())
    server = uvicorn.Server(config)
    await server.serve()


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    settings = get_settings()
    level = (args.log_level or settings.log_level).upper()

    setup_structured_logging(level=level, json_format=not args.plain_logs)
    logger.info(f"Starting Leadflow API on {args.host}:{args.port} (env={settings.env})")

    if not 1 <= args.port <= 65535:
        logger.error(f"Invalid port: {args.port}")
        return 2

    try:
        asyncio.run(run_server(args.host, args.port, level))
    except KeyboardInterrupt:
        logger.info("Leadflow API stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Author Analysis Web Server Entry Point

This script starts the web server using uvicorn.

Usage:
    python run.py

Or with custom host/port:
    python run.py --host 0.0.0.0 --port 8080

Defaults come from the environment (see config.py); SERVER_VARIANT=not_found
switches to the 404-fallback deployment on port 80.
"""

import sys
import argparse
import logging
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

import uvicorn

from config import Config

# Configure basic logging before importing app
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class AnnouncingServer(uvicorn.Server):
    """uvicorn server that logs 'Running' once its socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("Running")


def parse_args(argv=None):
    """
    Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Namespace with parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Author Analysis Web Server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--host",
        type=str,
        default=Config.HOST,
        help="Host to bind to"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=Config.PORT,
        help="Port to bind to"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=Config.LOG_LEVEL.lower(),
        choices=["debug", "info", "warning", "error", "critical"],
        help="Logging level"
    )

    return parser.parse_args(argv)


def build_server(args) -> AnnouncingServer:
    """Create the uvicorn server for the parsed arguments."""
    config = uvicorn.Config(
        "app.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        access_log=True
    )
    return AnnouncingServer(config)


def main(argv=None):
    """
    Main entry point for the application.
    """
    args = parse_args(argv)
    Config.display()

    logger.info("=" * 60)
    logger.info("Starting Author Analysis Server...")
    logger.info(f"Variant: {Config.SERVER_VARIANT}")
    logger.info(f"Host: {args.host}")
    logger.info(f"Port: {args.port}")
    logger.info(f"Log Level: {args.log_level}")
    logger.info("=" * 60)

    try:
        build_server(args).run()
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user")
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""CLI entry point for the scavenger hunt service."""

import argparse
import logging
import sys

import uvicorn
from pymongo.errors import PyMongoError

from scavenger_hunt.core.settings import get_settings
from scavenger_hunt.core.utils import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """
    Main CLI entry point.

        int: Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(
        description="Scavenger Hunt Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    server_parser = subparsers.add_parser("server", help="Start the API server")
    server_parser.add_argument("--host", default=None, help="Server host")
    server_parser.add_argument("--port", type=int, default=None, help="Server port")
    server_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    subparsers.add_parser("seed", help="Create indexes and seed default hunt data")

    args = parser.parse_args()

    if args.command == "server":
        return run_server(args)
    elif args.command == "seed":
        return run_seed(args)
    else:
        parser.print_help()
        return 0


def run_server(args: argparse.Namespace) -> int:
    """
    Run the API server.

    Args:
        args (argparse.Namespace): Parsed command line arguments.

        int: Exit code (0 for success).
    """
    settings = get_settings()

    host = args.host or settings.api_server.host
    port = args.port or settings.api_server.port

    uvicorn.run(
        app="scavenger_hunt.api.server:app",
        host=host,
        port=port,
        reload=args.reload,
        workers=None if args.reload else settings.api_server.workers,
    )
    return 0


def run_seed(args: argparse.Namespace) -> int:
    """
    Create indexes and insert the default components and QR codes.

    Args:
        args (argparse.Namespace): Parsed command line arguments.

        int: Exit code (0 for success, 1 if the database is unreachable).
    """
    from scavenger_hunt.api.dependencies import get_qr_service, get_verification_store
    from scavenger_hunt.core.database import close_database

    setup_logging(settings=get_settings().logging)

    try:
        qr_service = get_qr_service()
        qr_service.ensure_indexes()
        get_verification_store().ensure_indexes()
        qr_service.ensure_seeded()
    except PyMongoError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        close_database()

    logger.info("Default hunt data seeded")
    return 0


if __name__ == "__main__":
    sys.exit(main())

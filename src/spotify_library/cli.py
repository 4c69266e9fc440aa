"""
Spotify library CLI - check, save and remove tracks or albums.

Reads SPOTIFY_ACCESS_TOKEN (and optional SPOTIFY_* settings) from the
environment, optionally seeded from a .env file.
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .client import SpotifyLibraryClient
from .config import SpotifyConfig
from .context import RequestContext
from .exceptions import RequestCancelledError, SpotifyError
from .logger import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="python -m spotify_library",
        description="Manage the saved tracks and albums of a Spotify account",
        epilog="Example: python -m spotify_library has tracks 4iV5W9uYEdYUVa79Axb7Rh 1301WleyT98MSxVHPZCA6M",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "action",
        choices=["has", "add", "remove"],
        help="Check membership, save, or remove items",
    )

    parser.add_argument(
        "kind",
        choices=["tracks", "albums"],
        help="Type of library item",
    )

    parser.add_argument(
        "ids",
        nargs="+",
        metavar="ID",
        help="Spotify track or album IDs",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Abort the request after this many seconds",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        metavar="PATH",
        help="Load environment variables from this file (default: ./.env if present)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def run(client: SpotifyLibraryClient, action: str, kind: str, ids: List[str], ctx: RequestContext) -> int:
    """Dispatch one CLI action against the client and print the result."""
    if action == "has":
        check = client.user_has_tracks if kind == "tracks" else client.user_has_albums
        for item_id, saved in zip(ids, check(*ids, ctx=ctx)):
            print(f"{item_id}\t{'true' if saved else 'false'}")
    elif action == "add":
        add = client.add_tracks_to_library if kind == "tracks" else client.add_albums_to_library
        add(*ids, ctx=ctx)
    else:
        remove = client.remove_tracks_from_library if kind == "tracks" else client.remove_albums_from_library
        remove(*ids, ctx=ctx)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 = success, 1 = error, 2 = usage/config error, 130 = cancelled)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    load_dotenv(args.env_file or find_dotenv(usecwd=True))
    setup_logging()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = SpotifyConfig.from_environment()
    except (EnvironmentError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_USAGE

    if args.timeout is not None and args.timeout <= 0:
        logger.error("--timeout must be > 0")
        return EXIT_USAGE

    ctx = RequestContext.with_timeout(args.timeout) if args.timeout else RequestContext.background()

    try:
        with SpotifyLibraryClient(config) as client:
            return run(client, args.action, args.kind, args.ids, ctx)
    except KeyboardInterrupt:
        ctx.cancel()
        logger.warning("Interrupted")
        return EXIT_CANCELLED
    except RequestCancelledError as e:
        logger.warning(f"Request aborted: {e}")
        return EXIT_CANCELLED
    except SpotifyError as e:
        logger.error(str(e))
        return EXIT_ERROR
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())

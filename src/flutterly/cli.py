"""Command-line interface for flutterly.

Starts the server, or talks to a running one to check or configure the
bedrock token.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the flutterly CLI."""
    parser = argparse.ArgumentParser(
        prog="flutterly",
        description="Local split-view page server with bedrock token helpers",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/flutterly.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Start the HTTP server")
    subparsers.add_parser("check", help="Ask a running server whether bedrock is configured")
    configure_parser = subparsers.add_parser(
        "configure", help="Send a bedrock token to a running server",
    )
    configure_parser.add_argument("token", type=str, help="Bedrock token")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)


def _base_url(settings) -> str:
    return f"http://{settings.server.host}:{settings.server.port}"


async def _check(settings) -> int:
    from flutterly.client import ClientError, FlutterlyClient

    try:
        async with FlutterlyClient(base_url=_base_url(settings)) as client:
            configured, body = await client.check_bedrock()
    except ClientError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(body)
    return 0 if configured else 1


async def _configure(settings, token: str) -> int:
    from flutterly.client import ClientError, FlutterlyClient

    try:
        async with FlutterlyClient(base_url=_base_url(settings)) as client:
            ok, error = await client.configure_bedrock(token)
    except ClientError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    if not ok:
        print(f"error: {error}", file=sys.stderr)
        return 1
    print("Bedrock token configured")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the flutterly CLI."""
    args = parse_args(argv)

    if args.command is None:
        build_parser().print_help()
        return 0

    from flutterly.config.settings import load_settings
    from flutterly.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        from flutterly.server import main as serve

        serve(settings.server)
        return 0

    if args.command == "check":
        return asyncio.run(_check(settings))

    if args.command == "configure":
        return asyncio.run(_configure(settings, args.token))

    return 0


if __name__ == "__main__":
    sys.exit(main())

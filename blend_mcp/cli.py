"""Command-line interface for the lending pool MCP server."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .addresses import check_address
from .config import TRANSPORTS, AppConfig, load_config
from .errors import InvalidRequest
from .logging_setup import configure_logging
from .server import build_server, open_context
from .services import AccountHealthReader


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="blend-mcp",
        description="MCP server for an Aave-style lending pool",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    serve_parser = sub.add_parser("serve", help="Run the MCP server")
    serve_parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=None,
        help="MCP transport (overrides config)",
    )

    account_parser = sub.add_parser("account", help="Print an account's health snapshot")
    account_parser.add_argument("address", help="Account address (0x...)")

    return parser


async def _account(config: AppConfig, address: str) -> bool:
    try:
        check_address(address, "address", required=True)
    except InvalidRequest as e:
        print(f"Failed to read account status [{e.kind.value}]: {e}")
        return False

    async with open_context(config) as context:
        result = await AccountHealthReader(context).read(address)
    print(result.human_message)
    return result.success


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "serve":
        server = build_server(config)
        server.run(transport=args.transport or config.server.transport)
    elif args.command == "account":
        if not asyncio.run(_account(config, args.address)):
            sys.exit(1)

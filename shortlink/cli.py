#!/usr/bin/env python3
"""
Command-line interface for the short link service.

Usage:
    shortlink shorten <url>
    shortlink custom <url> <code>
    shortlink resolve <code>
    shortlink init-db
    shortlink health

Storage and cache settings come from the same environment variables as the
server (STORE_BACKEND, DATABASE_URL, DYNAMODB_TABLE, REDIS_URL, ...).
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from .config import Config, load_config
from .bootstrap import create_service
from .lib.common.logging_config import setup_logging
from .lib.errors import ShortLinkError


class ShortLinkCLI:
    """Command-line interface over LinkService."""

    def __init__(self, config: Config, verbose: bool = False):
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "ERROR")
        self.service = None

    async def initialize(self):
        self.service = await create_service(self.config, self.logger)

    async def cleanup(self):
        if self.service:
            await self.service.close()

    @staticmethod
    def _emit(payload: dict, ok: bool = True) -> int:
        print(json.dumps({"success": ok, **payload}, indent=2), file=sys.stdout if ok else sys.stderr)
        return 0 if ok else 1

    async def _run(self, operation, *args) -> Optional[str]:
        try:
            return await operation(*args)
        except ShortLinkError as e:
            self._emit({"error": e.message, "status_code": e.status_code}, ok=False)
            return None

    async def shorten(self, url: str) -> int:
        short_url = await self._run(self.service.create_short_link, url)
        if short_url is None:
            return 1
        return self._emit({"short_url": short_url})

    async def custom(self, url: str, code: str) -> int:
        short_url = await self._run(self.service.create_custom_short_link, url, code)
        if short_url is None:
            return 1
        return self._emit({"short_url": short_url})

    async def resolve(self, code: str) -> int:
        long_url = await self._run(self.service.resolve_short_link, code)
        if long_url is None:
            return 1
        return self._emit({"code": code, "long_url": long_url})

    async def init_db(self) -> int:
        await self.service.store.create_tables()
        return self._emit({"store": self.service.store.name, "message": "Tables ready"})

    async def health(self) -> int:
        health_status = await self.service.health_check()
        return self._emit({"health": health_status}, ok=health_status["overall"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortlink",
        description="Short link CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shorten https://example.com/long/url
  %(prog)s custom https://example.com/long/url mylink01
  %(prog)s resolve mylink01
  %(prog)s --backend postgres init-db
        """
    )

    parser.add_argument(
        "--backend",
        choices=["memory", "postgres", "dynamodb"],
        help="Override STORE_BACKEND"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL with a random code")
    shorten_parser.add_argument("url", help="URL to shorten")

    custom_parser = subparsers.add_parser("custom", help="Shorten a URL with a custom code")
    custom_parser.add_argument("url", help="URL to shorten")
    custom_parser.add_argument("code", help="Custom short code")

    resolve_parser = subparsers.add_parser("resolve", help="Look up the long URL for a code")
    resolve_parser.add_argument("code", help="Short code to resolve")

    subparsers.add_parser("init-db", help="Create the links table")
    subparsers.add_parser("health", help="Check store and cache health")

    return parser


async def run(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = load_config()
    if args.backend:
        config = config.model_copy(update={"store_backend": args.backend})

    cli = ShortLinkCLI(config, verbose=args.verbose)
    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "custom":
            return await cli.custom(args.url, args.code)
        elif args.command == "resolve":
            return await cli.resolve(args.code)
        elif args.command == "init-db":
            return await cli.init_db()
        elif args.command == "health":
            return await cli.health()
        parser.print_help()
        return 1
    finally:
        await cli.cleanup()


def main():
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()

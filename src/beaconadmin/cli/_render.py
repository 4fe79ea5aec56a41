"""``beacon-admin render`` — navigate once and print the page.

Configuration comes from ``BEACON_ADMIN_*`` environment variables. Alerts
raised by the navigation are written to stderr.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys

from beaconadmin.config import AdminConfig
from beaconadmin.console import Console
from beaconadmin.errors import ConfigurationError
from beaconadmin.routing import NavigationResult, NavigationStatus


def _stderr_notifier(message: str) -> None:
    print(message, file=sys.stderr)


def configure_logging(config: AdminConfig) -> None:
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def render(config: AdminConfig, location: str) -> tuple[NavigationResult, str]:
    """Render *location* and return the result with the committed page."""
    async with Console(config, notifier=_stderr_notifier) as console:
        result = await console.navigate(location)
        return result, console.display.content


def run_render(args: argparse.Namespace) -> None:
    try:
        config = AdminConfig.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    if args.api_url:
        config = dataclasses.replace(config, api_url=args.api_url)

    configure_logging(config)
    result, content = asyncio.run(render(config, args.location))

    if result.status is NavigationStatus.FAILED:
        raise SystemExit(1)
    print(content)
    if result.status is NavigationStatus.NOT_FOUND and args.strict:
        raise SystemExit(1)

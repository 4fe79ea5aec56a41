"""Beacon Admin CLI — inspect the route table and render console pages.

Entry point registered as ``beacon-admin`` in ``pyproject.toml``::

    [project.scripts]
    beacon-admin = "beaconadmin.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``beacon-admin`` command."""
    parser = argparse.ArgumentParser(
        prog="beacon-admin",
        description="Beacon Admin — mail server administration console.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- beacon-admin routes ------------------------------------------------
    subparsers.add_parser("routes", help="List console locations and their views")

    # -- beacon-admin render ------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render one location to stdout")
    render_parser.add_argument("location", help="Console location (e.g. '#accounts')")
    render_parser.add_argument("--api-url", default=None, help="Admin API base URL")
    render_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when the location matches no view",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from beaconadmin.cli._routes import run_routes

        run_routes(args)
    elif args.command == "render":
        from beaconadmin.cli._render import run_render

        run_render(args)

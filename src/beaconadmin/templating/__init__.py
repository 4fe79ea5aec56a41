"""Templating — kida environment and filters for console pages."""

from beaconadmin.templating.filters import BUILTIN_FILTERS
from beaconadmin.templating.integration import create_environment, render_page

__all__ = ["BUILTIN_FILTERS", "create_environment", "render_page"]

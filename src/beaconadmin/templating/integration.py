"""Kida environment setup.

Creates a kida Environment over the console's page templates and binds
the built-in filters. The environment is created once per console and
shared by every view.
"""

from collections.abc import Callable, Mapping
from typing import Any

from kida import DictLoader, Environment

from beaconadmin.config import AdminConfig
from beaconadmin.templating.filters import BUILTIN_FILTERS
from beaconadmin.templating.pages import TEMPLATES


def create_environment(
    config: AdminConfig,
    filters: Mapping[str, Callable[..., Any]] | None = None,
    templates: Mapping[str, str] | None = None,
) -> Environment:
    """Create a kida Environment for rendering console pages.

    *templates* overrides or adds page sources by name.
    """
    sources = dict(TEMPLATES)
    if templates:
        sources.update(templates)

    env = Environment(loader=DictLoader(sources), autoescape=True)
    env.update_filters(BUILTIN_FILTERS)
    if filters:
        env.update_filters(dict(filters))
    env.add_global("title", config.title)
    return env


def render_page(env: Environment, name: str, **context: Any) -> str:
    """Render page template *name* to a string."""
    template = env.get_template(name)
    return template.render(context)

"""Page building blocks shared by all views."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from kida import Environment

from beaconadmin.config import AdminConfig
from beaconadmin.reports.table import DisplayRow
from beaconadmin.rpc.client import AdminClient
from beaconadmin.templating.integration import render_page


@dataclass(frozen=True, slots=True)
class Link:
    text: str
    href: str = ""
    note: str = ""


@dataclass(frozen=True, slots=True)
class HeaderGroup:
    label: str
    span: int


@dataclass(frozen=True, slots=True)
class Section:
    """A block of a page. Set ``headers`` to get a table of ``rows``."""

    heading: str = ""
    paragraphs: tuple[str, ...] = ()
    warning: str = ""
    links: tuple[Link, ...] = ()
    header_groups: tuple[HeaderGroup, ...] = ()
    headers: tuple[str, ...] = ()
    rows: tuple[DisplayRow, ...] = ()
    empty: str = ""
    literal: str = ""


@dataclass(frozen=True, slots=True)
class ViewContext:
    """What every view needs: the API client, templates and config."""

    client: AdminClient
    env: Environment
    config: AdminConfig

    def home(self) -> Link:
        return Link(self.config.title, "#")

    def report_window(self) -> tuple[datetime, datetime]:
        """Start and end of the period report views look at."""
        end = datetime.now(UTC)
        return end - timedelta(days=self.config.report_days), end

    def render(self, crumbs: Sequence[Link], *sections: Section, **extra: Any) -> str:
        return render_page(
            self.env,
            "page.html",
            crumbs=list(crumbs),
            sections=list(sections),
            **extra,
        )

"""Route, matcher variants and RouteMatch frozen dataclasses."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from beaconadmin.routing.params import parse_positive_int

Handler = Callable[..., Awaitable[str]]


@dataclass(frozen=True, slots=True)
class Literal:
    """Segment must equal ``value`` exactly: ``domains``."""

    value: str

    def accepts(self, segment: str) -> bool:
        return segment == self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Integer:
    """Segment must be a positive decimal integer, bound as ``int``: ``{id:int}``."""

    name: str

    def accepts(self, segment: str) -> bool:
        return parse_positive_int(segment) is not None

    def __str__(self) -> str:
        return f"{{{self.name}:int}}"


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Any non-empty segment, bound as ``str``: ``{domain}``."""

    name: str

    def accepts(self, segment: str) -> bool:
        return segment != ""

    def __str__(self) -> str:
        return f"{{{self.name}}}"


Matcher = Literal | Integer | Wildcard


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created while the console is set up, compiled into the router before
    the first navigation.
    """

    matchers: tuple[Matcher, ...]
    handler: Handler
    name: str | None = None

    @property
    def pattern(self) -> str:
        return "/".join(str(m) for m in self.matchers)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, Any]

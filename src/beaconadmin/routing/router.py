"""Ordered router over ``/``-separated locations.

Routes are registered during setup and frozen with ``compile()`` before
the first navigation. Matching walks the routes in declaration order and
the first full match wins; routes that could both match one location are
rejected when added.
"""

from urllib.parse import unquote

from beaconadmin.errors import ConfigurationError, RouteNotFound
from beaconadmin.routing.params import CONVERTERS, convert_segment, parse_positive_int
from beaconadmin.routing.route import Integer, Literal, Matcher, Route, RouteMatch, Wildcard

LOCATION_MARKER = "#"


def parse_pattern(pattern: str) -> tuple[Matcher, ...]:
    """Parse a route pattern into matchers.

    Examples::

        ""                                    -> ()
        "accounts"                            -> (Literal("accounts"),)
        "accounts/{name}"                     -> (Literal("accounts"), Wildcard("name"))
        "domains/{domain}/dmarc/{id:int}"     -> (..., Literal("dmarc"), Integer("id"))
    """
    pattern = pattern.lstrip(LOCATION_MARKER)
    if pattern == "":
        return ()

    matchers: list[Matcher] = []
    for part in pattern.split("/"):
        if not part:
            msg = f"Route pattern {pattern!r} has an empty segment."
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            name, _, converter = inner.partition(":")
            converter = converter or "str"
            if not name.isidentifier():
                msg = f"Route pattern {pattern!r}: {part!r} needs an identifier name."
                raise ConfigurationError(msg)
            if converter not in CONVERTERS:
                msg = (
                    f"Route pattern {pattern!r}: unknown converter {converter!r}. "
                    f"Use one of: {', '.join(sorted(CONVERTERS))}."
                )
                raise ConfigurationError(msg)
            matchers.append(Integer(name) if converter == "int" else Wildcard(name))
        elif "{" in part or "}" in part:
            msg = f"Route pattern {pattern!r}: malformed parameter {part!r}."
            raise ConfigurationError(msg)
        else:
            matchers.append(Literal(part))
    return tuple(matchers)


def split_location(location: str) -> list[str]:
    """Decode a location and split it into segments.

    ``"#domains/example.org/dmarc"`` -> ``["domains", "example.org", "dmarc"]``.
    The empty location (with or without the marker) gives ``[]``.
    """
    path = unquote(location)
    if path.startswith(LOCATION_MARKER):
        path = path[1:]
    if path == "":
        return []
    return path.split("/")


def _overlaps(a: Matcher, b: Matcher) -> bool:
    """Whether some segment is accepted by both matchers."""
    if isinstance(a, Wildcard) or isinstance(b, Wildcard):
        return True
    if isinstance(a, Literal) and isinstance(b, Literal):
        return a.value == b.value
    if isinstance(a, Literal):
        return parse_positive_int(a.value) is not None
    if isinstance(b, Literal):
        return parse_positive_int(b.value) is not None
    return True


def ambiguous(a: tuple[Matcher, ...], b: tuple[Matcher, ...]) -> bool:
    """Whether one location could match both matcher sequences."""
    if len(a) != len(b):
        return False
    return all(_overlaps(x, y) for x, y in zip(a, b, strict=True))


def _bind(route: Route, segments: list[str]) -> dict[str, str | int] | None:
    if len(route.matchers) != len(segments):
        return None
    params: dict[str, str | int] = {}
    for matcher, segment in zip(route.matchers, segments, strict=True):
        if not matcher.accepts(segment):
            return None
        if isinstance(matcher, Integer):
            params[matcher.name] = convert_segment(segment, "int")
        elif isinstance(matcher, Wildcard):
            params[matcher.name] = segment
    return params


class Router:
    """Ordered route table with a pure matching function.

    Usage::

        router = Router()
        router.add(Route(parse_pattern("accounts"), accounts))
        router.add(Route(parse_pattern("accounts/{name}"), account))
        router.compile()
        match = router.match("#accounts/admin")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile().

        Raises ``ConfigurationError`` if the route is ambiguous with one
        already registered.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        for existing in self._routes:
            if ambiguous(existing.matchers, route.matchers):
                msg = (
                    f"Route {route.pattern!r} is ambiguous with "
                    f"{existing.pattern!r}: some location matches both."
                )
                raise ConfigurationError(msg)
        self._routes.append(route)

    @property
    def routes(self) -> list[Route]:
        """All registered routes in declaration order."""
        return list(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, location: str) -> RouteMatch:
        """Match a location against the route table.

        Returns a ``RouteMatch`` on success.
        Raises ``RouteNotFound`` if no route matches.
        """
        segments = split_location(location)
        for route in self._routes:
            params = _bind(route, segments)
            if params is not None:
                return RouteMatch(route=route, params=params)
        raise RouteNotFound(location)

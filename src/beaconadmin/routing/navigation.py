"""Single-flight navigation.

Exactly one navigation is current: the one started last. Handlers await
the admin API, and another navigation may start meanwhile. When a handler
finishes, its result is committed only if its location is still current;
otherwise it is dropped. Last started wins at commit time, not last
completed. Superseded requests are not cancelled, they run to completion
and their result is discarded.
"""

import enum
import logging
from dataclasses import dataclass

from beaconadmin.display import Display
from beaconadmin.errors import AdminError, RouteNotFound
from beaconadmin.routing.route import RouteMatch
from beaconadmin.routing.router import Router

logger = logging.getLogger("beaconadmin.routing")

NOT_FOUND_PAGE = "<p>page not found</p>"


class NavigationStatus(enum.Enum):
    SKIPPED = "skipped"
    COMMITTED = "committed"
    NOT_FOUND = "not_found"
    SUPERSEDED = "superseded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Rendered:
    """A handler finished with page content."""

    content: str


@dataclass(frozen=True, slots=True)
class Failed:
    """A handler raised while fetching or rendering."""

    error: AdminError


Outcome = Rendered | Failed


@dataclass(frozen=True, slots=True)
class NavigationResult:
    location: str
    status: NavigationStatus
    error: AdminError | None = None

    @property
    def committed(self) -> bool:
        return self.status in (NavigationStatus.COMMITTED, NavigationStatus.NOT_FOUND)


async def invoke(match: RouteMatch) -> Outcome:
    """Run a matched handler and capture its outcome."""
    try:
        content = await match.route.handler(**match.params)
    except AdminError as exc:
        return Failed(exc)
    return Rendered(content)


class Navigator:
    """Owns the current-location marker and commits results to a Display.

    Usage::

        navigator = Navigator(router, display)
        await navigator.navigate("#accounts")
    """

    __slots__ = ("_current", "_display", "_not_found_page", "_router")

    def __init__(
        self,
        router: Router,
        display: Display,
        *,
        not_found_page: str = NOT_FOUND_PAGE,
    ) -> None:
        if not router.compiled:
            router.compile()
        self._router = router
        self._display = display
        self._not_found_page = not_found_page
        self._current: str | None = None

    @property
    def current(self) -> str | None:
        """Location of the navigation started last, committed or not."""
        return self._current

    @property
    def display(self) -> Display:
        return self._display

    def reset(self) -> None:
        """Forget the current location so the next navigation always runs."""
        self._current = None

    async def navigate(self, location: str) -> NavigationResult:
        """Navigate to *location*, committing its page if still current when done."""
        if location == self._current:
            logger.debug("navigate %r: already current", location)
            return NavigationResult(location, NavigationStatus.SKIPPED)

        self._current = location
        self._display.loading = True
        logger.debug("navigate %r: started", location)

        try:
            match = self._router.match(location)
        except RouteNotFound:
            self._display.commit(location, self._not_found_page)
            return NavigationResult(location, NavigationStatus.NOT_FOUND)

        try:
            outcome = await invoke(match)
        except Exception:
            # Clear the marker so the same location can be navigated to again.
            if self._current == location:
                self._current = None
                self._display.loading = False
            logger.exception("navigate %r: handler raised", location)
            raise

        if self._current != location:
            logger.debug(
                "navigate %r: superseded by %r, result dropped", location, self._current
            )
            return NavigationResult(location, NavigationStatus.SUPERSEDED)

        if isinstance(outcome, Failed):
            self._display.alert(f"Error: {outcome.error}")
            return NavigationResult(location, NavigationStatus.FAILED, outcome.error)

        self._display.commit(location, outcome.content)
        logger.debug("navigate %r: committed", location)
        return NavigationResult(location, NavigationStatus.COMMITTED)

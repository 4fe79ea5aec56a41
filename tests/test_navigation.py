"""Tests for beaconadmin.routing.navigation — single-flight navigation."""

import asyncio
from collections.abc import Awaitable, Callable

import pytest

from beaconadmin.display import Display
from beaconadmin.errors import DecodeError, RpcFailure
from beaconadmin.routing import NavigationStatus, Navigator, Route, Router, parse_pattern
from beaconadmin.routing.navigation import NOT_FOUND_PAGE, Failed, Rendered, invoke


def _navigator(
    *routes: tuple[str, Callable[..., Awaitable[str]]],
    display: Display | None = None,
) -> Navigator:
    router = Router()
    for pattern, handler in routes:
        router.add(Route(parse_pattern(pattern), handler))
    return Navigator(router, display or Display())


class Gate:
    """A handler that blocks until released, counting its calls."""

    def __init__(self, content: str, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls = 0
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self, **params: object) -> str:
        self.calls += 1
        self.started.set()
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.content


def _page(content: str) -> Callable[..., Awaitable[str]]:
    async def handler(**params: object) -> str:
        return content

    return handler


class TestCommit:
    async def test_commits_page(self) -> None:
        nav = _navigator(("accounts", _page("<p>accounts</p>")))
        result = await nav.navigate("#accounts")
        assert result.status is NavigationStatus.COMMITTED
        assert result.committed
        assert nav.display.content == "<p>accounts</p>"
        assert nav.display.location == "#accounts"
        assert nav.display.loading is False

    async def test_params_passed_to_handler(self) -> None:
        seen: dict[str, object] = {}

        async def report(**params: object) -> str:
            seen.update(params)
            return "report"

        nav = _navigator(("domains/{domain}/dmarc/{report_id:int}", report))
        await nav.navigate("#domains/example.org/dmarc/4")
        assert seen == {"domain": "example.org", "report_id": 4}

    async def test_loading_while_in_flight(self) -> None:
        gate = Gate("slow")
        nav = _navigator(("slow", gate))
        task = asyncio.create_task(nav.navigate("#slow"))
        await gate.started.wait()
        assert nav.current == "#slow"
        assert nav.display.loading is True
        gate.release.set()
        await task
        assert nav.display.loading is False

    async def test_compiles_router(self) -> None:
        router = Router()
        router.add(Route(parse_pattern("x"), _page("x")))
        Navigator(router, Display())
        assert router.compiled


class TestSingleFlight:
    async def test_same_location_fetches_once(self) -> None:
        calls = 0

        async def accounts(**params: object) -> str:
            nonlocal calls
            calls += 1
            return "accounts"

        nav = _navigator(("accounts", accounts))
        first = await nav.navigate("#accounts")
        second = await nav.navigate("#accounts")
        assert first.status is NavigationStatus.COMMITTED
        assert second.status is NavigationStatus.SKIPPED
        assert calls == 1

    async def test_same_location_while_in_flight(self) -> None:
        gate = Gate("slow")
        nav = _navigator(("slow", gate))
        task = asyncio.create_task(nav.navigate("#slow"))
        await gate.started.wait()
        again = await nav.navigate("#slow")
        gate.release.set()
        first = await task
        assert again.status is NavigationStatus.SKIPPED
        assert first.status is NavigationStatus.COMMITTED
        assert gate.calls == 1

    async def test_slow_then_fast(self) -> None:
        slow = Gate("A")
        nav = _navigator(("a", slow), ("b", _page("B")))
        task_a = asyncio.create_task(nav.navigate("#a"))
        await slow.started.wait()

        result_b = await nav.navigate("#b")
        assert result_b.status is NavigationStatus.COMMITTED
        assert nav.display.content == "B"

        slow.release.set()
        result_a = await task_a
        assert result_a.status is NavigationStatus.SUPERSEDED
        assert nav.display.content == "B"
        assert nav.display.location == "#b"
        assert nav.current == "#b"

    async def test_last_started_wins_even_if_it_finishes_first(self) -> None:
        a, b = Gate("A"), Gate("B")
        nav = _navigator(("a", a), ("b", b))
        task_a = asyncio.create_task(nav.navigate("#a"))
        await a.started.wait()
        task_b = asyncio.create_task(nav.navigate("#b"))
        await b.started.wait()

        b.release.set()
        assert (await task_b).status is NavigationStatus.COMMITTED
        a.release.set()
        assert (await task_a).status is NavigationStatus.SUPERSEDED
        assert nav.display.content == "B"

    async def test_location_compared_by_value(self) -> None:
        # a (slow, run 1) -> b -> a (run 2): run 1 finishing last matches
        # the current location again, so its page is committed too.
        first_a = Gate("A1")
        calls = {"n": 0}

        async def a(**params: object) -> str:
            calls["n"] += 1
            if calls["n"] == 1:
                return await first_a()
            return "A2"

        nav = _navigator(("a", a), ("b", _page("B")))
        task = asyncio.create_task(nav.navigate("#a"))
        await first_a.started.wait()
        await nav.navigate("#b")
        assert (await nav.navigate("#a")).status is NavigationStatus.COMMITTED
        assert nav.display.content == "A2"
        first_a.release.set()
        assert (await task).status is NavigationStatus.COMMITTED
        assert nav.display.content == "A1"


class TestFailure:
    async def test_failure_alerts_and_keeps_content(self) -> None:
        async def broken(**params: object) -> str:
            raise RpcFailure("Accounts", "server:error", "boom")

        alerts: list[str] = []
        nav = _navigator(("ok", _page("OK")), ("broken", broken), display=Display(alerts.append))
        await nav.navigate("#ok")

        result = await nav.navigate("#broken")
        assert result.status is NavigationStatus.FAILED
        assert isinstance(result.error, RpcFailure)
        assert alerts == ["Error: Accounts: boom"]
        assert nav.display.alerts == alerts
        assert nav.display.content == "OK"
        assert nav.display.location == "#ok"
        assert nav.display.loading is False

    async def test_failed_location_stays_current(self) -> None:
        async def broken(**params: object) -> str:
            raise DecodeError("bad address")

        nav = _navigator(("broken", broken))
        await nav.navigate("#broken")
        assert nav.current == "#broken"
        assert (await nav.navigate("#broken")).status is NavigationStatus.SKIPPED

    async def test_reset_allows_retry(self) -> None:
        calls = 0

        async def flaky(**params: object) -> str:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RpcFailure("QueueList", "client:transport", "connection refused")
            return "queue"

        nav = _navigator(("queue", flaky))
        assert (await nav.navigate("#queue")).status is NavigationStatus.FAILED
        nav.reset()
        assert nav.current is None
        assert (await nav.navigate("#queue")).status is NavigationStatus.COMMITTED
        assert nav.display.content == "queue"

    async def test_superseded_failure_is_silent(self) -> None:
        slow = Gate("", error=RpcFailure("Domains", "server:error", "late"))
        nav = _navigator(("a", slow), ("b", _page("B")))
        task = asyncio.create_task(nav.navigate("#a"))
        await slow.started.wait()
        await nav.navigate("#b")
        slow.release.set()
        result = await task
        assert result.status is NavigationStatus.SUPERSEDED
        assert nav.display.alerts == []
        assert nav.display.content == "B"

    async def test_non_admin_errors_propagate(self) -> None:
        async def buggy(**params: object) -> str:
            raise KeyError("Domain")

        nav = _navigator(("buggy", buggy))
        with pytest.raises(KeyError):
            await nav.navigate("#buggy")

    async def test_escaped_error_leaves_navigator_usable(self) -> None:
        calls = 0

        async def buggy(**params: object) -> str:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise TypeError("cannot unpack non-iterable NoneType object")
            return "fixed"

        nav = _navigator(("buggy", buggy))
        with pytest.raises(TypeError):
            await nav.navigate("#buggy")
        assert nav.display.loading is False
        assert nav.current is None
        assert (await nav.navigate("#buggy")).status is NavigationStatus.COMMITTED
        assert nav.display.content == "fixed"

    async def test_superseded_escaped_error_keeps_newer_navigation(self) -> None:
        slow = Gate("", error=TypeError("late"))
        fast = Gate("B")
        nav = _navigator(("a", slow), ("b", fast))
        first = asyncio.create_task(nav.navigate("#a"))
        await slow.started.wait()
        second = asyncio.create_task(nav.navigate("#b"))
        await fast.started.wait()
        slow.release.set()
        with pytest.raises(TypeError):
            await first
        assert nav.current == "#b"
        assert nav.display.loading is True
        fast.release.set()
        assert (await second).status is NavigationStatus.COMMITTED


class TestNotFound:
    async def test_renders_not_found_page(self) -> None:
        nav = _navigator(("accounts", _page("accounts")))
        result = await nav.navigate("#nope")
        assert result.status is NavigationStatus.NOT_FOUND
        assert result.committed
        assert nav.display.content == NOT_FOUND_PAGE
        assert nav.display.location == "#nope"
        assert nav.display.alerts == []

    async def test_custom_not_found_page(self) -> None:
        router = Router()
        display = Display()
        nav = Navigator(router, display, not_found_page="<p>gone</p>")
        await nav.navigate("#x")
        assert display.content == "<p>gone</p>"


class TestInvoke:
    async def test_rendered(self) -> None:
        router = Router()
        router.add(Route(parse_pattern("x"), _page("X")))
        assert await invoke(router.match("#x")) == Rendered("X")

    async def test_failed(self) -> None:
        error = RpcFailure("Domains", "user:notFound", "no such domain")

        async def broken(**params: object) -> str:
            raise error

        router = Router()
        router.add(Route(parse_pattern("x"), broken))
        assert await invoke(router.match("#x")) == Failed(error)

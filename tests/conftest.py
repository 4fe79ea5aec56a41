"""Shared fixtures: a fake admin API behind httpx.MockTransport."""

import json
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import httpx
import pytest

from beaconadmin.config import AdminConfig
from beaconadmin.console import Console


class FakeAPI:
    """Answers admin API calls from a method -> result table.

    A result that is an ``Exception`` instance is sent back as an API
    error. Unknown methods answer ``server:error``.
    """

    def __init__(self, results: dict[str, Any] | None = None) -> None:
        self.results: dict[str, Any] = dict(results or {})
        self.calls: list[tuple[str, list[Any]]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        params = json.loads(request.content)["params"]
        self.calls.append((method, params))
        if method not in self.results:
            return httpx.Response(500, json={"error": {"code": "server:error", "message": f"no fake for {method}"}})
        result = self.results[method]
        if isinstance(result, Exception):
            return httpx.Response(400, json={"error": {"code": "user:error", "message": str(result)}})
        return httpx.Response(200, json={"result": result})

    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]


@pytest.fixture
def api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def config(tmp_path: Path) -> AdminConfig:
    return AdminConfig(api_url="http://mail.test/admin/api", token_path=tmp_path / "token")


@pytest.fixture
async def console(api: FakeAPI, config: AdminConfig) -> AsyncIterator[Console]:
    alerts: list[str] = []
    async with Console(config, notifier=alerts.append, transport=httpx.MockTransport(api)) as c:
        yield c

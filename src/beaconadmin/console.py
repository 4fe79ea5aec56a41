"""The console: config, API client, views and navigation wired together.

Usage::

    async with Console(AdminConfig.from_env()) as console:
        result = await console.navigate("#accounts")
        print(console.display.content)
"""

import logging

import httpx

from beaconadmin.config import AdminConfig
from beaconadmin.display import Display, Notifier
from beaconadmin.routing import NavigationResult, Navigator, Router
from beaconadmin.rpc import AdminClient, TokenStore
from beaconadmin.templating import create_environment
from beaconadmin.views import ViewContext, build_router

logger = logging.getLogger("beaconadmin.console")


class Console:
    """One operator session against one admin API.

    The route table is built and frozen on construction. The stored auth
    token, if any, is loaded from ``config.resolved_token_path``.
    """

    __slots__ = ("_client", "_config", "_display", "_navigator", "_router", "_tokens")

    def __init__(
        self,
        config: AdminConfig | None = None,
        *,
        notifier: Notifier | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        token_store: TokenStore | None = None,
    ) -> None:
        self._config = config or AdminConfig()
        self._tokens = token_store or TokenStore(self._config.resolved_token_path)
        token = self._tokens.load()
        if token is None:
            logger.info("no stored token at %s", self._tokens.path)
        self._client = AdminClient.from_config(self._config, token=token or "", transport=transport)
        ctx = ViewContext(self._client, create_environment(self._config), self._config)
        self._router = build_router(ctx)
        self._display = Display(notifier)
        self._navigator = Navigator(self._router, self._display)

    @property
    def config(self) -> AdminConfig:
        return self._config

    @property
    def client(self) -> AdminClient:
        return self._client

    @property
    def router(self) -> Router:
        return self._router

    @property
    def display(self) -> Display:
        return self._display

    @property
    def navigator(self) -> Navigator:
        return self._navigator

    async def navigate(self, location: str) -> NavigationResult:
        return await self._navigator.navigate(location)

    async def reload(self) -> NavigationResult:
        """Navigate to the current location again, as a page reload would."""
        location = self._navigator.current or ""
        self._navigator.reset()
        return await self._navigator.navigate(location)

    async def logout(self) -> None:
        """End the API session and forget the stored token."""
        await self._client.logout()
        self._tokens.clear()
        self._client.with_token("")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Console":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

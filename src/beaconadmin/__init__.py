"""Beacon Admin — console core for administering a mail server.

Routes console locations to views that fetch from the admin API and
render HTML pages, with single-flight navigation.

Basic usage::

    from beaconadmin import AdminConfig, Console

    async with Console(AdminConfig.from_env()) as console:
        await console.navigate("#dmarc/reports")
        print(console.display.content)
"""

__version__ = "0.1.0"
__all__ = [
    "AdminClient",
    "AdminConfig",
    "AdminError",
    "ConfigurationError",
    "Console",
    "DecodeError",
    "Display",
    "InvalidSizeError",
    "NavigationResult",
    "NavigationStatus",
    "Navigator",
    "RouteNotFound",
    "Router",
    "RpcFailure",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import beaconadmin`` from pulling in httpx and kida until needed.
    """
    if name == "Console":
        from beaconadmin.console import Console

        return Console

    if name == "AdminConfig":
        from beaconadmin.config import AdminConfig

        return AdminConfig

    if name == "AdminClient":
        from beaconadmin.rpc.client import AdminClient

        return AdminClient

    if name == "Display":
        from beaconadmin.display import Display

        return Display

    if name in ("NavigationResult", "NavigationStatus", "Navigator"):
        from beaconadmin.routing import navigation

        return getattr(navigation, name)

    if name == "Router":
        from beaconadmin.routing.router import Router

        return Router

    if name in (
        "AdminError",
        "ConfigurationError",
        "DecodeError",
        "InvalidSizeError",
        "RouteNotFound",
        "RpcFailure",
    ):
        from beaconadmin import errors

        return getattr(errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

"""Beacon admin exception hierarchy.

Shared across Router, Navigator, formatters and the RPC client so every
module raises and catches the same types.
"""


class AdminError(Exception):
    """Base for all beaconadmin-specific errors."""


class ConfigurationError(AdminError):
    """Raised when console configuration or the route table is invalid.

    Typically raised while the route table is built, before any navigation.
    """


class RouteNotFound(AdminError):  # noqa: N818
    """No route matched the location.

    The navigator renders the fixed "page not found" page for it.
    """

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"No route matches {location!r}")


class DecodeError(AdminError):
    """Malformed transport bytes, e.g. an IP address of the wrong length."""


class InvalidSizeError(AdminError, ValueError):
    """Quota size input that does not survive a re-encode unchanged."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid size {value!r}")


class RpcFailure(AdminError):
    """A remote admin API call failed.

    ``code`` is the server error code (``user:notFound``, ``server:error``)
    or a client-side code for transport problems (``client:transport``,
    ``client:status``, ``client:decode``).
    """

    def __init__(self, method: str, code: str, message: str = "") -> None:
        self.method = method
        self.code = code
        self.message = message
        super().__init__(method, code, message)

    def __str__(self) -> str:
        if self.message:
            return f"{self.method}: {self.message}"
        return f"{self.method}: {self.code}"

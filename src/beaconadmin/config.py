"""Console configuration.

AdminConfig is a frozen dataclass: immutable after creation, with attribute access
instead of string-key dict lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from beaconadmin.errors import ConfigurationError


def _default_token_path() -> Path:
    return Path.home() / ".config" / "beacon-admin" / "token"


@dataclass(frozen=True, slots=True)
class AdminConfig:
    """Console configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AdminConfig(api_url="https://mail.example.org/admin/api")
    """

    # Admin API
    api_url: str = "http://localhost/admin/api"
    csrf_header: str = "x-beacon-csrf"
    request_timeout: float = 30.0

    # Persisted client state
    token_path: str | Path = ""

    # Reports: how far back the DMARC/TLSRPT views look
    report_days: int = 30

    # Display
    title: str = "Beacon Admin"

    # Logging
    log_level: str = "warning"

    @property
    def resolved_token_path(self) -> Path:
        return Path(self.token_path) if self.token_path else _default_token_path()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AdminConfig":
        """Build a config from ``BEACON_ADMIN_*`` environment variables.

        Unset variables keep their defaults. Raises ``ConfigurationError``
        for values that do not parse.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        if api_url := env.get("BEACON_ADMIN_API_URL", "").strip():
            kwargs["api_url"] = api_url.rstrip("/")
        if token_path := env.get("BEACON_ADMIN_TOKEN_PATH", "").strip():
            kwargs["token_path"] = token_path
        if log_level := env.get("BEACON_ADMIN_LOG_LEVEL", "").strip():
            kwargs["log_level"] = log_level.lower()

        raw_timeout = env.get("BEACON_ADMIN_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                msg = f"BEACON_ADMIN_TIMEOUT must be a number, got {raw_timeout!r}"
                raise ConfigurationError(msg) from None
            if timeout <= 0:
                msg = f"BEACON_ADMIN_TIMEOUT must be positive, got {raw_timeout!r}"
                raise ConfigurationError(msg)
            kwargs["request_timeout"] = timeout

        return cls(**kwargs)  # type: ignore[arg-type]

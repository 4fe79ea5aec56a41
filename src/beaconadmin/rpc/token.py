"""The one piece of persisted client state: the auth token.

Storage problems never stop the console from starting. A missing or
unreadable token file reads as "no token"; a failed write is logged and
the token simply lives for this process only.
"""

import logging
from pathlib import Path

logger = logging.getLogger("beaconadmin.rpc")


class TokenStore:
    """Reads and writes the auth token at *path*."""

    __slots__ = ("_path",)

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        """Return the stored token, or None when absent or unreadable."""
        try:
            token = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("reading token from %s: %s", self._path, exc)
            return None
        return token or None

    def save(self, token: str) -> bool:
        """Store *token*. Returns False, after logging, if it could not be written."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(token, encoding="utf-8")
        except OSError as exc:
            logger.warning("saving token to %s: %s", self._path, exc)
            return False
        return True

    def clear(self) -> None:
        """Remove the stored token, if any."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("removing token at %s: %s", self._path, exc)

"""The page the operator is looking at.

The navigator is the only writer. Content is replaced wholesale on commit;
failures leave it untouched and go to ``alert()`` instead.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger("beaconadmin.display")

Notifier = Callable[[str], None]


class Display:
    """Committed page content plus the blocking-notification channel.

    ``notifier`` receives each alert message; the CLI passes one that
    writes to stderr. Alerts are also kept in ``alerts`` for inspection.
    """

    __slots__ = ("_notifier", "alerts", "content", "loading", "location")

    def __init__(self, notifier: Notifier | None = None) -> None:
        self._notifier = notifier
        self.content = ""
        self.location: str | None = None
        self.loading = False
        self.alerts: list[str] = []

    def commit(self, location: str, content: str) -> None:
        """Replace the page with *content* rendered for *location*."""
        self.content = content
        self.location = location
        self.loading = False

    def alert(self, message: str) -> None:
        """Show a blocking error notification. The page is not changed."""
        logger.error("%s", message)
        self.alerts.append(message)
        self.loading = False
        if self._notifier is not None:
            self._notifier(message)

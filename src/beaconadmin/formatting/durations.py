"""Human-relative durations ("3h 12mins ago", "2d 4h")."""

import math
import time
from datetime import datetime

from beaconadmin.formatting.periods import as_utc

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
MONTH = 30 * DAY
YEAR = 365 * DAY

# Largest first. A unit is only used once the remaining delta is at least
# twice its size, so 47 hours is "47h 0s", not "1d 23h".
UNITS: tuple[tuple[int, str], ...] = (
    (YEAR, "y"),
    (MONTH, "m"),
    (DAY, "d"),
    (HOUR, "h"),
    (MINUTE, "mins"),
    (1, "s"),
)


def _seconds(value: datetime | str | float | int) -> float:
    if isinstance(value, datetime | str):
        return as_utc(value).timestamp()
    return float(value)


def format_age(
    instant: datetime | str | float | int,
    future: bool = False,
    reference: datetime | float | int | None = None,
) -> str:
    """Format the distance between *instant* and *reference*.

    At most two unit/count pairs are shown, larger unit first. The
    ``" ago"`` suffix is dropped only for an instant after *reference*
    when *future* is set, e.g. a next delivery attempt.

    Example::

        format_age(now - 183600, reference=now)             -> "2d 3h ago"
        format_age(now + 600, future=True, reference=now)   -> "10mins 0s"
    """
    ref = time.time() if reference is None else _seconds(reference)
    delta = ref - _seconds(instant)
    negative = delta < 0
    if negative:
        delta = -delta

    parts: list[str] = []
    last = len(UNITS) - 1
    for i, (size, suffix) in enumerate(UNITS):
        if delta >= 2 * size or i == last:
            n = math.floor(delta / size)
            parts.append(f"{n}{suffix}")
            delta -= n * size
            if len(parts) >= 2:
                break

    text = " ".join(parts)
    if not future or not negative:
        text += " ago"
    return text

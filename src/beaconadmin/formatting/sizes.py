"""Byte sizes for display, and the quota size text format.

Quota sizes use binary units and a canonical form: the largest of
``t``/``g``/``m`` that divides the value evenly, else bare digits. Input is
only accepted when it is already in canonical form, so nothing is silently
truncated (``"1.5m"`` is rejected rather than read as ``1m``).
"""

import math

from beaconadmin.errors import InvalidSizeError

KIB = 1024
MIB = KIB * 1024
GIB = MIB * 1024
TIB = GIB * 1024

# Largest first, for encoding.
_ENCODE_UNITS: tuple[tuple[int, str], ...] = ((TIB, "t"), (GIB, "g"), (MIB, "m"))

_DECODE_UNITS: dict[str, int] = {"k": KIB, "m": MIB, "g": GIB, "t": TIB}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_byte_size(n: int) -> str:
    """Render a byte count: ``"11 mb"``, ``"1 kb"``, ``"10 bytes"``."""
    if n > 10 * MIB:
        return f"{_round_half_up(n / MIB)} mb"
    if n > 500:
        return f"{_round_half_up(n / KIB)} kb"
    return f"{n} bytes"


def encode_quota_size(value: int) -> str:
    """Encode a byte count in canonical quota form.

    Example::

        encode_quota_size(0)           -> "0"
        encode_quota_size(1073741824)  -> "1g"
        encode_quota_size(1500)        -> "1500"
    """
    if value == 0:
        return "0"
    for size, suffix in _ENCODE_UNITS:
        if value % size == 0:
            return f"{value // size}{suffix}"
    return str(value)


def decode_quota_size(text: str) -> int:
    """Parse quota input such as ``"20m"`` or ``"1g"`` into a byte count.

    The unit suffix is matched case-insensitively, but the input must equal
    the canonical encoding of the parsed value. Raises ``InvalidSizeError``
    otherwise.
    """
    digits = text.lower()
    multiplier = 1
    if digits and digits[-1] in _DECODE_UNITS:
        multiplier = _DECODE_UNITS[digits[-1]]
        digits = digits[:-1]
    try:
        number = int(digits)
    except ValueError:
        raise InvalidSizeError(text) from None
    value = number * multiplier
    if value < 0 or encode_quota_size(value) != text:
        raise InvalidSizeError(text)
    return value

"""Location segment parsing.

Route patterns support two converters, ``{name}`` and ``{name:int}``.
"""

# Converters accepted inside ``{name:converter}``.
CONVERTERS: frozenset[str] = frozenset({"str", "int"})


def parse_positive_int(segment: str) -> int | None:
    """Return the value of an all-ASCII-digit segment greater than zero.

    ``"12"`` -> 12, while ``"0"``, ``"-1"``, ``"+3"``, ``"1_0"``, ``" 7"`` and
    ``"12abc"`` -> None.
    """
    if not segment.isascii() or not segment.isdigit():
        return None
    value = int(segment)
    if value <= 0:
        return None
    return value


def convert_segment(segment: str, converter: str) -> str | int:
    """Convert an accepted segment to the value bound for the handler.

    Raises ``ValueError`` if the segment does not convert.
    """
    if converter == "int":
        value = parse_positive_int(segment)
        if value is None:
            msg = f"not a positive integer: {segment!r}"
            raise ValueError(msg)
        return value
    return segment

"""``beacon-admin routes`` — list console locations.

Prints every registered pattern with its route name and view function,
in match order.
"""

import argparse

from beaconadmin.routing import parse_pattern
from beaconadmin.views import ROUTES


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATTERN, NAME and VIEW."""
    rows: list[tuple[str, str, str]] = []
    for pattern, handler, name in ROUTES:
        shown = "/".join(str(m) for m in parse_pattern(pattern)) or "(index)"
        rows.append((f"#{shown}" if pattern else shown, name, f"{handler.__module__}.{handler.__name__}"))

    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    max_name = max(max(len(r[1]) for r in rows), 4)  # "NAME" header

    fmt = f"{{:<{max_pattern}}}  {{:<{max_name}}}  {{}}"
    print(fmt.format("PATTERN", "NAME", "VIEW"))
    sep_len = max_pattern + max_name + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))

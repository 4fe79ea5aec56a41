"""Suppress values that repeat the row above.

Long lists such as pending DMARC evaluations repeat the same interval,
addresses and policy on most rows. Only changes are shown. This is a left
to right fold, not a global de-duplication: a value reappearing after a
different one is shown again.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class MergeState:
    """Last value seen per merged field. Fields never seen count as ``""``."""

    last: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def seen(self, name: str) -> str:
        return self.last.get(name, "")


def merge_step(
    state: MergeState,
    values: Mapping[str, str],
    fields: Sequence[str],
) -> tuple[dict[str, str], MergeState]:
    """Apply the merge rule to one row.

    Returns the row with unchanged *fields* blanked, and the state for the
    next row. Fields not in *fields* pass through.
    """
    shown = dict(values)
    last = dict(state.last)
    for name in fields:
        value = values.get(name, "")
        if value == state.seen(name):
            shown[name] = ""
        last[name] = value
    return shown, MergeState(MappingProxyType(last))


def merge_unchanged(
    rows: Iterable[Mapping[str, str]],
    fields: Sequence[str],
    state: MergeState | None = None,
) -> tuple[list[dict[str, str]], MergeState]:
    """Fold ``merge_step`` over *rows*, returning shown rows and the final state.

    Example::

        rows, _ = merge_unchanged(
            [{"interval": "24h"}, {"interval": "24h"}, {"interval": "1h"}],
            fields=["interval"],
        )
        # -> [{"interval": "24h"}, {"interval": ""}, {"interval": "1h"}]
    """
    acc = state if state is not None else MergeState()
    shown_rows: list[dict[str, str]] = []
    for values in rows:
        shown, acc = merge_step(acc, values, fields)
        shown_rows.append(shown)
    return shown_rows, acc

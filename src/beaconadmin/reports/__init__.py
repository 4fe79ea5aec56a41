"""Report tables — nested DMARC/TLSRPT reports flattened into display rows."""

from beaconadmin.reports.merge import MergeState, merge_step, merge_unchanged
from beaconadmin.reports.models import DMARCReport, Evaluation, TLSReport
from beaconadmin.reports.table import (
    Cell,
    DisplayRow,
    RowGroup,
    expand_spans,
    is_rectangular,
    render_groups,
)

__all__ = [
    "Cell",
    "DMARCReport",
    "DisplayRow",
    "Evaluation",
    "MergeState",
    "RowGroup",
    "TLSReport",
    "expand_spans",
    "is_rectangular",
    "merge_step",
    "merge_unchanged",
    "render_groups",
]

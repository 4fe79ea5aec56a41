"""Built-in beaconadmin template filters.

Auto-registered on the console's kida Environment. They expose the
formatters to templates, plus ``td`` which renders a report table cell.
"""

import html
from typing import Any

from kida.template import Markup

from beaconadmin.formatting import (
    domain_name,
    domain_string,
    encode_quota_size,
    format_age,
    format_byte_size,
    format_ip,
    format_period,
    ipdomain_string,
)
from beaconadmin.reports.table import Cell


def age(instant: Any, now: float | None = None, future: bool = False) -> str:
    """Relative age of an API timestamp.

    Example:
        {{ msg.Queued | age(now) }}                 → "3h 12mins ago"
        {{ msg.NextAttempt | age(now, True) }}      → "10mins 0s"

    """
    if not instant:
        return "-"
    return format_age(instant, future=future, reference=now)


def td(cell: Cell) -> Markup:
    """Render a table cell with its spans, tooltip, link and highlight.

    Example:
        {% for cell in row.cells %}{{ cell | td }}{% end %}
        → <td rowspan="4" title="View raw report."><a href="#domains/x/dmarc/1">1</a></td>

    """
    attrs: list[str] = []
    if cell.rowspan != 1:
        attrs.append(f' rowspan="{cell.rowspan}"')
    if cell.colspan != 1:
        attrs.append(f' colspan="{cell.colspan}"')
    if cell.title:
        attrs.append(f' title="{html.escape(cell.title, quote=True)}"')
    classes = [c for c in (cell.tone and f"tone-{cell.tone}", cell.numeric and "num") if c]
    if cell.rowspan != 1:
        classes.append("top")
    if classes:
        attrs.append(f' class="{" ".join(classes)}"')

    text = html.escape(cell.text)
    if cell.href:
        text = f'<a href="{html.escape(cell.href, quote=True)}">{text}</a>'
    return Markup(f"<td{''.join(attrs)}>{text}</td>")


# All built-in beaconadmin filters, registered automatically on every env.
BUILTIN_FILTERS: dict[str, Any] = {
    "age": age,
    "domain": domain_string,
    "domain_name": domain_name,
    "ip": format_ip,
    "ipdomain": ipdomain_string,
    "period": format_period,
    "quota": encode_quota_size,
    "size": format_byte_size,
    "td": td,
}

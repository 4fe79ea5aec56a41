"""Operational pages: delivery queue, cached MTA-STS policies, DNSBL status."""

import asyncio
import time
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

from beaconadmin.formatting import format_age, format_byte_size, ipdomain_string
from beaconadmin.reports.table import Cell, DisplayRow, RowGroup, render_groups
from beaconadmin.views.page import Link, Section, ViewContext

QUEUE_HEADERS = (
    "ID",
    "Submitted",
    "From",
    "To",
    "Size",
    "Attempts",
    "Next attempt",
    "Last attempt",
    "Last error",
    "Require TLS",
    "Transport",
)

MTASTS_HEADERS = (
    "LastUse",
    "Domain",
    "Backoff",
    "RecordID",
    "Version",
    "Mode",
    "MX",
    "MaxAgeSeconds",
    "Extensions",
    "ValidEnd",
    "LastUpdate",
    "Inserted",
)

DNSBL_HEADERS = ("IP", "Zone", "Result")

DNSBL_LOOKUP_URL = "https://multirbl.valli.org/lookup/{ip}.html"


def _require_tls(value: bool | None) -> str:
    if value is None:
        return "Default"
    return "With RequireTLS" if value else "Fallback to insecure"


def _optional_age(value: str | None, now: float, future: bool = False, missing: str = "") -> str:
    if not value:
        return missing
    return format_age(value, future=future, reference=now)


def queue_rows(messages: Sequence[Mapping[str, Any]], now: float) -> list[DisplayRow]:
    """Rows of the queue table. Ages are relative to *now*."""
    rows: list[DisplayRow] = []
    for m in messages:
        sender = f"{m.get('SenderLocalpart', '')}@{ipdomain_string(m.get('SenderDomain') or {})}"
        recipient = f"{m.get('RecipientLocalpart', '')}@{ipdomain_string(m.get('RecipientDomain') or {})}"
        rows.append(
            DisplayRow(
                (
                    Cell(str(m.get("ID", ""))),
                    Cell(_optional_age(m.get("Queued"), now, missing="-")),
                    Cell(sender),
                    Cell(recipient),
                    Cell(format_byte_size(int(m.get("Size", 0))), numeric=True),
                    Cell(str(m.get("Attempts", 0)), numeric=True),
                    Cell(_optional_age(m.get("NextAttempt"), now, future=True, missing="-")),
                    Cell(_optional_age(m.get("LastAttempt"), now, missing="-")),
                    Cell(m.get("LastError") or "-", tone="bad" if m.get("LastError") else ""),
                    Cell(_require_tls(m.get("RequireTLS"))),
                    Cell(m.get("Transport") or "(default)"),
                )
            )
        )
    return rows


async def queue(ctx: ViewContext) -> str:
    messages, transports = await asyncio.gather(ctx.client.queue_list(), ctx.client.transports())
    rows = queue_rows(messages, time.time())
    return ctx.render(
        [ctx.home(), Link("Queue")],
        Section(
            paragraphs=("The messages below are currently in the queue.",) if rows else (),
            headers=QUEUE_HEADERS,
            rows=tuple(rows),
            empty="Currently no messages in the queue.",
        ),
        Section(
            heading="Transports",
            paragraphs=tuple(sorted(transports)) or ("(default only)",),
        ),
    )


def _format_mx(mx: Sequence[Mapping[str, Any]]) -> str:
    return ", ".join(
        ("*." if e.get("Wildcard") else "") + (e.get("Domain") or {}).get("ASCII", "") for e in mx
    )


def mtasts_rows(policies: Sequence[Mapping[str, Any]], now: float) -> list[DisplayRow]:
    rows: list[DisplayRow] = []
    for p in policies:
        backoff = bool(p.get("Backoff"))
        rows.append(
            DisplayRow(
                (
                    Cell(_optional_age(p.get("LastUse"), now)),
                    Cell(p.get("Domain", "")),
                    Cell(str(backoff).lower(), tone="bad" if backoff else ""),
                    Cell(p.get("RecordID", "")),
                    Cell(p.get("Version", "")),
                    Cell(p.get("Mode", "")),
                    Cell(_format_mx(p.get("MX") or ())),
                    Cell(str(p.get("MaxAgeSeconds", "")), numeric=True),
                    Cell(str(p.get("Extensions") or "")),
                    Cell(_optional_age(p.get("ValidEnd"), now, future=True)),
                    Cell(_optional_age(p.get("LastUpdate"), now)),
                    Cell(_optional_age(p.get("Inserted"), now)),
                )
            )
        )
    return rows


async def mtasts(ctx: ViewContext) -> str:
    policies = await ctx.client.mtasts_policies()
    return ctx.render(
        [ctx.home(), Link("MTA-STS policies")],
        Section(
            paragraphs=(
                "MTA-STS is a mechanism allowing email domains to publish a policy "
                "for using SMTP STARTTLS and TLS verification. See RFC 8461.",
            ),
            headers=MTASTS_HEADERS,
            rows=tuple(mtasts_rows(policies, time.time())),
            empty="No data",
        ),
    )


def dnsbl_groups(status: Mapping[str, Mapping[str, str]]) -> list[RowGroup]:
    """One group per IP, one child row per blocklist zone, sorted."""
    return [
        RowGroup(
            (Cell(ip, href=DNSBL_LOOKUP_URL.format(ip=quote(ip, safe=""))),),
            tuple(
                RowGroup((Cell(zone), Cell(result, tone="" if result == "pass" else "bad")))
                for zone, result in sorted(zones.items())
            ),
        )
        for ip, zones in sorted(status.items())
    ]


async def dnsbl(ctx: ViewContext) -> str:
    status = await ctx.client.dnsbl_status()
    return ctx.render(
        [ctx.home(), Link("DNS blocklist status for IPs")],
        Section(
            paragraphs=(
                "Follow the external links to a third party DNSBL checker to see "
                "if the IP is on one of the many blocklists.",
            ),
            headers=DNSBL_HEADERS,
            rows=tuple(render_groups(dnsbl_groups(status), (1, 2))),
            empty="No IPs found.",
        ),
    )

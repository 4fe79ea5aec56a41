"""Overview pages: home, accounts, a single account, a single domain."""

import asyncio

from beaconadmin.formatting import domain_name, domain_string, encode_quota_size
from beaconadmin.reports import dmarc as dmarc_tables
from beaconadmin.reports import tlsrpt as tlsrpt_tables
from beaconadmin.reports.table import Cell, DisplayRow
from beaconadmin.views.page import Link, Section, ViewContext


async def index(ctx: ViewContext) -> str:
    domains, queue_size, check_updates = await asyncio.gather(
        ctx.client.domains(),
        ctx.client.queue_size(),
        ctx.client.check_updates_enabled(),
    )
    return ctx.render(
        [Link(ctx.config.title)],
        Section(
            warning=(
                ""
                if check_updates
                else "Warning: checking for updates has not been enabled. "
                "Make sure you stay up to date through another mechanism."
            ),
            links=(
                Link("Accounts", "#accounts"),
                Link("Queue", "#queue", f"({queue_size})"),
            ),
        ),
        Section(
            heading="Domains",
            links=tuple(Link(domain_string(d), f"#domains/{domain_name(d)}") for d in domains),
            warning="" if domains else "No domains",
        ),
        Section(
            heading="Reports",
            links=(Link("DMARC", "#dmarc/reports"), Link("TLS", "#tlsrpt/reports")),
        ),
        Section(
            heading="Operations",
            links=(
                Link("MTA-STS policies", "#mtasts"),
                Link("DMARC evaluations", "#dmarc/evaluations"),
                Link("DNSBL status", "#dnsbl"),
            ),
        ),
    )


async def accounts(ctx: ViewContext) -> str:
    names = await ctx.client.accounts()
    return ctx.render(
        [ctx.home(), Link("Accounts")],
        Section(
            heading="Accounts",
            links=tuple(Link(name, f"#accounts/{name}") for name in names),
            paragraphs=() if names else ("No accounts",),
        ),
    )


def _limit(value: object, unit: str = "") -> str:
    if not value:
        return "(default)"
    return f"{value}{unit}"


async def account(ctx: ViewContext, name: str) -> str:
    config = await ctx.client.account(name)
    default_domain = config.get("Domain") or ""
    destinations = sorted(config.get("Destinations") or {})
    quota = int(config.get("QuotaMessageSize") or 0)

    address_rows = tuple(
        DisplayRow((Cell(address if "@" in address else f"{address}@{default_domain}"),))
        for address in destinations
    )
    limit_rows = (
        DisplayRow((Cell("Maximum outgoing messages per day"), Cell(_limit(config.get("MaxOutgoingMessagesPerDay")), numeric=True))),
        DisplayRow((Cell("Maximum first-time recipients per day"), Cell(_limit(config.get("MaxFirstTimeRecipientsPerDay")), numeric=True))),
        DisplayRow((Cell("Disk usage quota"), Cell(encode_quota_size(quota) if quota else "(default)", numeric=True))),
    )
    return ctx.render(
        [ctx.home(), Link("Accounts", "#accounts"), Link(name)],
        Section(
            links=(Link(default_domain, f"#domains/{default_domain}", "(default domain)"),)
            if default_domain
            else (),
            paragraphs=() if default_domain else ("Default domain: (none)",),
        ),
        Section(heading="Addresses", headers=("Address",), rows=address_rows, empty="No addresses."),
        Section(heading="Limits", headers=("Limit", "Value"), rows=limit_rows),
    )


async def domain(ctx: ViewContext, domain: str) -> str:
    start, end = ctx.report_window()
    dmarc_summaries, tlsrpt_summaries, localparts, dnsdomain = await asyncio.gather(
        ctx.client.dmarc_summaries(start, end, domain),
        ctx.client.tlsrpt_summaries(start, end, domain),
        ctx.client.domain_localparts(domain),
        ctx.client.domain(domain),
    )
    address_rows = tuple(
        DisplayRow(
            (
                Cell(f"{localpart or '(catchall)'}@{domain}"),
                Cell(account_name, href=f"#accounts/{account_name}"),
            )
        )
        for localpart, account_name in sorted(localparts.items())
    )
    return ctx.render(
        [ctx.home(), Link(f"Domain {domain_string(dnsdomain)}")],
        Section(
            links=(
                Link("DMARC aggregate reports", f"#domains/{domain}/dmarc"),
                Link("TLS reports", f"#tlsrpt/reports/{domain}"),
            ),
        ),
        Section(
            heading="DMARC aggregate reports summary",
            headers=dmarc_tables.SUMMARY_HEADERS,
            rows=tuple(dmarc_tables.summary_rows(dmarc_summaries)),
            empty="No DMARC reports for domain.",
        ),
        Section(
            heading="TLS reports summary",
            headers=tlsrpt_tables.SUMMARY_HEADERS,
            rows=tuple(tlsrpt_tables.summary_rows(tlsrpt_summaries)),
            empty="No TLS reports for domain.",
        ),
        Section(
            heading="Addresses",
            headers=("Address", "Account"),
            rows=address_rows,
            empty="No addresses.",
        ),
    )

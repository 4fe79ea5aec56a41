"""TLSRPT pages: reporting summary, per-domain reports, a single raw report."""

import asyncio
import json

from beaconadmin.formatting import domain_string
from beaconadmin.reports import tlsrpt as tables
from beaconadmin.reports.models import TLSReport
from beaconadmin.views.page import HeaderGroup, Link, Section, ViewContext

ABOUT_TLSRPT = (
    "TLSRPT (TLS reporting) is a mechanism to request feedback from other mail "
    "servers about TLS connections to your mail server. Mail servers implementing "
    "TLSRPT will typically send a daily report with both successful and failed "
    "connection counts, including details about failures."
)


def _crumbs(ctx: ViewContext, *rest: Link) -> list[Link]:
    return [ctx.home(), Link("TLSRPT", "#tlsrpt"), *rest]


async def tlsrpt_index(ctx: ViewContext) -> str:
    return ctx.render(
        [ctx.home(), Link("TLSRPT")],
        Section(
            links=(Link("Reports", "#tlsrpt/reports", ", incoming TLS reports."),),
        ),
    )


async def tlsrpt_reports(ctx: ViewContext) -> str:
    start, end = ctx.report_window()
    summaries = await ctx.client.tlsrpt_summaries(start, end)
    return ctx.render(
        _crumbs(ctx, Link("Reports")),
        Section(
            paragraphs=(
                ABOUT_TLSRPT,
                f"Below a summary of TLS reports for the past {ctx.config.report_days} days.",
            ),
            headers=tables.SUMMARY_HEADERS,
            rows=tuple(tables.summary_rows(summaries)),
            empty="No domains with TLS reports.",
        ),
    )


async def domain_tlsrpt(ctx: ViewContext, domain: str) -> str:
    start, end = ctx.report_window()
    records, dnsdomain = await asyncio.gather(
        ctx.client.tls_reports(start, end, domain),
        ctx.client.parse_domain(domain),
    )
    rows = tables.tlsrpt_report_rows([TLSReport.from_api(r) for r in records])
    return ctx.render(
        _crumbs(ctx, Link("Reports", "#tlsrpt/reports"), Link(f"Domain {domain_string(dnsdomain)}")),
        Section(
            paragraphs=(
                ABOUT_TLSRPT,
                f"Below the TLS reports for the past {ctx.config.report_days} days.",
            ),
            header_groups=tuple(HeaderGroup(label, span) for label, span in tables.REPORT_HEADER_GROUPS),
            headers=tables.REPORT_HEADERS,
            rows=tuple(rows),
            empty="No TLS reports for domain.",
        ),
    )


async def domain_tlsrpt_report(ctx: ViewContext, domain: str, report_id: int) -> str:
    record, dnsdomain = await asyncio.gather(
        ctx.client.tls_report_id(domain, report_id),
        ctx.client.parse_domain(domain),
    )
    return ctx.render(
        _crumbs(
            ctx,
            Link("Reports", "#tlsrpt/reports"),
            Link(f"Domain {domain_string(dnsdomain)}", f"#tlsrpt/reports/{domain}"),
            Link(f"Report {report_id}"),
        ),
        Section(
            paragraphs=("Below is the raw report as received from the remote mail server.",),
            literal=json.dumps(record.get("Report", record), indent=2),
        ),
    )

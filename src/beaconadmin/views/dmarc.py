"""DMARC pages: reporting summary, per-domain reports, pending evaluations."""

import asyncio
import json
from collections.abc import Mapping
from typing import Any

from beaconadmin.formatting import domain_name, domain_string
from beaconadmin.reports import dmarc as tables
from beaconadmin.reports.models import DMARCReport, Evaluation
from beaconadmin.reports.table import Cell, DisplayRow
from beaconadmin.views.page import Link, Section, ViewContext

ABOUT_REPORTS = (
    'DMARC reports are periodically sent by other mail servers that received an email '
    'message with a "From" header with our domain. Domains can have a DMARC DNS record '
    "that asks other mail servers to send these aggregate reports for analysis."
)

EVALUATION_STATS_HEADERS = ("Domain", "Dispositions", "Evaluations", "Send report")


def _crumbs(ctx: ViewContext, *rest: Link) -> list[Link]:
    return [ctx.home(), Link("DMARC", "#dmarc"), *rest]


async def dmarc_index(ctx: ViewContext) -> str:
    return ctx.render(
        [ctx.home(), Link("DMARC")],
        Section(
            links=(
                Link("Reports", "#dmarc/reports", ", incoming DMARC aggregate reports."),
                Link("Evaluations", "#dmarc/evaluations", ", for outgoing DMARC aggregate reports."),
            ),
        ),
    )


async def dmarc_reports(ctx: ViewContext) -> str:
    start, end = ctx.report_window()
    summaries = await ctx.client.dmarc_summaries(start, end)
    return ctx.render(
        _crumbs(ctx, Link("Aggregate reporting summary")),
        Section(
            paragraphs=(
                ABOUT_REPORTS,
                f"Below a summary of DMARC aggregate reporting results for the past {ctx.config.report_days} days.",
            ),
            headers=tables.SUMMARY_HEADERS,
            rows=tuple(tables.summary_rows(summaries)),
            empty="No domains with reports.",
        ),
    )


def evaluation_stats_rows(stats: Mapping[str, Mapping[str, Any]]) -> list[DisplayRow]:
    rows: list[DisplayRow] = []
    for _, stat in sorted(stats.items()):
        domain = stat.get("Domain") or {}
        rows.append(
            DisplayRow(
                (
                    Cell(domain_string(domain), href=f"#dmarc/evaluations/{domain_name(domain)}"),
                    Cell(" ".join(stat.get("Dispositions") or ())),
                    Cell(str(stat.get("Count", 0)), numeric=True),
                    Cell("✓" if stat.get("SendReport") else "", numeric=True),
                )
            )
        )
    return rows


async def dmarc_evaluations(ctx: ViewContext) -> str:
    stats = await ctx.client.dmarc_evaluation_stats()
    return ctx.render(
        _crumbs(ctx, Link("Evaluations")),
        Section(
            paragraphs=(
                "Incoming messages are checked against the DMARC policy of the domain in "
                "the message From header. If the policy requests reporting on the resulting "
                "evaluations, they are stored in the database.",
            ),
            headers=EVALUATION_STATS_HEADERS,
            rows=tuple(evaluation_stats_rows(stats)),
            empty="No evaluations.",
        ),
    )


async def dmarc_evaluations_domain(ctx: ViewContext, domain: str) -> str:
    parsed, evaluations = await ctx.client.dmarc_evaluations_domain(domain)
    rows = tables.evaluation_rows([Evaluation.from_api(e) for e in evaluations], domain)
    return ctx.render(
        _crumbs(ctx, Link("Evaluations", "#dmarc/evaluations"), Link(f"Domain {domain_string(parsed)}")),
        Section(
            paragraphs=(
                "The evaluations below will be sent in a DMARC aggregate report to the "
                "addresses found in the published DMARC DNS record. The fields Interval "
                "hours, Addresses and Policy are only filled for the first row and whenever "
                "a new value in the published DMARC record is encountered.",
            ),
            headers=tables.EVALUATION_HEADERS,
            rows=tuple(rows),
            empty="No evaluations.",
        ),
    )


async def domain_dmarc(ctx: ViewContext, domain: str) -> str:
    start, end = ctx.report_window()
    reports, dnsdomain = await asyncio.gather(
        ctx.client.dmarc_reports(start, end, domain),
        ctx.client.domain(domain),
    )
    rows = tables.dmarc_report_rows([DMARCReport.from_api(r) for r in reports], domain)
    return ctx.render(
        [
            ctx.home(),
            Link(f"Domain {domain_string(dnsdomain)}", f"#domains/{domain}"),
            Link("DMARC aggregate reports"),
        ],
        Section(
            paragraphs=(
                ABOUT_REPORTS,
                f"Below the DMARC aggregate reports for the past {ctx.config.report_days} days.",
            ),
            headers=tables.REPORT_HEADERS,
            rows=tuple(rows),
            empty="No DMARC reports for domain.",
        ),
    )


async def domain_dmarc_report(ctx: ViewContext, domain: str, report_id: int) -> str:
    report, dnsdomain = await asyncio.gather(
        ctx.client.dmarc_report_id(domain, report_id),
        ctx.client.domain(domain),
    )
    return ctx.render(
        [
            ctx.home(),
            Link(f"Domain {domain_string(dnsdomain)}", f"#domains/{domain}"),
            Link("DMARC aggregate reports", f"#domains/{domain}/dmarc"),
            Link(f"Report {report_id}"),
        ],
        Section(
            paragraphs=(
                "Below is the raw report as received from the remote mail server.",
            ),
            literal=json.dumps(report, indent=2),
        ),
    )

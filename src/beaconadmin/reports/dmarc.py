"""DMARC tables: aggregate reports, pending evaluations, domain summaries."""

from collections.abc import Mapping, Sequence
from typing import Any

from beaconadmin.formatting import format_period, period_title
from beaconadmin.reports.merge import merge_unchanged
from beaconadmin.reports.models import AuthResult, DMARCRecord, DMARCReport, Evaluation, PolicyPublished
from beaconadmin.reports.table import Cell, DisplayRow, RowGroup, render_groups

# Columns per level: report, record, auth result.
REPORT_WIDTHS = (4, 8, 1)

REPORT_HEADERS = (
    "ID",
    "Organisation",
    "Period (UTC)",
    "Policy",
    "Source IP",
    "Messages",
    "Result",
    "ADKIM",
    "ASPF",
    "SMTP to",
    "SMTP from",
    "Header from",
    "Auth Results",
)

EVALUATION_HEADERS = (
    "ID",
    "Evaluated",
    "Optional",
    "Interval hours",
    "Addresses",
    "Policy",
    "IP",
    "Disposition",
    "Aligned DKIM/SPF",
    "Envelope to",
    "Envelope from",
    "Message from",
    "DKIM details",
    "SPF details",
)

SUMMARY_HEADERS = (
    "Domain",
    "Messages",
    'DMARC "quarantine"/"reject"',
    'DKIM "fail"',
    'SPF "fail"',
    "Policy overrides",
)

ALIGNMENTS = {"r": "relaxed", "s": "strict"}

DISPOSITIONS = {
    "none": "DMARC checks or were not applied.",
    "quarantine": "DMARC policy is to mark message as spam.",
    "reject": "DMARC policy is to reject the message during SMTP delivery.",
}

DKIM_STATUSES = {
    "none": "Message was not signed",
    "pass": "Message was signed and signature was verified.",
    "fail": "Message was signed, but signature was invalid.",
    "policy": "Message was signed, but signature is not accepted by policy.",
    "neutral": "Message was signed, but the signature contains an error or could not be processed.",
    "temperror": "Message could not be verified. A later attempt may succeed.",
    "permerror": "Message cannot be verified.",
}

SPF_STATUSES = {
    "none": "No SPF policy found.",
    "neutral": "Policy states nothing about IP.",
    "pass": "IP is authorized.",
    "fail": "IP is explicitly not authorized.",
    "softfail": "Weak statement that IP is probably not authorized.",
    "temperror": "Trying again later may succeed.",
    "permerror": "Error requiring some intervention to correct.",
}


def policy_summary(policy: PolicyPublished, domain: str) -> str:
    """Readable summary of a published policy, e.g. ``"dkim relaxed, policy reject"``."""
    parts: list[str] = []
    if policy.domain != domain:
        parts.append(policy.domain)
    if policy.adkim:
        parts.append(f"dkim {ALIGNMENTS.get(policy.adkim, policy.adkim)}")
    if policy.aspf:
        parts.append(f"spf {ALIGNMENTS.get(policy.aspf, policy.aspf)}")
    if policy.policy:
        parts.append(f"policy {policy.policy}")
    if policy.subdomain_policy and policy.subdomain_policy != policy.policy:
        parts.append(f"subdomain {policy.subdomain_policy}")
    if policy.percentage != 100:
        parts.append(f"{policy.percentage}%")
    return ", ".join(parts)


def policy_record(policy: PolicyPublished) -> str:
    """The policy as DNS-record-like tags: ``"p=reject; adkim=r; pct=100; "``."""
    text = ""
    for key, value in (
        ("p", policy.policy),
        ("sp", policy.subdomain_policy),
        ("adkim", policy.adkim),
        ("aspf", policy.aspf),
        ("pct", str(policy.percentage)),
        ("fo", policy.reporting_options),
    ):
        if value:
            text += f"{key}={value}; "
    return text


def _report_cells(report: DMARCReport, domain: str) -> tuple[Cell, ...]:
    period = format_period(report.begin, report.end)
    title = period_title(report.begin, report.end)
    if report.errors:
        period += " (errors)"
        title += "\nerrors: " + "; ".join(report.errors)
    return (
        Cell(str(report.id), href=f"#domains/{domain}/dmarc/{report.id}", title="View raw report."),
        Cell(report.org_name, title=f"Email: {report.email}, ReportID: {report.report_id}"),
        Cell(period, title=title),
        Cell(policy_summary(report.policy, domain)),
    )


def _record_cells(record: DMARCRecord) -> tuple[Cell, ...]:
    disposition = record.disposition
    for reason_type, comment in record.reasons:
        disposition += f"; {reason_type}" + (f" ({comment})" if comment else "")
    return (
        Cell(record.source_ip),
        Cell(str(record.count), numeric=True),
        Cell(
            disposition,
            title=f"{record.disposition}: {DISPOSITIONS.get(record.disposition, '')}",
            tone="" if record.disposition == "none" else "bad",
        ),
        Cell(record.dkim, tone="" if record.dkim == "pass" else "warn"),
        Cell(record.spf, tone="" if record.spf == "pass" else "warn"),
        Cell(record.envelope_to),
        Cell(record.envelope_from),
        Cell(record.header_from),
    )


def _auth_cell(result: AuthResult, domain: str) -> Cell:
    if result.method == "dkim":
        text = f"dkim: {result.result}"
        if result.selector:
            text += f", {result.selector}"
        title = f"{result.result}: {DKIM_STATUSES.get(result.result, 'invalid status')}"
        if result.human_result:
            title = f"additional information: {result.human_result};\n{title}"
        if result.domain != domain:
            title += f";\ndomain: {result.domain}"
        ok = result.result in ("none", "pass")
    else:
        text = f"spf: {result.result}, {result.scope} {result.domain}"
        title = f"{result.result}: {SPF_STATUSES.get(result.result, 'invalid status')}"
        ok = result.result in ("none", "neutral", "pass")
    return Cell(text, title=title, tone="" if ok else "warn")


def dmarc_report_groups(reports: Sequence[DMARCReport], domain: str) -> list[RowGroup]:
    """Nest reports -> records -> auth results for ``render_groups``."""
    return [
        RowGroup(
            _report_cells(report, domain),
            tuple(
                RowGroup(
                    _record_cells(record),
                    tuple(RowGroup((_auth_cell(a, domain),)) for a in record.auth_results),
                )
                for record in report.records
            ),
        )
        for report in reports
    ]


def dmarc_report_rows(reports: Sequence[DMARCReport], domain: str) -> list[DisplayRow]:
    """Rows of the aggregate report table for *domain*."""
    return render_groups(dmarc_report_groups(reports, domain), REPORT_WIDTHS)


def _auth_status(ok: bool) -> str:
    return "pass" if ok else "fail"


def evaluation_rows(evaluations: Sequence[Evaluation], domain: str) -> list[DisplayRow]:
    """Rows of the pending evaluations table.

    Interval, addresses and policy are only shown when they differ from
    the row above.
    """
    merged, _ = merge_unchanged(
        (
            {
                "interval": f"{e.interval_hours}h",
                "addresses": "\n".join(e.addresses),
                "policy": policy_record(e.policy),
            }
            for e in evaluations
        ),
        fields=("interval", "addresses", "policy"),
    )

    rows: list[DisplayRow] = []
    for e, shown in zip(evaluations, merged, strict=True):
        disposition = e.disposition
        if e.override_reasons:
            disposition += f" ({', '.join(e.override_reasons)})"
        dkim = "\n".join(
            f"selector {r.selector}{'' if r.domain == domain else ', domain ' + r.domain}: {r.result}"
            for r in e.dkim_results
        )
        spf = "\n".join(
            f"{r.scope}{'' if r.domain == domain else ', domain ' + r.domain}: {r.result}"
            for r in e.spf_results
        )
        rows.append(
            DisplayRow(
                (
                    Cell(str(e.id)),
                    Cell(e.evaluated),
                    Cell("Yes" if e.optional else ""),
                    Cell(shown["interval"]),
                    Cell(shown["addresses"]),
                    Cell(shown["policy"]),
                    Cell(e.source_ip),
                    Cell(disposition, tone="" if e.disposition == "none" else "bad"),
                    Cell(
                        f"{_auth_status(e.aligned_dkim_pass)}/{_auth_status(e.aligned_spf_pass)}",
                        tone="" if e.aligned_dkim_pass and e.aligned_spf_pass else "warn",
                    ),
                    Cell(e.envelope_to),
                    Cell(e.envelope_from),
                    Cell(e.header_from),
                    Cell(dkim),
                    Cell(spf),
                )
            )
        )
    return rows


def _overrides(overrides: Mapping[str, Any] | None) -> str:
    if not overrides:
        return ""
    return "; ".join(f"{k}: {v}" for k, v in overrides.items())


def summary_rows(summaries: Sequence[Mapping[str, Any]]) -> list[DisplayRow]:
    """Rows of the per-domain DMARC summary table."""
    rows: list[DisplayRow] = []
    for s in summaries:
        quarantine = int(s.get("DispositionQuarantine", 0))
        reject = int(s.get("DispositionReject", 0))
        dkim_fail = int(s.get("DKIMFail", 0))
        spf_fail = int(s.get("SPFFail", 0))
        rows.append(
            DisplayRow(
                (
                    Cell(s["Domain"], href=f"#domains/{s['Domain']}/dmarc", title="See report details."),
                    Cell(str(s.get("Total", 0)), numeric=True),
                    Cell(
                        f"{quarantine}/{reject}",
                        numeric=True,
                        tone="" if quarantine == 0 and reject == 0 else "bad",
                    ),
                    Cell(str(dkim_fail), numeric=True, tone="good" if dkim_fail == 0 else "bad"),
                    Cell(str(spf_fail), numeric=True, tone="good" if spf_fail == 0 else "bad"),
                    Cell(_overrides(s.get("PolicyOverrides"))),
                )
            )
        )
    return rows

"""TLSRPT tables: per-domain reports and domain summaries."""

from collections.abc import Mapping, Sequence
from typing import Any

from beaconadmin.formatting import domain_name, format_period, period_title
from beaconadmin.reports.models import FailureDetail, PolicyResult, TLSReport
from beaconadmin.reports.table import Cell, DisplayRow, RowGroup, render_groups

# Columns per level: report, policy result, failure detail.
REPORT_WIDTHS = (3, 3, 8)

REPORT_HEADER_GROUPS = (("Report", 3), ("Policy", 3), ("Failure Details", 8))

REPORT_HEADERS = (
    "ID",
    "From",
    "Period (UTC)",
    "Policy",
    "Successes",
    "Failures",
    "Result Type",
    "Sending MTA",
    "Receiving MX Host",
    "Receiving MX HELO",
    "Receiving IP",
    "Count",
    "More",
    "Code",
)

SUMMARY_HEADERS = ("Policy domain", "Successes", "Failures", "Failure details")


def _report_cells(record: TLSReport) -> tuple[Cell, ...]:
    sender = record.organization or record.contact_info or record.mail_from
    return (
        Cell(str(record.id), href=f"#tlsrpt/reports/{record.domain}/{record.id}"),
        Cell(
            sender,
            title=(
                f"Organization: {record.organization}; \n"
                f"Contact info: {record.contact_info}; \n"
                f"Report ID: {record.report_id}; \n"
                f"Mail from: {record.mail_from}"
            ),
        ),
        Cell(
            format_period(record.start, record.end),
            title=period_title(record.start, record.end),
        ),
    )


def _policy_cells(result: PolicyResult) -> tuple[Cell, ...]:
    return (
        Cell(result.display_type, title="\n".join(result.policy_strings)),
        Cell(str(result.successes), numeric=True),
        Cell(str(result.failures), numeric=True, tone="bad" if result.failures else ""),
    )


def _detail_cells(detail: FailureDetail) -> tuple[Cell, ...]:
    return (
        Cell(detail.result_type),
        Cell(detail.sending_mta_ip),
        Cell(detail.receiving_mx_hostname),
        Cell(detail.receiving_mx_helo),
        Cell(detail.receiving_ip),
        Cell(str(detail.failed_session_count), numeric=True),
        Cell(detail.additional_information),
        Cell(detail.failure_reason_code),
    )


def tlsrpt_report_groups(records: Sequence[TLSReport]) -> list[RowGroup]:
    """Nest reports -> policy results -> failure details for ``render_groups``."""
    return [
        RowGroup(
            _report_cells(record),
            tuple(
                RowGroup(
                    _policy_cells(result),
                    tuple(RowGroup(_detail_cells(d)) for d in result.details),
                )
                for result in record.policies
            ),
        )
        for record in records
    ]


def tlsrpt_report_rows(records: Sequence[TLSReport]) -> list[DisplayRow]:
    """Rows of the TLS report table for one policy domain."""
    return render_groups(tlsrpt_report_groups(records), REPORT_WIDTHS)


def summary_rows(summaries: Sequence[Mapping[str, Any]]) -> list[DisplayRow]:
    """Rows of the per-domain TLSRPT summary table."""
    rows: list[DisplayRow] = []
    for s in summaries:
        name = domain_name(s.get("PolicyDomain") or {})
        counts = s.get("ResultTypeCounts") or {}
        failures = int(s.get("Failure", 0))
        rows.append(
            DisplayRow(
                (
                    Cell(name, href=f"#tlsrpt/reports/{name}", title="See report details."),
                    Cell(str(s.get("Success", 0)), numeric=True),
                    Cell(str(failures), numeric=True, tone="bad" if failures else ""),
                    Cell("; ".join(f"{k}: {v}" for k, v in counts.items())),
                )
            )
        )
    return rows

"""Report records as returned by the admin API.

Frozen dataclasses built from the API's JSON with ``from_api``. Missing
lists (the API sends ``null`` for empty ones) become empty tuples.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

JSON = Mapping[str, Any]


def _items(data: JSON, key: str) -> list[JSON]:
    return list(data.get(key) or [])


# ---------------------------------------------------------------------------
# DMARC aggregate reports
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PolicyPublished:
    domain: str
    adkim: str = ""
    aspf: str = ""
    policy: str = ""
    subdomain_policy: str = ""
    percentage: int = 100
    reporting_options: str = ""

    @classmethod
    def from_api(cls, data: JSON) -> "PolicyPublished":
        return cls(
            domain=data.get("Domain", ""),
            adkim=data.get("ADKIM", ""),
            aspf=data.get("ASPF", ""),
            policy=data.get("Policy", ""),
            subdomain_policy=data.get("SubdomainPolicy", ""),
            percentage=int(data.get("Percentage", 100)),
            reporting_options=str(data.get("ReportingOptions") or ""),
        )


@dataclass(frozen=True, slots=True)
class AuthResult:
    """A DKIM or SPF authentication result of one DMARC record."""

    method: str  # "dkim" or "spf"
    domain: str
    result: str
    selector: str = ""
    scope: str = ""
    human_result: str = ""


@dataclass(frozen=True, slots=True)
class DMARCRecord:
    """One row of an aggregate report: a source IP and its evaluation."""

    source_ip: str
    count: int
    disposition: str
    dkim: str
    spf: str
    reasons: tuple[tuple[str, str], ...]
    envelope_to: str
    envelope_from: str
    header_from: str
    auth_results: tuple[AuthResult, ...]

    @classmethod
    def from_api(cls, data: JSON) -> "DMARCRecord":
        row = data.get("Row") or {}
        evaluated = row.get("PolicyEvaluated") or {}
        ids = data.get("Identifiers") or {}
        auth = data.get("AuthResults") or {}
        results = [
            AuthResult(
                method="dkim",
                domain=d.get("Domain", ""),
                result=d.get("Result", ""),
                selector=d.get("Selector", ""),
                human_result=d.get("HumanResult", ""),
            )
            for d in _items(auth, "DKIM")
        ]
        results.extend(
            AuthResult(
                method="spf",
                domain=s.get("Domain", ""),
                result=s.get("Result", ""),
                scope=s.get("Scope", ""),
            )
            for s in _items(auth, "SPF")
        )
        return cls(
            source_ip=row.get("SourceIP", ""),
            count=int(row.get("Count", 0)),
            disposition=evaluated.get("Disposition", ""),
            dkim=evaluated.get("DKIM", ""),
            spf=evaluated.get("SPF", ""),
            reasons=tuple(
                (r.get("Type", ""), r.get("Comment", "")) for r in _items(evaluated, "Reasons")
            ),
            envelope_to=ids.get("EnvelopeTo", ""),
            envelope_from=ids.get("EnvelopeFrom", ""),
            header_from=ids.get("HeaderFrom", ""),
            auth_results=tuple(results),
        )


@dataclass(frozen=True, slots=True)
class DMARCReport:
    """A stored DMARC aggregate report for one of our domains."""

    id: int
    org_name: str
    email: str
    report_id: str
    begin: int
    end: int
    errors: tuple[str, ...]
    policy: PolicyPublished
    records: tuple[DMARCRecord, ...]

    @classmethod
    def from_api(cls, data: JSON) -> "DMARCReport":
        meta = data.get("ReportMetadata") or {}
        date_range = meta.get("DateRange") or {}
        return cls(
            id=int(data.get("ID", 0)),
            org_name=meta.get("OrgName", ""),
            email=meta.get("Email", ""),
            report_id=meta.get("ReportID", ""),
            begin=int(date_range.get("Begin", 0)),
            end=int(date_range.get("End", 0)),
            errors=tuple(meta.get("Errors") or ()),
            policy=PolicyPublished.from_api(data.get("PolicyPublished") or {}),
            records=tuple(DMARCRecord.from_api(r) for r in _items(data, "Records")),
        )


# ---------------------------------------------------------------------------
# DMARC evaluations (pending outgoing reports)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Evaluation:
    id: int
    evaluated: str
    optional: bool
    interval_hours: int
    addresses: tuple[str, ...]
    policy: PolicyPublished
    source_ip: str
    disposition: str
    aligned_dkim_pass: bool
    aligned_spf_pass: bool
    override_reasons: tuple[str, ...]
    envelope_to: str
    envelope_from: str
    header_from: str
    dkim_results: tuple[AuthResult, ...]
    spf_results: tuple[AuthResult, ...]

    @classmethod
    def from_api(cls, data: JSON) -> "Evaluation":
        return cls(
            id=int(data.get("ID", 0)),
            evaluated=data.get("Evaluated", ""),
            optional=bool(data.get("Optional")),
            interval_hours=int(data.get("IntervalHours", 0)),
            addresses=tuple(data.get("Addresses") or ()),
            policy=PolicyPublished.from_api(data.get("PolicyPublished") or {}),
            source_ip=data.get("SourceIP", ""),
            disposition=data.get("Disposition", ""),
            aligned_dkim_pass=bool(data.get("AlignedDKIMPass")),
            aligned_spf_pass=bool(data.get("AlignedSPFPass")),
            override_reasons=tuple(r.get("Type", "") for r in _items(data, "OverrideReasons")),
            envelope_to=data.get("EnvelopeTo", ""),
            envelope_from=data.get("EnvelopeFrom", ""),
            header_from=data.get("HeaderFrom", ""),
            dkim_results=tuple(
                AuthResult("dkim", d.get("Domain", ""), d.get("Result", ""), selector=d.get("Selector", ""))
                for d in _items(data, "DKIMResults")
            ),
            spf_results=tuple(
                AuthResult("spf", s.get("Domain", ""), s.get("Result", ""), scope=s.get("Scope", ""))
                for s in _items(data, "SPFResults")
            ),
        )


# ---------------------------------------------------------------------------
# TLSRPT reports
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FailureDetail:
    result_type: str
    sending_mta_ip: str
    receiving_mx_hostname: str
    receiving_mx_helo: str
    receiving_ip: str
    failed_session_count: int
    additional_information: str
    failure_reason_code: str

    @classmethod
    def from_api(cls, data: JSON) -> "FailureDetail":
        return cls(
            result_type=data.get("ResultType", ""),
            sending_mta_ip=data.get("SendingMTAIP", ""),
            receiving_mx_hostname=data.get("ReceivingMXHostname", ""),
            receiving_mx_helo=data.get("ReceivingMXHelo", ""),
            receiving_ip=data.get("ReceivingIP", ""),
            failed_session_count=int(data.get("FailedSessionCount", 0)),
            additional_information=data.get("AdditionalInformation", ""),
            failure_reason_code=data.get("FailureReasonCode", ""),
        )


@dataclass(frozen=True, slots=True)
class PolicyResult:
    policy_type: str
    policy_strings: tuple[str, ...]
    successes: int
    failures: int
    details: tuple[FailureDetail, ...]

    @classmethod
    def from_api(cls, data: JSON) -> "PolicyResult":
        policy = data.get("Policy") or {}
        summary = data.get("Summary") or {}
        return cls(
            policy_type=policy.get("Type", ""),
            policy_strings=tuple(policy.get("String") or ()),
            successes=int(summary.get("TotalSuccessfulSessionCount", 0)),
            failures=int(summary.get("TotalFailureSessionCount", 0)),
            details=tuple(FailureDetail.from_api(d) for d in _items(data, "FailureDetails")),
        )

    @property
    def display_type(self) -> str:
        """Policy type, with the mode for MTA-STS: ``"sts: enforce"``."""
        if self.policy_type != "sts":
            return self.policy_type
        for line in self.policy_strings:
            if line.startswith("mode:"):
                return f"sts: {line.removeprefix('mode:').strip()}"
        return self.policy_type


@dataclass(frozen=True, slots=True)
class TLSReport:
    """A stored TLSRPT report and the envelope it arrived in."""

    id: int
    domain: str
    mail_from: str
    organization: str
    contact_info: str
    report_id: str
    start: str
    end: str
    policies: tuple[PolicyResult, ...]

    @classmethod
    def from_api(cls, data: JSON) -> "TLSReport":
        report = data.get("Report") or {}
        date_range = report.get("DateRange") or {}
        return cls(
            id=int(data.get("ID", 0)),
            domain=data.get("Domain", ""),
            mail_from=data.get("MailFrom", ""),
            organization=report.get("OrganizationName", ""),
            contact_info=report.get("ContactInfo", ""),
            report_id=report.get("ReportID", ""),
            start=date_range.get("Start", ""),
            end=date_range.get("End", ""),
            policies=tuple(PolicyResult.from_api(p) for p in _items(report, "Policies")),
        )

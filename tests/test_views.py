"""Tests for beaconadmin.views — pages rendered through the console."""

import httpx
import pytest

from beaconadmin.config import AdminConfig
from beaconadmin.console import Console
from beaconadmin.routing import NavigationStatus, Router
from beaconadmin.views import ROUTES
from conftest import FakeAPI

EXAMPLE = {"ASCII": "example.org", "Unicode": ""}


class TestRouteTable:
    def test_table_compiles_without_ambiguity(self, console: Console) -> None:
        assert isinstance(console.router, Router)
        assert console.router.compiled
        assert len(console.router.routes) == len(ROUTES)

    @pytest.mark.parametrize(
        ("location", "name", "params"),
        [
            ("", "index", {}),
            ("#accounts/admin", "account", {"name": "admin"}),
            ("#domains/example.org/dmarc/5", "domain-dmarc-report", {"domain": "example.org", "report_id": 5}),
            ("#tlsrpt/reports/example.org", "domain-tlsrpt", {"domain": "example.org"}),
            ("#dmarc/evaluations/example.org", "dmarc-evaluations-domain", {"domain": "example.org"}),
        ],
    )
    def test_locations(self, console: Console, location: str, name: str, params: dict) -> None:
        match = console.router.match(location)
        assert match.route.name == name
        assert match.params == params


class TestOverview:
    async def test_index(self, console: Console, api: FakeAPI) -> None:
        api.results.update(Domains=[EXAMPLE], QueueSize=2, CheckUpdatesEnabled=False)
        result = await console.navigate("#")
        assert result.status is NavigationStatus.COMMITTED
        html = console.display.content
        assert '<a href="#domains/example.org">example.org</a>' in html
        assert '<a href="#queue">Queue</a> (2)' in html
        assert "checking for updates has not been enabled" in html

    async def test_accounts(self, console: Console, api: FakeAPI) -> None:
        api.results["Accounts"] = ["admin", "mjl"]
        await console.navigate("#accounts")
        assert '<a href="#accounts/mjl">mjl</a>' in console.display.content

    async def test_account(self, console: Console, api: FakeAPI) -> None:
        api.results["Account"] = {
            "Domain": "example.org",
            "Destinations": {"admin": {}, "postmaster@example.net": {}},
            "QuotaMessageSize": 1073741824,
            "MaxOutgoingMessagesPerDay": 1000,
        }
        await console.navigate("#accounts/admin")
        html = console.display.content
        assert api.calls == [("Account", ["admin"])]
        assert "<td>admin@example.org</td>" in html
        assert "<td>postmaster@example.net</td>" in html
        assert '<td class="num">1g</td>' in html
        assert '<td class="num">1000</td>' in html

    async def test_domain(self, console: Console, api: FakeAPI) -> None:
        api.results.update(
            DMARCSummaries=[],
            TLSRPTSummaries=None,
            DomainLocalparts={"": "admin", "info": "mjl"},
            Domain=EXAMPLE,
        )
        await console.navigate("#domains/example.org")
        html = console.display.content
        assert "Domain example.org" in html
        assert "<td>(catchall)@example.org</td>" in html
        assert '<a href="#accounts/mjl">mjl</a>' in html
        assert "No DMARC reports for domain." in html
        assert sorted(api.methods()) == ["DMARCSummaries", "Domain", "DomainLocalparts", "TLSRPTSummaries"]


class TestOperations:
    async def test_queue(self, console: Console, api: FakeAPI) -> None:
        api.results.update(
            QueueList=[
                {
                    "ID": 12,
                    "Queued": "2024-03-01T00:00:00Z",
                    "SenderLocalpart": "mjl",
                    "SenderDomain": {"IP": "", "Domain": EXAMPLE},
                    "RecipientLocalpart": "bob",
                    "RecipientDomain": {"IP": "wAACAQ==", "Domain": {}},
                    "Size": 11 * 1024 * 1024,
                    "Attempts": 2,
                    "NextAttempt": "2024-03-01T01:00:00Z",
                    "LastAttempt": None,
                    "LastError": "",
                    "RequireTLS": None,
                    "Transport": "",
                }
            ],
            Transports={"submit": {}},
        )
        await console.navigate("#queue")
        html = console.display.content
        assert "<td>mjl@example.org</td>" in html
        assert "<td>bob@192.0.2.1</td>" in html
        assert '<td class="num">11 mb</td>' in html
        assert "<td>Default</td>" in html
        assert "<p>submit</p>" in html

    async def test_empty_queue(self, console: Console, api: FakeAPI) -> None:
        api.results.update(QueueList=None, Transports=None)
        await console.navigate("#queue")
        assert "Currently no messages in the queue." in console.display.content

    async def test_mtasts(self, console: Console, api: FakeAPI) -> None:
        api.results["MTASTSPolicies"] = [
            {
                "Domain": "example.org",
                "LastUse": "2024-03-01T00:00:00Z",
                "Backoff": False,
                "RecordID": "20240301",
                "Version": "STSv1",
                "Mode": "enforce",
                "MX": [{"Wildcard": True, "Domain": {"ASCII": "example.org"}}, {"Wildcard": False, "Domain": {"ASCII": "mx.example.org"}}],
                "MaxAgeSeconds": 86400,
                "Extensions": None,
                "ValidEnd": "2030-01-01T00:00:00Z",
                "LastUpdate": None,
                "Inserted": "2024-02-01T00:00:00Z",
            }
        ]
        await console.navigate("#mtasts")
        html = console.display.content
        assert "<td>*.example.org, mx.example.org</td>" in html
        assert "<td>enforce</td>" in html

    async def test_dnsbl(self, console: Console, api: FakeAPI) -> None:
        api.results["DNSBLStatus"] = {
            "192.0.2.1": {"zen.example": "pass", "bl.example": "listed"},
        }
        await console.navigate("#dnsbl")
        html = console.display.content
        assert 'href="https://multirbl.valli.org/lookup/192.0.2.1.html"' in html
        assert 'rowspan="2"' in html
        assert html.index("bl.example") < html.index("zen.example")
        assert '<td class="tone-bad">listed</td>' in html

    async def test_dnsbl_empty(self, console: Console, api: FakeAPI) -> None:
        api.results["DNSBLStatus"] = {}
        await console.navigate("#dnsbl")
        assert "No IPs found." in console.display.content


class TestReports:
    async def test_dmarc_summary(self, console: Console, api: FakeAPI) -> None:
        api.results["DMARCSummaries"] = [
            {"Domain": "example.org", "Total": 4, "DispositionQuarantine": 0, "DispositionReject": 0, "DKIMFail": 0, "SPFFail": 0}
        ]
        await console.navigate("#dmarc/reports")
        html = console.display.content
        assert '<a href="#domains/example.org/dmarc">example.org</a>' in html
        method, params = api.calls[0]
        assert method == "DMARCSummaries"
        assert params[2] == ""

    async def test_domain_dmarc_report_raw(self, console: Console, api: FakeAPI) -> None:
        api.results.update(DMARCReportID={"ID": 5, "ReportMetadata": {"OrgName": "google.com"}}, Domain=EXAMPLE)
        await console.navigate("#domains/example.org/dmarc/5")
        html = console.display.content
        assert '<pre class="literal">' in html
        assert "google.com" in html
        assert ("DMARCReportID", ["example.org", 5]) in api.calls

    async def test_dmarc_evaluation_stats(self, console: Console, api: FakeAPI) -> None:
        api.results["DMARCEvaluationStats"] = {
            "example.org": {"Domain": EXAMPLE, "Dispositions": ["none"], "Count": 3, "SendReport": True},
        }
        await console.navigate("#dmarc/evaluations")
        assert '<a href="#dmarc/evaluations/example.org">example.org</a>' in console.display.content

    async def test_tlsrpt_domain(self, console: Console, api: FakeAPI) -> None:
        api.results.update(TLSReports=[], ParseDomain=EXAMPLE)
        await console.navigate("#tlsrpt/reports/example.org")
        assert "No TLS reports for domain." in console.display.content

    async def test_tlsrpt_index_needs_no_api(self, console: Console, api: FakeAPI) -> None:
        await console.navigate("#tlsrpt")
        assert api.calls == []
        assert '<a href="#tlsrpt/reports">Reports</a>' in console.display.content


class TestFailures:
    async def test_api_error_alerts(self, console: Console, api: FakeAPI) -> None:
        api.results["Accounts"] = ["admin"]
        await console.navigate("#accounts")
        before = console.display.content

        api.results["Account"] = ValueError("account not found")
        result = await console.navigate("#accounts/ghost")
        assert result.status is NavigationStatus.FAILED
        assert console.display.alerts == ["Error: Account: account not found"]
        assert console.display.content == before

    async def test_bad_address_fails_render(self, console: Console, api: FakeAPI) -> None:
        api.results.update(
            QueueList=[
                {
                    "ID": 1,
                    "Queued": "2024-03-01T00:00:00Z",
                    "SenderDomain": {"IP": "AAE=", "Domain": {}},
                    "RecipientDomain": {"Domain": EXAMPLE},
                    "NextAttempt": "2024-03-01T00:00:00Z",
                }
            ],
            Transports={},
        )
        result = await console.navigate("#queue")
        assert result.status is NavigationStatus.FAILED
        assert console.display.content == ""

    async def test_malformed_result_fails_navigation(self, console: Console, api: FakeAPI) -> None:
        api.results["DMARCEvaluationsDomain"] = None
        result = await console.navigate("#dmarc/evaluations/example.org")
        assert result.status is NavigationStatus.FAILED
        assert result.error is not None and result.error.code == "client:decode"
        assert console.display.alerts == [
            "Error: DMARCEvaluationsDomain: expected [domain, evaluations], got NoneType"
        ]
        assert console.display.loading is False

        api.results["DMARCEvaluationsDomain"] = [EXAMPLE, []]
        assert (await console.reload()).status is NavigationStatus.COMMITTED
        assert "No evaluations." in console.display.content

    async def test_queue_entry_without_times(self, console: Console, api: FakeAPI) -> None:
        api.results.update(QueueList=[{"ID": 3, "RecipientDomain": {"Domain": EXAMPLE}}], Transports={})
        result = await console.navigate("#queue")
        assert result.status is NavigationStatus.COMMITTED
        assert "<td>3</td>" in console.display.content

    async def test_not_found(self, console: Console, api: FakeAPI) -> None:
        result = await console.navigate("#domains/example.org/dnscheck")
        assert result.status is NavigationStatus.NOT_FOUND
        assert "page not found" in console.display.content
        assert api.calls == []


class TestConsole:
    async def test_reload_refetches(self, console: Console, api: FakeAPI) -> None:
        api.results["Accounts"] = []
        await console.navigate("#accounts")
        assert (await console.navigate("#accounts")).status is NavigationStatus.SKIPPED
        assert (await console.reload()).status is NavigationStatus.COMMITTED
        assert api.methods() == ["Accounts", "Accounts"]

    async def test_stored_token_used(self, api: FakeAPI, config: AdminConfig) -> None:
        config.resolved_token_path.write_text("stored-token")
        api.results["Accounts"] = []
        async with Console(config, transport=httpx.MockTransport(api)) as console:
            assert console.client.token == "stored-token"

    async def test_logout_clears_token(self, api: FakeAPI, config: AdminConfig) -> None:
        config.resolved_token_path.write_text("stored-token")
        api.results["Logout"] = None
        async with Console(config, transport=httpx.MockTransport(api)) as console:
            await console.logout()
            assert console.client.token == ""
        assert not config.resolved_token_path.exists()

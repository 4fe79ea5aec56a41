"""Typed async client for the admin API.

Each API operation is an HTTP ``POST {api_url}/{Method}`` with a JSON body
``{"params": [...]}``. The server answers ``{"result": ...}`` or
``{"error": {"code": ..., "message": ...}}``. Every failure, whether
transport, HTTP status or API error, surfaces as ``RpcFailure``.

Times are sent as RFC 3339 strings.
"""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from beaconadmin.config import AdminConfig
from beaconadmin.errors import RpcFailure

logger = logging.getLogger("beaconadmin.rpc")


def _param(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.isoformat()
    return value


def _shape_error(method: str, expected: str, result: Any) -> RpcFailure:
    return RpcFailure(method, "client:decode", f"expected {expected}, got {type(result).__name__}")


def _records(method: str, result: Any, item: type = dict) -> list[Any]:
    """A list result of *item* values; null reads as empty."""
    if result is None:
        return []
    if not isinstance(result, list) or not all(isinstance(e, item) for e in result):
        raise _shape_error(method, f"list of {item.__name__}", result)
    return result


def _object(method: str, result: Any, *, optional: bool = False) -> dict[str, Any]:
    """A JSON object result; null reads as empty only when *optional*."""
    if result is None and optional:
        return {}
    if not isinstance(result, dict):
        raise _shape_error(method, "object", result)
    return result



class AdminClient:
    """Admin API client.

    Usage::

        async with AdminClient.from_config(config, token=token) as client:
            domains = await client.domains()

    Pass ``transport`` (e.g. ``httpx.MockTransport``) to talk to something
    other than the network.
    """

    __slots__ = ("_csrf_header", "_http", "_token")

    def __init__(
        self,
        api_url: str,
        *,
        token: str = "",
        csrf_header: str = "x-beacon-csrf",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._csrf_header = csrf_header
        self._http = httpx.AsyncClient(
            base_url=api_url.rstrip("/") + "/",
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: AdminConfig,
        *,
        token: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AdminClient":
        return cls(
            config.api_url,
            token=token,
            csrf_header=config.csrf_header,
            timeout=config.request_timeout,
            transport=transport,
        )

    @property
    def token(self) -> str:
        return self._token

    def with_token(self, token: str) -> None:
        """Use *token* for subsequent calls."""
        self._token = token

    async def __aenter__(self) -> "AdminClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def call(self, method: str, *params: Any) -> Any:
        """Call API operation *method* and return its result.

        Raises ``RpcFailure`` for transport errors, non-2xx responses, API
        errors and undecodable responses.
        """
        headers = {"content-type": "application/json"}
        if self._token:
            headers[self._csrf_header] = self._token
        body = {"params": [_param(p) for p in params]}

        logger.debug("call %s", method)
        try:
            response = await self._http.post(method, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise RpcFailure(method, "client:transport", str(exc) or type(exc).__name__) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and payload.get("error"):
            error = payload["error"]
            raise RpcFailure(
                method,
                str(error.get("code") or "server:error"),
                str(error.get("message") or ""),
            )
        if not response.is_success:
            raise RpcFailure(method, "client:status", f"HTTP {response.status_code}")
        if not isinstance(payload, dict) or "result" not in payload:
            raise RpcFailure(method, "client:decode", "response has no result")
        return payload["result"]

    # -- Domains & accounts ------------------------------------------------

    async def domains(self) -> list[dict[str, Any]]:
        return _records("Domains", await self.call("Domains"))

    async def domain(self, domain: str) -> dict[str, Any]:
        return _object("Domain", await self.call("Domain", domain))

    async def parse_domain(self, domain: str) -> dict[str, Any]:
        return _object("ParseDomain", await self.call("ParseDomain", domain))

    async def domain_localparts(self, domain: str) -> dict[str, str]:
        return _object("DomainLocalparts", await self.call("DomainLocalparts", domain), optional=True)

    async def accounts(self) -> list[str]:
        return _records("Accounts", await self.call("Accounts"), str)

    async def account(self, name: str) -> dict[str, Any]:
        return _object("Account", await self.call("Account", name))

    async def check_updates_enabled(self) -> bool:
        return bool(await self.call("CheckUpdatesEnabled"))

    # -- Queue ---------------------------------------------------------------

    async def queue_size(self) -> int:
        result = await self.call("QueueSize")
        if isinstance(result, bool) or not isinstance(result, int):
            raise _shape_error("QueueSize", "integer", result)
        return result

    async def queue_list(self) -> list[dict[str, Any]]:
        return _records("QueueList", await self.call("QueueList"))

    async def transports(self) -> dict[str, Any]:
        return _object("Transports", await self.call("Transports"), optional=True)

    # -- DMARC ---------------------------------------------------------------

    async def dmarc_summaries(self, start: datetime, end: datetime, domain: str = "") -> list[dict[str, Any]]:
        return _records("DMARCSummaries", await self.call("DMARCSummaries", start, end, domain))

    async def dmarc_reports(self, start: datetime, end: datetime, domain: str) -> list[dict[str, Any]]:
        return _records("DMARCReports", await self.call("DMARCReports", start, end, domain))

    async def dmarc_report_id(self, domain: str, report_id: int) -> dict[str, Any]:
        return _object("DMARCReportID", await self.call("DMARCReportID", domain, report_id))

    async def dmarc_evaluation_stats(self) -> dict[str, dict[str, Any]]:
        return _object("DMARCEvaluationStats", await self.call("DMARCEvaluationStats"), optional=True)

    async def dmarc_evaluations_domain(self, domain: str) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        result = await self.call("DMARCEvaluationsDomain", domain)
        if not isinstance(result, list) or len(result) != 2:
            raise _shape_error("DMARCEvaluationsDomain", "[domain, evaluations]", result)
        parsed_domain, evaluations = result
        return (
            _object("DMARCEvaluationsDomain", parsed_domain),
            _records("DMARCEvaluationsDomain", evaluations),
        )

    # -- TLSRPT --------------------------------------------------------------

    async def tlsrpt_summaries(self, start: datetime, end: datetime, domain: str = "") -> list[dict[str, Any]]:
        return _records("TLSRPTSummaries", await self.call("TLSRPTSummaries", start, end, domain))

    async def tls_reports(self, start: datetime, end: datetime, domain: str) -> list[dict[str, Any]]:
        return _records("TLSReports", await self.call("TLSReports", start, end, domain))

    async def tls_report_id(self, domain: str, report_id: int) -> dict[str, Any]:
        return _object("TLSReportID", await self.call("TLSReportID", domain, report_id))

    # -- Misc ----------------------------------------------------------------

    async def mtasts_policies(self) -> list[dict[str, Any]]:
        return _records("MTASTSPolicies", await self.call("MTASTSPolicies"))

    async def dnsbl_status(self) -> dict[str, dict[str, str]]:
        return _object("DNSBLStatus", await self.call("DNSBLStatus"), optional=True)

    async def lookup_ip(self, ip: str) -> dict[str, Any]:
        return _object("LookupIP", await self.call("LookupIP", ip))

    async def logout(self) -> None:
        await self.call("Logout")

"""Views — one async handler per console location.

Each handler takes a ``ViewContext`` first and the route parameters as
keyword arguments, fetches what it needs from the admin API and returns
the complete page HTML.
"""

from functools import partial

from beaconadmin.routing import Route, Router, parse_pattern
from beaconadmin.views import dmarc, operations, overview, tlsrpt
from beaconadmin.views.page import HeaderGroup, Link, Section, ViewContext

# (pattern, handler, name). Order matters: first full match wins.
ROUTES = (
    ("", overview.index, "index"),
    ("accounts", overview.accounts, "accounts"),
    ("accounts/{name}", overview.account, "account"),
    ("domains/{domain}", overview.domain, "domain"),
    ("domains/{domain}/dmarc", dmarc.domain_dmarc, "domain-dmarc"),
    ("domains/{domain}/dmarc/{report_id:int}", dmarc.domain_dmarc_report, "domain-dmarc-report"),
    ("queue", operations.queue, "queue"),
    ("dmarc", dmarc.dmarc_index, "dmarc"),
    ("dmarc/reports", dmarc.dmarc_reports, "dmarc-reports"),
    ("dmarc/evaluations", dmarc.dmarc_evaluations, "dmarc-evaluations"),
    ("dmarc/evaluations/{domain}", dmarc.dmarc_evaluations_domain, "dmarc-evaluations-domain"),
    ("tlsrpt", tlsrpt.tlsrpt_index, "tlsrpt"),
    ("tlsrpt/reports", tlsrpt.tlsrpt_reports, "tlsrpt-reports"),
    ("tlsrpt/reports/{domain}", tlsrpt.domain_tlsrpt, "domain-tlsrpt"),
    ("tlsrpt/reports/{domain}/{report_id:int}", tlsrpt.domain_tlsrpt_report, "domain-tlsrpt-report"),
    ("mtasts", operations.mtasts, "mtasts"),
    ("dnsbl", operations.dnsbl, "dnsbl"),
)


def build_router(ctx: ViewContext) -> Router:
    """Register every view, bound to *ctx*, and compile the table."""
    router = Router()
    for pattern, handler, name in ROUTES:
        router.add(Route(parse_pattern(pattern), partial(handler, ctx), name=name))
    router.compile()
    return router


__all__ = ["ROUTES", "HeaderGroup", "Link", "Section", "ViewContext", "build_router"]

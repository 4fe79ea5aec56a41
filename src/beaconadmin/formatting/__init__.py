"""Formatters — raw API values to canonical display text, and back.

Everything here is pure: no I/O, no clock reads except where a reference
time is left unset.
"""

from beaconadmin.formatting.addresses import (
    IPV4_MAPPED_PREFIX,
    Address,
    decode_address,
    format_address,
    format_ip,
)
from beaconadmin.formatting.domains import domain_name, domain_string, ipdomain_string
from beaconadmin.formatting.durations import format_age
from beaconadmin.formatting.periods import as_utc, format_period, is_day_change, period_title
from beaconadmin.formatting.sizes import (
    decode_quota_size,
    encode_quota_size,
    format_byte_size,
)

__all__ = [
    "IPV4_MAPPED_PREFIX",
    "Address",
    "as_utc",
    "decode_address",
    "decode_quota_size",
    "domain_name",
    "domain_string",
    "encode_quota_size",
    "format_address",
    "format_age",
    "format_byte_size",
    "format_ip",
    "format_period",
    "ipdomain_string",
    "is_day_change",
    "period_title",
]

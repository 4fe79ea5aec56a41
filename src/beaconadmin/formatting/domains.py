"""Domain and IP-or-domain display.

The admin API returns domains as ``{"ASCII": ..., "Unicode": ...}`` with an
empty ``Unicode`` for plain ASCII names.
"""

from collections.abc import Mapping
from typing import Any

from beaconadmin.formatting.addresses import format_ip


def domain_name(domain: Mapping[str, Any]) -> str:
    """Short name: unicode form when present."""
    return domain.get("Unicode") or domain.get("ASCII") or ""


def domain_string(domain: Mapping[str, Any]) -> str:
    """Long name: ``"unicode (ascii)"`` for IDNA names, else the ASCII name."""
    unicode_name = domain.get("Unicode") or ""
    ascii_name = domain.get("ASCII") or ""
    if unicode_name:
        return f"{unicode_name} ({ascii_name})"
    return ascii_name


def ipdomain_string(ipdomain: Mapping[str, Any]) -> str:
    """An IP-or-domain value: the IP when set, else the domain."""
    if ipdomain.get("IP"):
        return format_ip(ipdomain["IP"])
    return domain_string(ipdomain.get("Domain") or {})

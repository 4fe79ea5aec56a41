"""IP address decoding and canonical display.

The admin API sends addresses as the raw 4 or 16 address bytes, base64
encoded. IPv4-mapped IPv6 addresses display as plain dotted IPv4.
"""

import base64
import binascii
from dataclasses import dataclass

from beaconadmin.errors import DecodeError

IPV4_MAPPED_PREFIX = bytes([0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0xFF, 0xFF])


@dataclass(frozen=True, slots=True)
class Address:
    """A decoded IPv4 (4 bytes) or IPv6 (16 bytes) address."""

    packed: bytes

    def __post_init__(self) -> None:
        if len(self.packed) not in (4, 16):
            msg = f"address must be 4 or 16 bytes, got {len(self.packed)}"
            raise DecodeError(msg)

    @property
    def is_ipv4_mapped(self) -> bool:
        return len(self.packed) == 16 and self.packed[:12] == IPV4_MAPPED_PREFIX

    def __str__(self) -> str:
        return format_address(self)


def decode_address(encoded: str | bytes) -> Address:
    """Decode a base64 transport value into an ``Address``.

    Raises ``DecodeError`` for invalid base64 or a length other than 4 or 16.
    """
    try:
        packed = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        msg = f"invalid address encoding {encoded!r}"
        raise DecodeError(msg) from exc
    return Address(packed)


def format_address(address: Address | bytes) -> str:
    """Render an address in canonical text form.

    Examples::

        format_address(bytes([192, 0, 2, 1]))     -> "192.0.2.1"
        format_address(ipv4_mapped_bytes)         -> "192.0.2.1"
        format_address(loopback_v6_bytes)         -> "::1"
        format_address(b"\\x20\\x01\\x0d\\xb8" + ...) -> "2001:db8::1"
    """
    if not isinstance(address, Address):
        address = Address(bytes(address))
    packed = address.packed
    if len(packed) == 4 or address.is_ipv4_mapped:
        return ".".join(str(b) for b in packed[-4:])
    return _format_ipv6(packed)


def _format_ipv6(packed: bytes) -> str:
    groups = [(packed[i] << 8) | packed[i + 1] for i in range(0, 16, 2)]
    start, end = _longest_zero_run(groups)
    if end - start < 2:
        return ":".join(f"{g:x}" for g in groups)
    head = ":".join(f"{g:x}" for g in groups[:start])
    tail = ":".join(f"{g:x}" for g in groups[end:])
    return f"{head}::{tail}"


def _longest_zero_run(groups: list[int]) -> tuple[int, int]:
    """Return ``(start, end)`` of the first longest run of zero groups."""
    best_start = best_end = 0
    i = 0
    while i < len(groups):
        if groups[i] != 0:
            i += 1
            continue
        j = i
        while j < len(groups) and groups[j] == 0:
            j += 1
        # Strictly longer: ties keep the earlier run.
        if j - i > best_end - best_start:
            best_start, best_end = i, j
        i = j
    return best_start, best_end


def format_ip(encoded: str | bytes) -> str:
    """Decode a base64 transport value and render it."""
    return format_address(decode_address(encoded))

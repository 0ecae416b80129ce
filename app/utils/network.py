"""Network utility functions.

Client address detection works in two steps: every candidate (proxy headers
first, in trust order, then the transport peer address) is classified as
IPv4 or IPv6, and candidates are folded into a single ``AddressResult``
using :func:`should_prioritize_ip`.
"""
import logging
import re
from typing import Dict, Mapping, Optional

from starlette.requests import Request

from app.models.schemas import AddressResult, IPVersion, UNKNOWN_ADDRESS

logger = logging.getLogger(__name__)

# Highest trust first. The transport peer address is always considered last.
PROXY_HEADERS = (
    "cf-connecting-ip",
    "true-client-ip",
    "x-real-ip",
    "x-client-ip",
    "x-cluster-client-ip",
    "x-forwarded-for",
    "x-original-forwarded-for",
)

# Comma-separated lists where only the leftmost (closest to the client) entry is used
_LIST_HEADERS = frozenset({"x-forwarded-for", "x-original-forwarded-for"})

IPV4_MAPPED_PREFIX = "::ffff:"

_IPV4_PATTERN = re.compile(
    r"(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)
_IPV6_PATTERN = re.compile(
    r"(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}"
    r"|::1"
    r"|::"
    r"|(?:[0-9a-fA-F]{1,4}:)*::(?:[0-9a-fA-F]{1,4}:)*[0-9a-fA-F]{1,4}"
)


def is_ipv4(ip: str) -> bool:
    """Check for a strict dotted quad (four groups of 0-255)."""
    return bool(ip) and _IPV4_PATTERN.fullmatch(ip) is not None


def is_ipv6(ip: str) -> bool:
    """Check for full or compressed hextet notation.

    Anything containing ``::`` is accepted as well, so some malformed
    strings pass. Callers rely on that leniency; do not tighten it here.
    """
    if not ip:
        return False
    return _IPV6_PATTERN.fullmatch(ip) is not None or "::" in ip


def _is_private_ipv4(ip: str) -> bool:
    octets = [int(part) for part in ip.split(".")]
    first, second = octets[0], octets[1]
    return (
        first == 127
        or first == 10
        or (first == 172 and 16 <= second <= 31)
        or (first == 192 and second == 168)
        or (first == 169 and second == 254)
    )


def _is_private_ipv6(ip: str) -> bool:
    lowered = ip.lower()
    return (
        lowered == "::1"
        or lowered.startswith(("fc", "fd"))
        or lowered.startswith("fe80:")
        or "::" in lowered
    )


def is_private_ip(ip: str) -> bool:
    """Return True for loopback, RFC1918, link-local and unique-local addresses.

    Strings that are neither IPv4 nor IPv6 are reported as not private;
    they never make it into an ``AddressResult``.
    """
    if is_ipv4(ip):
        return _is_private_ipv4(ip)
    if is_ipv6(ip):
        return _is_private_ipv6(ip)
    return False


def should_prioritize_ip(new_ip: str, current_ip: Optional[str]) -> bool:
    """Decide whether ``new_ip`` replaces ``current_ip``.

    Within a family a public address beats a private one, and on a tie the
    current (earlier, more trusted) address is kept. Across families an IPv4
    address always displaces an IPv6 one, whatever header either came from.
    That IPv4 preference is the observed behavior of the service and has not
    been confirmed as intended policy.
    """
    if not current_ip or current_ip == UNKNOWN_ADDRESS:
        return True

    new_is_v4 = is_ipv4(new_ip)
    current_is_v4 = is_ipv4(current_ip)

    if new_is_v4 == current_is_v4:
        return is_private_ip(current_ip) and not is_private_ip(new_ip)

    return new_is_v4


def _normalize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Lower-case header names, keeping the first value of repeated headers."""
    normalized: Dict[str, str] = {}
    for name, value in headers.items():
        normalized.setdefault(name.lower(), value)
    return normalized


def read_proxy_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Return the raw value of every recognised proxy header, in trust order."""
    normalized = _normalize_headers(headers)
    return {name: normalized.get(name) for name in PROXY_HEADERS}


def _candidates(headers: Mapping[str, str], peer_address: Optional[str]):
    for name, value in read_proxy_headers(headers).items():
        if not value:
            continue
        if name in _LIST_HEADERS:
            value = value.split(",")[0]
        yield name, value.strip()

    if peer_address:
        yield "peer", peer_address.strip()


def extract_client_addresses(
    headers: Mapping[str, str],
    peer_address: Optional[str] = None,
) -> AddressResult:
    """Fold proxy headers and the peer address into an ``AddressResult``."""
    fields = {
        "ipv4": None,
        "ipv6": None,
        "primary": UNKNOWN_ADDRESS,
        "version": IPVersion.UNKNOWN,
    }

    for source, candidate in _candidates(headers, peer_address):
        if not candidate or candidate == UNKNOWN_ADDRESS:
            continue

        clean = candidate[len(IPV4_MAPPED_PREFIX):] if candidate.startswith(IPV4_MAPPED_PREFIX) else candidate

        if is_ipv4(clean):
            address, slot, version = clean, "ipv4", IPVersion.IPV4
        elif is_ipv6(candidate):
            address, slot, version = candidate, "ipv6", IPVersion.IPV6
        else:
            logger.debug(f"Discarding unrecognised address {candidate!r} from {source}")
            continue

        if should_prioritize_ip(address, fields[slot]):
            fields[slot] = address

        if should_prioritize_ip(address, fields["primary"]):
            fields["primary"] = address
            fields["version"] = version

    return AddressResult(**fields)


def get_client_addresses(request: Request) -> AddressResult:
    """Extract client addresses from request, handling proxies."""
    peer_address = request.client.host if request.client else None
    return extract_client_addresses(request.headers, peer_address)


def has_public_address(result: AddressResult) -> bool:
    """True when any classified address lies outside the private ranges."""
    return any(not is_private_ip(ip) for ip in result.addresses)

"""Lenient IP address and CIDR parsing that tolerates leading zeros."""

from __future__ import annotations

import ipaddress
from typing import Optional, Tuple, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

_DIGITS = frozenset("0123456789")


def _is_decimal(text: str) -> bool:
    return bool(text) and all(ch in _DIGITS for ch in text)


def _parse_ipv4(text: str) -> Optional[ipaddress.IPv4Address]:
    parts = text.split(".")
    if len(parts) != 4 or not all(_is_decimal(part) for part in parts):
        return None
    octets = [int(part) for part in parts]
    if any(octet > 0xFF for octet in octets):
        return None
    return ipaddress.IPv4Address(bytes(octets))


def _parse_ipv6(text: str) -> Optional[ipaddress.IPv6Address]:
    if "%" in text:
        # Zones are not part of an address.
        return None
    head, sep, tail = text.rpartition(":")
    if sep and "." in tail:
        embedded = _parse_ipv4(tail)
        if embedded is None:
            return None
        text = f"{head}:{embedded}"
    try:
        return ipaddress.IPv6Address(text)
    except ValueError:
        return None


def _parse_raw(text: str) -> Optional[IPAddress]:
    """Parse without folding IPv4-mapped IPv6 addresses into IPv4."""
    for ch in text:
        if ch == ".":
            return _parse_ipv4(text)
        if ch == ":":
            return _parse_ipv6(text)
    return None


def _to4(ip: Optional[IPAddress]) -> Optional[ipaddress.IPv4Address]:
    """Return the IPv4 form of ``ip``, or None if it has none."""
    if ip is None:
        return None
    if isinstance(ip, ipaddress.IPv4Address):
        return ip
    return ip.ipv4_mapped


def _normalize_ip(ip: IPAddress) -> IPAddress:
    """Fold IPv4-mapped IPv6 addresses into plain IPv4 addresses."""
    v4 = _to4(ip)
    return ip if v4 is None else v4


def parse_ip_sloppy(text: str) -> Optional[IPAddress]:
    """Parse an IP address, allowing leading zeros in IPv4 numbers.

    IPv4-mapped IPv6 addresses come back as IPv4 addresses.
    Returns None when ``text`` is not a valid address.
    """
    raw = _parse_raw(text)
    return None if raw is None else _normalize_ip(raw)


def parse_cidr_sloppy(text: str) -> Tuple[IPAddress, IPNetwork]:
    """Parse CIDR notation into the address and its network.

    Leading zeros in IPv4 numbers are allowed. Raises ValueError on bad input.
    """
    address, sep, prefix = text.partition("/")
    raw = _parse_raw(address) if sep else None
    if raw is None or not _is_decimal(prefix) or int(prefix) > raw.max_prefixlen:
        raise ValueError(f"invalid CIDR address: {text}")
    network = ipaddress.ip_network((raw, int(prefix)), strict=False)
    return _normalize_ip(raw), network
"""Helpers for IP families, CIDR lists, ports and address arithmetic."""

from __future__ import annotations

import ipaddress
from typing import Iterable, List, Optional

from kubeutil.netparse import (
    IPAddress,
    IPNetwork,
    _DIGITS,
    _normalize_ip,
    _to4,
    parse_cidr_sloppy,
    parse_ip_sloppy,
)

_MAX_INT64 = 2**63 - 1
_IPV4_MAPPED_PREFIX = 0xFFFF << 32


def parse_cidrs(cidrs: Iterable[str]) -> List[IPNetwork]:
    """Parse CIDR strings in order. Raises ValueError on the first bad one."""
    result = []
    for cidr in cidrs:
        try:
            _, network = parse_cidr_sloppy(cidr)
        except ValueError as err:
            raise ValueError(f'failed to parse cidr value:"{cidr}" with error:{err}') from err
        result.append(network)
    return result


def is_dual_stack_ips(ips: Iterable[Optional[IPAddress]]) -> bool:
    """Return True if the addresses include both families.

    Raises ValueError if any address is None.
    """
    v4_found = v6_found = False
    for ip in ips:
        if ip is None:
            raise ValueError("ip None is invalid")
        if is_ipv6(ip):
            v6_found = True
        else:
            v4_found = True
    return v4_found and v6_found


def is_dual_stack_ip_strings(ips: Iterable[str]) -> bool:
    """Return True if the address strings include both families."""
    return is_dual_stack_ips([parse_ip_sloppy(ip) for ip in ips])


def is_dual_stack_cidrs(cidrs: Iterable[Optional[IPNetwork]]) -> bool:
    """Return True if the networks include both families.

    Raises ValueError if any network is None.
    """
    v4_found = v6_found = False
    for cidr in cidrs:
        if cidr is None:
            raise ValueError("cidr None is invalid")
        if is_ipv6(cidr.network_address):
            v6_found = True
        else:
            v4_found = True
    return v4_found and v6_found


def is_dual_stack_cidr_strings(cidrs: Iterable[str]) -> bool:
    """Return True if the CIDR strings include both families."""
    return is_dual_stack_cidrs(parse_cidrs(cidrs))


def is_ipv6(ip: Optional[IPAddress]) -> bool:
    """Return True if ``ip`` is an IPv6 address that has no IPv4 form."""
    return ip is not None and _to4(ip) is None


def is_ipv6_string(ip: str) -> bool:
    """Return True if ``ip`` parses as an IPv6 address."""
    return is_ipv6(parse_ip_sloppy(ip))


def _cidr_ip(cidr: str) -> Optional[IPAddress]:
    try:
        return parse_cidr_sloppy(cidr)[0]
    except ValueError:
        return None


def is_ipv6_cidr_string(cidr: str) -> bool:
    """Return True if ``cidr`` is an IPv6 CIDR."""
    return is_ipv6(_cidr_ip(cidr))


def is_ipv6_cidr(cidr: IPNetwork) -> bool:
    """Return True if the network is IPv6."""
    return is_ipv6(cidr.network_address)


def is_ipv4(ip: Optional[IPAddress]) -> bool:
    """Return True if ``ip`` is an IPv4 address or has an IPv4 form."""
    return ip is not None and _to4(ip) is not None


def is_ipv4_string(ip: str) -> bool:
    """Return True if ``ip`` parses as an IPv4 address."""
    return is_ipv4(parse_ip_sloppy(ip))


def is_ipv4_cidr(cidr: IPNetwork) -> bool:
    """Return True if the network is IPv4."""
    return is_ipv4(cidr.network_address)


def is_ipv4_cidr_string(cidr: str) -> bool:
    """Return True if ``cidr`` is an IPv4 CIDR."""
    return is_ipv4(_cidr_ip(cidr))


def parse_port(port: str, allow_zero: bool = False) -> int:
    """Parse a decimal port number in 0..65535. Raises ValueError if invalid."""
    if not port or not all(ch in _DIGITS for ch in port):
        raise ValueError(f'invalid port number: "{port}"')
    value = int(port)
    if value > 0xFFFF:
        raise ValueError(f'port number out of range: "{port}"')
    if value == 0 and not allow_zero:
        raise ValueError("0 is not a valid port number")
    return value


def big_for_ip(ip: IPAddress) -> int:
    """Return the integer value of the 16-byte form of ``ip``."""
    v4 = _to4(ip)
    if v4 is not None:
        return _IPV4_MAPPED_PREFIX | int(v4)
    return int(ip)


def add_ip_offset(base: int, offset: int) -> IPAddress:
    """Return the address at ``base + offset``.

    Overflowing an IPv4 address yields an IPv6 address.
    """
    value = abs(base + offset) & ((1 << 128) - 1)
    return _normalize_ip(ipaddress.IPv6Address(value))


def range_size(subnet: IPNetwork) -> int:
    """Return the number of addresses in ``subnet``.

    Returns 0 for ranges too large to support and 2**63-1 on int64 overflow.
    """
    ones = subnet.prefixlen
    bits = subnet.max_prefixlen
    if (bits == 32 and bits - ones >= 31) or (bits == 128 and bits - ones >= 127):
        return 0
    if bits - ones >= 63:
        return _MAX_INT64
    return 1 << (bits - ones)


def _contains(subnet: IPNetwork, ip: IPAddress) -> bool:
    net_v4 = _to4(subnet.network_address)
    ip_v4 = _to4(ip)
    if (net_v4 is None) != (ip_v4 is None):
        return False
    if net_v4 is not None and ip_v4 is not None:
        prefix = subnet.prefixlen if subnet.version == 4 else max(subnet.prefixlen - 96, 0)
        mask = int(ipaddress.IPv4Network((0, prefix)).netmask)
        return int(ip_v4) & mask == int(net_v4) & mask
    return int(ip) & int(subnet.netmask) == int(subnet.network_address)


def get_indexed_ip(subnet: IPNetwork, index: int) -> IPAddress:
    """Return the address ``index`` steps past the start of ``subnet``.

    Raises ValueError if that address lies outside the subnet.
    """
    ip = add_ip_offset(big_for_ip(subnet.network_address), index)
    if not _contains(subnet, ip):
        raise ValueError(
            f"can't generate IP with index {index} from subnet. "
            f'subnet too small. subnet: "{subnet}"'
        )
    return ip
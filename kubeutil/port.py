"""Local IP/port/protocol descriptions that can be held open."""

from __future__ import annotations

import json
import socket
from dataclasses import dataclass
from enum import Enum
from typing import Union

from kubeutil.netparse import _to4, parse_ip_sloppy


class IPFamily(str, Enum):
    """An IP family; ANY means no particular family."""

    ANY = ""
    IPV4 = "4"
    IPV6 = "6"

    def __str__(self) -> str:
        return self.value


class Protocol(str, Enum):
    """A network protocol supported by LocalPort."""

    TCP = "TCP"
    UDP = "UDP"

    def __str__(self) -> str:
        return self.value


def _join_host_port(host: str, port: int) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


@dataclass
class LocalPort:
    """An IP address and port pair with a protocol and optional IP family.

    An empty ``ip`` binds to all local addresses; port 0 picks a free port.
    """

    description: str
    ip: str = ""
    ip_family: Union[IPFamily, str] = IPFamily.ANY
    port: int = 0
    protocol: Union[Protocol, str] = Protocol.TCP

    def __post_init__(self) -> None:
        try:
            self.protocol = Protocol(self.protocol)
        except ValueError:
            raise ValueError(f"Unsupported protocol {self.protocol}") from None
        try:
            self.ip_family = IPFamily(self.ip_family)
        except ValueError:
            raise ValueError(f"Invalid IP family {self.ip_family}") from None
        if self.ip:
            parsed = parse_ip_sloppy(self.ip)
            if parsed is None:
                raise ValueError(f"invalid ip address {self.ip}")
            as_v4 = _to4(parsed)
            if (as_v4 is None and self.ip_family is IPFamily.IPV4) or (
                as_v4 is not None and self.ip_family is IPFamily.IPV6
            ):
                raise ValueError(
                    f"ip address and family mismatch {self.ip}, {self.ip_family.value}"
                )

    def __str__(self) -> str:
        host_port = _join_host_port(self.ip, self.port)
        return (
            f"{json.dumps(self.description, ensure_ascii=False)} "
            f"({host_port}/{self.protocol.value.lower()}{self.ip_family.value})"
        )


def _bind_address(lp: LocalPort):
    """Return (family, host, dualstack) for binding ``lp``."""
    if lp.ip:
        parsed = parse_ip_sloppy(lp.ip)
        if parsed is None:
            raise ValueError(f"invalid ip address {lp.ip}")
        family = socket.AF_INET if parsed.version == 4 else socket.AF_INET6
        return family, str(parsed), False
    if lp.ip_family is IPFamily.IPV4:
        return socket.AF_INET, "0.0.0.0", False
    if lp.ip_family is IPFamily.IPV6:
        return socket.AF_INET6, "::", False
    if socket.has_ipv6 and socket.has_dualstack_ipv6():
        return socket.AF_INET6, "::", True
    return socket.AF_INET, "0.0.0.0", False


def open_local_port(lp: LocalPort) -> socket.socket:
    """Bind (and for TCP, listen on) the given local port and return the socket."""
    family, host, dualstack = _bind_address(lp)
    if lp.protocol is Protocol.TCP:
        return socket.create_server(
            (host, lp.port), family=family, dualstack_ipv6=dualstack
        )
    if lp.protocol is Protocol.UDP:
        sock = socket.socket(family, socket.SOCK_DGRAM)
        try:
            if dualstack:
                sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
            sock.bind((host, lp.port))
        except OSError:
            sock.close()
            raise
        return sock
    raise ValueError(f'unknown protocol "{lp.protocol}"')


class ListenPortOpener:
    """Opens ports by binding and listening on them."""

    def open_local_port(self, lp: LocalPort) -> socket.socket:
        """Hold the given local port open; close the returned socket to release it."""
        return open_local_port(lp)
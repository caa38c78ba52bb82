"""Parsing and inspection of CIDR network ranges."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

_IPInterface = ipaddress.IPv4Interface | ipaddress.IPv6Interface


@dataclass(frozen=True)
class CIDR:
    """An address together with the network it belongs to, e.g. 192.168.1.0/24."""

    interface: _IPInterface

    def is_ipv4(self) -> bool:
        return self.interface.version == 4

    def is_ipv6(self) -> bool:
        return self.interface.version == 6

    def ip(self) -> str:
        """The address as written, before masking."""
        return str(self.interface.ip)

    def network(self) -> str:
        """The network address."""
        return str(self.interface.network.network_address)

    def mask_size(self) -> tuple[int, int]:
        """Return (prefix length, total address bits)."""
        return self.interface.network.prefixlen, self.interface.network.max_prefixlen

    def mask(self) -> str:
        """The subnet mask in address notation."""
        return str(self.interface.network.netmask)

    def cidr(self) -> str:
        """The standard form: network address and prefix length."""
        return str(self.interface.network)

    def __str__(self) -> str:
        return self.cidr()


def parse_cidr(s: str) -> CIDR:
    """Parse an address/prefix-length string; raise ValueError if it is malformed."""
    address, sep, prefix = s.partition("/")
    if not sep or not prefix.isdigit() or not prefix.isascii():
        raise ValueError(f"invalid CIDR address: {s}")
    try:
        interface = ipaddress.ip_interface(f"{address}/{int(prefix)}")
    except ValueError as exc:
        raise ValueError(f"invalid CIDR address: {s}") from exc
    return CIDR(interface)


def parse_cidr_string(s: str) -> str:
    """Parse s and return it in standard network/prefix form."""
    return parse_cidr(s).cidr()
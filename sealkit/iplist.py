"""Helpers for lists of host addresses."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable

from sealkit.types import Hosts


def not_in(key: str, items: Iterable[str]) -> bool:
    """True when key is not among items."""
    return key not in items


def reduce_ip_list(src: Iterable[str], dst: Iterable[str]) -> list[str]:
    """Return the entries of src that also appear in dst, in src order."""
    wanted = list(dst)
    return [ip for ip in src if ip in wanted]


def append_ip_list(src: Iterable[str], dst: Iterable[str]) -> list[str]:
    """Return src followed by each entry of dst not already present."""
    merged = list(src)
    for ip in dst:
        if ip not in merged:
            merged.append(ip)
    return merged


def _sort_key(ip: str) -> int:
    try:
        address = ipaddress.ip_address(ip)
    except ValueError as exc:
        raise ValueError(f"invalid IP address: {ip}") from exc
    if address.version == 4:
        address = ipaddress.IPv6Address(f"::ffff:{address}")
    return int(address)


def sort_ip_list(ip_list: list[str]) -> None:
    """Sort ip_list in place by address value and normalise each entry."""
    ordered = sorted((_sort_key(ip), ip) for ip in ip_list)
    ip_list[:] = [str(ipaddress.ip_address(ip)) for _, ip in ordered]


def get_host_ip(host: str) -> str:
    """Strip a port suffix from host:port."""
    return host.split(":")[0]


def get_host_ip_slice(hosts: Iterable[str]) -> list[str]:
    """Strip port suffixes from every host."""
    return [get_host_ip(host) for host in hosts]


def get_diff_hosts(hosts_old: Hosts, hosts_new: Hosts) -> tuple[list[str], list[str]]:
    """Return (added, removed) addresses going from hosts_old to hosts_new."""
    pending = {ip: True for ip in hosts_old.ip_list}
    added: list[str] = []
    for ip in hosts_new.ip_list:
        if not pending.get(ip, False):
            added.append(ip)
        else:
            pending[ip] = False
    removed = [ip for ip in hosts_old.ip_list if pending[ip]]
    return added, removed
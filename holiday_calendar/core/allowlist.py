"""HTTP 服务的客户端 IP 白名单。

规则文本：每行一个 IP 或 CIDR 网段，# 之后为注释，空白分隔的多个规则同样有效。
"""

from __future__ import annotations

import threading
from ipaddress import IPv4Address, IPv4Network, IPv6Address, IPv6Network, ip_address, ip_network
from typing import Union

from holiday_calendar.core.errors import AllowListError

IPAddress = Union[IPv4Address, IPv6Address]
IPNetwork = Union[IPv4Network, IPv6Network]

ACTIONS = ("ADD", "UPDATE", "DEL")


def parse_rules(text: str) -> tuple[dict[str, IPAddress], dict[str, IPNetwork]]:
    """
    解析规则文本。

    Returns:
        (ips, networks)，键为规则原文。

    Raises:
        AllowListError: 任一规则既不是 IP 也不是网段。
    """
    ips: dict[str, IPAddress] = {}
    networks: dict[str, IPNetwork] = {}
    for line in text.splitlines():
        for token in line.split("#", 1)[0].split():
            try:
                if "/" in token:
                    networks[token] = ip_network(token, strict=False)
                else:
                    ips[token] = ip_address(token)
            except ValueError as exc:
                raise AllowListError(f"not a valid ip address: {token}") from exc
    return ips, networks


def _overlaps(a: IPNetwork, b: IPNetwork) -> bool:
    return a.version == b.version and a.overlaps(b)


def _covered(addr: IPAddress, ips: dict[str, IPAddress], networks: dict[str, IPNetwork]) -> bool:
    if any(addr.version == net.version and addr in net for net in networks.values()):
        return True
    return any(addr == other for other in ips.values())


class AllowList:
    """
    IP 白名单。

    并发约定：update() 在互斥锁内基于当前内容构造新字典后整体替换（copy-on-write），
    verify() 只读取一次字典引用，可与 update() 并发调用。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: tuple[dict[str, IPAddress], dict[str, IPNetwork]] = ({}, {})

    @classmethod
    def from_text(cls, text: str) -> AllowList:
        allow_list = cls()
        allow_list.update("ADD", text)
        return allow_list

    def __len__(self) -> int:
        ips, networks = self._state
        return len(ips) + len(networks)

    def __repr__(self) -> str:
        ips, networks = self._state
        return f"AllowList(ips={sorted(ips)}, networks={sorted(networks)})"

    def verify(self, ip: str | IPAddress | None) -> bool:
        """ip 是否被任一网段包含或与任一 IP 相同；无法解析的 ip 一律拒绝。"""
        if ip is None:
            return False
        if isinstance(ip, str):
            try:
                ip = ip_address(ip.strip())
            except ValueError:
                return False
        return _covered(ip, *self._state)

    def update(self, action: str, text: str) -> None:
        """
        更新白名单。

        Args:
            action: ADD / UPDATE（两者相同）或 DEL。
            text: 规则文本。

        说明（ADD / UPDATE）：
        - 新网段与已有网段重叠时，保留掩码更长（更具体）的一个，掩码相同保留已有；
        - 不与任何已有网段重叠的网段直接加入；
        - 单个 IP 仅在当前白名单尚未覆盖时加入。

        说明（DEL）：按规则原文删除对应的 IP / 网段。

        Raises:
            AllowListError: action 未知或规则无法解析；此时白名单不变。
        """
        action = action.strip().upper()
        if action not in ACTIONS:
            raise AllowListError(f"unknown action: {action}（可选 {'/'.join(ACTIONS)}）")
        ips, networks = parse_rules(text)

        with self._lock:
            new_ips, new_networks = (dict(d) for d in self._state)
            if action == "DEL":
                for key in networks:
                    new_networks.pop(key, None)
                for key in ips:
                    new_ips.pop(key, None)
            else:
                for key, net in networks.items():
                    for old_key, old in list(new_networks.items()):
                        if _overlaps(old, net):
                            if net.prefixlen > old.prefixlen:
                                del new_networks[old_key]
                                new_networks[key] = net
                            break
                    else:
                        new_networks[key] = net
                for key, addr in ips.items():
                    if not _covered(addr, new_ips, new_networks):
                        new_ips[key] = addr
            self._state = (new_ips, new_networks)

    def rules(self) -> list[str]:
        """当前全部规则原文（网段在前，按字典序）。"""
        ips, networks = self._state
        return sorted(networks) + sorted(ips)

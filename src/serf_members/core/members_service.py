"""Core members service — fetches the snapshot and parses raw records.

This is the service class consumed by the CLI layer.  It depends on a
:class:`~serf_members.core.protocols.MembersProvider` injected at
construction time (dependency inversion), keeping the core free of any
socket or msgpack imports.

Guarantees
----------
* Exactly one provider call per :meth:`MembersService.list_members`.
* Only :class:`~serf_members.exceptions.SerfMembersError` subclasses escape.
* Parsing is deterministic and preserves the provider's ordering.
"""

from __future__ import annotations

import ipaddress
from typing import Any

from serf_members.core.models import Member, MemberSnapshot
from serf_members.core.protocols import MembersProvider
from serf_members.exceptions import RequestError, SerfMembersError

_PORT_MAX = 0xFFFF


class MembersService:
    """Stateless service that turns provider output into a snapshot.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`MembersProvider` protocol.
    """

    def __init__(self, provider: MembersProvider) -> None:
        self._provider: MembersProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_members(self) -> MemberSnapshot:
        """Return the agent's current member list.

        Raises
        ------
        ConnectionError
            If the agent cannot be reached.
        RequestError
            If the request fails or the reply contains malformed records.
        """
        raw_members = self._fetch()
        return MemberSnapshot(
            members=tuple(self._parse_member(raw) for raw in raw_members),
        )

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self) -> list[dict[str, Any]]:
        """Call the provider and ensure only our exceptions escape."""
        try:
            raw: object = self._provider.fetch_members()
        except SerfMembersError:
            raise
        except Exception as exc:
            raise RequestError(
                f"Unexpected provider error: {exc}",
            ) from exc

        if not isinstance(raw, list):
            raise RequestError("Agent returned an unexpected member list.")
        return raw

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_address(raw_addr: object) -> str:
        """Decode ``Addr`` from raw IP bytes or text.

        IPv4-mapped IPv6 addresses (the 16-byte form Go uses for IPv4)
        are shown as plain IPv4.
        """
        if isinstance(raw_addr, (bytes, bytearray)):
            ip = ipaddress.ip_address(bytes(raw_addr))
        elif isinstance(raw_addr, str):
            ip = ipaddress.ip_address(raw_addr)
        else:
            raise ValueError(f"unsupported address value {raw_addr!r}")

        if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
            return str(ip.ipv4_mapped)
        return str(ip)

    @staticmethod
    def _parse_role(raw: dict[str, Any]) -> str:
        tags = raw.get("Tags")
        if isinstance(tags, dict) and "role" in tags:
            return str(tags["role"])
        return str(raw.get("Role") or "")

    @classmethod
    def _parse_member(cls, raw: object) -> Member:
        """Convert one raw member dict to a :class:`Member`."""
        if not isinstance(raw, dict):
            raise RequestError(f"Agent returned a malformed member record: {raw!r}")

        name = raw.get("Name", "<unknown>")
        try:
            address = cls._parse_address(raw.get("Addr"))
            port = int(raw.get("Port", 0))
            if not 0 <= port <= _PORT_MAX:
                raise ValueError(f"port {port} out of range")
            return Member(
                name=str(raw.get("Name", "")),
                address=address,
                port=port,
                role=cls._parse_role(raw),
                status=str(raw.get("Status", "")),
                protocol_current=int(raw.get("DelegateCur", 0)),
                protocol_min=int(raw.get("DelegateMin", 0)),
                protocol_max=int(raw.get("DelegateMax", 0)),
            )
        except (TypeError, ValueError) as exc:
            raise RequestError(
                f"Agent returned a malformed record for member {name!r}: {exc}",
            ) from exc

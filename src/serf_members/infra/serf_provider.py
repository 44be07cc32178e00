"""Serf-backed implementation of :class:`~serf_members.core.protocols.MembersProvider`."""

from __future__ import annotations

from typing import Any

from serf_members.infra.serf_rpc import SerfRPCClient
from serf_members.utils import DEFAULT_RPC_ADDR


class SerfMembersProvider:
    """Concrete :class:`MembersProvider` backed by :class:`SerfRPCClient`.

    Each :meth:`fetch_members` call opens a fresh connection, issues a
    single ``members`` request and closes the connection before
    returning or raising.
    """

    def __init__(
        self,
        address: str = DEFAULT_RPC_ADDR,
        *,
        auth_key: str | None = None,
    ) -> None:
        self.address: str = address
        self._auth_key: str | None = auth_key

    def fetch_members(self) -> list[dict[str, Any]]:
        with SerfRPCClient(self.address, auth_key=self._auth_key) as client:
            return client.members()

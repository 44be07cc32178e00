"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Any, Protocol


class MembersProvider(Protocol):
    """Contract for member-list backends.

    Any object that implements :meth:`fetch_members` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def fetch_members(self) -> list[dict[str, Any]]:
        """Fetch the raw member records from the agent.

        Each record is a dict shaped like the Serf IPC ``Member``
        struct: ``Name``, ``Addr``, ``Port``, ``Tags``, ``Status`` and
        the ``Delegate*`` protocol fields.

        Implementations own the connection for the duration of the
        call and must release it before returning or raising.

        Raises
        ------
        ConnectionError
            When the agent cannot be reached or refuses the handshake.
        RequestError
            When the ``members`` request fails.
        """
        ...  # pragma: no cover

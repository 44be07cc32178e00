"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Serf agent's RPC listener.
Every raw socket or msgpack exception must be caught here and
re-raised as a :class:`~serf_members.exceptions.SerfMembersError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from serf_members.infra.serf_provider import SerfMembersProvider
from serf_members.infra.serf_rpc import SerfRPCClient, parse_rpc_address

__all__: list[str] = [
    "SerfMembersProvider",
    "SerfRPCClient",
    "parse_rpc_address",
]

"""Domain models for serf-members.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and live only for the duration of a single run.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from serf_members.utils import DEFAULT_RPC_ADDR, MATCH_ALL


# ---------------------------------------------------------------------------
# Cluster member
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Member:
    """One node of the Serf cluster as reported by the agent."""

    name: str
    """Unique node name."""

    address: str
    """IP address in its canonical text form (IPv4 or IPv6)."""

    port: int
    """Gossip port, 0-65535."""

    role: str
    """Free-form role tag."""

    status: str
    """Lifecycle state (``alive``, ``leaving``, ``left``, ``failed``...)."""

    protocol_current: int
    """Delegate protocol version the member is speaking."""

    protocol_min: int
    """Lowest delegate protocol version the member understands."""

    protocol_max: int
    """Highest delegate protocol version the member understands."""

    @property
    def endpoint(self) -> str:
        """``address:port``, with IPv6 addresses wrapped in brackets."""
        if ":" in self.address:
            return f"[{self.address}]:{self.port}"
        return f"{self.address}:{self.port}"


# ---------------------------------------------------------------------------
# Typed collection wrapper
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MemberSnapshot:
    """Immutable, ordered view of the cluster at the time of the call.

    The order is whatever the agent returned; nothing downstream
    re-sorts it.
    """

    members: tuple[Member, ...]

    def __len__(self) -> int:
        return len(self.members)

    def __bool__(self) -> bool:
        return len(self.members) > 0

    def __iter__(self) -> Iterator[Member]:
        return iter(self.members)


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MembersConfig:
    """Options resolved once per invocation."""

    detailed: bool = False
    role_filter: str = MATCH_ALL
    status_filter: str = MATCH_ALL
    rpc_address: str = DEFAULT_RPC_ADDR
    rpc_auth: str | None = None
    output_format: str = "text"
    verbose: bool = False

"""Shared utilities — constants and cross-cutting concerns.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from __future__ import annotations

DEFAULT_RPC_ADDR: str = "127.0.0.1:7373"
"""Loopback endpoint the Serf agent binds its RPC listener to by default."""

RPC_ADDR_ENV: str = "SERF_RPC_ADDR"
"""Environment variable overriding the default RPC address."""

RPC_AUTH_ENV: str = "SERF_RPC_AUTH"
"""Environment variable supplying the default RPC auth key."""

IPC_VERSION: int = 1
"""Serf IPC protocol version sent in the handshake."""

MATCH_ALL: str = ".*"
"""Default role and status filter."""

"""Custom exception hierarchy for serf-members.

All exceptions that cross layer boundaries must inherit from
:class:`SerfMembersError`.  Raw socket and msgpack exceptions must NEVER
propagate beyond the infrastructure layer — they must be caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
SerfMembersError
├── OptionParseError
├── PatternCompileError
├── ConnectionError
├── RequestError
└── EnvironmentError
"""

from __future__ import annotations


class SerfMembersError(Exception):
    """Base exception for all serf-members errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Invocation ------------------------------------------------------------

class OptionParseError(SerfMembersError):
    """Raised when the command-line options are malformed or unknown."""


class PatternCompileError(SerfMembersError):
    """Raised when a role or status filter is not a valid regexp."""

    def __init__(
        self,
        filter_name: str,
        message: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.filter_name: str = filter_name
        """Which filter failed to compile: ``"role"`` or ``"status"``."""


# --- Agent RPC -------------------------------------------------------------

class ConnectionError(SerfMembersError):
    """Raised when the RPC connection to the agent cannot be established."""


class RequestError(SerfMembersError):
    """Raised when the agent rejects a request or the transport fails mid-call."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(SerfMembersError):
    """Raised when a required runtime dependency is not available."""

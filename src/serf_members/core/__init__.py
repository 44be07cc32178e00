"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from serf_members.core.member_filter import (
    MemberFilter,
    compile_filters,
    filter_members,
    render_members,
    render_members_json,
)
from serf_members.core.members_service import MembersService
from serf_members.core.models import Member, MembersConfig, MemberSnapshot
from serf_members.core.protocols import MembersProvider

__all__: list[str] = [
    "Member",
    "MemberFilter",
    "MemberSnapshot",
    "MembersConfig",
    "MembersProvider",
    "MembersService",
    "compile_filters",
    "filter_members",
    "render_members",
    "render_members_json",
]

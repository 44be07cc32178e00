"""Pure member filtering and rendering logic.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic, and trivially unit-testable.

Pipeline order (enforced by :func:`render_members`):

1. **Compile** — role and status patterns, once per run.
2. **Filter** — keep members whose role AND status both match.
3. **Format** — one summary line per member, plus two protocol lines
   when detailed output is requested.

Snapshot order is preserved throughout; nothing is sorted.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from serf_members.core.models import Member
from serf_members.exceptions import PatternCompileError
from serf_members.utils import MATCH_ALL

FIELD_SEPARATOR: str = "    "
"""Delimiter between the columns of a summary line."""

DETAIL_INDENT: str = "    "


# ---------------------------------------------------------------------------
# 1. Compile
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MemberFilter:
    """Compiled role and status predicates.

    Patterns match anywhere in the value (``re.search``), so ``web``
    matches ``web`` and ``frontend-web`` alike.  Anchor explicitly with
    ``^...$`` for an exact match.
    """

    role_pattern: re.Pattern[str]
    status_pattern: re.Pattern[str]

    def role_matches(self, role: str) -> bool:
        return self.role_pattern.search(role) is not None

    def status_matches(self, status: str) -> bool:
        return self.status_pattern.search(status) is not None

    def matches(self, member: Member) -> bool:
        """True when *member* satisfies both predicates."""
        return self.role_matches(member.role) and self.status_matches(member.status)


def _compile(filter_name: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternCompileError(
            filter_name,
            f"Failed to compile {filter_name} regexp: {exc}",
            hint=f"Check the -{filter_name} value {pattern!r}.",
        ) from exc


def compile_filters(
    role_filter: str = MATCH_ALL,
    status_filter: str = MATCH_ALL,
) -> MemberFilter:
    """Compile both filters, role first.

    Raises
    ------
    PatternCompileError
        Tagged with ``filter_name`` of the first filter that is not a
        valid regular expression.
    """
    return MemberFilter(
        role_pattern=_compile("role", role_filter),
        status_pattern=_compile("status", status_filter),
    )


# ---------------------------------------------------------------------------
# 2. Filter
# ---------------------------------------------------------------------------

def filter_members(
    members: Iterable[Member],
    member_filter: MemberFilter,
) -> list[Member]:
    """Return the members matching both predicates, in input order."""
    return [member for member in members if member_filter.matches(member)]


# ---------------------------------------------------------------------------
# 3. Format
# ---------------------------------------------------------------------------

def format_member_lines(member: Member, *, detailed: bool = False) -> list[str]:
    """Render one member as a summary line plus optional protocol lines."""
    lines = [
        FIELD_SEPARATOR.join(
            (member.name, member.endpoint, member.status, member.role),
        ),
    ]
    if detailed:
        lines.append(f"{DETAIL_INDENT}Protocol Version: {member.protocol_current}")
        lines.append(
            f"{DETAIL_INDENT}Available Protocol Range: "
            f"[{member.protocol_min}, {member.protocol_max}]"
        )
    return lines


def _member_document(member: Member) -> dict[str, Any]:
    return {
        "name": member.name,
        "addr": member.endpoint,
        "port": member.port,
        "role": member.role,
        "status": member.status,
        "protocol": {
            "min": member.protocol_min,
            "max": member.protocol_max,
            "version": member.protocol_current,
        },
    }


# ---------------------------------------------------------------------------
# Composite pipelines
# ---------------------------------------------------------------------------

def render_members(
    members: Iterable[Member],
    member_filter: MemberFilter,
    *,
    detailed: bool = False,
) -> list[str]:
    """Run the filter → format pipeline and return the output lines.

    Returns an empty list when no member matches.
    """
    lines: list[str] = []
    for member in filter_members(members, member_filter):
        lines.extend(format_member_lines(member, detailed=detailed))
    return lines


def render_members_json(
    members: Iterable[Member],
    member_filter: MemberFilter,
) -> str:
    """Render the matching members as an indented JSON document."""
    documents = [_member_document(m) for m in filter_members(members, member_filter)]
    return json.dumps({"members": documents}, indent=2)

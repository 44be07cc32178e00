"""CLI application entry point for serf-members.

This module is the **sole error boundary** for the entire application.
It catches :class:`~serf_members.exceptions.SerfMembersError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Stages run strictly in order: options → patterns → RPC → render.  A
  failure at any stage stops the run before a single member line is
  written.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from serf_members.cli import exit_codes
from serf_members.cli.console import console, write_lines
from serf_members.cli.options import resolve_config
from serf_members.core.models import MembersConfig
from serf_members.exceptions import SerfMembersError
from serf_members.utils.log import configure_logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_members(config: MembersConfig) -> int:
    """List, filter and print the cluster members.

    Flow:
    1. Compile the role and status filters (no network yet).
    2. Fetch the member snapshot over one RPC connection.
    3. Render the matching members to stdout.
    """
    from serf_members.core.member_filter import (
        compile_filters,
        render_members,
        render_members_json,
    )
    from serf_members.core.members_service import MembersService
    from serf_members.infra.serf_provider import SerfMembersProvider

    member_filter = compile_filters(config.role_filter, config.status_filter)

    provider = SerfMembersProvider(config.rpc_address, auth_key=config.rpc_auth)
    snapshot = MembersService(provider).list_members()
    logger.debug("Snapshot holds %d member(s)", len(snapshot))

    if config.output_format == "json":
        write_lines([render_members_json(snapshot, member_filter)])
    else:
        write_lines(render_members(snapshot, member_filter, detailed=config.detailed))
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the serf-members CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    config = resolve_config(argv)
    configure_logging(config.verbose)
    return _handle_members(config)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: Sequence[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except SerfMembersError as exc:
        console.error(str(exc), hint=exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.unexpected(exc)
        sys.exit(exit_codes.UNEXPECTED_ERROR)

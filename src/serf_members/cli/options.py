"""Option resolution — argv and environment into a :class:`MembersConfig`.

Options are accepted in the single-dash form Serf users know
(``-role=web``) as well as the double-dash form (``--role web``).
Parse failures raise :class:`~serf_members.exceptions.OptionParseError`
instead of exiting, so the error boundary in :mod:`serf_members.cli.app`
owns the exit code.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Mapping, Sequence
from typing import NoReturn

from serf_members.core.models import MembersConfig
from serf_members.exceptions import OptionParseError
from serf_members.utils import DEFAULT_RPC_ADDR, MATCH_ALL, RPC_ADDR_ENV, RPC_AUTH_ENV
from serf_members.version import __version__

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json")

_VALUE_OPTIONS: frozenset[str] = frozenset(
    f"{dashes}{name}"
    for dashes in ("-", "--")
    for name in ("role", "status", "rpc-addr", "rpc-auth", "format")
)


class _MembersArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of calling ``sys.exit(2)``."""

    def error(self, message: str) -> NoReturn:
        raise OptionParseError(message, hint=self.format_usage().strip())


def build_parser(environ: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    """Construct the argument parser.

    *environ* supplies the ``SERF_RPC_ADDR`` / ``SERF_RPC_AUTH``
    defaults; ``os.environ`` is used when it is ``None``.
    """
    env = os.environ if environ is None else environ

    parser = _MembersArgumentParser(
        prog="serf-members",
        description="Outputs the members of a running Serf agent.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-detailed",
        "--detailed",
        action="store_true",
        help="Additional information such as protocol versions will be shown.",
    )
    parser.add_argument(
        "-role",
        "--role",
        default=MATCH_ALL,
        metavar="REGEXP",
        help="Only show nodes whose role matches the regular expression.",
    )
    parser.add_argument(
        "-status",
        "--status",
        default=MATCH_ALL,
        metavar="REGEXP",
        help="Only show nodes whose status matches the regular expression.",
    )
    parser.add_argument(
        "-rpc-addr",
        "--rpc-addr",
        dest="rpc_addr",
        default=env.get(RPC_ADDR_ENV) or DEFAULT_RPC_ADDR,
        metavar="HOST:PORT",
        help=f"RPC address of the Serf agent (env: {RPC_ADDR_ENV}).",
    )
    parser.add_argument(
        "-rpc-auth",
        "--rpc-auth",
        dest="rpc_auth",
        default=env.get(RPC_AUTH_ENV) or None,
        metavar="KEY",
        help=f"RPC auth token of the Serf agent (env: {RPC_AUTH_ENV}).",
    )
    parser.add_argument(
        "-format",
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log RPC activity to stderr.",
    )
    return parser


def _attach_values(argv: Sequence[str]) -> list[str]:
    """Fold a value-taking option and its next argument into ``-opt=value``.

    argparse would read a value such as ``-web`` as another option;
    Go's ``flag`` package takes it verbatim, and so do we.  Arguments
    after a bare ``--`` are left untouched.
    """
    result: list[str] = []
    pending = list(argv)
    while pending:
        arg = pending.pop(0)
        if arg == "--":
            result.append(arg)
            result.extend(pending)
            break
        if arg in _VALUE_OPTIONS and pending:
            arg = f"{arg}={pending.pop(0)}"
        result.append(arg)
    return result


def resolve_config(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> MembersConfig:
    """Parse *argv* (default ``sys.argv[1:]``) into a :class:`MembersConfig`.

    Raises
    ------
    OptionParseError
        On unknown options, missing values or invalid choices.  The hint
        carries the usage line.
    """
    raw_args = sys.argv[1:] if argv is None else argv
    args = build_parser(environ).parse_args(_attach_values(raw_args))
    return MembersConfig(
        detailed=args.detailed,
        role_filter=args.role,
        status_filter=args.status,
        rpc_address=args.rpc_addr,
        rpc_auth=args.rpc_auth,
        output_format=args.output_format,
        verbose=args.verbose,
    )

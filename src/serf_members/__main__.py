"""Allow ``python -m serf_members`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m serf_members`` behaves identically to the
``serf-members`` console script.
"""

from __future__ import annotations

from serf_members.cli.app import cli

if __name__ == "__main__":
    cli()

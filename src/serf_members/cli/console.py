"""CLI console helpers with optional Rich support.

Diagnostics go to stderr through Rich; member output goes to stdout as
plain text so it stays byte-stable and pipe-friendly.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import Any

from serf_members.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr.

	Soft wrapping keeps every diagnostic on one line regardless of the
	terminal width.
	"""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, soft_wrap=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def error(self, message: str, *, hint: str | None = None) -> None:
		"""Render an error line (and hint) with user text escaped."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(f"Error: {message}", file=sys.stderr)
			if hint:
				print(hint, file=sys.stderr)
			return
		from rich.markup import escape

		rich_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
		if hint:
			rich_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")

	def unexpected(self, exc: BaseException) -> None:
		"""Render an unexpected exception with its text escaped."""
		detail = f"{type(exc).__name__}: {exc}"
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print("Unexpected error. Please report this issue.", file=sys.stderr)
			print(f"  {detail}", file=sys.stderr)
			return
		from rich.markup import escape

		rich_console.print(
			"[bold red]Unexpected error.[/bold red] "
			"Please report this issue.\n"
			f"  {escape(detail)}"
		)


console = _ConsoleProxy()


def write_lines(lines: Iterable[str]) -> None:
	"""Write *lines* to stdout, one per line, with no markup."""
	for line in lines:
		sys.stdout.write(line + "\n")
	sys.stdout.flush()

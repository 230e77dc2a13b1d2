"""CLI console helpers with optional Rich support.

Rich is imported lazily so ``--help`` and ``--version`` keep working
when it is not installed.  All output goes to stderr.
"""

from __future__ import annotations

import sys
from typing import Any

from tauri_mobile.exceptions import EnvironmentError


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
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def rich_available() -> bool:
    try:
        _load_rich_console_class()
    except EnvironmentError:
        return False
    return True


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object, plain: str | None = None) -> None:
        """Render with Rich when available.

        Without Rich, *plain* (when given) is printed instead of the
        markup-carrying *objects*.
        """
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            if plain is not None:
                print(plain, file=sys.stderr)
            else:
                print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()

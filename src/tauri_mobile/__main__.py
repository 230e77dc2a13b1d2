"""Allow ``python -m tauri_mobile`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m tauri_mobile`` behaves identically to the
``tauri-mobile`` console script.
"""

from __future__ import annotations

from tauri_mobile.cli.app import cli

if __name__ == "__main__":
    cli()

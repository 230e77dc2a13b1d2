"""``tauri-mobile doctor`` — environment diagnostics command.

Gathers the tools ``android init`` and ``ios init`` rely on and renders
a Rich table summarising what is present.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It only collects and displays
diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from tauri_mobile.cli import exit_codes
from tauri_mobile.cli.console import console
from tauri_mobile.exceptions import AndroidEnvironmentError, TauriMobileError
from tauri_mobile.infra import process
from tauri_mobile.infra.android_env import probe_android_env
from tauri_mobile.infra.editor import detect_editor
from tauri_mobile.infra.host_triple import host_target_triple
from tauri_mobile.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _version_check() -> tuple[str, str, str]:
    return "tauri-mobile", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 11)
    status = OK if ok else "[red]FAIL (>=3.11 required)[/red]"
    return "Python", version, status


def _rustc_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the rustc host triple row."""
    try:
        triple = host_target_triple()
    except TauriMobileError:
        return "rustc", "not found", FAIL
    return "rustc", triple, OK


def _editor_check() -> tuple[str, str, str]:
    status = detect_editor()
    if status.present:
        return "VS Code", str(status.path) if status.path else "found", OK
    return "VS Code", "not found", WARN


def _android_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Android SDK/NDK row."""
    try:
        env = probe_android_env()
    except AndroidEnvironmentError as exc:
        return "Android", str(exc), WARN
    return "Android", f"NDK {env.ndk_version} ({env.sdk_root})", OK


def _xcodegen_check() -> tuple[str, str, str]:
    if platform.system() != "Darwin":
        return "xcodegen", "macOS only", OK
    if process.command_present("xcodegen"):
        return "xcodegen", "found", OK
    return "xcodegen", "not found", WARN


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ntauri-mobile doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings do not
        fail the run.
    """
    checks = [
        _version_check(),
        _python_version_check(),
        _rustc_check(),
        _editor_check(),
        _android_check(),
        _xcodegen_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        table = Table(
            title="tauri-mobile doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]", plain="Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]", plain="All checks passed.")
    return exit_codes.SUCCESS

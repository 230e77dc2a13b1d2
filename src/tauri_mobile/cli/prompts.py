"""Interactive prompts used while generating projects."""

from __future__ import annotations

from typing import Any

from tauri_mobile.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def prompt_development_team() -> str | None:
    """Ask for an Apple development team ID.

    Returns
    -------
    str | None
        The stripped team ID, or ``None`` when left blank or cancelled.
    """
    questionary = _import_questionary()
    answer: str | None = questionary.text(
        "Apple development team ID (leave blank to set it later in Xcode):",
    ).ask()  # Returns None on Ctrl+C / Esc
    if answer is None:
        return None
    return answer.strip() or None

"""Exit-code constants used by the CLI layer.

Every exit path returns one of these values instead of a bare integer.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed.  Includes init runs that ended with an action request."""

GENERAL_ERROR: int = 1
"""A known TauriMobileError was caught and its message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

"""Infrastructure: blocking child-process execution.

Every subprocess the tool spawns goes through :func:`run_and_wait` or
:func:`capture`, so failures always surface as
:class:`~tauri_mobile.exceptions.CommandError`.  No timeouts are
applied: a hung child hangs the caller.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from tauri_mobile.exceptions import CommandError

logger = logging.getLogger(__name__)


def command_present(name: str) -> bool:
    """Whether *name* resolves to an executable on ``PATH``."""
    return shutil.which(name) is not None


def run_and_wait(args: Sequence[str], *, cwd: Path | None = None) -> None:
    """Run *args* with inherited stdio and wait for it to exit.

    Raises
    ------
    CommandError
        When the process cannot be started or exits non-zero.
    """
    logger.debug(f"Running {' '.join(args)}")
    try:
        result = subprocess.run(list(args), cwd=cwd, check=False)
    except OSError as exc:
        raise CommandError(args, None, str(exc)) from exc
    if result.returncode != 0:
        raise CommandError(args, result.returncode)


def capture(args: Sequence[str], *, cwd: Path | None = None) -> str:
    """Run *args* and return its stdout as text.

    Raises
    ------
    CommandError
        When the process cannot be started or exits non-zero; stderr is
        attached to the error message.
    """
    logger.debug(f"Capturing {' '.join(args)}")
    try:
        result = subprocess.run(
            list(args),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise CommandError(args, None, str(exc)) from exc
    if result.returncode != 0:
        raise CommandError(args, result.returncode, result.stderr.strip())
    return result.stdout

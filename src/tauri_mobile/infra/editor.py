"""Infrastructure: VS Code detection, extension install and open.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* An absent editor is a capability result, never an error.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from tauri_mobile.core.models import EditorPresence, EditorStatus
from tauri_mobile.infra import process

CODE_BINARY = "code"


def detect_editor(binary: str = CODE_BINARY) -> EditorStatus:
    """Probe the system for the editor binary."""
    result = shutil.which(binary)
    if result is None:
        return EditorStatus(presence=EditorPresence.ABSENT)
    return EditorStatus(presence=EditorPresence.PRESENT, path=Path(result).resolve())


class VsCodeEditor:
    """Concrete :class:`~tauri_mobile.core.protocols.Editor` backed by ``code``.

    Satisfies the protocol structurally — no explicit inheritance required.
    """

    def __init__(self, binary: str = CODE_BINARY) -> None:
        self._binary = binary

    def detect(self) -> EditorStatus:
        return detect_editor(self._binary)

    def install_extension(self, extension_id: str, *, force: bool) -> None:
        """Install *extension_id*; ``force`` skips the interactive confirmation.

        Raises
        ------
        CommandError
            When ``code --install-extension`` fails.
        """
        args = [self._binary, "--install-extension", extension_id]
        if force:
            args.append("--force")
        process.run_and_wait(args)

    def open(self, path: Path) -> None:
        """Open *path* as a folder in the editor.

        Raises
        ------
        CommandError
            When the editor cannot be launched.
        """
        process.run_and_wait([self._binary, str(path)])

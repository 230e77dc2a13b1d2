"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system, child
processes, the Android SDK/NDK, ``rustc``, VS Code and the files the
tool reads and writes.  Raw exceptions are caught here and re-raised as
:class:`~tauri_mobile.exceptions.TauriMobileError` subclasses.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from tauri_mobile.infra.android_env import probe_android_env
from tauri_mobile.infra.dot_cargo import DotCargo
from tauri_mobile.infra.editor import VsCodeEditor, detect_editor
from tauri_mobile.infra.host_triple import host_target_triple
from tauri_mobile.infra.project_gen import AndroidTemplateGenerator, IosTemplateGenerator
from tauri_mobile.infra.tauri_config import TauriConfigLoader, find_tauri_dir

__all__: list[str] = [
    "AndroidTemplateGenerator",
    "DotCargo",
    "IosTemplateGenerator",
    "TauriConfigLoader",
    "VsCodeEditor",
    "detect_editor",
    "find_tauri_dir",
    "host_target_triple",
    "probe_android_env",
]

"""Custom exception hierarchy for tauri-mobile.

All exceptions that cross layer boundaries must inherit from
:class:`TauriMobileError`.  Raw exceptions raised by collaborators
(subprocesses, the filesystem, TOML/JSON parsers) must be caught at the
step that triggered them and re-raised as exactly one typed subclass
defined here.

Hierarchy
---------
TauriMobileError
├── InitError
│   ├── InvalidTauriConfigError
│   ├── AssetDirCreationError
│   ├── LldbExtensionInstallError
│   ├── DotCargoLoadError
│   ├── DotCargoWriteError
│   ├── HostTargetTripleDetectionError
│   ├── AndroidEnvError
│   ├── AndroidInitError
│   ├── IosInitError
│   └── OpenInEditorError
├── TemplateHelperError
│   ├── MissingArrayError
│   ├── MissingContextFieldError
│   └── PathNotUnderRootError
├── AndroidEnvironmentError
├── CommandError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class TauriMobileError(Exception):
    """Base exception for all tauri-mobile errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Init sequence ---------------------------------------------------------

class InitError(TauriMobileError):
    """A step of the init sequence failed.

    ``cause`` holds the underlying diagnostic as plain text so the
    error can be rendered without re-querying any state.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(f"{message}: {cause}" if cause else message, hint=hint)
        self.cause: str = cause


class InvalidTauriConfigError(InitError):
    """Raised when the application configuration is absent or malformed."""

    def __init__(self, cause: str, *, hint: str | None = None) -> None:
        super().__init__("invalid tauri configuration", cause=cause, hint=hint)


class AssetDirCreationError(InitError):
    """Raised when the configured asset directory cannot be created."""

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(f"failed to create asset dir {path}", cause=cause)
        self.path: Path = path


class LldbExtensionInstallError(InitError):
    """Raised when the editor's extension-install command exits in error."""

    def __init__(self, cause: str) -> None:
        super().__init__("failed to install LLDB VS Code extension", cause=cause)


class DotCargoLoadError(InitError):
    """Raised when the ``.cargo`` config cannot be read or parsed."""

    def __init__(self, cause: str, *, path: Path | None = None) -> None:
        location = f" {path}" if path is not None else ""
        super().__init__(f"failed to load cargo config{location}", cause=cause)
        self.path: Path | None = path


class DotCargoWriteError(InitError):
    """Raised when the ``.cargo`` config cannot be written."""

    def __init__(self, cause: str, *, path: Path | None = None) -> None:
        location = f" {path}" if path is not None else ""
        super().__init__(f"failed to write cargo config{location}", cause=cause)
        self.path: Path | None = path


class HostTargetTripleDetectionError(InitError):
    """Raised when the host's target triple cannot be determined."""

    def __init__(self, cause: str) -> None:
        super().__init__(
            "failed to detect host target triple",
            cause=cause,
            hint="Make sure a Rust toolchain is installed: https://rustup.rs",
        )


class AndroidEnvError(InitError):
    """Raised for Android environment failures that are not SDK/NDK issues."""

    def __init__(self, cause: str) -> None:
        super().__init__("failed to initialize Android environment", cause=cause)


class AndroidInitError(InitError):
    """Raised when the Android project generator fails."""

    def __init__(self, cause: str) -> None:
        super().__init__("failed to generate Android project", cause=cause)


class IosInitError(InitError):
    """Raised when the iOS project generator fails."""

    def __init__(self, cause: str) -> None:
        super().__init__("failed to generate Xcode project", cause=cause)


class OpenInEditorError(InitError):
    """Raised when opening the project in the editor fails.

    Only ever raised after the project was generated successfully.
    """

    def __init__(self, cause: str) -> None:
        super().__init__("failed to open project in editor", cause=cause)


# --- Template helpers ------------------------------------------------------

class TemplateHelperError(TauriMobileError):
    """Raised by a template helper while rendering."""


class MissingArrayError(TemplateHelperError):
    """Raised when an array helper is given something other than strings."""

    def __init__(self, helper: str) -> None:
        super().__init__(f"`{helper}` helper wasn't given an array")
        self.helper: str = helper


class MissingContextFieldError(TemplateHelperError):
    """Raised when a helper needs a context field that is absent or invalid."""

    def __init__(self, field: str, reason: str = "missing from template data") -> None:
        super().__init__(f"`{field}` {reason}.")
        self.field: str = field


class PathNotUnderRootError(TemplateHelperError):
    """Raised when a path to unprefix is not inside the app root dir."""

    def __init__(self, path: str, root: str) -> None:
        super().__init__(
            f"Attempted to unprefix a path that wasn't in the app root dir: {path} (root: {root})",
        )
        self.path: str = path
        self.root: str = root


# --- Collaborators ---------------------------------------------------------

class AndroidEnvironmentError(TauriMobileError):
    """Raised by the Android environment probe.

    ``sdk_or_ndk_issue`` marks failures the user can fix by installing
    or pointing at the Android SDK/NDK; those are recoverable during init.
    """

    def __init__(
        self,
        message: str,
        *,
        sdk_or_ndk_issue: bool,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.sdk_or_ndk_issue: bool = sdk_or_ndk_issue


class CommandError(TauriMobileError):
    """Raised when a child process cannot be spawned or exits non-zero."""

    def __init__(
        self,
        args: Sequence[str],
        returncode: int | None,
        detail: str = "",
    ) -> None:
        command = " ".join(args)
        if returncode is None:
            message = f"`{command}` could not be started"
        else:
            message = f"`{command}` exited with status {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.args_list: tuple[str, ...] = tuple(args)
        self.returncode: int | None = returncode


class EnvironmentError(TauriMobileError):
    """Raised when an optional runtime dependency is not available."""

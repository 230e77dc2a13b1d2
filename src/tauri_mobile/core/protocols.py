"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
Any object with matching methods satisfies a protocol structurally.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from tauri_mobile.core.models import (
    AndroidConfig,
    AndroidEnv,
    AndroidMetadata,
    AppConfig,
    AppleConfig,
    AppleMetadata,
    EditorStatus,
    Report,
    TauriConfig,
)
from tauri_mobile.core.template_helpers import TemplateRenderer


class ConfigLoader(Protocol):
    """Supplies the already-parsed application configuration."""

    def __call__(self) -> TauriConfig:
        """Return the parsed config.

        Raises
        ------
        InvalidTauriConfigError
            When the configuration is absent or malformed.
        """
        ...  # pragma: no cover


class DotCargoDocument(Protocol):
    """The build-target override file held in memory during a run."""

    def set_default_target(self, triple: str) -> None:
        ...  # pragma: no cover

    def insert_target(self, triple: str, table: dict[str, Any]) -> None:
        ...  # pragma: no cover

    def write(self, app: AppConfig) -> None:
        """Persist the document, keeping keys this tool does not own.

        Raises
        ------
        DotCargoWriteError
            When the file cannot be written.
        """
        ...  # pragma: no cover


class DotCargoLoader(Protocol):
    def __call__(self, app: AppConfig) -> DotCargoDocument:
        """Load the document for *app*, or an empty one when absent.

        Raises
        ------
        DotCargoLoadError
            When an existing file cannot be read or parsed.
        """
        ...  # pragma: no cover


class HostTripleDetector(Protocol):
    def __call__(self) -> str:
        """Return the host target triple (e.g. ``x86_64-unknown-linux-gnu``)."""
        ...  # pragma: no cover


class Editor(Protocol):
    """An interactive editor the project can be opened in."""

    def detect(self) -> EditorStatus:
        """Report whether the editor binary is available; never raises."""
        ...  # pragma: no cover

    def install_extension(self, extension_id: str, *, force: bool) -> None:
        """Install an editor extension and wait for completion.

        Raises
        ------
        CommandError
            When the install command fails.
        """
        ...  # pragma: no cover

    def open(self, path: Path) -> None:
        ...  # pragma: no cover


class AndroidEnvProbe(Protocol):
    def __call__(self) -> AndroidEnv:
        """Discover the Android SDK/NDK environment.

        Raises
        ------
        AndroidEnvironmentError
            With ``sdk_or_ndk_issue`` set when the SDK or NDK is missing.
        """
        ...  # pragma: no cover


class AndroidProjectGenerator(Protocol):
    def generate(
        self,
        config: AndroidConfig,
        metadata: AndroidMetadata,
        env: AndroidEnv,
        renderer: TemplateRenderer,
        dot_cargo: DotCargoDocument,
    ) -> None:
        """Write the Android Studio project; may add cargo targets to *dot_cargo*."""
        ...  # pragma: no cover


class IosProjectGenerator(Protocol):
    def generate(
        self,
        config: AppleConfig,
        metadata: AppleMetadata,
        renderer: TemplateRenderer,
        *,
        non_interactive: bool,
        skip_dev_tools: bool,
        reinstall_deps: bool,
    ) -> None:
        """Write the Xcode project."""
        ...  # pragma: no cover


class Reporter(Protocol):
    """Report sink for user-facing outcome messages."""

    def emit(self, report: Report) -> None:
        ...  # pragma: no cover

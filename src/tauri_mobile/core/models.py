"""Domain models for tauri-mobile.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and serialization into template data.
They carry zero I/O and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


# ---------------------------------------------------------------------------
# Selectors and flags
# ---------------------------------------------------------------------------

class Target(enum.Enum):
    """Mobile platform requested for initialization."""

    ANDROID = "android"
    IOS = "ios"


@dataclass(frozen=True, slots=True)
class InitOptions:
    """Run flags for a single init invocation."""

    target: Target
    non_interactive: bool = False
    skip_dev_tools: bool = False
    reinstall_deps: bool = True
    open_in_editor: bool = False
    cwd: Path = field(default_factory=Path.cwd)


# ---------------------------------------------------------------------------
# Parsed application configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TauriConfig:
    """The subset of ``tauri.conf.json`` the init sequence consumes."""

    identifier: str
    """Reverse-domain bundle identifier (e.g. ``com.example.app``)."""

    root_dir: Path
    """Directory containing ``tauri.conf.json``."""

    product_name: str | None = None
    android_min_sdk_version: int | None = None
    ios_development_team: str | None = None


# ---------------------------------------------------------------------------
# Config facets
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AppConfig:
    """Cross-platform app settings."""

    name: str
    stylized_name: str
    domain: str
    root_dir: Path
    asset_dir: Path

    def to_template_data(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "stylized-name": self.stylized_name,
            "domain": self.domain,
            "root-dir": str(self.root_dir),
            "asset-dir": str(self.asset_dir),
        }


@dataclass(frozen=True, slots=True)
class AndroidConfig:
    """Android-specific settings."""

    min_sdk_version: int = 24
    project_dir: str = "gen/android"
    targets: tuple[str, ...] = ("aarch64", "armv7", "i686", "x86_64")
    vulkan_validation: bool = False

    def to_template_data(self) -> dict[str, Any]:
        return {
            "min-sdk-version": self.min_sdk_version,
            "project-dir": self.project_dir,
            "targets": list(self.targets),
            "vulkan-validation": self.vulkan_validation,
        }


@dataclass(frozen=True, slots=True)
class AppleConfig:
    """Apple-specific settings."""

    development_team: str | None = None
    project_dir: str = "gen/apple"
    ios_version: str = "13.0"

    def to_template_data(self) -> dict[str, Any]:
        return {
            "development-team": self.development_team,
            "project-dir": self.project_dir,
            "ios-version": self.ios_version,
        }


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable, per-invocation configuration tree."""

    app: AppConfig
    android: AndroidConfig = field(default_factory=AndroidConfig)
    apple: AppleConfig = field(default_factory=AppleConfig)


# ---------------------------------------------------------------------------
# Metadata facets
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AndroidMetadata:
    """Auxiliary values consumed only by the Android generator."""

    supported: bool = True
    features: tuple[str, ...] = ()
    app_sources: tuple[str, ...] = ()
    app_plugins: tuple[str, ...] = ()
    app_dependencies: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AppleMetadata:
    """Auxiliary values consumed only by the iOS generator."""

    supported: bool = True
    frameworks: tuple[str, ...] = ()
    pods: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Metadata:
    android: AndroidMetadata = field(default_factory=AndroidMetadata)
    apple: AppleMetadata = field(default_factory=AppleMetadata)


# ---------------------------------------------------------------------------
# Collaborator results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AndroidEnv:
    """A discovered Android SDK/NDK environment."""

    sdk_root: Path
    ndk_home: Path
    ndk_version: str
    host_tag: str
    """NDK prebuilt toolchain directory name (e.g. ``linux-x86_64``)."""


class EditorPresence(enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True)
class EditorStatus:
    """Result of an editor detection probe."""

    presence: EditorPresence
    path: Path | None = None

    @property
    def present(self) -> bool:
        return self.presence is EditorPresence.PRESENT


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class ReportKind(enum.Enum):
    ACTION_REQUEST = "action_request"
    VICTORY = "victory"


@dataclass(frozen=True, slots=True)
class Report:
    """A user-facing outcome message; carries no state."""

    kind: ReportKind
    headline: str
    body: str

    @classmethod
    def action_request(cls, headline: str, body: str) -> Report:
        return cls(ReportKind.ACTION_REQUEST, headline, body)

    @classmethod
    def victory(cls, headline: str, body: str) -> Report:
        return cls(ReportKind.VICTORY, headline, body)

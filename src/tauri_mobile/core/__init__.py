"""Core / service layer — the init sequence and template helpers.

Rules
-----
* No ``print()`` calls.
* No subprocesses; external systems are reached only through the
  protocols in :mod:`tauri_mobile.core.protocols`.
* No imports from ``cli`` or ``infra``.
* The only filesystem side effect is creating the asset directory.
"""

from tauri_mobile.core.init_service import InitService, ensure_asset_dir
from tauri_mobile.core.models import (
    AndroidConfig,
    AndroidEnv,
    AppConfig,
    AppleConfig,
    Config,
    InitOptions,
    Metadata,
    Report,
    ReportKind,
    TauriConfig,
    Target,
)
from tauri_mobile.core.template_helpers import HELPERS, TemplateRenderer, build_template_context

__all__: list[str] = [
    "HELPERS",
    "AndroidConfig",
    "AndroidEnv",
    "AppConfig",
    "AppleConfig",
    "Config",
    "InitOptions",
    "InitService",
    "Metadata",
    "Report",
    "ReportKind",
    "TauriConfig",
    "Target",
    "TemplateRenderer",
    "build_template_context",
    "ensure_asset_dir",
]

"""Pure projection of a parsed :class:`TauriConfig` into config facets.

Every function in this module is deterministic and side-effect free.
"""

from __future__ import annotations

from tauri_mobile.core.models import (
    AndroidConfig,
    AndroidMetadata,
    AppConfig,
    AppleConfig,
    AppleMetadata,
    Config,
    Metadata,
    TauriConfig,
)

ASSET_DIR_NAME = "assets"


def split_identifier(identifier: str) -> tuple[str, str]:
    """Split a bundle identifier into ``(app_name, domain)``.

    ``com.example.app`` becomes ``("app", "example.com")``: the last
    segment names the app and the remaining segments, reversed, form
    the domain.
    """
    segments = identifier.split(".")
    app_name = segments[-1]
    domain = ".".join(reversed(segments[:-1]))
    return app_name, domain


def derive_config(tauri_config: TauriConfig) -> Config:
    """Build the :class:`Config` facets for a parsed tauri config."""
    name, domain = split_identifier(tauri_config.identifier)
    app = AppConfig(
        name=name,
        stylized_name=tauri_config.product_name or name,
        domain=domain,
        root_dir=tauri_config.root_dir,
        asset_dir=tauri_config.root_dir / ASSET_DIR_NAME,
    )

    android = AndroidConfig()
    if tauri_config.android_min_sdk_version is not None:
        android = AndroidConfig(min_sdk_version=tauri_config.android_min_sdk_version)

    apple = AppleConfig(development_team=tauri_config.ios_development_team)
    return Config(app=app, android=android, apple=apple)


def derive_metadata(_tauri_config: TauriConfig) -> Metadata:
    """Build the generator-only :class:`Metadata` for a parsed tauri config.

    Plugin and dependency metadata is not configurable yet, so both
    platforms get their defaults.
    """
    return Metadata(android=AndroidMetadata(), apple=AppleMetadata())

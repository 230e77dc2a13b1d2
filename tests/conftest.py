"""Shared pytest fixtures and configuration for the tauri-mobile test suite.

Guidelines
----------
* No child processes: ``rustc``, ``code`` and ``xcodegen`` are mocked at
  the infra boundary.
* Filesystem access goes through ``tmp_path`` only.
* Core tests use in-memory fakes for every collaborator.
* Tests must not depend on OS state (``ANDROID_HOME``, ``CI``, ...).
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tauri_mobile.core.facets import derive_config
from tauri_mobile.core.models import Config, TauriConfig
from tauri_mobile.core.template_helpers import TemplateRenderer, build_template_context


@pytest.fixture
def tauri_config(tmp_path: Path) -> TauriConfig:
    return TauriConfig(
        identifier="com.example.my-app",
        root_dir=tmp_path / "src-tauri",
        product_name="My App",
    )


@pytest.fixture
def config(tauri_config: TauriConfig) -> Config:
    return derive_config(tauri_config)


@pytest.fixture
def renderer(config: Config) -> TemplateRenderer:
    return build_template_context(config, include_apple=True)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CI", "ANDROID_HOME", "ANDROID_SDK_ROOT", "NDK_HOME"):
        monkeypatch.delenv(name, raising=False)

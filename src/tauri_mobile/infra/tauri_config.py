"""Infrastructure: locating and parsing ``tauri.conf.json``.

Only the handful of keys the init sequence consumes are read; the rest
of the file is ignored.  Every failure is raised as
:class:`~tauri_mobile.exceptions.InvalidTauriConfigError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tauri_mobile.core.models import TauriConfig
from tauri_mobile.exceptions import InvalidTauriConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "tauri.conf.json"
TAURI_DIR_NAME = "src-tauri"


def find_tauri_dir(start: Path | None = None) -> Path | None:
    """Walk up from *start* to the directory holding ``tauri.conf.json``.

    A ``src-tauri`` child of each visited directory is checked too, so
    the tool works from the frontend root of a standard Tauri app.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for candidate in (directory, directory / TAURI_DIR_NAME):
            if (candidate / CONFIG_FILE_NAME).is_file():
                return candidate
    return None


def _lookup(data: dict[str, Any], *keys: str) -> Any:
    value: Any = data
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def parse_tauri_config(data: dict[str, Any], root_dir: Path) -> TauriConfig:
    """Build a :class:`TauriConfig` from decoded ``tauri.conf.json`` data.

    Raises
    ------
    InvalidTauriConfigError
        When the bundle identifier is missing or not reverse-domain, or
        an optional key has the wrong type.
    """
    identifier = _lookup(data, "tauri", "bundle", "identifier")
    if not isinstance(identifier, str) or not identifier:
        raise InvalidTauriConfigError(
            "`tauri.bundle.identifier` is missing",
            hint="Set a reverse-domain identifier such as `com.example.app`.",
        )
    segments = identifier.split(".")
    if len(segments) < 2 or not all(segments):
        raise InvalidTauriConfigError(
            f"`tauri.bundle.identifier` must be in reverse-domain form, got {identifier!r}",
        )

    product_name = _lookup(data, "package", "productName")
    if product_name is not None and not isinstance(product_name, str):
        raise InvalidTauriConfigError("`package.productName` must be a string")

    min_sdk = _lookup(data, "tauri", "bundle", "android", "minSdkVersion")
    if min_sdk is not None and (isinstance(min_sdk, bool) or not isinstance(min_sdk, int)):
        raise InvalidTauriConfigError("`tauri.bundle.android.minSdkVersion` must be an integer")

    team = _lookup(data, "tauri", "bundle", "iOS", "developmentTeam")
    if team is not None and not isinstance(team, str):
        raise InvalidTauriConfigError("`tauri.bundle.iOS.developmentTeam` must be a string")

    return TauriConfig(
        identifier=identifier,
        root_dir=root_dir,
        product_name=product_name,
        android_min_sdk_version=min_sdk,
        ios_development_team=team or None,
    )


def load_tauri_config(tauri_dir: Path) -> TauriConfig:
    """Read and parse ``tauri.conf.json`` inside *tauri_dir*.

    Raises
    ------
    InvalidTauriConfigError
        When the file is missing, unreadable, not JSON, or invalid.
    """
    path = tauri_dir / CONFIG_FILE_NAME
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidTauriConfigError(f"failed to read {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidTauriConfigError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidTauriConfigError(f"{path} must contain a JSON object")

    logger.debug(f"Loaded {path}")
    return parse_tauri_config(data, tauri_dir)


class TauriConfigLoader:
    """Callable :class:`~tauri_mobile.core.protocols.ConfigLoader` for a directory."""

    def __init__(self, tauri_dir: Path) -> None:
        self.tauri_dir = tauri_dir

    def __call__(self) -> TauriConfig:
        return load_tauri_config(self.tauri_dir)

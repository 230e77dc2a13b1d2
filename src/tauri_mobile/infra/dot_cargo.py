"""Infrastructure: the ``.cargo/config.toml`` build-target override file.

The tool owns exactly two things in this file: ``build.target`` and the
``target.<triple>`` tables generators insert.  Everything else belongs
to the user and must survive a round trip, so :meth:`DotCargo.write`
re-reads the file and merges the in-memory document over it instead of
overwriting it.
"""

from __future__ import annotations

import datetime as _dt
import logging
import os
import re
import stat
import tempfile
import tomllib
from pathlib import Path
from typing import Any

from tauri_mobile.core.models import AppConfig
from tauri_mobile.exceptions import DotCargoLoadError, DotCargoWriteError

logger = logging.getLogger(__name__)

DOT_CARGO_DIR = ".cargo"
CONFIG_FILE = "config.toml"
LEGACY_CONFIG_FILE = "config"

_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

def config_path(app: AppConfig) -> Path:
    """Path of the config file for *app*.

    The legacy extension-less ``.cargo/config`` is used only when it is
    the one that already exists.
    """
    dot_cargo = app.root_dir / DOT_CARGO_DIR
    current = dot_cargo / CONFIG_FILE
    legacy = dot_cargo / LEGACY_CONFIG_FILE
    if not current.exists() and legacy.is_file():
        return legacy
    return current


def _read_document(path: Path) -> dict[str, Any]:
    """Parse *path*, or return an empty document when it does not exist."""
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge *overlay* into a copy of *base*; nested tables merge key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


# ---------------------------------------------------------------------------
# TOML emission
# ---------------------------------------------------------------------------

_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _quote(value: str) -> str:
    parts: list[str] = []
    for char in value:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            # Raw control characters are not allowed in TOML basic strings.
            parts.append(f"\\u{ord(char):04X}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


def _format_key(key: str) -> str:
    return key if _BARE_KEY_RE.match(key) else _quote(key)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, list):
        return "[" + ", ".join(_format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        inner = ", ".join(f"{_format_key(k)} = {_format_value(v)}" for k, v in value.items())
        return "{ " + inner + " }" if inner else "{}"
    raise TypeError(f"Unsupported TOML value type: {type(value).__name__}")


def _is_table_array(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(item, dict) for item in value)


def _emit_table(table: dict[str, Any], header: list[str], lines: list[str]) -> None:
    scalars = [
        (key, value)
        for key, value in table.items()
        if not isinstance(value, dict) and not _is_table_array(value)
    ]
    if header and (scalars or not table):
        if lines:
            lines.append("")
        lines.append("[" + ".".join(_format_key(part) for part in header) + "]")
    for key, value in scalars:
        lines.append(f"{_format_key(key)} = {_format_value(value)}")

    for key, value in table.items():
        if isinstance(value, dict):
            _emit_table(value, [*header, key], lines)
        elif _is_table_array(value):
            for item in value:
                if lines:
                    lines.append("")
                lines.append("[[" + ".".join(_format_key(part) for part in [*header, key]) + "]]")
                lines.extend(
                    f"{_format_key(item_key)} = {_format_value(item_value)}"
                    for item_key, item_value in item.items()
                )


def dumps(document: dict[str, Any]) -> str:
    """Serialize *document* as TOML.

    Plain tables become ``[section]`` headers, arrays of tables become
    ``[[section]]`` entries.  Tables nested inside an array of tables are
    written inline.
    """
    lines: list[str] = []
    _emit_table(document, [], lines)
    return "\n".join(lines) + "\n" if lines else ""


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write *text* to *path* through a temporary file in the same directory.

    An existing file keeps its permission bits; a new one gets *mode*.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class DotCargo:
    """In-memory view of the tool-owned part of ``.cargo/config.toml``.

    Satisfies :class:`~tauri_mobile.core.protocols.DotCargoDocument`.
    """

    def __init__(self, document: dict[str, Any] | None = None) -> None:
        self.document: dict[str, Any] = document if document is not None else {}

    @classmethod
    def load(cls, app: AppConfig) -> DotCargo:
        """Load the config for *app*; a missing file yields an empty store.

        Raises
        ------
        DotCargoLoadError
            When an existing file cannot be read or is not valid TOML.
        """
        path = config_path(app)
        try:
            document = _read_document(path)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise DotCargoLoadError(str(exc), path=path) from exc
        logger.debug(f"Loaded cargo config from {path} ({len(document)} top-level key(s))")
        return cls(document)

    @property
    def default_target(self) -> str | None:
        build = self.document.get("build")
        if isinstance(build, dict):
            target = build.get("target")
            return target if isinstance(target, str) else None
        return None

    def set_default_target(self, triple: str) -> None:
        build = self.document.get("build")
        if not isinstance(build, dict):
            build = {}
            self.document["build"] = build
        build["target"] = triple

    def insert_target(self, triple: str, table: dict[str, Any]) -> None:
        targets = self.document.get("target")
        if not isinstance(targets, dict):
            targets = {}
            self.document["target"] = targets
        existing = targets.get(triple)
        if isinstance(existing, dict):
            targets[triple] = deep_merge(existing, table)
        else:
            targets[triple] = dict(table)

    def write(self, app: AppConfig) -> None:
        """Merge this store over the file on disk and write the result.

        Raises
        ------
        DotCargoWriteError
            When the directory or file cannot be written, or the file on
            disk changed into invalid TOML since it was loaded.
        """
        path = config_path(app)
        try:
            on_disk = _read_document(path)
            merged = deep_merge(on_disk, self.document)
            atomic_write_text(path, dumps(merged))
        except (OSError, tomllib.TOMLDecodeError, TypeError) as exc:
            raise DotCargoWriteError(str(exc), path=path) from exc
        logger.debug(f"Wrote cargo config to {path}")

"""Infrastructure: platform project generators backed by bundled templates.

Each generator renders every ``*.j2`` file under its platform directory
in ``tauri_mobile/templates/`` into the configured project directory,
preserving the directory layout and stripping the ``.j2`` extension.
Templates see the init renderer's context plus ``root_dir_rel``, the
path from the generated project back to the app root.
"""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from tauri_mobile.core.models import (
    AndroidConfig,
    AndroidEnv,
    AndroidMetadata,
    AppleConfig,
    AppleMetadata,
)
from tauri_mobile.core.protocols import DotCargoDocument
from tauri_mobile.core.template_helpers import TemplateRenderer, app_root
from tauri_mobile.exceptions import TauriMobileError
from tauri_mobile.infra import process
from tauri_mobile.infra.dot_cargo import atomic_write_text

logger = logging.getLogger(__name__)

TEMPLATE_ROOT = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_SUFFIX = ".j2"

# Rust target name -> (rustc triple, NDK clang prefix)
ANDROID_TARGETS: dict[str, tuple[str, str]] = {
    "aarch64": ("aarch64-linux-android", "aarch64-linux-android"),
    "armv7": ("armv7-linux-androideabi", "armv7a-linux-androideabi"),
    "i686": ("i686-linux-android", "i686-linux-android"),
    "x86_64": ("x86_64-linux-android", "x86_64-linux-android"),
}


# ---------------------------------------------------------------------------
# Tree rendering
# ---------------------------------------------------------------------------

def render_tree(
    renderer: TemplateRenderer,
    template_dir: Path,
    output_dir: Path,
    extra: Mapping[str, Any] | None = None,
) -> list[Path]:
    """Render every template under *template_dir* into *output_dir*.

    Returns
    -------
    list[Path]
        Written file paths, in sorted template order.
    """
    if not template_dir.is_dir():
        raise TauriMobileError(f"Template directory not found: {template_dir}")

    written: list[Path] = []
    for template_file in sorted(template_dir.rglob(f"*{TEMPLATE_SUFFIX}")):
        rel = template_file.relative_to(template_dir)
        output_file = output_dir / str(rel)[: -len(TEMPLATE_SUFFIX)]
        rendered = renderer.render_file(template_file, extra)
        atomic_write_text(output_file, rendered)
        logger.info(f"Rendered {rel} → {output_file}")
        written.append(output_file)
    return written


def _project_paths(renderer: TemplateRenderer, project_dir: str) -> tuple[Path, str]:
    root = Path(app_root(renderer.context))
    dest = root / project_dir
    return dest, Path(os.path.relpath(root, dest)).as_posix()


# ---------------------------------------------------------------------------
# Android
# ---------------------------------------------------------------------------

def ndk_linker(env: AndroidEnv, clang_prefix: str, min_sdk_version: int) -> Path:
    """Path of the NDK clang wrapper that links for one target/API level."""
    name = f"{clang_prefix}{min_sdk_version}-clang"
    if platform.system() == "Windows":
        name += ".cmd"
    return env.ndk_home / "toolchains" / "llvm" / "prebuilt" / env.host_tag / "bin" / name


class AndroidTemplateGenerator:
    """Concrete :class:`~tauri_mobile.core.protocols.AndroidProjectGenerator`."""

    def __init__(self, template_root: Path = TEMPLATE_ROOT) -> None:
        self._template_dir = template_root / "android"

    def generate(
        self,
        config: AndroidConfig,
        metadata: AndroidMetadata,
        env: AndroidEnv,
        renderer: TemplateRenderer,
        dot_cargo: DotCargoDocument,
    ) -> None:
        """Write the Android Studio project and register an NDK linker per target.

        Raises
        ------
        TauriMobileError
            For unknown Rust targets or missing templates.
        TemplateHelperError
            When a template helper fails while rendering.
        """
        if not metadata.supported:
            logger.info("Android is marked unsupported; skipping project generation")
            return

        unknown = [name for name in config.targets if name not in ANDROID_TARGETS]
        if unknown:
            raise TauriMobileError(
                f"Unknown Android target(s): {', '.join(unknown)}",
                hint=f"Supported targets: {', '.join(ANDROID_TARGETS)}",
            )

        dest, root_dir_rel = _project_paths(renderer, config.project_dir)
        logger.debug(f"Generating Android project in {dest} (NDK {env.ndk_version})")
        render_tree(renderer, self._template_dir, dest, {"root_dir_rel": root_dir_rel})

        for name in config.targets:
            triple, clang_prefix = ANDROID_TARGETS[name]
            linker = ndk_linker(env, clang_prefix, config.min_sdk_version)
            dot_cargo.insert_target(triple, {"linker": str(linker)})


# ---------------------------------------------------------------------------
# iOS
# ---------------------------------------------------------------------------

class IosTemplateGenerator:
    """Concrete :class:`~tauri_mobile.core.protocols.IosProjectGenerator`.

    Parameters
    ----------
    prompt_development_team:
        Asked for a team ID when running interactively and none is
        configured.  May return ``None`` to leave it unset.
    """

    def __init__(
        self,
        template_root: Path = TEMPLATE_ROOT,
        prompt_development_team: Callable[[], str | None] | None = None,
    ) -> None:
        self._template_dir = template_root / "apple"
        self._prompt_development_team = prompt_development_team

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
        """Write the XcodeGen spec and, when possible, the Xcode project.

        Raises
        ------
        CommandError
            When ``xcodegen`` fails.
        TauriMobileError
            When the templates are missing.
        """
        if not metadata.supported:
            logger.info("iOS is marked unsupported; skipping project generation")
            return

        team = config.development_team
        if team is None and not non_interactive and self._prompt_development_team:
            team = self._prompt_development_team() or None

        apple_data = {**config.to_template_data(), "development-team": team}
        dest, root_dir_rel = _project_paths(renderer, config.project_dir)
        render_tree(
            renderer,
            self._template_dir,
            dest,
            {"apple": apple_data, "root_dir_rel": root_dir_rel},
        )

        if skip_dev_tools:
            return
        if not process.command_present("xcodegen"):
            logger.warning(f"xcodegen not found on PATH; run `xcodegen generate` in {dest}")
            return

        app_name = renderer.context["app"]["name"]
        if (dest / f"{app_name}.xcodeproj").exists() and not reinstall_deps:
            logger.debug("Xcode project already exists; not regenerating")
            return
        process.run_and_wait(["xcodegen", "generate", "--spec", str(dest / "project.yml")], cwd=dest)

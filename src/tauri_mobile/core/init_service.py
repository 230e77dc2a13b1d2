"""Core init service — orchestrates mobile project initialization.

The service runs a fixed sequence of steps.  Each step either succeeds
and advances, or raises exactly one :class:`~tauri_mobile.exceptions.InitError`
subclass that aborts the remaining sequence.  Completed steps are never
rolled back.

1. Load the parsed tauri config.
2. Derive config/metadata facets.
3. Ensure the asset directory exists.
4. Install the LLDB editor extension (best effort, editor present only).
5. Load the ``.cargo`` config.
6. Detect the host triple and pin it as the default build target.
7. Build the template renderer and insert the invoking binary name.
8. Delegate to the Android or iOS generator.
9. Write the ``.cargo`` config back.
10. Report victory and optionally open the editor.

The only recoverable failure is an Android SDK/NDK issue in step 8: it
is reported as an action request and the run continues without an
Android project.

All collaborators are injected; the service itself touches the
filesystem only to create the asset directory.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tauri_mobile.core.facets import derive_config, derive_metadata
from tauri_mobile.core.models import Config, InitOptions, Metadata, Report, Target
from tauri_mobile.core.protocols import (
    AndroidEnvProbe,
    AndroidProjectGenerator,
    ConfigLoader,
    DotCargoDocument,
    DotCargoLoader,
    Editor,
    HostTripleDetector,
    IosProjectGenerator,
    Reporter,
)
from tauri_mobile.core.template_helpers import (
    TAURI_BINARY_KEY,
    TemplateRenderer,
    build_template_context,
)
from tauri_mobile.exceptions import (
    AndroidEnvError,
    AndroidEnvironmentError,
    AndroidInitError,
    AssetDirCreationError,
    DotCargoLoadError,
    DotCargoWriteError,
    HostTargetTripleDetectionError,
    InvalidTauriConfigError,
    IosInitError,
    LldbExtensionInstallError,
    OpenInEditorError,
)

logger = logging.getLogger(__name__)

LLDB_EXTENSION_ID = "vadimcn.vscode-lldb"
DEFAULT_BINARY_NAME = "cargo"

ANDROID_ENV_HEADLINE = (
    "Failed to initialize Android environment; Android support won't be usable "
    "until you fix the issue below and re-run `tauri-mobile android init`!"
)
VICTORY_HEADLINE = "Project generated successfully!"
VICTORY_BODY = "Make cool apps! 🌻 🐕 🎉"


# ---------------------------------------------------------------------------
# Standalone steps
# ---------------------------------------------------------------------------

def ensure_asset_dir(config: Config) -> Path:
    """Create the configured asset directory and any missing ancestors.

    Idempotent: an existing directory is left untouched.

    Raises
    ------
    AssetDirCreationError
        When the directory cannot be created.
    """
    asset_dir = config.app.asset_dir
    if not asset_dir.is_dir():
        logger.debug(f"Creating asset dir {asset_dir}")
        try:
            asset_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AssetDirCreationError(asset_dir, str(exc)) from exc
    return asset_dir


def invoking_binary(argv: Sequence[str] | None = None) -> str:
    """Name of the binary that started this process, ``cargo`` if unknown."""
    args = sys.argv if argv is None else argv
    if args and args[0]:
        return args[0]
    return DEFAULT_BINARY_NAME


def _describe(exc: Exception) -> str:
    hint = getattr(exc, "hint", None)
    return f"{exc}\n{hint}" if hint else str(exc)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class InitService:
    """Runs the init sequence against injected collaborators.

    Parameters
    ----------
    load_config:
        Returns the parsed tauri config.
    load_dot_cargo:
        Loads the ``.cargo`` config document for an app.
    detect_host_triple:
        Returns the host target triple.
    editor:
        Editor used for the LLDB extension and ``open_in_editor``.
    probe_android_env:
        Discovers the Android SDK/NDK.
    android_generator, ios_generator:
        Platform project writers.
    reporter:
        Sink for action-request and victory reports.
    can_generate_ios_projects:
        Whether this host can produce Xcode projects.  When ``False`` the
        iOS branch is a no-op and ``apple`` is left out of the template
        context.
    binary_name:
        Value stored under ``tauri-binary``; defaults to
        :func:`invoking_binary`.
    """

    def __init__(
        self,
        *,
        load_config: ConfigLoader,
        load_dot_cargo: DotCargoLoader,
        detect_host_triple: HostTripleDetector,
        editor: Editor,
        probe_android_env: AndroidEnvProbe,
        android_generator: AndroidProjectGenerator,
        ios_generator: IosProjectGenerator,
        reporter: Reporter,
        can_generate_ios_projects: bool = False,
        binary_name: str | None = None,
    ) -> None:
        self._load_config = load_config
        self._load_dot_cargo = load_dot_cargo
        self._detect_host_triple = detect_host_triple
        self._editor = editor
        self._probe_android_env = probe_android_env
        self._android_generator = android_generator
        self._ios_generator = ios_generator
        self._reporter = reporter
        self._can_generate_ios_projects = can_generate_ios_projects
        self._binary_name = binary_name or invoking_binary()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, options: InitOptions) -> Config:
        """Execute the init sequence for ``options.target``.

        Returns
        -------
        Config
            The config the projects were generated from.

        Raises
        ------
        InitError
            The subclass matching the first step that failed.
        """
        logger.debug(f"Initializing {options.target.value} project")

        config, metadata = self._derive_facets()
        ensure_asset_dir(config)
        self._install_debugger_extension(options)

        dot_cargo = self._load_dot_cargo_document(config)
        dot_cargo.set_default_target(self._host_triple())

        renderer = build_template_context(
            config, include_apple=self._can_generate_ios_projects
        )
        renderer.insert(TAURI_BINARY_KEY, self._binary_name)

        if options.target is Target.ANDROID:
            self._init_android(config, metadata, renderer, dot_cargo)
        else:
            self._init_ios(config, metadata, renderer, options)

        self._write_dot_cargo(config, dot_cargo)

        self._reporter.emit(Report.victory(VICTORY_HEADLINE, VICTORY_BODY))
        if options.open_in_editor:
            self._open_in_editor(options.cwd)
        return config

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _derive_facets(self) -> tuple[Config, Metadata]:
        try:
            tauri_config = self._load_config()
        except InvalidTauriConfigError:
            raise
        except Exception as exc:
            raise InvalidTauriConfigError(str(exc)) from exc
        return derive_config(tauri_config), derive_metadata(tauri_config)

    def _install_debugger_extension(self, options: InitOptions) -> None:
        if options.skip_dev_tools:
            return
        status = self._editor.detect()
        if not status.present:
            logger.debug("Editor not found; skipping LLDB extension install")
            return
        logger.debug(f"Installing {LLDB_EXTENSION_ID} with {status.path}")
        try:
            self._editor.install_extension(
                LLDB_EXTENSION_ID, force=options.non_interactive
            )
        except Exception as exc:
            raise LldbExtensionInstallError(str(exc)) from exc

    def _load_dot_cargo_document(self, config: Config) -> DotCargoDocument:
        try:
            return self._load_dot_cargo(config.app)
        except DotCargoLoadError:
            raise
        except Exception as exc:
            raise DotCargoLoadError(str(exc)) from exc

    def _host_triple(self) -> str:
        # Pinning build.target keeps plain `cargo build` and mobile builds
        # from invalidating each other's build cache.
        try:
            triple = self._detect_host_triple()
        except Exception as exc:
            raise HostTargetTripleDetectionError(str(exc)) from exc
        logger.debug(f"Host target triple: {triple}")
        return triple

    def _init_android(
        self,
        config: Config,
        metadata: Metadata,
        renderer: TemplateRenderer,
        dot_cargo: DotCargoDocument,
    ) -> None:
        try:
            env = self._probe_android_env()
        except AndroidEnvironmentError as exc:
            if not exc.sdk_or_ndk_issue:
                raise AndroidEnvError(str(exc)) from exc
            logger.debug(f"Android SDK/NDK issue, skipping project generation: {exc}")
            self._reporter.emit(Report.action_request(ANDROID_ENV_HEADLINE, _describe(exc)))
            return
        except Exception as exc:
            raise AndroidEnvError(str(exc)) from exc

        try:
            self._android_generator.generate(
                config.android, metadata.android, env, renderer, dot_cargo
            )
        except Exception as exc:
            raise AndroidInitError(str(exc)) from exc

    def _init_ios(
        self,
        config: Config,
        metadata: Metadata,
        renderer: TemplateRenderer,
        options: InitOptions,
    ) -> None:
        if not self._can_generate_ios_projects:
            logger.debug("Xcode projects cannot be generated on this host; skipping")
            return
        try:
            self._ios_generator.generate(
                config.apple,
                metadata.apple,
                renderer,
                non_interactive=options.non_interactive,
                skip_dev_tools=options.skip_dev_tools,
                reinstall_deps=options.reinstall_deps,
            )
        except Exception as exc:
            raise IosInitError(str(exc)) from exc

    def _write_dot_cargo(self, config: Config, dot_cargo: DotCargoDocument) -> None:
        try:
            dot_cargo.write(config.app)
        except DotCargoWriteError:
            raise
        except Exception as exc:
            raise DotCargoWriteError(str(exc)) from exc

    def _open_in_editor(self, path: Path) -> None:
        try:
            self._editor.open(path)
        except Exception as exc:
            raise OpenInEditorError(str(exc)) from exc

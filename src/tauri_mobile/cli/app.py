"""CLI application entry point and command routing for tauri-mobile.

This module is the **sole error boundary** for the entire application.
It catches :class:`~tauri_mobile.exceptions.TauriMobileError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import os
import platform
import sys
from pathlib import Path

from tauri_mobile.cli import exit_codes
from tauri_mobile.cli.console import console
from tauri_mobile.core.models import InitOptions, Target
from tauri_mobile.exceptions import TauriMobileError
from tauri_mobile.version import __version__

CI_ENV_VAR = "CI"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_init_parser(platforms: argparse._SubParsersAction, target: Target, help_text: str) -> None:
    platform_parser = platforms.add_parser(target.value, help=help_text)
    platform_parser.set_defaults(print_platform_help=platform_parser.print_help)
    commands = platform_parser.add_subparsers(dest="command", metavar="COMMAND")
    init = commands.add_parser(
        "init",
        help=f"Generate the {help_text} project and configure Rust for it.",
    )
    init.add_argument(
        "--ci",
        action="store_true",
        help="Never prompt; also implied when the CI environment variable is set.",
    )
    init.add_argument(
        "--skip-dev-tools",
        action="store_true",
        help="Don't install the LLDB editor extension or run xcodegen.",
    )
    init.add_argument(
        "--open",
        action="store_true",
        help="Open the project in VS Code when done.",
    )
    init.set_defaults(target=target)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``tauri-mobile android init``  — generate the Android project
    * ``tauri-mobile ios init``      — generate the Xcode project
    * ``tauri-mobile doctor``        — environment diagnostics
    * ``tauri-mobile --version``
    """
    parser = argparse.ArgumentParser(
        prog="tauri-mobile",
        description="Initialize Android and iOS projects for a Tauri app.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging.",
    )
    platforms = parser.add_subparsers(dest="platform", metavar="COMMAND")
    _add_init_parser(platforms, Target.ANDROID, "Android")
    _add_init_parser(platforms, Target.IOS, "iOS")
    platforms.add_parser("doctor", help="Check the environment for mobile development.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_init(args: argparse.Namespace) -> int:
    """Wire the infra collaborators into :class:`InitService` and run it."""
    from tauri_mobile.cli.prompts import prompt_development_team
    from tauri_mobile.cli.report import RichReporter
    from tauri_mobile.core.init_service import InitService
    from tauri_mobile.exceptions import InvalidTauriConfigError
    from tauri_mobile.infra.android_env import probe_android_env
    from tauri_mobile.infra.dot_cargo import DotCargo
    from tauri_mobile.infra.editor import VsCodeEditor
    from tauri_mobile.infra.host_triple import host_target_triple
    from tauri_mobile.infra.project_gen import AndroidTemplateGenerator, IosTemplateGenerator
    from tauri_mobile.infra.tauri_config import CONFIG_FILE_NAME, TauriConfigLoader, find_tauri_dir

    cwd = Path.cwd()
    tauri_dir = find_tauri_dir(cwd)
    if tauri_dir is None:
        raise InvalidTauriConfigError(
            f"couldn't find {CONFIG_FILE_NAME} in {cwd} or any parent directory",
            hint="Run this command from inside a Tauri project.",
        )

    options = InitOptions(
        target=args.target,
        non_interactive=args.ci or CI_ENV_VAR in os.environ,
        skip_dev_tools=args.skip_dev_tools,
        reinstall_deps=True,
        open_in_editor=args.open,
        cwd=cwd,
    )
    service = InitService(
        load_config=TauriConfigLoader(tauri_dir),
        load_dot_cargo=DotCargo.load,
        detect_host_triple=host_target_triple,
        editor=VsCodeEditor(),
        probe_android_env=probe_android_env,
        android_generator=AndroidTemplateGenerator(),
        ios_generator=IosTemplateGenerator(prompt_development_team=prompt_development_team),
        reporter=RichReporter(),
        can_generate_ios_projects=platform.system() == "Darwin",
    )
    service.run(options)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from tauri_mobile.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the tauri-mobile CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.platform is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.platform == "doctor":
        return _handle_doctor()

    if getattr(args, "command", None) != "init":
        args.print_platform_help()
        return exit_codes.SUCCESS

    return _handle_init(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TauriMobileError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}", plain=f"Error: {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}", plain=f"Hint: {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]", plain="\nAborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

"""Infrastructure: host target triple detection via ``rustc -vV``."""

from __future__ import annotations

from tauri_mobile.exceptions import CommandError, TauriMobileError
from tauri_mobile.infra import process

_HOST_PREFIX = "host:"


def parse_host_triple(version_output: str) -> str:
    """Extract the triple from the ``host:`` line of ``rustc -vV`` output.

    Raises
    ------
    TauriMobileError
        When no ``host:`` line is present.
    """
    for line in version_output.splitlines():
        stripped = line.strip()
        if stripped.startswith(_HOST_PREFIX):
            triple = stripped[len(_HOST_PREFIX):].strip()
            if triple:
                return triple
    raise TauriMobileError("`rustc -vV` output did not contain a host triple.")


def host_target_triple() -> str:
    """Return the triple ``rustc`` compiles for by default on this host.

    Raises
    ------
    TauriMobileError
        When ``rustc`` is missing, fails, or prints no host line.
    """
    try:
        output = process.capture(["rustc", "-vV"])
    except CommandError as exc:
        raise TauriMobileError(
            f"Failed to query rustc: {exc}",
            hint="Install Rust with rustup: https://rustup.rs",
        ) from exc
    return parse_host_triple(output)

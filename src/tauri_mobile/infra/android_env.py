"""Infrastructure: Android SDK/NDK environment discovery.

Failures are raised as :class:`~tauri_mobile.exceptions.AndroidEnvironmentError`.
Missing or broken SDK/NDK installs set ``sdk_or_ndk_issue`` so the init
sequence can report them and carry on; a broken base environment
(``PATH``, home directory) does not.
"""

from __future__ import annotations

import os
import platform
import re
from collections.abc import Mapping
from pathlib import Path

from tauri_mobile.core.models import AndroidEnv
from tauri_mobile.exceptions import AndroidEnvironmentError

SDK_ENV_VARS: tuple[str, ...] = ("ANDROID_HOME", "ANDROID_SDK_ROOT")
NDK_ENV_VAR = "NDK_HOME"

_REVISION_RE = re.compile(r"^\s*Pkg\.Revision\s*=\s*(\S+)\s*$", re.MULTILINE)


# ---------------------------------------------------------------------------
# Individual probes
# ---------------------------------------------------------------------------

def _check_base_env(environ: Mapping[str, str]) -> None:
    home_var = "USERPROFILE" if platform.system() == "Windows" else "HOME"
    for name in (home_var, "PATH"):
        if not environ.get(name):
            raise AndroidEnvironmentError(
                f"The `{name}` environment variable isn't set.",
                sdk_or_ndk_issue=False,
            )


def find_sdk_root(environ: Mapping[str, str]) -> Path:
    for name in SDK_ENV_VARS:
        value = environ.get(name)
        if not value:
            continue
        sdk_root = Path(value)
        if not sdk_root.is_dir():
            raise AndroidEnvironmentError(
                f"`{name}` is set to {sdk_root}, which doesn't exist.",
                sdk_or_ndk_issue=True,
                hint="Point it at your Android SDK installation.",
            )
        return sdk_root
    raise AndroidEnvironmentError(
        "Have you installed the Android SDK? The `ANDROID_HOME` environment variable isn't set.",
        sdk_or_ndk_issue=True,
        hint=(
            "Install the SDK with Android Studio's SDK Manager and set "
            "`ANDROID_HOME` to its location."
        ),
    )


def _version_key(path: Path) -> tuple[int, ...]:
    return tuple(int(part) for part in re.findall(r"\d+", path.name))


def find_ndk_home(environ: Mapping[str, str], sdk_root: Path) -> Path:
    value = environ.get(NDK_ENV_VAR)
    if value:
        ndk_home = Path(value)
        if not ndk_home.is_dir():
            raise AndroidEnvironmentError(
                f"`{NDK_ENV_VAR}` is set to {ndk_home}, which doesn't exist.",
                sdk_or_ndk_issue=True,
                hint="Point it at your Android NDK installation.",
            )
        return ndk_home

    side_by_side = sdk_root / "ndk"
    if side_by_side.is_dir():
        installed = [child for child in side_by_side.iterdir() if child.is_dir()]
        if installed:
            return max(installed, key=_version_key)

    bundle = sdk_root / "ndk-bundle"
    if bundle.is_dir():
        return bundle

    raise AndroidEnvironmentError(
        "Have you installed the NDK? No NDK was found in the Android SDK "
        f"and the `{NDK_ENV_VAR}` environment variable isn't set.",
        sdk_or_ndk_issue=True,
        hint="Install the NDK with Android Studio's SDK Manager (SDK Tools > NDK).",
    )


def read_ndk_version(ndk_home: Path) -> str:
    properties = ndk_home / "source.properties"
    try:
        text = properties.read_text(encoding="utf-8")
    except OSError as exc:
        raise AndroidEnvironmentError(
            f"Failed to read NDK version from {properties}: {exc}",
            sdk_or_ndk_issue=True,
        ) from exc
    match = _REVISION_RE.search(text)
    if match is None:
        raise AndroidEnvironmentError(
            f"{properties} doesn't contain a `Pkg.Revision` entry.",
            sdk_or_ndk_issue=True,
            hint="Your NDK install may be corrupt; try reinstalling it.",
        )
    return match.group(1)


def ndk_host_tag() -> str:
    """Name of the NDK's prebuilt toolchain directory for this host."""
    system = platform.system().lower()
    if system == "windows":
        return "windows-x86_64"
    if system == "darwin":
        # The NDK ships a universal toolchain under the x86_64 name.
        return "darwin-x86_64"
    return "linux-x86_64"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def probe_android_env(environ: Mapping[str, str] | None = None) -> AndroidEnv:
    """Discover the Android SDK/NDK environment.

    Raises
    ------
    AndroidEnvironmentError
        When the base environment, SDK or NDK is unusable.
    """
    env = os.environ if environ is None else environ
    _check_base_env(env)
    sdk_root = find_sdk_root(env)
    ndk_home = find_ndk_home(env, sdk_root)
    return AndroidEnv(
        sdk_root=sdk_root,
        ndk_home=ndk_home,
        ndk_version=read_ndk_version(ndk_home),
        host_tag=ndk_host_tag(),
    )

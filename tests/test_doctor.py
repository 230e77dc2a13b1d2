"""Tests for the ``tauri-mobile doctor`` command (cli/doctor.py).

All external tools (rustc, code, the Android SDK, xcodegen) are mocked.

Coverage:
* Individual check functions return correct tuples.
* Missing optional tools are warnings, a missing rustc is a failure.
* Plain output is used when Rich is unavailable.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tauri_mobile.cli import exit_codes
from tauri_mobile.core.models import AndroidEnv, EditorPresence, EditorStatus
from tauri_mobile.exceptions import AndroidEnvironmentError, TauriMobileError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _android_env() -> AndroidEnv:
    return AndroidEnv(
        sdk_root=Path("/opt/android-sdk"),
        ndk_home=Path("/opt/android-sdk/ndk/26.1.10909125"),
        ndk_version="26.1.10909125",
        host_tag="linux-x86_64",
    )


def _all_present(stack: list[MagicMock]) -> None:
    """Configure the mocks of ``_patched_tools`` as a fully set-up machine."""
    host, editor, android = stack
    host.return_value = "x86_64-unknown-linux-gnu"
    editor.return_value = EditorStatus(presence=EditorPresence.PRESENT, path=Path("/usr/bin/code"))
    android.return_value = _android_env()


def _patched_tools():  # type: ignore[no-untyped-def]
    return (
        patch("tauri_mobile.cli.doctor.host_target_triple"),
        patch("tauri_mobile.cli.doctor.detect_editor"),
        patch("tauri_mobile.cli.doctor.probe_android_env"),
    )


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from tauri_mobile.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestRustcCheck:
    @patch("tauri_mobile.cli.doctor.host_target_triple", return_value="aarch64-apple-darwin")
    def test_found(self, _mock: MagicMock) -> None:
        from tauri_mobile.cli.doctor import _rustc_check

        assert _rustc_check() == ("rustc", "aarch64-apple-darwin", "[green]OK[/green]")

    @patch(
        "tauri_mobile.cli.doctor.host_target_triple",
        side_effect=TauriMobileError("rustc missing"),
    )
    def test_missing_fails(self, _mock: MagicMock) -> None:
        from tauri_mobile.cli.doctor import _rustc_check

        _label, value, status = _rustc_check()
        assert value == "not found"
        assert "FAIL" in status


class TestEditorCheck:
    @patch(
        "tauri_mobile.cli.doctor.detect_editor",
        return_value=EditorStatus(presence=EditorPresence.ABSENT),
    )
    def test_missing_warns(self, _mock: MagicMock) -> None:
        from tauri_mobile.cli.doctor import _editor_check

        assert _editor_check() == ("VS Code", "not found", "[yellow]WARN[/yellow]")


class TestAndroidCheck:
    @patch("tauri_mobile.cli.doctor.probe_android_env", return_value=_android_env())
    def test_found(self, _mock: MagicMock) -> None:
        from tauri_mobile.cli.doctor import _android_check

        _label, value, status = _android_check()
        assert "26.1.10909125" in value
        assert "OK" in status

    @patch(
        "tauri_mobile.cli.doctor.probe_android_env",
        side_effect=AndroidEnvironmentError("ANDROID_HOME isn't set", sdk_or_ndk_issue=True),
    )
    def test_missing_warns(self, _mock: MagicMock) -> None:
        from tauri_mobile.cli.doctor import _android_check

        _label, value, status = _android_check()
        assert "ANDROID_HOME" in value
        assert "WARN" in status


class TestXcodegenCheck:
    @patch("tauri_mobile.cli.doctor.platform.system", return_value="Linux")
    def test_not_applicable_off_macos(self, _mock: MagicMock) -> None:
        from tauri_mobile.cli.doctor import _xcodegen_check

        assert _xcodegen_check()[2] == "[green]OK[/green]"

    @patch("tauri_mobile.cli.doctor.process.command_present", return_value=False)
    @patch("tauri_mobile.cli.doctor.platform.system", return_value="Darwin")
    def test_missing_on_macos_warns(self, _mock_system: MagicMock, _mock_present: MagicMock) -> None:
        from tauri_mobile.cli.doctor import _xcodegen_check

        assert "WARN" in _xcodegen_check()[2]


class TestOsCheck:
    @patch("tauri_mobile.cli.doctor.platform.machine", return_value="arm64")
    @patch("tauri_mobile.cli.doctor.platform.release", return_value="23.4.0")
    @patch("tauri_mobile.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from tauri_mobile.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert value == "macOS 23.4.0 (arm64)"


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_all_pass_returns_success(self) -> None:
        from tauri_mobile.cli.doctor import run_doctor

        host, editor, android = _patched_tools()
        with host as mock_host, editor as mock_editor, android as mock_android:
            _all_present([mock_host, mock_editor, mock_android])
            assert run_doctor() == exit_codes.SUCCESS

    def test_warnings_still_succeed(self) -> None:
        from tauri_mobile.cli.doctor import run_doctor

        host, editor, android = _patched_tools()
        with host as mock_host, editor as mock_editor, android as mock_android:
            _all_present([mock_host, mock_editor, mock_android])
            mock_editor.return_value = EditorStatus(presence=EditorPresence.ABSENT)
            mock_android.side_effect = AndroidEnvironmentError("no sdk", sdk_or_ndk_issue=True)
            assert run_doctor() == exit_codes.SUCCESS

    def test_missing_rustc_fails(self) -> None:
        from tauri_mobile.cli.doctor import run_doctor

        host, editor, android = _patched_tools()
        with host as mock_host, editor as mock_editor, android as mock_android:
            _all_present([mock_host, mock_editor, mock_android])
            mock_host.side_effect = TauriMobileError("rustc missing")
            assert run_doctor() == exit_codes.GENERAL_ERROR

    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output_without_rich(self, capsys: pytest.CaptureFixture[str]) -> None:
        from tauri_mobile.cli.doctor import run_doctor

        host, editor, android = _patched_tools()
        with host as mock_host, editor as mock_editor, android as mock_android:
            _all_present([mock_host, mock_editor, mock_android])
            assert run_doctor() == exit_codes.SUCCESS

        err = capsys.readouterr().err
        assert "tauri-mobile doctor" in err
        assert "x86_64-unknown-linux-gnu" in err
        assert "All checks passed." in err
        assert "[green]" not in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("tauri_mobile.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from tauri_mobile.cli.app import main

        assert main(["doctor"]) == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch("tauri_mobile.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, _mock_run: MagicMock) -> None:
        from tauri_mobile.cli.app import main

        assert main(["doctor"]) == exit_codes.GENERAL_ERROR

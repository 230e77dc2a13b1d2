"""Tests for the template-backed project generators (infra/project_gen.py).

The bundled templates are rendered for real into ``tmp_path``;
``xcodegen`` is mocked.
"""

from __future__ import annotations

import stat
import sys
import tomllib
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tauri_mobile.core.models import (
    AndroidConfig,
    AndroidEnv,
    AndroidMetadata,
    AppleMetadata,
    Config,
)
from tauri_mobile.core.template_helpers import TAURI_BINARY_KEY, TemplateRenderer
from tauri_mobile.exceptions import TauriMobileError
from tauri_mobile.infra.dot_cargo import DotCargo
from tauri_mobile.infra.project_gen import (
    ANDROID_TARGETS,
    AndroidTemplateGenerator,
    IosTemplateGenerator,
    ndk_linker,
    render_tree,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def ready_renderer(renderer: TemplateRenderer) -> TemplateRenderer:
    renderer.insert(TAURI_BINARY_KEY, "cargo-tauri")
    return renderer


def _env(tmp_path: Path) -> AndroidEnv:
    return AndroidEnv(
        sdk_root=tmp_path / "sdk",
        ndk_home=tmp_path / "sdk" / "ndk" / "26.1.10909125",
        ndk_version="26.1.10909125",
        host_tag="linux-x86_64",
    )


# ---------------------------------------------------------------------------
# render_tree
# ---------------------------------------------------------------------------

class TestRenderTree:
    def test_preserves_layout_and_strips_suffix(
        self, ready_renderer: TemplateRenderer, tmp_path: Path
    ) -> None:
        templates = tmp_path / "tpl"
        (templates / "nested").mkdir(parents=True)
        (templates / "top.txt.j2").write_text("{{ app.name }}\n", encoding="utf-8")
        (templates / "nested" / "inner.txt.j2").write_text("{{ tauri_binary }}", encoding="utf-8")
        (templates / "ignored.txt").write_text("not a template", encoding="utf-8")

        out = tmp_path / "out"
        written = render_tree(ready_renderer, templates, out)

        assert written == [out / "nested" / "inner.txt", out / "top.txt"]
        assert (out / "top.txt").read_text(encoding="utf-8") == "my-app\n"
        assert (out / "nested" / "inner.txt").read_text(encoding="utf-8") == "cargo-tauri"
        assert not (out / "ignored.txt").exists()

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_rendered_files_are_world_readable(
        self, ready_renderer: TemplateRenderer, tmp_path: Path
    ) -> None:
        templates = tmp_path / "tpl"
        templates.mkdir()
        (templates / "settings.gradle.kts.j2").write_text("{{ app.name }}\n", encoding="utf-8")

        written = render_tree(ready_renderer, templates, tmp_path / "out")

        assert [stat.S_IMODE(path.stat().st_mode) for path in written] == [0o644]

    def test_missing_template_dir(self, ready_renderer: TemplateRenderer, tmp_path: Path) -> None:
        with pytest.raises(TauriMobileError):
            render_tree(ready_renderer, tmp_path / "nope", tmp_path / "out")


# ---------------------------------------------------------------------------
# Android
# ---------------------------------------------------------------------------

class TestAndroidTemplateGenerator:
    def test_generates_project(
        self, config: Config, ready_renderer: TemplateRenderer, tmp_path: Path
    ) -> None:
        dot_cargo = DotCargo()
        AndroidTemplateGenerator().generate(
            config.android, AndroidMetadata(), _env(tmp_path), ready_renderer, dot_cargo
        )

        project = config.app.root_dir / "gen" / "android"
        gradle = (project / "app" / "build.gradle.kts").read_text(encoding="utf-8")
        assert 'applicationId = "com.example.my_app"' in gradle
        assert "minSdk = 24" in gradle
        assert 'assets.srcDir("../../../assets")' in gradle
        assert 'cargoBinary = "cargo-tauri"' in gradle
        assert 'listOf("aarch64", "armv7", "i686", "x86_64")' in gradle
        assert str(config.app.root_dir) not in gradle

        settings = (project / "settings.gradle.kts").read_text(encoding="utf-8")
        assert 'rootProject.name = "My App"' in settings
        strings = project / "app" / "src" / "main" / "res" / "values" / "strings.xml"
        assert "My App" in strings.read_text(encoding="utf-8")

    def test_inserts_one_linker_per_target(
        self, config: Config, ready_renderer: TemplateRenderer, tmp_path: Path
    ) -> None:
        dot_cargo = DotCargo()
        env = _env(tmp_path)
        AndroidTemplateGenerator().generate(
            config.android, AndroidMetadata(), env, ready_renderer, dot_cargo
        )

        targets = dot_cargo.document["target"]
        assert set(targets) == {triple for triple, _ in ANDROID_TARGETS.values()}
        for triple, table in targets.items():
            assert set(table) == {"linker"}
            assert "24-clang" in table["linker"]
        assert "armv7a-linux-androideabi24-clang" in targets["armv7-linux-androideabi"]["linker"]

    def test_unknown_target(
        self, config: Config, ready_renderer: TemplateRenderer, tmp_path: Path
    ) -> None:
        android = AndroidConfig(targets=("aarch64", "mips"))
        with pytest.raises(TauriMobileError, match="mips"):
            AndroidTemplateGenerator().generate(
                android, AndroidMetadata(), _env(tmp_path), ready_renderer, DotCargo()
            )

    def test_unsupported_is_skipped(
        self, config: Config, ready_renderer: TemplateRenderer, tmp_path: Path
    ) -> None:
        dot_cargo = DotCargo()
        AndroidTemplateGenerator().generate(
            config.android, AndroidMetadata(supported=False), _env(tmp_path), ready_renderer, dot_cargo
        )
        assert dot_cargo.document == {}
        assert not (config.app.root_dir / "gen").exists()

    def test_written_targets_survive_toml_round_trip(
        self, config: Config, ready_renderer: TemplateRenderer, tmp_path: Path
    ) -> None:
        dot_cargo = DotCargo()
        AndroidTemplateGenerator().generate(
            config.android, AndroidMetadata(), _env(tmp_path), ready_renderer, dot_cargo
        )
        dot_cargo.write(config.app)

        path = config.app.root_dir / ".cargo" / "config.toml"
        written = tomllib.loads(path.read_text(encoding="utf-8"))
        assert "aarch64-linux-android" in written["target"]


class TestNdkLinker:
    @patch("tauri_mobile.infra.project_gen.platform.system", return_value="Linux")
    def test_linux(self, _mock_system: MagicMock, tmp_path: Path) -> None:
        linker = ndk_linker(_env(tmp_path), "aarch64-linux-android", 24)
        assert linker.name == "aarch64-linux-android24-clang"
        assert linker.parent.parent.name == "linux-x86_64"

    @patch("tauri_mobile.infra.project_gen.platform.system", return_value="Windows")
    def test_windows_uses_cmd_wrapper(self, _mock_system: MagicMock, tmp_path: Path) -> None:
        linker = ndk_linker(_env(tmp_path), "aarch64-linux-android", 24)
        assert linker.name == "aarch64-linux-android24-clang.cmd"


# ---------------------------------------------------------------------------
# iOS
# ---------------------------------------------------------------------------

class TestIosTemplateGenerator:
    def _generate(
        self,
        config: Config,
        renderer: TemplateRenderer,
        *,
        prompt: MagicMock | None = None,
        non_interactive: bool = True,
        skip_dev_tools: bool = True,
        reinstall_deps: bool = True,
    ) -> Path:
        IosTemplateGenerator(prompt_development_team=prompt).generate(
            config.apple,
            AppleMetadata(),
            renderer,
            non_interactive=non_interactive,
            skip_dev_tools=skip_dev_tools,
            reinstall_deps=reinstall_deps,
        )
        return config.app.root_dir / "gen" / "apple"

    def test_generates_project_yml(self, config: Config, ready_renderer: TemplateRenderer) -> None:
        project = self._generate(config, ready_renderer)

        project_yml = (project / "project.yml").read_text(encoding="utf-8")
        assert "name: my-app" in project_yml
        assert "bundleIdPrefix: com.example" in project_yml
        assert "path: ../../assets" in project_yml
        assert "xcode-script" not in project_yml
        assert "preBuildScripts" not in project_yml
        assert "libcom_example_my_app.a" in project_yml
        assert "DEVELOPMENT_TEAM" not in project_yml
        assert (project / "ExportOptions.plist").exists()

    def test_prompts_for_team_when_interactive(
        self, config: Config, ready_renderer: TemplateRenderer
    ) -> None:
        prompt = MagicMock(return_value="TEAM123456")
        project = self._generate(config, ready_renderer, prompt=prompt, non_interactive=False)

        prompt.assert_called_once()
        assert "DEVELOPMENT_TEAM: TEAM123456" in (project / "project.yml").read_text(encoding="utf-8")
        assert "TEAM123456" in (project / "ExportOptions.plist").read_text(encoding="utf-8")

    def test_never_prompts_non_interactive(
        self, config: Config, ready_renderer: TemplateRenderer
    ) -> None:
        prompt = MagicMock(return_value="TEAM123456")
        self._generate(config, ready_renderer, prompt=prompt, non_interactive=True)
        prompt.assert_not_called()

    @patch("tauri_mobile.infra.project_gen.process.run_and_wait")
    @patch("tauri_mobile.infra.project_gen.process.command_present", return_value=True)
    def test_runs_xcodegen(
        self,
        _mock_present: MagicMock,
        mock_run: MagicMock,
        config: Config,
        ready_renderer: TemplateRenderer,
    ) -> None:
        project = self._generate(config, ready_renderer, skip_dev_tools=False)
        mock_run.assert_called_once_with(
            ["xcodegen", "generate", "--spec", str(project / "project.yml")], cwd=project
        )

    @patch("tauri_mobile.infra.project_gen.process.run_and_wait")
    @patch("tauri_mobile.infra.project_gen.process.command_present", return_value=False)
    def test_missing_xcodegen_is_a_warning(
        self,
        _mock_present: MagicMock,
        mock_run: MagicMock,
        config: Config,
        ready_renderer: TemplateRenderer,
    ) -> None:
        self._generate(config, ready_renderer, skip_dev_tools=False)
        mock_run.assert_not_called()

    @patch("tauri_mobile.infra.project_gen.process.run_and_wait")
    @patch("tauri_mobile.infra.project_gen.process.command_present", return_value=True)
    def test_existing_project_kept_without_reinstall(
        self,
        _mock_present: MagicMock,
        mock_run: MagicMock,
        config: Config,
        ready_renderer: TemplateRenderer,
    ) -> None:
        (config.app.root_dir / "gen" / "apple" / "my-app.xcodeproj").mkdir(parents=True)
        self._generate(config, ready_renderer, skip_dev_tools=False, reinstall_deps=False)
        mock_run.assert_not_called()

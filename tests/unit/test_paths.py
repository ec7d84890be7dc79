"""Unit tests for paths module."""

from pathlib import Path

from faasctl.lib.paths import (
    get_build_dir,
    get_config_dir,
    get_config_file,
    get_project_config_file,
    get_template_dir,
)


class TestConfigPaths:
    """Tests for XDG config locations."""

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / "faasctl"
        assert get_config_file() == tmp_path / "faasctl" / "config.yaml"

    def test_home_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / ".config" / "faasctl"

    def test_project_config_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert get_project_config_file() == tmp_path / "faasctl.yaml"


class TestWorkingDirectoryPaths:
    """Tests for template and build folders."""

    def test_template_dir(self):
        assert get_template_dir() == Path("template")
        assert get_template_dir("python3") == Path("template") / "python3"

    def test_build_dir(self):
        assert get_build_dir("url-ping") == Path("build") / "url-ping"

"""
Tests for CLI commands — global options and the packages group.
"""

import json
from pathlib import Path

from click.testing import CliRunner
from conftest import enable_manager, mark_installed, mark_missing

from sysbak.adapters.mock import MockAdapter
from sysbak.core.models.manager import ManagerId
from sysbak.main import cli


def _invoke(adapter: MockAdapter, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, list(args), obj={"adapter": adapter})


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "packages" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_config(self, tmp_path: Path):
        config = tmp_path / "sysbak.yml"
        config.write_text("- not a mapping\n")
        result = _invoke(MockAdapter(), "--config", str(config), "packages", "save")
        assert result.exit_code == 1
        assert "mapping" in result.output


class TestDetectCommand:
    def test_detect(self):
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.FLATPAK)
        result = _invoke(adapter, "packages", "detect")
        assert result.exit_code == 0
        assert "✅ flatpak" in result.output
        assert "❌ apt" in result.output

    def test_detect_json(self):
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.APT)
        result = _invoke(adapter, "packages", "detect", "--json")
        data = json.loads(result.stdout)
        assert data["detected_package_managers"]["apt"] is True
        assert data["detected_package_managers"]["xbps"] is False


class TestListCommand:
    def test_list(self):
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.PACMAN, "bash 5.2\nvim 9.1\n")
        result = _invoke(adapter, "packages", "list")
        assert result.exit_code == 0
        assert "pacman (2)" in result.output
        assert "vim" in result.output

    def test_list_nothing_detected(self):
        result = _invoke(MockAdapter(), "packages", "list")
        assert result.exit_code == 0
        assert "No package managers detected" in result.output

    def test_list_json(self):
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.SNAP, "Name Version\nhello 2.10\n")
        result = _invoke(adapter, "packages", "list", "--json")
        assert json.loads(result.stdout) == {"snap": ["hello"]}


class TestSaveCommand:
    def test_save(self, tmp_path: Path):
        config = tmp_path / "sysbak.yml"
        config.write_text("audit: false\n")
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.APT, "Listing...\ncurl/now 7 amd64\n")

        result = _invoke(adapter, "--config", str(config), "packages", "save")

        assert result.exit_code == 0
        assert "Package list saved" in result.output
        saved = json.loads((tmp_path / "SysBackup" / "package_list.json").read_text())
        assert saved == {"apt": ["curl"]}

    def test_save_nothing_detected(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = _invoke(MockAdapter(), "packages", "save")
        assert result.exit_code == 0
        assert "Nothing saved" in result.output
        assert not (tmp_path / "SysBackup" / "package_list.json").exists()


class TestInstallCommand:
    def _setup(self, tmp_path: Path, catalog: dict) -> Path:
        config = tmp_path / "sysbak.yml"
        config.write_text("elevation: [sudo]\n")
        backup = tmp_path / "SysBackup"
        backup.mkdir()
        (backup / "package_list.json").write_text(json.dumps(catalog))
        return config

    def test_install_missing_catalog(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = _invoke(MockAdapter(), "packages", "install")
        assert result.exit_code == 1
        assert "Please save a package list first" in result.output

    def test_install_summary(self, tmp_path: Path):
        config = self._setup(tmp_path, {"apt": ["curl", "vim"], "snap": ["hello"]})
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.APT)
        mark_installed(adapter, ManagerId.APT, "curl")
        mark_missing(adapter, ManagerId.APT, "vim")
        adapter.set_binary("sudo")

        result = _invoke(adapter, "--config", str(config), "packages", "install")

        assert result.exit_code == 0
        assert "Already Installed Packages:" in result.output
        assert "- curl (apt)" in result.output
        assert "- vim (apt)" in result.output
        assert "Skipped snap" in result.output

    def test_install_failure_exits_nonzero(self, tmp_path: Path):
        config = self._setup(tmp_path, {"pacman": ["broken"]})
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.PACMAN)
        mark_missing(adapter, ManagerId.PACMAN, "broken")
        adapter.set_binary("sudo", return_code=1)

        result = _invoke(adapter, "--config", str(config), "packages", "install")

        assert result.exit_code == 1
        assert "Failed to Install Packages:" in result.output
        assert "- broken (pacman)" in result.output

    def test_install_nothing_new(self, tmp_path: Path):
        config = self._setup(tmp_path, {"pacman": ["bash"]})
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.PACMAN)
        mark_installed(adapter, ManagerId.PACMAN, "bash")

        result = _invoke(adapter, "--config", str(config), "packages", "install")

        assert result.exit_code == 0
        assert "No new packages were installed." in result.output

    def test_install_json(self, tmp_path: Path):
        config = self._setup(tmp_path, {"pacman": ["bash"]})
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.PACMAN)
        mark_installed(adapter, ManagerId.PACMAN, "bash")

        result = _invoke(adapter, "--config", str(config), "packages", "install", "--json")

        data = json.loads(result.stdout)
        assert data["report"]["already_installed"] == ["bash (pacman)"]
        assert data["report"]["status"] == "ok"


class TestHistoryCommand:
    def test_empty(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = _invoke(MockAdapter(), "packages", "history")
        assert result.exit_code == 0
        assert "No runs recorded yet." in result.output

    def test_lists_save_and_install_runs(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.PACMAN, "bash 5.2\n")
        mark_installed(adapter, ManagerId.PACMAN, "bash")
        _invoke(adapter, "packages", "save")
        _invoke(adapter, "packages", "install")

        result = _invoke(adapter, "packages", "history")

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert "save" in lines[0] and "(1 packages)" in lines[0]
        assert "install" in lines[1] and "1 present" in lines[1]

    def test_json_limit(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        adapter = MockAdapter()
        enable_manager(adapter, ManagerId.PACMAN, "bash 5.2\n")
        for _ in range(3):
            _invoke(adapter, "packages", "save")

        result = _invoke(adapter, "packages", "history", "-n", "2", "--json")

        entries = json.loads(result.stdout)["entries"]
        assert len(entries) == 2
        assert all(e["operation_type"] == "save" for e in entries)

"""CLI 端到端测试"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from assetpkg.cli import main


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def config_file(tmp_path: Path, make_project, add_exploded_package) -> Path:
    add_exploded_package("Foo", "1.0", {"a.cs": "a"}, license="MIT")
    cfg = make_project([{"name": "Foo", "version": "1.0"}])
    path = tmp_path / "assetpkg.yml"
    data = cfg.to_dict()
    data.pop("extra")
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def _invoke(runner: CliRunner, config_file: Path, *args: str):
    return runner.invoke(main, ["--config", str(config_file), *args])


class TestCli:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0

    def test_available(self, runner: CliRunner, config_file: Path) -> None:
        result = _invoke(runner, config_file, "available")
        assert result.exit_code == 0, result.output
        assert "Foo" in result.output
        assert "MIT" in result.output

    def test_install_list_nuke(self, runner: CliRunner, config_file: Path, project_dir: Path) -> None:
        result = _invoke(runner, config_file, "install")
        assert result.exit_code == 0, result.output
        assert "Foo~1.0" in result.output
        assert (project_dir / "Assets" / "UPackages" / "Foo~1.0" / "a.cs").is_file()

        result = _invoke(runner, config_file, "installed")
        assert "Foo" in result.output

        result = _invoke(runner, config_file, "nuke", "Foo")
        assert result.exit_code == 0
        assert not (project_dir / "Assets" / "UPackages").exists()

        result = _invoke(runner, config_file, "nuke", "Foo")
        assert result.exit_code == 0
        assert "未安装" in result.output

    def test_nuke_all(self, runner: CliRunner, config_file: Path, project_dir: Path) -> None:
        _invoke(runner, config_file, "install")
        result = _invoke(runner, config_file, "nuke-all", "--yes")
        assert result.exit_code == 0, result.output
        assert "1" in result.output
        assert not (project_dir / "UPackages" / "installed.yml").exists()

    def test_update(self, runner: CliRunner, config_file: Path) -> None:
        _invoke(runner, config_file, "install")
        result = _invoke(runner, config_file, "update", "Foo")
        assert result.exit_code == 0, result.output
        assert "Foo~1.0" in result.output

    def test_update_undeclared_fails(self, runner: CliRunner, config_file: Path) -> None:
        result = _invoke(runner, config_file, "update", "Nope")
        assert result.exit_code != 0
        assert "VALIDATION_ERROR" in result.output

    def test_strict_install_fails_on_missing(
        self, runner: CliRunner, tmp_path: Path, make_project,
    ) -> None:
        cfg = make_project([{"name": "Ghost"}])
        path = tmp_path / "strict.yml"
        path.write_text(yaml.safe_dump({"project_root": cfg.project_root}), encoding="utf-8")

        result = _invoke(runner, path, "install", "--strict")
        assert result.exit_code != 0
        assert "PACKAGE_NOT_FOUND" in result.output

        result = _invoke(runner, path, "install")
        assert result.exit_code == 0
        assert "没有安装任何包" in result.output

    def test_project_root_option(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, [
            "--config", str(tmp_path / "none.yml"),
            "--project-root", str(tmp_path),
            "installed",
        ])
        assert result.exit_code == 0
        assert "没有已安装的包" in result.output

"""项目依赖文件测试"""

from pathlib import Path

import pytest

from assetpkg.core.exceptions import ConfigError
from assetpkg.core.models import BASE, InstallSpec, PathConfiguration
from assetpkg.core.project import ProjectFile


class TestProjectFile:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "packages.yml"
        path.write_text(
            "repositories:\n"
            "  - {type: file, path: ../repo}\n"
            "destinations:\n"
            "  Base: {location: Assets/Vendor, skip_package_structure: true}\n"
            "dependencies:\n"
            "  - name: Foo\n"
            "    version: '1.0+'\n"
            "    skip_install: [Docs, {type: Examples}]\n"
            "    override_destination:\n"
            "      - {type: Plugin, location: Assets/MyPlugins}\n",
            encoding="utf-8",
        )
        project = ProjectFile.load(path)
        assert project.repositories[0].path == "../repo"
        assert project.destinations[BASE] == PathConfiguration("Assets/Vendor", True)
        decl = project.find_dependency("Foo")
        assert decl is not None
        assert decl.version == "1.0+"
        assert decl.skip_install == ["Docs", "Examples"]
        assert decl.override_for("Plugin") == "Assets/MyPlugins"
        assert decl.override_for(BASE) is None
        assert project.find_dependency("Bar") is None

    def test_missing_file_is_empty_project(self, tmp_path: Path) -> None:
        project = ProjectFile.load(tmp_path / "nope.yml")
        assert project.dependencies == []
        assert project.repositories == []

    def test_unknown_repository_type(self) -> None:
        with pytest.raises(ConfigError):
            ProjectFile.from_dict({"repositories": [{"type": "git", "path": "x"}]})

    def test_dependency_without_name(self) -> None:
        with pytest.raises(ConfigError):
            ProjectFile.from_dict({"dependencies": [{"version": "1.0"}]})


class TestGetDestinationFor:
    def test_project_destination_first(self) -> None:
        project = ProjectFile(destinations={"Docs": PathConfiguration("Documentation")})
        assert project.get_destination_for(InstallSpec("", "Docs")).location == "Documentation"

    def test_builtin_defaults(self) -> None:
        project = ProjectFile()
        assert project.get_destination_for(InstallSpec("", "Plugin")).location == "Assets/Plugins"
        gizmo = project.get_destination_for(InstallSpec("", "Gizmo"))
        assert gizmo.skip_package_structure is True

    def test_unknown_type_falls_back_to_base(self) -> None:
        project = ProjectFile()
        assert project.get_destination_for(InstallSpec("", "Weird")).location == "Assets/UPackages"

    def test_returns_copy(self) -> None:
        project = ProjectFile()
        dest = project.get_destination_for(InstallSpec("", BASE))
        dest.location = "Changed"
        assert project.get_destination_for(InstallSpec("", BASE)).location == "Assets/UPackages"

    def test_spec_flag_overrides(self) -> None:
        project = ProjectFile()
        dest = project.get_destination_for(InstallSpec("", BASE, skip_package_structure=True))
        assert dest.skip_package_structure is True

"""项目依赖文件

项目根目录下的 packages.yml 声明仓库、各分类的安装目标和依赖::

    repositories:
      - {type: file, path: ../repo}
    destinations:
      Base: {location: Assets/UPackages, skip_package_structure: false}
    dependencies:
      - name: Foo
        version: "1.0+"
        skip_install: [Docs]
        override_destination:
          - {type: Base, location: Assets/Vendor}

目标路径保持相对形式，由安装器按 project_root 解析。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from assetpkg.core.exceptions import ConfigError
from assetpkg.core.models import BASE, DependencyDeclaration, InstallSpec, PathConfiguration
from assetpkg.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

SUPPORTED_REPOSITORY_TYPES = ("file",)

DEFAULT_DESTINATIONS: dict[str, PathConfiguration] = {
    BASE: PathConfiguration("Assets/UPackages"),
    "Media": PathConfiguration("Assets/UPackages"),
    "Examples": PathConfiguration("Assets/UPackages/Examples"),
    "Docs": PathConfiguration("UDocs"),
    "Plugin": PathConfiguration("Assets/Plugins"),
    "EditorPlugin": PathConfiguration("Assets/Plugins/Editor"),
    "Gizmo": PathConfiguration("Assets/Gizmos", skip_package_structure=True),
}


@dataclass
class RepositoryEntry:
    type: str
    path: str


@dataclass
class ProjectFile:
    """已解析的项目依赖文件"""

    path: Path = field(default_factory=lambda: Path("packages.yml"))
    repositories: list[RepositoryEntry] = field(default_factory=list)
    destinations: dict[str, PathConfiguration] = field(default_factory=dict)
    dependencies: list[DependencyDeclaration] = field(default_factory=list)

    @classmethod
    def load(cls, path: str | Path) -> ProjectFile:
        """读取项目文件；文件不存在时返回空项目

        异常:
            ConfigError: 仓库类型未知或依赖/目标条目缺少字段
        """
        p = Path(path)
        if not p.exists():
            logger.warning("项目依赖文件不存在: %s", p)
        return cls.from_dict(load_yaml(p), path=p)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> ProjectFile:
        try:
            repositories = [_parse_repository(r) for r in data.get("repositories") or []]
            destinations = {
                str(kind): PathConfiguration(
                    location=str(entry["location"]),
                    skip_package_structure=bool(entry.get("skip_package_structure", False)),
                )
                for kind, entry in (data.get("destinations") or {}).items()
            }
            dependencies = [
                DependencyDeclaration.from_dict(d) for d in data.get("dependencies") or []
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigError(f"项目依赖文件格式错误 {path or ''}: {e}") from e
        return cls(
            path=path or Path("packages.yml"),
            repositories=repositories,
            destinations=destinations,
            dependencies=dependencies,
        )

    def get_destination_for(self, spec: InstallSpec) -> PathConfiguration:
        """返回分类对应的目标配置副本

        查找顺序: 项目配置 -> 内置默认 -> Base。
        spec 自带的 skip_package_structure 优先于目标配置。
        """
        config = self.destinations.get(spec.type) or DEFAULT_DESTINATIONS.get(spec.type)
        if config is None:
            logger.warning("分类 %s 未配置安装目标，使用 %s 的目标", spec.type, BASE)
            config = self.destinations.get(BASE) or DEFAULT_DESTINATIONS[BASE]
        result = replace(config)
        if spec.skip_package_structure is not None:
            result.skip_package_structure = bool(spec.skip_package_structure)
        return result

    def find_dependency(self, name: str) -> DependencyDeclaration | None:
        for decl in self.dependencies:
            if decl.name == name:
                return decl
        return None


def _parse_repository(entry: Any) -> RepositoryEntry:
    if not isinstance(entry, dict):
        raise ConfigError(f"仓库条目必须是映射: {entry!r}")
    kind = str(entry.get("type", "file"))
    if kind not in SUPPORTED_REPOSITORY_TYPES:
        raise ConfigError(f"不支持的仓库类型: {kind}")
    if not entry.get("path"):
        raise ConfigError(f"仓库条目缺少 path: {entry!r}")
    return RepositoryEntry(type=kind, path=str(entry["path"]))

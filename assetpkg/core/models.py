"""核心数据模型

清单 (PackageManifest)、依赖声明 (DependencyDeclaration)、求解节点、
目标路径配置等数据类集中定义于此，各层统一从这里导入。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from assetpkg.core.protocols import PackageRepository

# 内置分类（分类本身是开放的字符串集合）
ROOT = "Root"
BASE = "Base"

PACKAGE_DIR_SEPARATOR = "~"


# =========================================================================
# 包清单
# =========================================================================


@dataclass
class InstallSpec:
    """一条安装规则：包内相对路径 + 分类 + 是否跳过 name~version 目录层"""

    path: str = ""
    type: str = BASE
    skip_package_structure: bool | None = None  # None = 沿用目标配置

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InstallSpec:
        return cls(
            path=str(data.get("path", "") or ""),
            type=str(data.get("type", BASE)),
            skip_package_structure=data.get("skip_package_structure"),
        )


@dataclass
class PackageManifest:
    """包清单，(name, version) 在一次求解中唯一"""

    name: str
    version: str
    license: str = "Unknown"
    min_host_version: str = "0.0.0"
    install_specs: list[InstallSpec] = field(default_factory=list)
    dependencies: list[DependencyDeclaration] = field(default_factory=list)
    source_directory_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageManifest:
        """从解析后的清单字典构造（缺少 name/version 时抛 KeyError）"""
        return cls(
            name=str(data["name"]),
            version=str(data["version"]),
            license=str(data.get("license", "Unknown")),
            min_host_version=str(data.get("min_host_version", "0.0.0")),
            install_specs=[
                InstallSpec.from_dict(s) for s in (data.get("install_specs") or [])
            ],
            dependencies=[
                DependencyDeclaration.from_dict(d) for d in (data.get("dependencies") or [])
            ],
        )

    @property
    def package_directory(self) -> str:
        """规范目录名 ``name~version``"""
        return f"{self.name}{PACKAGE_DIR_SEPARATOR}{self.version}"

    def effective_install_specs(self) -> list[InstallSpec]:
        """未声明安装规则时，整个包按 Base 分类安装"""
        if self.install_specs:
            return list(self.install_specs)
        return [InstallSpec(path="", type=BASE)]

    def without_prefix(self, prefix: str) -> PackageManifest:
        """去掉以 prefix 开头的安装路径前缀（根目录折叠之后使用）

        返回新的清单对象；prefix 为空时返回自身。
        """
        if not prefix:
            return self
        specs = []
        for spec in self.install_specs:
            path = spec.path
            if path == prefix:
                path = ""
            elif path.startswith(prefix + os.sep):
                path = path[len(prefix) + len(os.sep):]
            specs.append(replace(spec, path=path))
        return replace(self, install_specs=specs)


# =========================================================================
# 依赖声明与求解
# =========================================================================


@dataclass
class OverrideDestination:
    """按分类覆盖安装目标路径"""

    type: str
    location: str


@dataclass
class DependencyDeclaration:
    """项目（或包清单）中声明的一条依赖"""

    name: str
    version: str = ""
    skip_install: list[str] = field(default_factory=list)
    override_destination: list[OverrideDestination] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyDeclaration:
        skips = []
        for item in data.get("skip_install") or []:
            skips.append(str(item["type"]) if isinstance(item, dict) else str(item))
        overrides = [
            OverrideDestination(type=str(o["type"]), location=str(o["location"]))
            for o in (data.get("override_destination") or [])
        ]
        return cls(
            name=str(data["name"]),
            version=str(data.get("version", "") or ""),
            skip_install=skips,
            override_destination=overrides,
        )

    def skips(self, spec_type: str) -> bool:
        return spec_type in self.skip_install

    def override_for(self, spec_type: str) -> str | None:
        for override in self.override_destination:
            if override.type == spec_type:
                return override.location
        return None


@dataclass(frozen=True)
class DependencyNode:
    """求解器内部的已解析需求；版本调和通过替换节点完成"""

    name: str
    version: str


@dataclass
class PackageRepo:
    """清单与可以物化它的仓库的配对，由 PackageLocator 产生，用后即弃"""

    package: PackageManifest
    repository: PackageRepository


# =========================================================================
# 目标路径与安装记录
# =========================================================================


@dataclass
class PathConfiguration:
    """某个分类的安装根目录"""

    location: str
    skip_package_structure: bool = False


@dataclass
class InstallLocation:
    """追踪记录中的一项：分类 + 目标路径，资源树内的文件另带 GUID"""

    type: str
    path: str
    guid: str = ""

    def to_dict(self) -> dict[str, str]:
        entry = {"type": self.type, "path": self.path}
        if self.guid:
            entry["guid"] = self.guid
        return entry

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InstallLocation:
        return cls(
            type=str(data.get("type", BASE)),
            path=str(data.get("path", "")),
            guid=str(data.get("guid", "") or ""),
        )

"""安装追踪

记录每个已安装包在磁盘上的全部足迹（规范根目录副本、复制出的文件、
安装时新建的目录），卸载时按记录删除，不多删也不少删。

存储格式 (YAML)::

    packages:
      Foo:
        version: "1.0"
        locations:
          - {type: Root, path: UPackages/Foo~1.0}
          - {type: Base, path: Assets/UPackages/Foo~1.0/a.cs, guid: 3f2a...}
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from assetpkg.core.models import ROOT, InstallLocation, PackageManifest
from assetpkg.core.registry import YamlRegistry
from assetpkg.utils.fs import meta_path_for

logger = logging.getLogger(__name__)


@dataclass
class InstalledPackage:
    """追踪记录中的一个包"""

    name: str
    version: str
    locations: list[InstallLocation] = field(default_factory=list)

    @property
    def guids(self) -> list[str]:
        return [loc.guid for loc in self.locations if loc.guid]

    def nuke(self) -> list[Path]:
        """删除记录的全部足迹，返回实际删除的路径

        顺序: 规范根目录整体删除 -> 文件（连同侧车）-> 新建目录（由深到浅，
        仅在已空时删除）。已不存在的路径跳过。
        """
        removed: list[Path] = []
        directories: list[Path] = []
        for loc in self.locations:
            path = Path(loc.path)
            if path.is_dir():
                if loc.type == ROOT:
                    shutil.rmtree(path)
                    removed.append(path)
                else:
                    directories.append(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
                removed.append(path)
                _unlink_sidecar(path)
            else:
                logger.debug("记录的路径已不存在: %s", path)

        for directory in sorted(directories, key=lambda p: len(p.parts), reverse=True):
            if any(directory.iterdir()):
                logger.info("目录非空，保留: %s", directory)
                continue
            directory.rmdir()
            removed.append(directory)
            _unlink_sidecar(directory)

        logger.info("已清除 %s %s 的 %d 个路径", self.name, self.version, len(removed))
        return removed


def _unlink_sidecar(path: Path) -> None:
    meta = meta_path_for(path)
    if meta.is_file():
        meta.unlink()


class TrackingStore(YamlRegistry):
    """已安装包的持久化账本

    所有修改只在内存中进行，显式调用 save_file() 才写盘。
    """

    section_key = "packages"

    def _entry(self, manifest: PackageManifest) -> dict:
        entry = self._get_raw(manifest.name)
        if entry is None:
            entry = self._put(manifest.name, {"version": manifest.version, "locations": []})
        return entry

    def add_package(self, manifest: PackageManifest) -> None:
        """登记包（覆盖同名旧记录）"""
        self._put(manifest.name, {"version": manifest.version, "locations": []})

    def remove_package(self, name: str) -> bool:
        return self._remove(name)

    def add_location(self, manifest: PackageManifest, spec_type: str, path: str | Path) -> None:
        loc = InstallLocation(type=spec_type, path=str(path))
        self._entry(manifest)["locations"].append(loc.to_dict())

    def add_guid(
        self, manifest: PackageManifest, spec_type: str, guid: str, path: str | Path,
    ) -> None:
        loc = InstallLocation(type=spec_type, path=str(path), guid=guid)
        self._entry(manifest)["locations"].append(loc.to_dict())

    def get_installed_package(self, name: str) -> InstalledPackage | None:
        entry = self._get_raw(name)
        if entry is None:
            return None
        return InstalledPackage(
            name=name,
            version=str(entry.get("version", "")),
            locations=[InstallLocation.from_dict(d) for d in entry.get("locations") or []],
        )

    @property
    def installed_packages(self) -> list[InstalledPackage]:
        result = []
        for name in list(self._section()):
            pkg = self.get_installed_package(name)
            if pkg is not None:
                result.append(pkg)
        return result

    def save_file(self) -> None:
        self.save()

    def remove_file(self) -> None:
        self.delete_file()

"""包安装器

安装流程:
  1. 整个物化目录复制到 ``<packages_root>/<name>~<version>``，记为 Root
     （无论后续规则如何，这份完整副本总是存在，是卸载/更新的依据）
  2. 取清单的安装规则；未声明时整包按 Base 安装
  3. 逐条规则：跳过声明中 skip_install 的分类；解析目标目录（可被
     override_destination 覆盖），按需加 ``name~version`` 目录层；
     复制文件或目录（连同 .meta 侧车），并登记每个落盘文件：
     资源树内且侧车带 GUID 的登记 GUID，否则登记路径。
     安装中新建的目录也一并登记，保证卸载后目录树复原。
  4. 保存追踪文件；物化目录无论成败都释放

卸载 (nuke) 只依据追踪记录，不看依赖图。
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from assetpkg.core.config import Config
from assetpkg.core.meta_file import read_guid
from assetpkg.core.models import ROOT, DependencyDeclaration, InstallSpec, PackageManifest
from assetpkg.core.protocols import DestinationProvider
from assetpkg.core.scratch import ScratchDirectory
from assetpkg.core.tracking import TrackingStore
from assetpkg.utils.fs import (
    copy_directory,
    make_path_os_friendly,
    meta_path_for,
    missing_parents,
    recursively_list_files,
    try_copy_meta,
)

logger = logging.getLogger(__name__)


class Installer:
    """把物化后的包安装到项目目录，并记录足迹"""

    def __init__(
        self,
        config: Config,
        destinations: DestinationProvider,
        tracking: TrackingStore,
    ) -> None:
        self.config = config
        self.destinations = destinations
        self.tracking = tracking

    def package_root_path(self, manifest: PackageManifest) -> Path:
        return self.config.packages_root_path / manifest.package_directory

    # ------------------------------------------------------------------
    # 安装
    # ------------------------------------------------------------------

    def install(
        self,
        manifest: PackageManifest,
        scratch: ScratchDirectory,
        declaration: DependencyDeclaration,
    ) -> None:
        """安装包；返回或抛异常时 scratch 均已释放"""
        try:
            self._install(manifest, scratch, declaration)
        finally:
            scratch.release()

    def _install(
        self,
        manifest: PackageManifest,
        scratch: ScratchDirectory,
        declaration: DependencyDeclaration,
    ) -> None:
        manifest = manifest.without_prefix(scratch.collapsed_prefix)
        extra = {"package": manifest.package_directory}

        # 整包副本复制成功后才登记
        root = self.package_root_path(manifest)
        copy_directory(scratch.path, root, with_meta=True)
        self.tracking.add_package(manifest)
        self.tracking.add_location(manifest, ROOT, root)

        for spec in manifest.effective_install_specs():
            if declaration.skips(spec.type):
                logger.info("跳过分类 %s: %s", spec.type, spec.path or "<整包>", extra=extra)
                continue
            self._install_spec(manifest, scratch.path, spec, declaration)

        self.tracking.save_file()
        logger.info("安装完成: %s", manifest.package_directory, extra=extra)

    def _destination_for(
        self, manifest: PackageManifest, spec: InstallSpec, declaration: DependencyDeclaration,
    ) -> Path:
        path_config = self.destinations.get_destination_for(spec)
        override = declaration.override_for(spec.type)
        if override is not None:
            path_config.location = make_path_os_friendly(override)
        destination = self.config.resolve(path_config.location)
        if not path_config.skip_package_structure:
            destination = destination / manifest.package_directory
        return destination

    def _install_spec(
        self,
        manifest: PackageManifest,
        scratch_path: Path,
        spec: InstallSpec,
        declaration: DependencyDeclaration,
    ) -> None:
        source = scratch_path / spec.path if spec.path else scratch_path
        destination = self._destination_for(manifest, spec, declaration)

        if source.is_file():
            created = missing_parents(destination)
            destination.mkdir(parents=True, exist_ok=True)
            target = destination / source.name
            shutil.copy2(source, target)
            try_copy_meta(source, target)
            self._record_directories(manifest, spec.type, created)
            self._record_file(manifest, spec.type, target)
        elif source.is_dir():
            created = missing_parents(destination)
            for sub in sorted(p for p in source.rglob("*") if p.is_dir()):
                target_dir = destination / sub.relative_to(source)
                if not target_dir.exists():
                    created.append(target_dir)
            copy_directory(source, destination, with_meta=True)
            self._record_directories(manifest, spec.type, created)
            for relative in recursively_list_files(source, skip_meta=True):
                self._record_file(manifest, spec.type, destination / relative)
        else:
            logger.warning(
                "安装规则指向的路径不存在: %s (%s)", spec.path, spec.type,
                extra={"package": manifest.package_directory},
            )

    def _record_directories(
        self, manifest: PackageManifest, spec_type: str, directories: list[Path],
    ) -> None:
        for directory in directories:
            self.tracking.add_location(manifest, spec_type, directory)

    def _under_asset_tree(self, path: Path) -> bool:
        asset_root = Path(os.path.abspath(self.config.asset_root_path))
        return Path(os.path.abspath(path)).is_relative_to(asset_root)

    def _record_file(self, manifest: PackageManifest, spec_type: str, target: Path) -> None:
        if self._under_asset_tree(target):
            guid = read_guid(meta_path_for(target))
            if guid:
                self.tracking.add_guid(manifest, spec_type, guid, target)
                return
        self.tracking.add_location(manifest, spec_type, target)

    # ------------------------------------------------------------------
    # 更新 / 卸载
    # ------------------------------------------------------------------

    def update(
        self,
        manifest: PackageManifest,
        scratch: ScratchDirectory,
        declaration: DependencyDeclaration,
    ) -> None:
        """先完整卸载同名旧版本，再安装新版本"""
        try:
            self.uninstall(manifest.name)
        except BaseException:
            scratch.release()
            raise
        self.install(manifest, scratch, declaration)

    def uninstall(self, name: str) -> bool:
        """清除包的全部足迹并删除其追踪记录

        包未被追踪时为幂等空操作，返回 False。
        """
        installed = self.tracking.get_installed_package(name)
        if installed is None:
            logger.info("包未安装，无需清除: %s", name)
            return False
        installed.nuke()
        self.tracking.remove_package(name)
        self.tracking.save_file()
        return True

    def uninstall_all(self) -> int:
        """清除所有已追踪的包并删除追踪文件，返回清除的包数

        按安装顺序倒序清除，先装的包新建的公共父目录最后才会变空。
        """
        packages = self.tracking.installed_packages
        for installed in reversed(packages):
            installed.nuke()
            self.tracking.remove_package(installed.name)
        self.tracking.remove_file()
        logger.info("已清除全部 %d 个包", len(packages))
        return len(packages)

"""包管理编排服务

流程: 求解依赖 → 定位包与仓库 → 物化到临时目录 → 安装 → 保存追踪

单个包找不到时的处理由调用方决定（strict）；格式无法识别的包只记录
错误，其余包照常安装。本层不做任何重试。

安装、更新和列举可用包前都会重新扫描仓库，长驻的 Web 进程也能看到
仓库的最新内容。
"""

from __future__ import annotations

import logging
from typing import Any

from assetpkg.core.exceptions import (
    PackageNotFoundError,
    UnsupportedPackageFormatError,
    ValidationError,
)
from assetpkg.core.installer import Installer
from assetpkg.core.locator import PackageLocator
from assetpkg.core.models import DependencyDeclaration, PackageManifest, PackageRepo
from assetpkg.core.project import ProjectFile
from assetpkg.core.scratch import ScratchDirectory
from assetpkg.core.solver import TransitiveDependencySolver

logger = logging.getLogger(__name__)


class PackageService:
    """安装 / 更新 / 清除包的统一入口"""

    def __init__(
        self,
        project: ProjectFile,
        locator: PackageLocator,
        installer: Installer,
        solver: TransitiveDependencySolver,
    ) -> None:
        self.project = project
        self.locator = locator
        self.installer = installer
        self.solver = solver

    # ------------------------------------------------------------------
    # 安装
    # ------------------------------------------------------------------

    def install_dependencies(
        self,
        solver: TransitiveDependencySolver | None = None,
        *,
        strict: bool = False,
    ) -> list[str]:
        """安装项目声明的全部依赖（含传递依赖），返回本次安装的 name~version

        已安装同一版本的包跳过；已安装其他版本的包先卸载旧版本再安装。

        参数:
            solver: 替换默认求解器（例如使用严格冲突策略）
            strict: 为 True 时任何包找不到都中止整个安装
        """
        self.locator.refresh()
        declarations = (solver or self.solver).solve_dependencies(self.project.dependencies)
        logger.info("依赖求解完成: %d 个包", len(declarations))

        installed: list[str] = []
        for declaration in declarations:
            try:
                found = self.locator.find_package_and_repository(declaration)
            except PackageNotFoundError:
                if strict:
                    raise
                logger.warning(
                    "未找到 %s (%s)，跳过", declaration.name, declaration.version or "*",
                )
                continue

            tracked = self.installer.tracking.get_installed_package(declaration.name)
            if tracked is not None and tracked.version == found.package.version:
                logger.info("已安装，跳过: %s", found.package.package_directory)
                continue

            try:
                scratch = found.repository.materialize(found.package)
            except UnsupportedPackageFormatError as e:
                logger.error("跳过 %s: %s", found.package.package_directory, e)
                continue

            self.install_package(found.package, scratch, declaration)
            installed.append(found.package.package_directory)
        return installed

    def install_package(
        self,
        manifest: PackageManifest,
        scratch: ScratchDirectory,
        declaration: DependencyDeclaration,
    ) -> None:
        """安装单个包；同名包已被追踪时先卸载旧版本"""
        if self.installer.tracking.get_installed_package(manifest.name) is not None:
            self.installer.update(manifest, scratch, declaration)
        else:
            self.installer.install(manifest, scratch, declaration)

    # ------------------------------------------------------------------
    # 更新
    # ------------------------------------------------------------------

    def update_package(self, name: str) -> str:
        """按项目声明重新定位并更新包，返回新安装的 name~version

        异常:
            ValidationError: 项目未声明该依赖
            PackageNotFoundError: 没有仓库提供满足约束的版本
        """
        declaration = self.project.find_dependency(name)
        if declaration is None:
            raise ValidationError(f"项目未声明依赖: {name}")
        self.locator.refresh()
        found = self.locator.find_package_and_repository(declaration)
        self.update_package_repo(found, declaration)
        return found.package.package_directory

    def update_package_repo(
        self,
        package_repo: PackageRepo,
        declaration: DependencyDeclaration | None = None,
    ) -> None:
        manifest = package_repo.package
        if declaration is None:
            declaration = self.project.find_dependency(manifest.name) or DependencyDeclaration(
                name=manifest.name, version=manifest.version,
            )
        scratch = package_repo.repository.materialize(manifest)
        self.installer.update(manifest, scratch, declaration)

    # ------------------------------------------------------------------
    # 清除
    # ------------------------------------------------------------------

    def nuke_package(self, name: str) -> bool:
        """清除单个包（不考虑依赖关系）；未安装时返回 False"""
        return self.installer.uninstall(name)

    def nuke_all_packages(self) -> int:
        return self.installer.uninstall_all()

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def list_installed(self) -> list[dict[str, Any]]:
        return [
            {
                "name": pkg.name,
                "version": pkg.version,
                "locations": len(pkg.locations),
                "guids": len(pkg.guids),
            }
            for pkg in self.installer.tracking.installed_packages
        ]

    def list_available(self) -> list[dict[str, str]]:
        self.locator.refresh()
        return [
            {
                "name": found.package.name,
                "version": found.package.version,
                "license": found.package.license,
                "repository": repr(found.repository),
            }
            for found in self.locator.list_all()
        ]

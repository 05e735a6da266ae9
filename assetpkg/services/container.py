"""服务容器 — 显式构造、显式传递的运行上下文

一次 CLI 调用或一个 Web 应用持有一个容器；容器内各组件懒加载、
共享同一份追踪账本和仓库列表缓存。不存在进程级全局单例。

依赖关系（→ 表示依赖）:
  packages  → installer, locator, project
  installer → tracking, project
  solver    → locator → repositories → project

用法:
    cfg = Config.from_file("configs/assetpkg.yml")
    container = ServiceContainer(cfg)
    container.packages.install_dependencies()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from assetpkg.core.config import Config

if TYPE_CHECKING:
    from assetpkg.core.installer import Installer
    from assetpkg.core.locator import PackageLocator
    from assetpkg.core.project import ProjectFile
    from assetpkg.core.protocols import PackageRepository, VersionComparator
    from assetpkg.core.solver import TransitiveDependencySolver
    from assetpkg.core.tracking import TrackingStore
    from assetpkg.services.package_service import PackageService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载容器 — 每个实例持有一组共享组件"""

    def __init__(
        self,
        config: Config | None = None,
        comparator: VersionComparator | None = None,
    ) -> None:
        self._config = config or Config()
        self._instances: dict[str, object] = {}
        if comparator is not None:
            self._instances["comparator"] = comparator

    @property
    def config(self) -> Config:
        return self._config

    @property
    def comparator(self) -> VersionComparator:
        if "comparator" not in self._instances:
            from assetpkg.core.versioning import PackagingVersionComparator
            self._instances["comparator"] = PackagingVersionComparator()
        return self._instances["comparator"]  # type: ignore[return-value]

    @property
    def project(self) -> ProjectFile:
        if "project" not in self._instances:
            from assetpkg.core.project import ProjectFile
            self._instances["project"] = ProjectFile.load(
                self._config.resolve(self._config.project_file),
            )
        return self._instances["project"]  # type: ignore[return-value]

    @property
    def tracking(self) -> TrackingStore:
        if "tracking" not in self._instances:
            from assetpkg.core.tracking import TrackingStore
            self._instances["tracking"] = TrackingStore(
                self._config.resolve(self._config.tracking_file),
            )
        return self._instances["tracking"]  # type: ignore[return-value]

    @property
    def repositories(self) -> list[PackageRepository]:
        if "repositories" not in self._instances:
            from assetpkg.core.repository import FileRepository
            scratch_dir = self._config.scratch_dir or None
            self._instances["repositories"] = [
                FileRepository(
                    self._config.resolve(entry.path),
                    manifest_file=self._config.manifest_file,
                    archive_extension=self._config.archive_extension,
                    scratch_dir=scratch_dir,
                )
                for entry in self.project.repositories
            ]
        return self._instances["repositories"]  # type: ignore[return-value]

    @property
    def locator(self) -> PackageLocator:
        if "locator" not in self._instances:
            from assetpkg.core.locator import PackageLocator
            self._instances["locator"] = PackageLocator(self.repositories, self.comparator)
        return self._instances["locator"]  # type: ignore[return-value]

    @property
    def solver(self) -> TransitiveDependencySolver:
        if "solver" not in self._instances:
            from assetpkg.core.solver import TransitiveDependencySolver
            self._instances["solver"] = TransitiveDependencySolver(self.locator)
        return self._instances["solver"]  # type: ignore[return-value]

    @property
    def installer(self) -> Installer:
        if "installer" not in self._instances:
            from assetpkg.core.installer import Installer
            self._instances["installer"] = Installer(
                self._config, self.project, self.tracking,
            )
        return self._instances["installer"]  # type: ignore[return-value]

    @property
    def packages(self) -> PackageService:
        if "packages" not in self._instances:
            from assetpkg.services.package_service import PackageService
            self._instances["packages"] = PackageService(
                project=self.project,
                locator=self.locator,
                installer=self.installer,
                solver=self.solver,
            )
        return self._instances["packages"]  # type: ignore[return-value]

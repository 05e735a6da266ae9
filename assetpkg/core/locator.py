"""包定位器

按配置顺序遍历仓库，返回第一个名称匹配且版本满足约束的清单。
各仓库的清单列表在首次使用时读取并缓存，refresh() 清除缓存。
"""

from __future__ import annotations

import logging

from assetpkg.core.exceptions import PackageNotFoundError
from assetpkg.core.models import DependencyDeclaration, PackageManifest, PackageRepo
from assetpkg.core.protocols import PackageRepository, VersionComparator
from assetpkg.core.versioning import PackagingVersionComparator

logger = logging.getLogger(__name__)


class PackageLocator:
    """在多个仓库中查找满足依赖声明的包"""

    def __init__(
        self,
        repositories: list[PackageRepository],
        comparator: VersionComparator | None = None,
    ) -> None:
        self.repositories = list(repositories)
        self.comparator = comparator or PackagingVersionComparator()
        self._listing: list[list[PackageManifest]] | None = None

    def refresh(self) -> None:
        self._listing = None

    def _manifests(self) -> list[list[PackageManifest]]:
        if self._listing is None:
            self._listing = [repo.list_packages() for repo in self.repositories]
        return self._listing

    def list_all(self) -> list[PackageRepo]:
        """所有仓库中的全部包（按仓库顺序）"""
        return [
            PackageRepo(package=manifest, repository=repo)
            for repo, manifests in zip(self.repositories, self._manifests())
            for manifest in manifests
        ]

    def find_package_and_repository(self, declaration: DependencyDeclaration) -> PackageRepo:
        """异常: PackageNotFoundError"""
        for repo, manifests in zip(self.repositories, self._manifests()):
            for manifest in manifests:
                if manifest.name != declaration.name:
                    continue
                if self.comparator.satisfies(manifest.version, declaration.version):
                    logger.debug(
                        "定位到 %s -> %r", manifest.package_directory, repo,
                    )
                    return PackageRepo(package=manifest, repository=repo)
        raise PackageNotFoundError(declaration.name, declaration.version)

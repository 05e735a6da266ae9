"""领域协议定义

求解器、定位器、安装器只依赖这些协议，不依赖具体的仓库实现、
版本比较实现或目标路径配置来源。

使用 typing.Protocol 而非 ABC，现有类无需修改继承关系即可满足协议。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from assetpkg.core.models import InstallSpec, PackageManifest, PathConfiguration
    from assetpkg.core.scratch import ScratchDirectory


class PackageRepository(Protocol):
    """包仓库协议：列出可用清单，并把某个包物化到临时目录"""

    def list_packages(self) -> list[PackageManifest]:
        ...

    def materialize(self, manifest: PackageManifest) -> ScratchDirectory:
        """返回的 ScratchDirectory 归调用方所有，需由调用方释放"""
        ...


class VersionComparator(Protocol):
    """版本比较协议（版本语义由实现方决定）"""

    def greater_than(self, a: str, b: str) -> bool:
        """a 是否严格大于 b"""
        ...

    def satisfies(self, version: str, constraint: str) -> bool:
        """version 是否满足约束 constraint"""
        ...


class DestinationProvider(Protocol):
    """目标路径配置协议"""

    def get_destination_for(self, spec: InstallSpec) -> PathConfiguration:
        """返回新的 PathConfiguration 副本，调用方可以自由修改"""
        ...

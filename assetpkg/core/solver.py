"""传递依赖求解

以项目根依赖为初始工作队列，逐个处理:
  - 名称首次出现: 建立节点，并把该包清单中声明的子依赖入队
  - 名称已存在: 调用冲突策略 (existing, compared) -> 版本，替换节点

冲突策略是纯函数，节点表由求解器自己维护。展开时记录 包名 -> 子依赖名
的边，队列处理完后对整张图做深度优先检查，与根依赖的声明顺序无关。
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import replace
from typing import Callable

from assetpkg.core.exceptions import (
    CyclicDependencyError,
    PackageNotFoundError,
    VersionConflictError,
)
from assetpkg.core.locator import PackageLocator
from assetpkg.core.models import DependencyDeclaration, DependencyNode
from assetpkg.core.protocols import VersionComparator

logger = logging.getLogger(__name__)

ConflictPolicy = Callable[[DependencyNode, DependencyNode], str]


def default_conflict_policy(comparator: VersionComparator) -> ConflictPolicy:
    """较高的版本要求胜出；较低的要求被忽略（仅记日志）"""

    def resolve(existing: DependencyNode, compared: DependencyNode) -> str:
        if comparator.greater_than(compared.version, existing.version):
            logger.warning(
                "%s 已有依赖版本 %s，另一个包依赖更高版本 %s，升级依赖定义",
                compared.name, existing.version, compared.version,
            )
            return compared.version
        if compared.version != existing.version:
            logger.info(
                "%s 已有依赖版本 %s，另一个包依赖较低版本 %s，忽略后者",
                compared.name, existing.version, compared.version,
            )
        return existing.version

    return resolve


def strict_conflict_policy(comparator: VersionComparator) -> ConflictPolicy:
    """与默认策略相同，但较低的版本要求直接报错"""
    lenient = default_conflict_policy(comparator)

    def resolve(existing: DependencyNode, compared: DependencyNode) -> str:
        if compared.version != existing.version and not comparator.greater_than(
            compared.version, existing.version,
        ):
            raise VersionConflictError(
                f"{compared.name} 的版本要求冲突: 已有 {existing.version}，"
                f"另一个包要求较低版本 {compared.version}"
            )
        return lenient(existing, compared)

    return resolve


class TransitiveDependencySolver:
    """传递依赖求解器"""

    def __init__(
        self,
        locator: PackageLocator,
        conflict_policy: ConflictPolicy | None = None,
    ) -> None:
        self.locator = locator
        self.conflict_policy = conflict_policy or default_conflict_policy(locator.comparator)

    def solve_dependencies(
        self, declarations: list[DependencyDeclaration],
    ) -> list[DependencyDeclaration]:
        """返回传递闭包，每个包名一条声明，版本为调和后的结果

        顺序: 包名首次出现的顺序（输入顺序确定时结果确定）。
        """
        nodes: dict[str, DependencyNode] = {}
        first_seen: dict[str, DependencyDeclaration] = {}
        edges: dict[str, list[str]] = {}
        queue: deque[DependencyDeclaration] = deque(declarations)

        while queue:
            decl = queue.popleft()
            compared = DependencyNode(name=decl.name, version=decl.version)
            existing = nodes.get(decl.name)
            if existing is not None:
                resolved = self.conflict_policy(existing, compared)
                nodes[decl.name] = replace(existing, version=resolved)
                continue

            nodes[decl.name] = compared
            first_seen[decl.name] = decl
            subs = self._sub_dependencies(decl)
            edges[decl.name] = [sub.name for sub in subs]
            queue.extend(subs)

        cycle = find_cycle(edges)
        if cycle is not None:
            raise CyclicDependencyError(cycle)

        return [
            replace(first_seen[name], version=node.version)
            for name, node in nodes.items()
        ]

    def _sub_dependencies(self, decl: DependencyDeclaration) -> list[DependencyDeclaration]:
        try:
            found = self.locator.find_package_and_repository(decl)
        except PackageNotFoundError:
            logger.warning("求解时未找到 %s (%s)，按无子依赖处理", decl.name, decl.version or "*")
            return []
        return list(found.package.dependencies)


def find_cycle(edges: dict[str, list[str]]) -> list[str] | None:
    """深度优先查找依赖图中的环，返回首尾相同的包名链；无环返回 None"""
    done: set[str] = set()
    path: list[str] = []

    def visit(name: str) -> list[str] | None:
        if name in path:
            return [*path[path.index(name):], name]
        if name in done:
            return None
        path.append(name)
        for sub in edges.get(name, []):
            cycle = visit(sub)
            if cycle is not None:
                return cycle
        path.pop()
        done.add(name)
        return None

    for name in edges:
        cycle = visit(name)
        if cycle is not None:
            return cycle
    return None

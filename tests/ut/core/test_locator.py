"""包定位器测试"""

from __future__ import annotations

import pytest

from assetpkg.core.exceptions import PackageNotFoundError
from assetpkg.core.locator import PackageLocator
from assetpkg.core.models import DependencyDeclaration, PackageManifest


class FakeRepository:
    def __init__(self, *manifests: PackageManifest) -> None:
        self.manifests = list(manifests)
        self.list_calls = 0

    def list_packages(self) -> list[PackageManifest]:
        self.list_calls += 1
        return list(self.manifests)

    def materialize(self, manifest: PackageManifest):  # pragma: no cover
        raise NotImplementedError


class TestPackageLocator:
    def test_first_repository_wins(self) -> None:
        first = FakeRepository(PackageManifest("Foo", "1.0"))
        second = FakeRepository(PackageManifest("Foo", "1.0"))
        found = PackageLocator([first, second]).find_package_and_repository(
            DependencyDeclaration("Foo", "1.0"),
        )
        assert found.repository is first

    def test_version_constraint(self) -> None:
        repo = FakeRepository(
            PackageManifest("Foo", "1.0"),
            PackageManifest("Foo", "2.0"),
        )
        locator = PackageLocator([repo])
        assert locator.find_package_and_repository(
            DependencyDeclaration("Foo", "2.0"),
        ).package.version == "2.0"
        assert locator.find_package_and_repository(
            DependencyDeclaration("Foo", "1.5+"),
        ).package.version == "2.0"
        assert locator.find_package_and_repository(
            DependencyDeclaration("Foo"),
        ).package.version == "1.0"

    def test_not_found(self) -> None:
        locator = PackageLocator([FakeRepository(PackageManifest("Foo", "1.0"))])
        with pytest.raises(PackageNotFoundError) as exc_info:
            locator.find_package_and_repository(DependencyDeclaration("Foo", "3.0"))
        assert exc_info.value.name == "Foo"
        assert exc_info.value.constraint == "3.0"

    def test_listing_cached_until_refresh(self) -> None:
        repo = FakeRepository(PackageManifest("Foo", "1.0"))
        locator = PackageLocator([repo])
        locator.find_package_and_repository(DependencyDeclaration("Foo"))
        locator.list_all()
        assert repo.list_calls == 1
        locator.refresh()
        locator.list_all()
        assert repo.list_calls == 2

    def test_list_all(self) -> None:
        first = FakeRepository(PackageManifest("A", "1"))
        second = FakeRepository(PackageManifest("B", "1"), PackageManifest("C", "1"))
        found = PackageLocator([first, second]).list_all()
        assert [(f.package.name, f.repository) for f in found] == [
            ("A", first), ("B", second), ("C", second),
        ]

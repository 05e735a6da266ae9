"""版本比较器测试"""

import pytest

from assetpkg.core.versioning import PackagingVersionComparator, base_version


@pytest.fixture()
def cmp() -> PackagingVersionComparator:
    return PackagingVersionComparator()


class TestBaseVersion:
    @pytest.mark.parametrize("text,expected", [
        ("1.2+", "1.2"),
        (">=1.0,<2", "1.0"),
        ("==2.0", "2.0"),
        ("1.0", "1.0"),
    ])
    def test_strip_operators(self, text: str, expected: str) -> None:
        assert base_version(text) == expected


class TestGreaterThan:
    def test_numeric_not_lexical(self, cmp: PackagingVersionComparator) -> None:
        assert cmp.greater_than("1.10.0", "1.9.0")
        assert not cmp.greater_than("1.9.0", "1.10.0")

    def test_equal(self, cmp: PackagingVersionComparator) -> None:
        assert not cmp.greater_than("1.0", "1.0.0")

    def test_constraint_forms(self, cmp: PackagingVersionComparator) -> None:
        assert cmp.greater_than("2.0+", "1.5")

    def test_non_pep440_falls_back_to_string(self, cmp: PackagingVersionComparator) -> None:
        assert cmp.greater_than("beta-b", "beta-a")


class TestSatisfies:
    @pytest.mark.parametrize("constraint", ["", "*", "latest"])
    def test_any(self, cmp: PackagingVersionComparator, constraint: str) -> None:
        assert cmp.satisfies("0.0.1", constraint)

    def test_exact(self, cmp: PackagingVersionComparator) -> None:
        assert cmp.satisfies("1.0.0", "1.0")
        assert not cmp.satisfies("1.0.1", "1.0")

    def test_minimum(self, cmp: PackagingVersionComparator) -> None:
        assert cmp.satisfies("1.3", "1.2+")
        assert cmp.satisfies("1.2", "1.2+")
        assert not cmp.satisfies("1.1", "1.2+")

    def test_specifier_set(self, cmp: PackagingVersionComparator) -> None:
        assert cmp.satisfies("1.5", ">=1.0,<2")
        assert not cmp.satisfies("2.0", ">=1.0,<2")

    def test_invalid_specifier(self, cmp: PackagingVersionComparator) -> None:
        assert not cmp.satisfies("1.0", ">>>1")

    def test_non_pep440_exact(self, cmp: PackagingVersionComparator) -> None:
        assert cmp.satisfies("custom-build", "custom-build")
        assert not cmp.satisfies("custom-build", "other")

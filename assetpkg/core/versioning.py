"""默认版本比较器（基于 packaging）

约束语法:
  - ""、"*"、"latest"      任意版本
  - "1.2.0+"                不低于 1.2.0
  - ">=1.0,<2"              PEP 440 specifier 集合
  - 其他                    精确版本（1.0 与 1.0.0 视为相同）

无法按 PEP 440 解析的版本串退化为字符串比较。
"""

from __future__ import annotations

import logging

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

_ANY = ("", "*", "latest")
_OPERATOR_CHARS = "<>=!~"


def base_version(constraint: str) -> str:
    """约束串中的版本部分: "1.2+" -> "1.2", ">=1.0" -> "1.0" """
    text = constraint.strip()
    if text.endswith("+"):
        text = text[:-1]
    text = text.lstrip(_OPERATOR_CHARS).strip()
    return text.split(",")[0].strip()


def _parse(text: str) -> Version | None:
    try:
        return Version(text)
    except InvalidVersion:
        return None


class PackagingVersionComparator:
    """VersionComparator 的默认实现"""

    def greater_than(self, a: str, b: str) -> bool:
        left, right = base_version(a), base_version(b)
        va, vb = _parse(left), _parse(right)
        if va is None or vb is None:
            return left > right
        return va > vb

    def satisfies(self, version: str, constraint: str) -> bool:
        text = constraint.strip()
        if text in _ANY:
            return True

        candidate = _parse(version)
        if text.endswith("+"):
            minimum = _parse(text[:-1].strip())
            if candidate is None or minimum is None:
                return version == text[:-1].strip()
            return candidate >= minimum

        if text[0] in _OPERATOR_CHARS:
            if candidate is None:
                return False
            try:
                return SpecifierSet(text).contains(candidate, prereleases=True)
            except InvalidSpecifier:
                logger.warning("无法解析的版本约束: %s", text)
                return False

        exact = _parse(text)
        if candidate is None or exact is None:
            return version == text
        return candidate == exact

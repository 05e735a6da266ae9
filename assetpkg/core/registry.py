"""YAML 注册表基类

以 YAML 文件中的一个 section 字典为存储，提供条目的读写删。
修改只作用于内存，调用 save() 才落盘（原子写入）。

子类只需指定 section_key:
    class MyRegistry(YamlRegistry):
        section_key = "items"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from assetpkg.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)


class YamlRegistry:
    """YAML 文件注册表基类"""

    section_key: str = "entries"

    def __init__(self, registry_file: str | Path) -> None:
        self.registry_file = Path(registry_file)
        self._data: dict[str, Any] = load_yaml(self.registry_file)

    def _section(self) -> dict[str, dict[str, Any]]:
        """获取当前 section 字典（自动创建）"""
        section = self._data.get(self.section_key)
        if not isinstance(section, dict):
            section = {}
            self._data[self.section_key] = section
        return section

    def save(self) -> None:
        save_yaml(self.registry_file, self._data)
        logger.debug("注册表已保存: %s", self.registry_file)

    def delete_file(self) -> None:
        """删除注册表文件并清空内存数据"""
        self._data = {}
        if self.registry_file.exists():
            self.registry_file.unlink()
            logger.info("注册表文件已删除: %s", self.registry_file)

    def _put(self, name: str, entry: dict[str, Any]) -> dict[str, Any]:
        self._section()[name] = entry
        return entry

    def _get_raw(self, name: str) -> dict[str, Any] | None:
        return self._section().get(name)

    def _remove(self, name: str) -> bool:
        section = self._section()
        if name not in section:
            return False
        del section[name]
        return True

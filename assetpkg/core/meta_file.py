"""侧车 .meta 文件读取

侧车是 YAML 文本，形如::

    fileFormatVersion: 2
    guid: 3f2a6c0e9b1d4e5f8a7b6c5d4e3f2a1b

用 BaseLoader 解析，所有标量保持字符串，纯数字 GUID 不会丢失前导零。
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


def read_guid(meta_path: Path) -> str | None:
    """读取侧车中的 guid，文件缺失、格式错误或无 guid 时返回 None"""
    if not meta_path.is_file():
        return None
    try:
        data = yaml.load(meta_path.read_text(encoding="utf-8"), Loader=yaml.BaseLoader)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        logger.warning("侧车文件无法解析，按普通路径记录: %s (%s)", meta_path, e)
        return None
    if not isinstance(data, dict):
        return None
    guid = data.get("guid")
    if not isinstance(guid, str) or not guid.strip():
        return None
    return guid.strip()

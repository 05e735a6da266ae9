"""根目录折叠

很多打包工具会把所有内容包在一层（或多层）冗余目录里。某个目录若
只含一个子目录、且除至多一个 .meta 侧车外没有其他文件，就是一层
"包装目录"。从解压根目录开始，只要根下唯一的子目录本身也是包装
目录，就把它去掉；第一个真正装有内容的目录保留::

    root/only/asset.txt  ->  only/asset.txt
    a/b.txt              ->  a/b.txt（a 直接装有文件，不是包装目录）
"""

from __future__ import annotations

import logging
import os
import shutil
import uuid
from pathlib import Path

from assetpkg.utils.fs import is_meta, meta_path_for, move_directory_content

logger = logging.getLogger(__name__)


def _single_child(directory: Path) -> Path | None:
    """directory 是包装目录时返回其唯一的子目录"""
    subdirs = [p for p in directory.iterdir() if p.is_dir()]
    if len(subdirs) != 1:
        return None
    files = [p for p in directory.iterdir() if p.is_file()]
    if len(files) > 1 or (len(files) == 1 and not is_meta(files[0])):
        return None
    return subdirs[0]


def find_common_root(root: Path) -> list[str]:
    """返回应去掉的包装目录链（由浅到深的目录名），无需折叠时为空"""
    chain: list[str] = []
    inspected = root
    while True:
        child = _single_child(inspected)
        if child is None:
            break
        chain.append(child.name)
        inspected = child
    # 链上最后一个目录自己不是包装目录，保留
    return chain[:-1]


def collapse_root(root: Path) -> str:
    """就地折叠 root，返回被去掉的前缀（平台分隔符），未折叠返回空串

    对已折叠过的目录再次调用是空操作。
    """
    parts = find_common_root(root)
    if not parts:
        return ""

    top = root / parts[0]
    # 被去掉的顶层目录自身的侧车
    stray = meta_path_for(top)
    if stray.is_file():
        stray.unlink()

    # 先把顶层目录改成唯一名字，避免与上移的同名条目冲突
    parked = root / f".collapse-{uuid.uuid4().hex[:8]}"
    top.rename(parked)
    deepest = parked.joinpath(*parts[1:])

    move_directory_content(deepest, root)
    shutil.rmtree(parked)

    prefix = os.sep.join(parts)
    logger.info("根目录已折叠: %s", prefix)
    return prefix

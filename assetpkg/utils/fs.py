"""文件系统辅助函数

资源文件旁可能带有同名 ``.meta`` 侧车文件（记录 GUID 等信息），
复制/列举时需要一并处理或显式排除。
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"


def is_meta(path: str | Path) -> bool:
    return str(path).endswith(META_SUFFIX)


def meta_path_for(path: str | Path) -> Path:
    """资源文件对应的侧车路径: ``a/b.txt`` -> ``a/b.txt.meta``"""
    return Path(f"{path}{META_SUFFIX}")


def make_path_os_friendly(path: str) -> str:
    """把清单里的 ``/`` 或 ``\\`` 分隔符统一为当前平台分隔符"""
    return path.replace("/", os.sep).replace("\\", os.sep)


def copy_directory(source: Path, destination: Path, *, with_meta: bool = True) -> None:
    """递归复制目录（合并到已有目录）。with_meta=False 时跳过 .meta 侧车"""
    ignore = None if with_meta else shutil.ignore_patterns(f"*{META_SUFFIX}")
    shutil.copytree(source, destination, dirs_exist_ok=True, ignore=ignore)


def try_copy_meta(source_file: Path, destination_file: Path) -> bool:
    """若源文件带侧车，则一并复制到目标文件旁"""
    src_meta = meta_path_for(source_file)
    if not src_meta.is_file():
        return False
    shutil.copy2(src_meta, meta_path_for(destination_file))
    return True


def recursively_list_files(root: Path, *, skip_meta: bool = True) -> list[Path]:
    """列出 root 下所有文件的相对路径（排序，保证结果稳定）"""
    files = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if skip_meta and is_meta(path):
            continue
        files.append(path.relative_to(root))
    return files


def move_directory_content(source: Path, destination: Path) -> None:
    """把 source 下的所有条目移动到 destination（同名目录合并）"""
    destination.mkdir(parents=True, exist_ok=True)
    for entry in sorted(source.iterdir()):
        target = destination / entry.name
        if entry.is_dir() and target.is_dir():
            move_directory_content(entry, target)
            entry.rmdir()
        else:
            shutil.move(str(entry), str(target))


def missing_parents(path: Path) -> list[Path]:
    """返回 path 自身及其尚不存在的祖先目录（由浅到深）

    安装前调用，用于记录安装过程中新建的目录。
    """
    created: list[Path] = []
    current = path
    while not current.exists():
        created.append(current)
        if current.parent == current:
            break
        current = current.parent
    created.reverse()
    return created

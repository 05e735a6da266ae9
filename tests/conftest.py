"""公共测试夹具: 构造 .unitypackage 归档、包仓库和项目目录"""

from __future__ import annotations

import gzip
import io
import logging
import tarfile
from pathlib import Path
from typing import Callable

import pytest
import yaml

from assetpkg.core.config import Config

# 条目 (名称, 内容)；内容为 None 表示 tar 目录条目
Entry = tuple[str, "bytes | None"]


def meta_text(guid: str) -> bytes:
    return f"fileFormatVersion: 2\nguid: {guid}\n".encode()


def guid_for(index: int) -> str:
    return f"{index + 1:032x}"


def write_archive(path: Path, entries: list[Entry]) -> Path:
    """按给定顺序写出 gzip + tar 归档"""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w") as tf:
        for name, data in entries:
            info = tarfile.TarInfo(name)
            if data is None:
                info.type = tarfile.DIRTYPE
                tf.addfile(info)
            else:
                info.size = len(data)
                tf.addfile(info, io.BytesIO(data))
    path.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(path, "wb") as f:
        f.write(buf.getvalue())
    return path


def package_entries(
    files: dict[str, str],
    *,
    with_meta: bool = True,
    folders: tuple[str, ...] = (),
) -> list[Entry]:
    """文件映射 {pathname: 内容} 转成资源分组条目

    folders 中的路径以目录条目形式（只有 pathname + meta）写在最前面。
    """
    entries: list[Entry] = []
    index = 0
    for folder in folders:
        guid = guid_for(index)
        index += 1
        entries.append((f"{guid}/", None))
        entries.append((f"{guid}/asset.meta", meta_text(guid)))
        entries.append((f"{guid}/pathname", folder.encode()))
    for pathname, content in files.items():
        guid = guid_for(index)
        index += 1
        entries.append((f"{guid}/", None))
        entries.append((f"{guid}/asset", content.encode()))
        if with_meta:
            entries.append((f"{guid}/asset.meta", meta_text(guid)))
        entries.append((f"{guid}/pathname", f"{pathname}\n00".encode()))
    return entries


@pytest.fixture()
def build_archive() -> Callable[..., Path]:
    return write_archive


@pytest.fixture()
def build_package() -> Callable[..., Path]:
    """build_package(path, {pathname: 内容}, with_meta=True, folders=()) -> 归档路径"""

    def _build(
        path: Path,
        files: dict[str, str],
        *,
        with_meta: bool = True,
        folders: tuple[str, ...] = (),
    ) -> Path:
        return write_archive(path, package_entries(files, with_meta=with_meta, folders=folders))

    return _build


@pytest.fixture()
def repo_dir(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo


@pytest.fixture()
def add_exploded_package(repo_dir: Path) -> Callable[..., Path]:
    """在仓库中创建展开目录包: add_exploded_package(name, version, files, **manifest)"""

    def _add(name: str, version: str, files: dict[str, str], **manifest: object) -> Path:
        directory = repo_dir / f"{name}-{version}"
        directory.mkdir(parents=True)
        data = {"name": name, "version": version, **manifest}
        (directory / "package.yml").write_text(yaml.safe_dump(data), encoding="utf-8")
        for relative, content in files.items():
            target = directory / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return directory

    return _add


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    (project / "Assets").mkdir(parents=True)
    return project


@pytest.fixture()
def make_project(project_dir: Path, repo_dir: Path) -> Callable[..., Config]:
    """写出 packages.yml 并返回指向该项目的 Config"""

    def _make(
        dependencies: list[dict] | None = None,
        destinations: dict | None = None,
    ) -> Config:
        data: dict = {
            "repositories": [{"type": "file", "path": str(repo_dir)}],
            "dependencies": dependencies or [],
        }
        if destinations:
            data["destinations"] = destinations
        (project_dir / "packages.yml").write_text(yaml.safe_dump(data), encoding="utf-8")
        return Config(project_root=str(project_dir), scratch_dir=str(project_dir.parent / "scratch"))

    return _make


def snapshot(root: Path) -> set[str]:
    """目录树快照（相对路径集合，含目录）"""
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


@pytest.fixture()
def tree_snapshot() -> Callable[[Path], set[str]]:
    return snapshot


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI / Web 入口会重新配置根日志器，测试结束后恢复"""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)

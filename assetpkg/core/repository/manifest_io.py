"""清单加载与推断

- 展开目录: ``<repo>/<dir>/package.yml``
- 归档文件: 同名侧边清单 ``<stem>.package.yml``，没有则按文件名
  ``Name-Version.<ext>`` 推断
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from assetpkg.core.exceptions import InferenceMismatchError, ValidationError
from assetpkg.core.models import PackageManifest
from assetpkg.utils.fs import make_path_os_friendly
from assetpkg.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

SIBLING_MANIFEST_SUFFIX = ".package.yml"
INFERRED_LICENSE = "Unknown"
INFERRED_MIN_HOST_VERSION = "0.0.0"


def normalize_install_paths(manifest: PackageManifest) -> PackageManifest:
    """安装路径统一为当前平台分隔符"""
    specs = [
        replace(spec, path=make_path_os_friendly(spec.path))
        for spec in manifest.install_specs
    ]
    return replace(manifest, install_specs=specs)


def load_manifest(path: Path, source_directory_name: str) -> PackageManifest:
    """读取清单文件

    异常:
        ValidationError: 缺少 name / version
    """
    data = load_yaml(path)
    try:
        manifest = PackageManifest.from_dict(data)
    except KeyError as e:
        raise ValidationError(f"清单缺少必填字段 {e}: {path}") from e
    manifest = normalize_install_paths(manifest)
    manifest.source_directory_name = source_directory_name
    return manifest


def sibling_manifest_path(archive_path: Path) -> Path:
    return archive_path.with_name(archive_path.stem + SIBLING_MANIFEST_SUFFIX)


def infer_manifest(archive_path: Path) -> PackageManifest:
    """按 ``Name-Version`` 文件名推断清单，不带安装规则（整包安装）

    异常:
        InferenceMismatchError: 文件名不是恰好一个连字符分隔的两段
    """
    split = archive_path.stem.split("-")
    if len(split) != 2 or not all(split):
        raise InferenceMismatchError(
            f"跳过 {archive_path.name}: 文件名不符合 'PackageName-PackageVersion"
            f"{archive_path.suffix}' 格式"
        )
    name, version = split
    return PackageManifest(
        name=name,
        version=version,
        license=INFERRED_LICENSE,
        min_host_version=INFERRED_MIN_HOST_VERSION,
        source_directory_name=archive_path.name,
    )


def load_or_infer(archive_path: Path) -> PackageManifest:
    sibling = sibling_manifest_path(archive_path)
    if sibling.is_file():
        return load_manifest(sibling, source_directory_name=archive_path.name)
    return infer_manifest(archive_path)

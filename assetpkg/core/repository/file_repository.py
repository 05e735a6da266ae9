"""本地文件仓库

仓库根目录下两类条目共同组成可用包列表:
  1. 含清单文件的子目录（展开包）
  2. 扩展名为归档格式的文件（大小写不敏感）

物化时目录包直接复制（连同侧车），归档包交给 ArchiveDecoder 解码。
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from assetpkg.core.archive.decoder import ArchiveDecoder
from assetpkg.core.exceptions import (
    InferenceMismatchError,
    UnsupportedPackageFormatError,
    ValidationError,
)
from assetpkg.core.models import PackageManifest
from assetpkg.core.repository.manifest_io import load_manifest, load_or_infer
from assetpkg.core.scratch import ScratchDirectory
from assetpkg.utils.fs import copy_directory

logger = logging.getLogger(__name__)


class FileRepository:
    """本地目录仓库"""

    def __init__(
        self,
        path: str | Path,
        *,
        manifest_file: str = "package.yml",
        archive_extension: str = ".unitypackage",
        scratch_dir: str | Path | None = None,
        decoder: ArchiveDecoder | None = None,
    ) -> None:
        self.path = Path(path)
        self.manifest_file = manifest_file
        self.archive_extension = archive_extension.lower()
        self._scratch_dir = scratch_dir
        self._decoder = decoder or ArchiveDecoder(scratch_dir)

    def __repr__(self) -> str:
        return f"FileRepository({self.path})"

    def is_package_archive(self, path: Path) -> bool:
        return path.is_file() and path.suffix.lower() == self.archive_extension

    # ------------------------------------------------------------------
    # 列举
    # ------------------------------------------------------------------

    def list_packages(self) -> list[PackageManifest]:
        if not self.path.is_dir():
            logger.warning("仓库目录不存在: %s", self.path)
            return []
        manifests: list[PackageManifest] = []
        manifests.extend(self._exploded_directories())
        manifests.extend(self._archives())
        return manifests

    def _exploded_directories(self) -> list[PackageManifest]:
        found = []
        for directory in sorted(p for p in self.path.iterdir() if p.is_dir()):
            manifest_path = directory / self.manifest_file
            if not manifest_path.is_file():
                continue
            try:
                found.append(load_manifest(manifest_path, source_directory_name=directory.name))
            except (ValidationError, yaml.YAMLError) as e:
                logger.warning("跳过无效清单 %s: %s", manifest_path, e)
        return found

    def _archives(self) -> list[PackageManifest]:
        found = []
        for file in sorted(self.path.iterdir()):
            if not self.is_package_archive(file):
                continue
            try:
                found.append(load_or_infer(file))
            except InferenceMismatchError as e:
                logger.warning("%s", e)
            except (ValidationError, yaml.YAMLError) as e:
                logger.warning("跳过无效清单 %s: %s", file, e)
        return found

    # ------------------------------------------------------------------
    # 物化
    # ------------------------------------------------------------------

    def materialize(self, manifest: PackageManifest) -> ScratchDirectory:
        """把包内容放进新的 ScratchDirectory

        异常:
            UnsupportedPackageFormatError: 源既不是目录也不是归档
        """
        source = self.path / manifest.source_directory_name
        if manifest.source_directory_name and source.is_dir():
            scratch = ScratchDirectory(self._scratch_dir)
            try:
                copy_directory(source, scratch.path, with_meta=True)
            except BaseException:
                scratch.release()
                raise
            logger.info("目录包已物化: %s", manifest.package_directory)
            return scratch

        if manifest.source_directory_name and self.is_package_archive(source):
            return self._decoder.decode(source)

        logger.error(
            "包 %s 版本 %s 格式无法识别，无法物化", manifest.name, manifest.version,
        )
        raise UnsupportedPackageFormatError(
            f"包 {manifest.name} 版本 {manifest.version} 格式无法识别: {source}"
        )

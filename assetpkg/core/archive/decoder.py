"""资源包归档解码器

归档格式: gzip 压缩的 tar，条目按资源分组（见 state.py）。
整个 tar 先解压到内存，再按存储顺序扫描；每凑齐一组就写到
``scratch/<pathname>``，侧车写到 ``<pathname>.meta``。
全部写完后做根目录折叠。
"""

from __future__ import annotations

import gzip
import io
import logging
import tarfile
import zlib
from pathlib import Path

from assetpkg.core.archive.collapse import collapse_root
from assetpkg.core.archive.state import AssetGroup, AssetGroupScanner, EntryKind, classify
from assetpkg.core.exceptions import InvalidArchiveStateError
from assetpkg.core.scratch import ScratchDirectory
from assetpkg.utils.fs import meta_path_for

logger = logging.getLogger(__name__)


class ArchiveDecoder:
    """把单个归档解码为 ScratchDirectory"""

    def __init__(self, scratch_dir: str | Path | None = None) -> None:
        self._scratch_dir = scratch_dir

    def decode(self, archive_path: Path) -> ScratchDirectory:
        """解码归档；失败时临时目录已被释放

        异常:
            UnsupportedFormatError: 旧版归档（含 metaData 条目）
            InvalidArchiveStateError: 载荷重叠或路径越界
            OSError: 读写失败或归档数据损坏
        """
        scratch = ScratchDirectory(self._scratch_dir)
        try:
            count = self.extract(Path(archive_path), scratch.path)
            scratch.collapsed_prefix = collapse_root(scratch.path)
        except BaseException:
            scratch.release()
            raise
        logger.info("归档已解码: %s (%d 个资源)", Path(archive_path).name, count)
        return scratch

    def extract(self, archive_path: Path, target: Path) -> int:
        """把归档中的资源写到 target，返回写出的资源数（不做根目录折叠）"""
        container = io.BytesIO(self._decompress(archive_path))
        scanner = AssetGroupScanner()
        count = 0
        try:
            with tarfile.open(fileobj=container, mode="r:") as tf:
                for member in tf:
                    if member.isdir():
                        continue
                    kind = classify(member.name)
                    if kind is EntryKind.OTHER:
                        continue
                    group = scanner.feed(kind, self._read_member(tf, member))
                    if group is not None:
                        self._write_group(group, target)
                        count += 1
        except tarfile.TarError as e:
            raise OSError(f"归档内容损坏: {archive_path}: {e}") from e
        scanner.finish()
        return count

    @staticmethod
    def _decompress(archive_path: Path) -> bytes:
        try:
            with gzip.open(archive_path, "rb") as f:
                return f.read()
        except (EOFError, zlib.error) as e:
            raise OSError(f"归档 gzip 数据损坏: {archive_path}: {e}") from e

    @staticmethod
    def _read_member(tf: tarfile.TarFile, member: tarfile.TarInfo) -> bytes:
        fileobj = tf.extractfile(member)
        if fileobj is None:
            return b""
        with fileobj:
            return fileobj.read()

    @staticmethod
    def _write_group(group: AssetGroup, target: Path) -> None:
        relative = [part for part in group.pathname.split("/") if part]
        if not relative:
            raise InvalidArchiveStateError("归档中存在空的 pathname")
        asset_path = target.joinpath(*relative)
        if not asset_path.resolve().is_relative_to(target.resolve()):
            raise InvalidArchiveStateError(f"归档路径越界: {group.pathname}")

        asset_path.parent.mkdir(parents=True, exist_ok=True)
        asset_path.write_bytes(group.asset)
        if group.meta is not None:
            meta_path_for(asset_path).write_bytes(group.meta)

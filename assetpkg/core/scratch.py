"""临时物化目录

每个包物化到独占的 ScratchDirectory 中，离开 with 块时（正常返回、
提前返回或异常）一定删除。不依赖对象回收做清理。
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class ScratchDirectory:
    """独占的临时目录

    用法:
        with ScratchDirectory() as scratch:
            (scratch.path / "a.txt").write_text("x")
        # 此处目录已删除

    collapsed_prefix 由归档解码器在根目录折叠后写入，
    安装器据此修正清单中的安装路径。
    """

    def __init__(self, base_dir: str | Path | None = None, prefix: str = "assetpkg-") -> None:
        if base_dir:
            Path(base_dir).mkdir(parents=True, exist_ok=True)
        self.path = Path(tempfile.mkdtemp(prefix=prefix, dir=str(base_dir) if base_dir else None))
        self.collapsed_prefix = ""
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """删除目录，可重复调用"""
        if self._released:
            return
        self._released = True
        shutil.rmtree(self.path, ignore_errors=True)
        if self.path.exists():
            logger.warning("临时目录未能完全删除: %s", self.path)

    def __enter__(self) -> ScratchDirectory:
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"ScratchDirectory({self.path}, {state})"

"""归档条目扫描状态机

归档内每个资源对应一个合成目录，目录下有 ``pathname``（目标相对路径）、
``asset``（载荷）和可选的 ``asset.meta``（侧车）。条目按存储顺序到达，
任一时刻最多有一组待写出的资源。

状态:
  IDLE                          无待写出载荷
  PAYLOAD_PENDING               已读到载荷
  PAYLOAD_AND_SIDECAR_PENDING   已读到载荷和侧车

转移只由条目后缀决定，见 _TRANSITIONS。本模块不做任何 I/O。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from assetpkg.core.exceptions import InvalidArchiveStateError, UnsupportedFormatError

logger = logging.getLogger(__name__)


class ScanState(Enum):
    IDLE = "idle"
    PAYLOAD_PENDING = "payload_pending"
    PAYLOAD_AND_SIDECAR_PENDING = "payload_and_sidecar_pending"


class EntryKind(Enum):
    ASSET = "asset"
    META = "meta"
    PATHNAME = "pathname"
    LEGACY_META = "metaData"
    OTHER = "other"


def classify(entry_name: str) -> EntryKind:
    """按条目名后缀分类（legacy 的 metaData 需先于 meta 判断）"""
    if entry_name.endswith("metaData"):
        return EntryKind.LEGACY_META
    if entry_name.endswith("asset"):
        return EntryKind.ASSET
    if entry_name.endswith("meta"):
        return EntryKind.META
    if entry_name.endswith("pathname"):
        return EntryKind.PATHNAME
    return EntryKind.OTHER


def parse_pathname(data: bytes) -> str:
    """pathname 条目是 UTF-8 文本，只有第一行有效"""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidArchiveStateError(f"归档结构异常: pathname 不是合法的 UTF-8 ({e})") from e
    return text.split("\n")[0].strip("\r")


@dataclass
class AssetGroup:
    """一个完整资源: 目标相对路径（``/`` 分隔）+ 载荷 + 可选侧车"""

    pathname: str
    asset: bytes
    meta: bytes | None = None


class AssetGroupScanner:
    """逐条喂入归档条目，凑齐一组时由 feed() 返回 AssetGroup"""

    def __init__(self) -> None:
        self.state = ScanState.IDLE
        self._asset: bytes | None = None
        self._meta: bytes | None = None

    def feed(self, kind: EntryKind, data: bytes) -> AssetGroup | None:
        handler = _TRANSITIONS.get((self.state, kind))
        if handler is None:
            return None
        return handler(self, data)

    def finish(self) -> None:
        """扫描结束；残留的载荷没有 pathname，无法落盘"""
        if self.state is not ScanState.IDLE:
            logger.warning("归档末尾存在缺少 pathname 的载荷，已丢弃")
        self._reset()

    # ---- 转移动作 ----

    def _start_payload(self, data: bytes) -> None:
        self._asset = data
        self.state = ScanState.PAYLOAD_PENDING

    def _overlapping_payload(self, data: bytes) -> None:
        raise InvalidArchiveStateError("归档结构异常: 上一个资源尚未写出又读到新的载荷")

    def _buffer_sidecar(self, data: bytes) -> None:
        self._meta = data
        self.state = ScanState.PAYLOAD_AND_SIDECAR_PENDING

    def _drop_directory_sidecar(self, data: bytes) -> None:
        # 目录条目的侧车不落盘
        pass

    def _discard_directory(self, data: bytes) -> None:
        logger.debug("跳过目录条目: %s", parse_pathname(data))

    def _flush(self, data: bytes) -> AssetGroup:
        assert self._asset is not None
        group = AssetGroup(pathname=parse_pathname(data), asset=self._asset, meta=self._meta)
        self._reset()
        return group

    def _legacy(self, data: bytes) -> None:
        raise UnsupportedFormatError(
            "该包由旧版打包工具生成（含 metaData 条目），不受支持，请联系包维护者更新"
        )

    def _reset(self) -> None:
        self._asset = None
        self._meta = None
        self.state = ScanState.IDLE


_Handler = Callable[[AssetGroupScanner, bytes], "AssetGroup | None"]

_TRANSITIONS: dict[tuple[ScanState, EntryKind], _Handler] = {}
for _state in ScanState:
    _TRANSITIONS[(_state, EntryKind.LEGACY_META)] = AssetGroupScanner._legacy
_TRANSITIONS.update({
    (ScanState.IDLE, EntryKind.ASSET): AssetGroupScanner._start_payload,
    (ScanState.IDLE, EntryKind.META): AssetGroupScanner._drop_directory_sidecar,
    (ScanState.IDLE, EntryKind.PATHNAME): AssetGroupScanner._discard_directory,
    (ScanState.PAYLOAD_PENDING, EntryKind.ASSET): AssetGroupScanner._overlapping_payload,
    (ScanState.PAYLOAD_PENDING, EntryKind.META): AssetGroupScanner._buffer_sidecar,
    (ScanState.PAYLOAD_PENDING, EntryKind.PATHNAME): AssetGroupScanner._flush,
    (ScanState.PAYLOAD_AND_SIDECAR_PENDING, EntryKind.ASSET): AssetGroupScanner._overlapping_payload,
    (ScanState.PAYLOAD_AND_SIDECAR_PENDING, EntryKind.META): AssetGroupScanner._buffer_sidecar,
    (ScanState.PAYLOAD_AND_SIDECAR_PENDING, EntryKind.PATHNAME): AssetGroupScanner._flush,
})

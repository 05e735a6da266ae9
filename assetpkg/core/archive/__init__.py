"""资源包归档解码

- state.py: 条目分类与扫描状态机
- collapse.py: 根目录折叠
- decoder.py: ArchiveDecoder
"""

from assetpkg.core.archive.collapse import collapse_root
from assetpkg.core.archive.decoder import ArchiveDecoder
from assetpkg.core.archive.state import AssetGroup, AssetGroupScanner, EntryKind, ScanState

__all__ = [
    "ArchiveDecoder",
    "AssetGroup",
    "AssetGroupScanner",
    "EntryKind",
    "ScanState",
    "collapse_root",
]

"""包仓库

- manifest_io.py: 清单加载 / 路径规范化 / 文件名推断
- file_repository.py: 本地目录仓库
"""

from assetpkg.core.repository.file_repository import FileRepository
from assetpkg.core.repository.manifest_io import infer_manifest, load_manifest

__all__ = ["FileRepository", "infer_manifest", "load_manifest"]

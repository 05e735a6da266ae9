"""统一异常体系

所有业务异常继承 AssetPkgError，code 字段供 Web 层映射 HTTP 状态码、
CLI 层输出友好提示。文件系统错误不在此列，按 OSError 原样上抛。
"""

from __future__ import annotations


class AssetPkgError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(AssetPkgError):
    """配置文件或项目依赖文件内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(AssetPkgError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class UnsupportedFormatError(AssetPkgError):
    """归档由旧版打包工具生成（含 metaData 条目），不支持"""

    code = "UNSUPPORTED_FORMAT"


class InvalidArchiveStateError(AssetPkgError):
    """归档结构异常：资源载荷重叠或路径越界"""

    code = "INVALID_ARCHIVE_STATE"


class PackageNotFoundError(AssetPkgError):
    """没有任何仓库提供满足约束的包"""

    code = "PACKAGE_NOT_FOUND"

    def __init__(self, name: str, constraint: str = "") -> None:
        detail = f"{name} ({constraint})" if constraint else name
        super().__init__(f"未找到满足条件的包: {detail}")
        self.name = name
        self.constraint = constraint


class UnsupportedPackageFormatError(AssetPkgError):
    """仓库条目既不是目录也不是可识别的归档文件"""

    code = "UNSUPPORTED_PACKAGE_FORMAT"


class InferenceMismatchError(AssetPkgError):
    """归档文件名不符合 Name-Version 约定，无法推断清单"""

    code = "INFERENCE_MISMATCH"


class CyclicDependencyError(AssetPkgError):
    """依赖图存在环"""

    code = "CYCLIC_DEPENDENCY"

    def __init__(self, chain: list[str]) -> None:
        super().__init__(f"检测到循环依赖: {' -> '.join(chain)}")
        self.chain = chain


class VersionConflictError(AssetPkgError):
    """严格冲突策略下出现无法调和的版本要求"""

    code = "VERSION_CONFLICT"

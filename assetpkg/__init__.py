"""assetpkg - 模块化资源包管理器"""

__version__ = "0.4.0"

"""集中配置管理

工具自身的设置（目录布局、追踪文件位置、日志），与项目依赖文件
(ProjectFile) 分开。支持从 YAML 文件加载 + 编程式覆盖。

不提供全局单例：入口层构造 Config 后显式传给 ServiceContainer。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from assetpkg.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "configs/assetpkg.yml"


@dataclass
class Config:
    """assetpkg 配置"""

    # 目录（相对路径均以 project_root 为基准）
    project_root: str = "."
    project_file: str = "packages.yml"
    packages_root: str = "UPackages"
    tracking_file: str = "UPackages/installed.yml"
    asset_root: str = "Assets"
    scratch_dir: str = ""  # 空 = 系统临时目录

    # 包格式
    manifest_file: str = "package.yml"
    archive_extension: str = ".unitypackage"

    # 日志
    log_level: str = "INFO"
    log_json: bool = False

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        logger.info("配置已加载: %s", path)
        return cfg

    def resolve(self, path: str) -> Path:
        """相对路径拼接到 project_root 上，绝对路径原样返回"""
        p = Path(path)
        if p.is_absolute():
            return p
        return Path(self.project_root) / p

    @property
    def packages_root_path(self) -> Path:
        return self.resolve(self.packages_root)

    @property
    def asset_root_path(self) -> Path:
        return self.resolve(self.asset_root)

    def to_dict(self) -> dict:
        return asdict(self)

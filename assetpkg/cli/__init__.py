"""assetpkg 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
main 根据 --config 构造 ServiceContainer，经 click 上下文传给子命令。
"""

from __future__ import annotations

import functools
from typing import Any, Callable

import click

from assetpkg import __version__
from assetpkg.core.config import DEFAULT_CONFIG_FILE, Config
from assetpkg.core.exceptions import AssetPkgError
from assetpkg.services.container import ServiceContainer
from assetpkg.utils.logger import setup_logging_from_env


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """业务异常转成 ClickException（非零退出码 + 友好提示）"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except AssetPkgError as e:
            raise click.ClickException(f"[{e.code}] {e}") from e

    return wrapper


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, help="配置文件路径")
@click.option("--project-root", default=None, help="项目根目录（覆盖配置）")
@click.pass_context
def main(ctx: click.Context, config_path: str, project_root: str | None) -> None:
    """assetpkg - 模块化资源包管理器"""
    cfg = Config.from_file(config_path)
    if project_root:
        cfg.project_root = project_root
    setup_logging_from_env(default_level=cfg.log_level, default_json=cfg.log_json)
    ctx.obj = ServiceContainer(cfg)


# 注册各领域子命令
from assetpkg.cli.cmd_install import register as _reg_install  # noqa: E402
from assetpkg.cli.cmd_packages import register as _reg_packages  # noqa: E402

_reg_install(main)
_reg_packages(main)

"""CLI — 查询与清除"""

from __future__ import annotations

import click

from assetpkg.cli import handle_errors
from assetpkg.services.container import ServiceContainer


def register(group: click.Group) -> None:
    group.add_command(installed)
    group.add_command(available)
    group.add_command(nuke)
    group.add_command(nuke_all)


@click.command()
@click.pass_obj
@handle_errors
def installed(container: ServiceContainer) -> None:
    """列出已安装的包"""
    packages = container.packages.list_installed()
    if not packages:
        click.echo("没有已安装的包。")
        return
    for p in packages:
        click.echo(f"  {p['name']:24s} {p['version']:12s} ({p['locations']} 个路径)")


@click.command()
@click.pass_obj
@handle_errors
def available(container: ServiceContainer) -> None:
    """列出所有仓库中的可用包"""
    packages = container.packages.list_available()
    if not packages:
        click.echo("仓库中没有可用的包。")
        return
    for p in packages:
        click.echo(f"  {p['name']:24s} {p['version']:12s} [{p['license']}] {p['repository']}")


@click.command()
@click.argument("name")
@click.pass_obj
@handle_errors
def nuke(container: ServiceContainer, name: str) -> None:
    """清除单个包的全部安装足迹（不考虑依赖关系）"""
    if container.packages.nuke_package(name):
        click.echo(f"已清除: {name}")
    else:
        click.echo(f"未安装: {name}")


@click.command(name="nuke-all")
@click.confirmation_option(prompt="确定清除所有已安装的包？")
@click.pass_obj
@handle_errors
def nuke_all(container: ServiceContainer) -> None:
    """清除所有已安装的包并删除追踪文件"""
    count = container.packages.nuke_all_packages()
    click.echo(f"已清除 {count} 个包")

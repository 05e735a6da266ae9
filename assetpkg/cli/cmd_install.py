"""CLI — 安装与更新"""

from __future__ import annotations

import click

from assetpkg.cli import handle_errors
from assetpkg.services.container import ServiceContainer


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(update)


@click.command()
@click.option("--strict", is_flag=True, help="任一依赖找不到时中止")
@click.option("--strict-conflicts", is_flag=True, help="版本要求冲突时报错而不是取较高版本")
@click.pass_obj
@handle_errors
def install(container: ServiceContainer, strict: bool, strict_conflicts: bool) -> None:
    """安装项目声明的全部依赖"""
    solver = None
    if strict_conflicts:
        from assetpkg.core.solver import TransitiveDependencySolver, strict_conflict_policy
        solver = TransitiveDependencySolver(
            container.locator, strict_conflict_policy(container.comparator),
        )
    installed = container.packages.install_dependencies(solver, strict=strict)
    if not installed:
        click.echo("没有安装任何包。")
        return
    for name in installed:
        click.echo(f"已安装: {name}")


@click.command()
@click.argument("name")
@click.pass_obj
@handle_errors
def update(container: ServiceContainer, name: str) -> None:
    """卸载已安装版本并按项目声明重新安装"""
    new = container.packages.update_package(name)
    click.echo(f"已更新: {new}")

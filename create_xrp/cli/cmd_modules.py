"""模块管理命令: add / list (ls) / remove (rm)"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click

from create_xrp.cli import _svc
from create_xrp.core.config_store import ScaffoldConfigStore
from create_xrp.core.models import InstalledModule
from create_xrp.core.module.models import Registry
from create_xrp.core.module.resolver import is_direct_source, module_name_from_url
from create_xrp.core.project import detect_framework, detect_package_manager, is_scaffold_project
from create_xrp.services.installer import InstallRequest

CUSTOM_URL_HINT = "  create-xrp add https://github.com/user/repo"


def register_commands(main: click.Group) -> None:
    """注册模块管理相关命令"""
    main.add_command(add)
    main.add_command(list_modules)
    main.add_command(list_modules, name="ls")
    main.add_command(remove)
    main.add_command(remove, name="rm")


def _project_store() -> ScaffoldConfigStore:
    """当前目录的项目配置存储，不是项目时退出"""
    store: ScaffoldConfigStore = _svc().store(Path.cwd())
    if not is_scaffold_project(store):
        click.echo("请在 scaffold-xrp 项目根目录下执行该命令。", err=True)
        raise click.ClickException("当前目录不是 scaffold-xrp 项目")
    return store


def _format_date(iso: str) -> str:
    try:
        return datetime.fromisoformat(iso).date().isoformat()
    except ValueError:
        return iso or "-"


def _prompt_module(registry: Registry) -> str | None:
    """交互式选择注册表模块或输入 git 地址，注册表为空时返回 None"""
    names = sorted(registry.modules)
    if not names:
        click.echo("注册表中没有可用模块。可直接使用 git 地址安装:")
        click.echo(CUSTOM_URL_HINT)
        return None

    click.echo("可用模块:")
    for i, name in enumerate(names, 1):
        click.echo(f"  {i:2d}) {name} - {registry.modules[name].description}")
    custom = len(names) + 1
    click.echo(f"  {custom:2d}) 输入自定义 git 地址...")

    choice = click.prompt("要安装哪个模块", type=click.IntRange(1, custom))
    if choice != custom:
        return names[choice - 1]

    def _check_url(value: str) -> str:
        if not value.startswith(("https://", "git@")):
            raise click.BadParameter("请输入有效的 git 地址")
        return value

    return click.prompt("模块 git 地址", value_proc=_check_url)


def _installed_name(module: str, installed: dict[str, InstalledModule], registry: Registry | None) -> str:
    """已安装条目以 module.json 的 name 为键，先按来源地址匹配，再按推导名匹配"""
    if is_direct_source(module):
        url, name = module, module_name_from_url(module)
    else:
        entry = registry.modules.get(module) if registry else None
        url, name = (entry.repo if entry else None), module
    for key, info in installed.items():
        if url and info.source == url:
            return key
    return name


@click.command(name="add")
@click.argument("module", required=False)
@click.option("--yes", "-y", is_flag=True, help="模块已安装时不询问直接重装")
def add(module: str | None, yes: bool) -> None:
    """向当前项目添加模块（模块名或 git 地址）"""
    svc = _svc()
    store = _project_store()

    framework = detect_framework(store)
    if framework is None:
        click.echo("请确认 apps/web 存在且包含 Next.js 或 Nuxt 配置。", err=True)
        raise click.ClickException("无法识别项目框架")
    config = store.ensure(framework)
    package_manager = detect_package_manager(store.project_dir)

    registry = None
    if not module:
        click.echo("正在获取可用模块...")
        registry = svc.registry.fetch()
        module = _prompt_module(registry)
        if module is None:
            return

    if registry is None and not is_direct_source(module):
        registry = svc.registry.fetch()
    installed_key = _installed_name(module, config.installed_modules, registry)
    if installed_key in config.installed_modules and not yes:
        click.echo(f'模块 "{installed_key}" 已安装。')
        if not click.confirm("是否重新安装？", default=False):
            return

    click.echo(f"正在为 {framework.value} 安装模块: {module}")
    result = svc.installer.install(
        store,
        InstallRequest(source=module, framework=framework, package_manager=package_manager),
        registry=registry,
    )
    for w in result.warnings:
        click.echo(f"警告: {w}")
    if not result.success:
        raise click.ClickException(f"模块安装失败: {result.error}")

    click.echo(f"模块安装成功: {result.module_name} v{result.version}")
    click.echo(f"模块文件位于: apps/web/modules/{result.module_name}/")


def _echo_installed(installed: dict[str, InstalledModule]) -> None:
    if not installed:
        click.echo("  尚未安装任何模块。")
        return
    for name, info in installed.items():
        click.echo(f"  {name} v{info.version}")
        click.echo(f"    来源: {info.source}")
        click.echo(f"    安装于: {_format_date(info.installed_at)}")


def _echo_registry(registry: Registry, installed: dict[str, InstalledModule]) -> None:
    if not registry.modules:
        click.echo("  注册表中没有可用模块。仍可直接使用 git 地址安装:")
        click.echo(CUSTOM_URL_HINT)
        return
    for name, info in registry.modules.items():
        badge = " [已安装]" if name in installed else ""
        click.echo(f"  {name}{badge}")
        if info.description:
            click.echo(f"    {info.description}")
        if info.author:
            click.echo(f"    作者: {info.author}")
        click.echo(f"    {info.repo}")


@click.command(name="list")
@click.option("--remote", "-r", is_flag=True, help="显示远程注册表中的模块")
def list_modules(remote: bool) -> None:
    """列出已安装和可用的模块"""
    svc = _svc()
    store: ScaffoldConfigStore = svc.store(Path.cwd())
    in_project = is_scaffold_project(store)
    installed = store.installed_modules() if in_project else {}

    if in_project:
        click.echo("已安装模块:")
        _echo_installed(installed)
        framework = detect_framework(store)
        if framework is not None:
            click.echo(f"  框架: {framework.value}")

    if remote or not in_project:
        click.echo("可用模块（注册表）:")
        _echo_registry(svc.registry.fetch(), installed)

    if in_project:
        click.echo("安装模块: create-xrp add <module-name>")
        click.echo("查看全部可用模块: create-xrp list --remote")
    else:
        click.echo("提示: 在 scaffold-xrp 项目中执行可查看已安装模块。")


@click.command(name="remove")
@click.argument("module", required=False)
@click.option("--yes", "-y", is_flag=True, help="不询问直接移除")
def remove(module: str | None, yes: bool) -> None:
    """从当前项目移除已安装模块"""
    svc = _svc()
    store = _project_store()
    installed = store.installed_modules()
    if not installed:
        click.echo("当前没有已安装的模块。")
        return

    names = list(installed)
    if not module:
        for i, name in enumerate(names, 1):
            click.echo(f"  {i:2d}) {name} v{installed[name].version}")
        choice = click.prompt("要移除哪个模块", type=click.IntRange(1, len(names)))
        module = names[choice - 1]

    if module not in installed:
        click.echo("已安装模块:", err=True)
        for name in names:
            click.echo(f"  - {name}", err=True)
        raise click.ClickException(f'模块 "{module}" 未安装')

    if not yes and not click.confirm(f'确定移除 "{module}"？', default=False):
        click.echo("已取消。")
        return

    result = svc.remover.remove(store, module)
    if not result.success:
        raise click.ClickException(f"模块移除失败: {result.error}")

    click.echo(f'模块 "{module}" 已移除。')
    click.echo("注意: 该模块安装的 npm 依赖未被卸载，可按需手动清理。")

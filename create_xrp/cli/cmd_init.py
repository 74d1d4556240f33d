"""项目创建命令: init"""

from __future__ import annotations

from pathlib import Path

import click

from create_xrp.cli import _svc
from create_xrp.core.exceptions import ScaffoldError, ValidationError
from create_xrp.core.models import Framework, PackageManager
from create_xrp.core.project import validate_project_name
from create_xrp.services.scaffold_service import ScaffoldRequest

_FRAMEWORKS = [f.value for f in Framework]
_PACKAGE_MANAGERS = [p.value for p in PackageManager]


def register_commands(main: click.Group) -> None:
    """注册项目创建命令"""
    main.add_command(init)


def _check_name(value: str) -> str:
    """项目名校验（交互输入与参数共用）"""
    try:
        validate_project_name(value)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e
    if Path(value).exists():
        raise click.BadParameter(f'目录 "{value}" 已存在，请换一个名称')
    return value


@click.command(name="init")
@click.argument("project_name", required=False)
@click.option("--framework", type=click.Choice(_FRAMEWORKS), default=None, help="前端框架")
@click.option("--pm", "package_manager", type=click.Choice(_PACKAGE_MANAGERS), default=None, help="包管理器")
@click.option("--modules", "-m", default="", help="逗号分隔的模块列表")
def init(
    project_name: str | None, framework: str | None,
    package_manager: str | None, modules: str,
) -> None:
    """从模板创建新的 XRPL dApp 项目"""
    if project_name:
        try:
            _check_name(project_name)
        except click.BadParameter as e:
            raise click.ClickException(e.message) from e
    else:
        project_name = click.prompt("项目名称", default="my-xrp-app", value_proc=_check_name)

    if framework is None:
        framework = click.prompt(
            "使用哪个框架", type=click.Choice(_FRAMEWORKS), default=Framework.NEXTJS.value,
        )
    if package_manager is None:
        package_manager = click.prompt(
            "使用哪个包管理器", type=click.Choice(_PACKAGE_MANAGERS), default=PackageManager.PNPM.value,
        )

    request = ScaffoldRequest(
        project_name=project_name,
        framework=Framework(framework),
        package_manager=PackageManager(package_manager),
        modules=[m.strip() for m in modules.split(",") if m.strip()],
    )
    click.echo(f"正在创建项目: {request.target_dir}")
    try:
        report = _svc().scaffolder.create(request)
    except ScaffoldError as e:
        raise click.ClickException(str(e)) from e

    for w in report.warnings:
        click.echo(f"警告: {w}")
    if report.modules is not None:
        if report.modules.installed:
            click.echo(f"已安装模块: {', '.join(report.modules.installed)}")
        if report.modules.failed:
            click.echo(f"安装失败: {', '.join(report.modules.failed)}")

    pm = request.package_manager
    run_dev = "npm run dev" if pm is PackageManager.NPM else f"{pm.value} dev"
    click.echo("项目创建成功！")
    click.echo("下一步:")
    click.echo(f"  cd {project_name}")
    click.echo(f"  {run_dev}")
    click.echo("模块管理:")
    click.echo("  create-xrp add <module>     # 添加模块")
    click.echo("  create-xrp list             # 列出模块")
    click.echo("  create-xrp remove <module>  # 移除模块")

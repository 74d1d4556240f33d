"""create-xrp 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os
from typing import Any

import click

from create_xrp import __version__
from create_xrp.core.config import init_config
from create_xrp.services.container import get_container, reset_container
from create_xrp.utils.logger import LOG_JSON_ENV, LOG_LEVEL_ENV, setup_logging


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__, prog_name="create-xrp")
@click.option(
    "--config", "config_path", default="", envvar="CREATE_XRP_CONFIG",
    help="工具配置文件路径 (YAML)",
)
def main(config_path: str) -> None:
    """create-xrp - 创建 XRPL dApp 项目并管理模块"""
    setup_logging(
        level=os.getenv(LOG_LEVEL_ENV, "WARNING"),
        json_output=os.getenv(LOG_JSON_ENV, "") == "1",
    )
    if config_path:
        init_config(config_path)
        reset_container()


# 注册各领域子命令
from create_xrp.cli.cmd_init import register_commands as _reg_init  # noqa: E402
from create_xrp.cli.cmd_modules import register_commands as _reg_modules  # noqa: E402

_reg_init(main)
_reg_modules(main)

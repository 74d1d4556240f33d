"""模块依赖安装器 - 调用项目包管理器添加 npm 依赖"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from create_xrp.core.models import PackageManager
from create_xrp.core.project import ProjectLayout
from create_xrp.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)


class DependencyInstaller:
    """在 apps/web 下执行一次包管理器命令；失败不抛异常，只返回 False"""

    def __init__(self, executor: CommandExecutor | None = None) -> None:
        self.executor = executor or get_executor()

    def install(
        self, project_dir: Path, packages: list[str], package_manager: PackageManager,
    ) -> bool:
        if not packages:
            return True
        cmd = package_manager.add_command(packages)
        cwd = ProjectLayout(project_dir).web_dir
        logger.info("  安装依赖: %s (cwd=%s)", shlex.join(cmd), cwd)
        try:
            r = self.executor.execute(cmd, cwd=cwd)
        except OSError as e:
            logger.warning("依赖安装命令无法执行: %s", e)
            return False
        if not r.success:
            logger.warning("依赖安装失败 (rc=%d): %s", r.returncode, r.stderr[:500])
            return False
        return True

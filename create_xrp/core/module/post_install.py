"""模块 post-install 脚本执行器

脚本以项目根为工作目录执行，继承当前环境并额外注入:
  SCAFFOLD_XRP_PROJECT_DIR  项目根目录
  SCAFFOLD_XRP_FRAMEWORK    项目框架 (nextjs / nuxt)
  SCAFFOLD_XRP_WEB_DIR      apps/web 目录
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from create_xrp.core.models import Framework
from create_xrp.core.module.models import ModuleConfig
from create_xrp.core.project import ProjectLayout
from create_xrp.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT = "install.js"
_NODE_SUFFIXES = (".js", ".mjs", ".cjs")


def build_hook_env(project_dir: Path, framework: Framework) -> dict[str, str]:
    """脚本环境变量: 继承当前进程环境 + 项目上下文"""
    return {
        **os.environ,
        "SCAFFOLD_XRP_PROJECT_DIR": str(project_dir),
        "SCAFFOLD_XRP_FRAMEWORK": framework.value,
        "SCAFFOLD_XRP_WEB_DIR": str(ProjectLayout(project_dir).web_dir),
    }


class PostInstallRunner:
    """post-install 脚本执行器；脚本不存在视为成功，失败只返回 False"""

    def __init__(
        self, executor: CommandExecutor | None = None, default_script: str = DEFAULT_SCRIPT,
    ) -> None:
        self.executor = executor or get_executor()
        self.default_script = default_script

    def find_script(self, module_dir: Path, manifest: ModuleConfig) -> Path | None:
        """清单 postInstall 优先，否则使用默认脚本；脚本必须位于模块目录内"""
        script = module_dir / (manifest.post_install or self.default_script)
        try:
            script.resolve().relative_to(module_dir.resolve())
        except ValueError:
            logger.warning("post-install 脚本不在模块目录内，已忽略: %s", script)
            return None
        return script if script.is_file() else None

    def run(
        self, module_dir: Path, project_dir: Path,
        manifest: ModuleConfig, framework: Framework,
    ) -> bool:
        module_dir, project_dir = module_dir.resolve(), project_dir.resolve()
        script = self.find_script(module_dir, manifest)
        if script is None:
            if manifest.post_install:
                logger.warning("清单声明的 post-install 脚本不可用: %s", manifest.post_install)
                return False
            return True
        cmd = ["node", str(script)] if script.suffix in _NODE_SUFFIXES else [str(script)]
        logger.info("  post-install: %s (cwd=%s)", script.name, project_dir)
        try:
            r = self.executor.execute(
                cmd, cwd=project_dir, env=build_hook_env(project_dir, framework),
            )
        except OSError as e:
            logger.warning("post-install 脚本无法执行: %s", e)
            return False
        if not r.success:
            logger.warning("post-install 脚本失败 (rc=%d): %s", r.returncode, r.stderr[:500])
            return False
        return True

"""模块拉取器 - 浅克隆到项目内临时目录"""

from __future__ import annotations

import logging
from pathlib import Path

from create_xrp.utils.fs import remove_tree
from create_xrp.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)


class ModuleFetcher:
    """模块拉取器

    克隆前强制清空目标目录；只返回成功/失败，不解析 git 输出。
    失败时的残留由安装编排器统一清理临时根目录。
    """

    def __init__(self, executor: CommandExecutor | None = None) -> None:
        self.executor = executor or get_executor()

    def fetch(self, url: str, dest: Path) -> bool:
        # git 以 cwd 解析相对目标路径
        dest = dest.resolve()
        remove_tree(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        logger.info("  git clone --depth 1 %s -> %s", url, dest)
        try:
            r = self.executor.execute(
                ["git", "clone", "--depth", "1", url, str(dest)],
                cwd=dest.parent,
            )
        except OSError as e:
            logger.error("git 无法执行: %s", e)
            return False
        if not r.success:
            logger.error("git clone 失败 (rc=%d): %s", r.returncode, r.stderr[:300])
            return False
        return True

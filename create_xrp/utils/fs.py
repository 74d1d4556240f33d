"""目录复制/删除工具 - 模块文件落地与清理的统一入口"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def replace_tree(src: Path, dest: Path) -> None:
    """用 src 整体替换 dest：先删除已有 dest，再递归复制（自动创建父目录）"""
    if dest.exists():
        shutil.rmtree(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(src, dest)
    logger.debug("  已复制: %s -> %s", src, dest)


def remove_tree(path: Path, *, ignore_errors: bool = True) -> bool:
    """删除目录（不存在时忽略），返回是否存在过

    ignore_errors=False 时删除失败抛 OSError。
    """
    if not path.exists():
        return False
    shutil.rmtree(path, ignore_errors=ignore_errors)
    return True

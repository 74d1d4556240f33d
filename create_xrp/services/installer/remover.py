"""模块移除

前置条件（不满足时不触碰文件系统）:
  - 项目配置存在，否则 NOT_A_PROJECT
  - 配置中存在该模块，否则 MODULE_NOT_INSTALLED

npm 依赖不会卸载: 其他模块或应用本身可能依赖同一个包。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from create_xrp.core.exceptions import (
    ConfigError,
    ModuleNotInstalledError,
    NotAProjectError,
    ScaffoldError,
)
from create_xrp.core.project import ProjectLayout
from create_xrp.services.installer.models import RemoveResult
from create_xrp.utils.fs import remove_tree

if TYPE_CHECKING:
    from create_xrp.core.config_store import ScaffoldConfigStore

logger = logging.getLogger(__name__)


class ModuleRemover:
    """模块移除器"""

    def remove(self, store: ScaffoldConfigStore, name: str) -> RemoveResult:
        result = RemoveResult(name=name)
        try:
            self._remove(store, name, result)
            result.success = True
        except ScaffoldError as e:
            result.error = str(e)
            result.error_code = e.code
            logger.error("模块移除失败 %s: %s", name, e)
        except OSError as e:
            result.error = f"模块文件删除失败: {e}"
            result.error_code = "IO_ERROR"
            logger.error("模块移除失败 %s: %s", name, e)
        return result

    @staticmethod
    def _remove(store: ScaffoldConfigStore, name: str, result: RemoveResult) -> None:
        config = store.read()
        if config is None:
            raise NotAProjectError(f"不是 scaffold-xrp 项目 (缺少 {store.path.name})")
        if name not in config.installed_modules:
            raise ModuleNotInstalledError(name)

        layout = ProjectLayout(store.project_dir)
        for path in (layout.web_module_dir(name), layout.bedrock_module_dir(name)):
            if remove_tree(path, ignore_errors=False):
                result.removed_paths.append(str(path))

        del config.installed_modules[name]
        try:
            store.write(config)
        except OSError as e:
            raise ConfigError(f"项目配置写入失败: {store.path} ({e})") from e
        logger.info("模块已移除: %s (%d 个目录)", name, len(result.removed_paths))

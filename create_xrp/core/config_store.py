"""项目配置存储 - .scaffold-xrp.json 的读写

读取宽松: 文件不存在或无法解析均视为"无配置"（返回 None）。
写入为整文档替换，原子写入，2 空格缩进、换行结尾。
"""

from __future__ import annotations

import logging
from pathlib import Path

from create_xrp.core.models import Framework, InstalledModule, ScaffoldConfig
from create_xrp.utils.file_io import load_json, save_json

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".scaffold-xrp.json"


class ScaffoldConfigStore:
    """单个项目的配置存储，所有模块操作显式持有一个实例"""

    def __init__(self, project_dir: str | Path, file_name: str = DEFAULT_CONFIG_FILE) -> None:
        # 克隆目标、脚本路径与子进程 cwd 都从这里派生，统一为绝对路径
        self.project_dir = Path(project_dir).resolve()
        self.path = self.project_dir / file_name

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> ScaffoldConfig | None:
        """读取项目配置，不存在或内容无效时返回 None"""
        try:
            data = load_json(self.path)
        except (OSError, ValueError) as e:
            logger.warning("项目配置无法读取，视为无配置: %s (%s)", self.path, e)
            return None
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("项目配置不是对象，视为无配置: %s", self.path)
            return None
        try:
            return ScaffoldConfig.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("项目配置内容无效，视为无配置: %s (%s)", self.path, e)
            return None

    def write(self, config: ScaffoldConfig) -> None:
        """整文档替换写入"""
        save_json(self.path, config.to_dict())
        logger.debug("项目配置已写入: %s", self.path)

    def init(self, framework: Framework) -> ScaffoldConfig:
        """创建空配置并写入（已有配置会被覆盖）"""
        config = ScaffoldConfig(framework=framework)
        self.write(config)
        logger.info("项目配置已初始化: %s (framework=%s)", self.path, framework.value)
        return config

    def ensure(self, framework: Framework) -> ScaffoldConfig:
        """读取配置，不存在时按给定框架创建"""
        return self.read() or self.init(framework)

    def installed_modules(self) -> dict[str, InstalledModule]:
        config = self.read()
        return dict(config.installed_modules) if config else {}

    def record_install(self, name: str, module: InstalledModule) -> ScaffoldConfig:
        """写入/覆盖模块的安装记录"""
        config = self.ensure(module.framework)
        config.installed_modules[name] = module
        self.write(config)
        return config

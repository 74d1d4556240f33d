"""集中配置管理

替代各模块散落的常量（注册表地址、临时目录名、配置文件名等），
提供统一的配置入口。支持从 YAML 文件加载 + 环境变量覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from create_xrp.utils.file_io import load_yaml

logger = logging.getLogger(__name__)

REGISTRY_URL_ENV = "SCAFFOLD_XRP_REGISTRY_URL"
CONFIG_PATH_ENV = "CREATE_XRP_CONFIG"

DEFAULT_REGISTRY_URL = (
    "https://raw.githubusercontent.com/XRPL-Commons/"
    "scaffold-xrp-registry/main/registry.json"
)
DEFAULT_TEMPLATE_REPO = "https://github.com/XRPL-Commons/scaffold-xrp.git"


@dataclass
class Config:
    """工具全局配置"""

    # 远程资源
    registry_url: str = DEFAULT_REGISTRY_URL
    registry_timeout: int = 15  # 秒
    template_repo: str = DEFAULT_TEMPLATE_REPO

    # 项目内文件/目录名
    temp_dir_name: str = ".scaffold-xrp-temp"
    config_file_name: str = ".scaffold-xrp.json"
    manifest_file_name: str = "module.json"
    default_post_install: str = "install.js"

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @property
    def effective_registry_url(self) -> str:
        """注册表地址，环境变量优先于配置文件"""
        return os.getenv(REGISTRY_URL_ENV) or self.registry_url

    @classmethod
    def from_file(cls, path: str) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        from dataclasses import asdict
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "") -> Config:
    """从文件初始化全局配置，path 为空时读取 CREATE_XRP_CONFIG"""
    global _current  # noqa: PLW0603
    path = path or os.getenv(CONFIG_PATH_ENV, "")
    _current = Config.from_file(path) if path else Config()
    if path:
        logger.info("配置已加载: %s", path)
    return _current

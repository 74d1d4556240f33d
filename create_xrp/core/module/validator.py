"""模块校验器

- load_manifest: 读取并类型校验 module.json
- check_compatibility: 框架兼容性检查，必须在任何文件复制之前执行
"""

from __future__ import annotations

import logging
from pathlib import Path

from create_xrp.core.exceptions import IncompatibleModuleError, ManifestError
from create_xrp.core.models import Framework
from create_xrp.core.module.models import ModuleConfig
from create_xrp.utils.file_io import load_json

logger = logging.getLogger(__name__)

MANIFEST_FILE = "module.json"


def load_manifest(module_dir: Path, file_name: str = MANIFEST_FILE) -> ModuleConfig:
    """读取模块清单

    Raises:
        ManifestError: 清单缺失、无法解析或字段类型不符
    """
    path = module_dir / file_name
    if not path.is_file():
        raise ManifestError(f"模块缺少 {file_name} 配置文件 (missing {file_name})")
    try:
        data = load_json(path)
    except (OSError, ValueError) as e:
        raise ManifestError(f"模块清单无效: {file_name} 无法解析 ({e})") from e
    manifest = ModuleConfig.from_dict(data)
    logger.info("模块清单: %s v%s", manifest.name, manifest.version)
    return manifest


def check_compatibility(manifest: ModuleConfig, framework: Framework) -> None:
    """声明了 compatibility.frameworks 且不含当前框架时拒绝

    Raises:
        IncompatibleModuleError: 框架不兼容
    """
    allowed = manifest.frameworks
    if allowed is None or framework.value in allowed:
        return
    supported = ", ".join(allowed) or "无"
    raise IncompatibleModuleError(
        f"模块 {manifest.name} 不兼容 {framework.value}，支持的框架: {supported}"
    )

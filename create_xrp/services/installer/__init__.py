"""模块安装服务

- models.py: 请求/结果模型
- steps.py: 单模块安装的各步骤
- installer.py: 单模块编排 + 批量安装
- remover.py: 模块移除
"""

from create_xrp.services.installer.installer import ModuleInstaller
from create_xrp.services.installer.models import (
    BatchInstallResult,
    InstallRequest,
    InstallResult,
    RemoveResult,
)
from create_xrp.services.installer.remover import ModuleRemover
from create_xrp.services.installer.steps import InstallSteps

__all__ = [
    "ModuleInstaller",
    "ModuleRemover",
    "InstallSteps",
    "InstallRequest",
    "InstallResult",
    "BatchInstallResult",
    "RemoveResult",
]

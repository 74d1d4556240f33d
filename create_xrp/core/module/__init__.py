"""模块安装子系统 - 各步骤的独立组件

- models.py: 清单 / 注册表数据模型
- registry.py: 注册表获取（失败降级为空）
- resolver.py: 模块引用解析
- fetcher.py: 浅克隆
- validator.py: 清单校验与框架兼容性
- materializer.py: 文件落地
- dependencies.py: npm 依赖安装
- post_install.py: post-install 脚本
"""

from create_xrp.core.module.dependencies import DependencyInstaller
from create_xrp.core.module.fetcher import ModuleFetcher
from create_xrp.core.module.materializer import FileMaterializer
from create_xrp.core.module.models import ModuleConfig, Registry, RegistryEntry, ResolvedSource
from create_xrp.core.module.post_install import PostInstallRunner
from create_xrp.core.module.registry import RegistryClient
from create_xrp.core.module.resolver import SourceResolver
from create_xrp.core.module.validator import check_compatibility, load_manifest

__all__ = [
    "ModuleConfig",
    "Registry",
    "RegistryEntry",
    "ResolvedSource",
    "RegistryClient",
    "SourceResolver",
    "ModuleFetcher",
    "FileMaterializer",
    "DependencyInstaller",
    "PostInstallRunner",
    "check_compatibility",
    "load_manifest",
]

"""模块引用解析器

引用有两种形式:
- 直接地址: https:// / git@ / git:// / ssh:// 开头，名称从地址末段推导
- 注册表名: 在注册表 modules 中查找，名称以注册表键为准
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from create_xrp.core.exceptions import ModuleResolutionError
from create_xrp.core.module.models import Registry, ResolvedSource

if TYPE_CHECKING:
    from create_xrp.core.module.registry import RegistryClient

logger = logging.getLogger(__name__)

DIRECT_SOURCE_PREFIXES = ("https://", "git@", "git://", "ssh://")
MODULE_NAME_PREFIX = "scaffold-xrp-module-"


def is_direct_source(source: str) -> bool:
    return source.startswith(DIRECT_SOURCE_PREFIXES)


def module_name_from_url(url: str) -> str:
    """从仓库地址推导模块名

    取最后一段路径（scp 风格地址以 : 分隔），去掉 #ref 片段、.git 后缀
    以及 scaffold-xrp-module- 前缀:
        https://host/org/scaffold-xrp-module-foo.git -> foo
        git@host:org/bar.git#v2 -> bar
    """
    tail = url.split("#", 1)[0].rstrip("/")
    tail = tail.rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if tail.endswith(".git"):
        tail = tail[: -len(".git")]
    if tail.startswith(MODULE_NAME_PREFIX):
        tail = tail[len(MODULE_NAME_PREFIX):]
    return tail


class SourceResolver:
    """模块引用解析器 - 除注册表获取外不访问网络"""

    def __init__(self, registry_client: RegistryClient | None = None) -> None:
        self.registry_client = registry_client

    def resolve(self, source: str, registry: Registry | None = None) -> ResolvedSource:
        """解析模块引用

        registry 未提供且引用不是直接地址时，通过 registry_client 获取。

        Raises:
            ModuleResolutionError: 注册表中不存在该模块
        """
        if is_direct_source(source):
            resolved = ResolvedSource(url=source, name=module_name_from_url(source))
            logger.info("直接地址: %s -> %s", source, resolved.name)
            return resolved

        if registry is None:
            registry = self.registry_client.fetch() if self.registry_client else Registry.empty()

        entry = registry.modules.get(source)
        if entry is None:
            raise ModuleResolutionError(source)
        logger.info("注册表命中: %s -> %s", source, entry.repo)
        return ResolvedSource(url=entry.repo, name=source)

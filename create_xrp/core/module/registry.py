"""模块注册表客户端

职责:
- 从远程 URL 获取注册表 JSON 并解析为 Registry
- 任何网络、协议或解析错误都降级为空注册表，不向调用方抛出
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
from typing import Any, Callable

from create_xrp.core.exceptions import ValidationError
from create_xrp.core.module.models import Registry, RegistryEntry
from create_xrp.utils.net import http_get

logger = logging.getLogger(__name__)

HttpGetter = Callable[..., bytes]


def parse_registry(data: Any) -> Registry:
    """将注册表 JSON 解析为 Registry，缺少 repo 的条目跳过

    Raises:
        ValueError: 顶层结构不是对象或 modules 不是对象
    """
    if not isinstance(data, dict):
        raise ValueError("注册表顶层必须为对象")
    modules_raw = data.get("modules") or {}
    if not isinstance(modules_raw, dict):
        raise ValueError("注册表 modules 必须为对象")

    modules: dict[str, RegistryEntry] = {}
    for name, info in modules_raw.items():
        if not isinstance(info, dict) or not isinstance(info.get("repo"), str) or not info["repo"]:
            logger.warning("注册表条目缺少 repo，已跳过: %s", name)
            continue
        tags = info.get("tags") or []
        modules[name] = RegistryEntry(
            repo=info["repo"],
            description=str(info.get("description") or ""),
            author=str(info.get("author") or ""),
            tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        )
    return Registry(version=str(data.get("version") or "0.0.0"), modules=modules)


class RegistryClient:
    """注册表客户端 - 获取失败时返回空注册表"""

    def __init__(
        self,
        url: str,
        *,
        timeout: int = 15,
        http_getter: HttpGetter | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._get = http_getter or http_get

    def fetch(self, url: str = "") -> Registry:
        """获取注册表，url 为空时使用客户端默认地址"""
        url = url or self.url
        try:
            body = self._get(url, timeout=self.timeout)
            registry = parse_registry(json.loads(body))
        except (
            urllib.error.URLError, http.client.HTTPException,
            OSError, ValueError, ValidationError,
        ) as e:
            logger.warning("注册表获取失败，使用空注册表: %s (%s)", url, e)
            return Registry.empty()
        logger.info("注册表已加载: %d 个模块 (version=%s)", len(registry.modules), registry.version)
        return registry

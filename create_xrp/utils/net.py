"""网络工具 - URL 安全校验与 HTTP GET"""

from __future__ import annotations

import urllib.request
from urllib.parse import urlparse

from create_xrp.core.exceptions import ValidationError

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def http_get(url: str, *, timeout: int = 15) -> bytes:
    """GET 请求并返回响应体

    Raises:
        ValidationError: URL 协议不合法
        urllib.error.URLError / OSError: 网络或 HTTP 错误
    """
    validate_url_scheme(url, context="http get")
    req = urllib.request.Request(url, headers={"Accept": "application/json"})
    with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
        return resp.read()

"""安装/移除结果模型

硬失败以 success=False + error/error_code 返回；
软失败（依赖安装、post-install）记录在 warnings 中，不影响 success。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from create_xrp.core.models import Framework, PackageManager


@dataclass
class InstallRequest:
    """单模块安装请求"""

    source: str
    framework: Framework
    package_manager: PackageManager = PackageManager.NPM


@dataclass
class InstallResult:
    """单模块安装结果"""

    source: str
    success: bool = False
    module_name: str = ""
    version: str = ""
    url: str = ""
    error: str = ""
    error_code: str = ""
    warnings: list[str] = field(default_factory=list)
    steps: list[dict[str, str]] = field(default_factory=list)


@dataclass
class BatchInstallResult:
    """批量安装结果: installed 为模块名，failed 为原始引用"""

    installed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    results: list[InstallResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed


@dataclass
class RemoveResult:
    name: str
    success: bool = False
    error: str = ""
    error_code: str = ""
    removed_paths: list[str] = field(default_factory=list)

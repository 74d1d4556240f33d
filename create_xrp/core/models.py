"""核心数据模型 - 项目级实体

- Framework / PackageManager: 项目框架与包管理器枚举
- InstalledModule: 已安装模块记录
- ScaffoldConfig: 项目配置文件 .scaffold-xrp.json 的内存表示

模块清单与注册表模型见 create_xrp.core.module.models。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Framework(str, Enum):
    """项目前端框架，项目创建后不再改变"""

    NEXTJS = "nextjs"
    NUXT = "nuxt"

    @property
    def variant(self) -> str:
        """模块内框架专属子目录名"""
        return "react" if self is Framework.NEXTJS else "vue"


class PackageManager(str, Enum):
    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"

    def add_command(self, packages: list[str]) -> list[str]:
        """添加依赖包的命令行"""
        if self is PackageManager.NPM:
            return ["npm", "install", *packages]
        return [self.value, "add", *packages]

    def install_command(self) -> list[str]:
        """安装项目全部依赖的命令行"""
        if self is PackageManager.YARN:
            return ["yarn"]
        return [self.value, "install"]


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass
class InstalledModule:
    """已安装模块记录（安装成功时整体写入，重装时覆盖）"""

    version: str
    source: str
    framework: Framework
    installed_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> dict[str, str]:
        return {
            "version": self.version,
            "source": self.source,
            "installedAt": self.installed_at,
            "framework": self.framework.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_framework: Framework) -> InstalledModule:
        raw_fw = data.get("framework")
        try:
            framework = Framework(raw_fw) if raw_fw else default_framework
        except ValueError:
            framework = default_framework
        return cls(
            version=str(data.get("version", "")),
            source=str(data.get("source", "")),
            framework=framework,
            installed_at=str(data.get("installedAt", "")),
        )


@dataclass
class ScaffoldConfig:
    """项目配置: 框架 + 已安装模块表"""

    framework: Framework
    installed_modules: dict[str, InstalledModule] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "framework": self.framework.value,
            "installedModules": {
                name: m.to_dict() for name, m in self.installed_modules.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScaffoldConfig:
        """从 JSON 字典构造，framework 缺失或非法时抛 ValueError"""
        framework = Framework(data["framework"])
        modules = data.get("installedModules") or {}
        if not isinstance(modules, dict):
            raise ValueError("installedModules 必须为对象")
        return cls(
            framework=framework,
            installed_modules={
                name: InstalledModule.from_dict(info, framework)
                for name, info in modules.items()
                if isinstance(info, dict)
            },
        )

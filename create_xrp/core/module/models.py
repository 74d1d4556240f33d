"""模块数据模型

数据类:
- ModuleConfig: 模块作者声明的 module.json 清单（加载时做类型校验）
- RegistryEntry / Registry: 远程注册表
- ResolvedSource: 模块引用解析结果
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any

from create_xrp.core.exceptions import ManifestError

# 模块名会作为目录名使用，只允许单段安全路径
SAFE_MODULE_NAME_RE = re.compile(r"^[A-Za-z0-9@][A-Za-z0-9_.@\-]*$")

FILE_CATEGORIES = ("components", "hooks", "composables", "lib", "contracts", "pages", "data")


def _str_list(data: dict[str, Any], key: str, where: str, problems: list[str]) -> list[str] | None:
    """读取可选的字符串列表字段，类型不符时记录问题"""
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        problems.append(f"{where}.{key} 必须为字符串数组")
        return None
    return list(value)


def _section(data: dict[str, Any], key: str, problems: list[str]) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        problems.append(f"{key} 必须为对象")
        return {}
    return value


@dataclass
class ModuleFiles:
    """files 段: 每个分类独立可选，None 表示未声明（空列表也算已声明）"""

    components: list[str] | None = None
    hooks: list[str] | None = None
    composables: list[str] | None = None
    lib: list[str] | None = None
    contracts: list[str] | None = None
    pages: list[str] | None = None
    data: list[str] | None = None

    def declares(self, category: str) -> bool:
        return getattr(self, category) is not None

    def to_dict(self) -> dict[str, list[str]]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self) if getattr(self, f.name) is not None
        }


@dataclass
class ModuleDependencies:
    npm: list[str] = field(default_factory=list)
    modules: list[str] = field(default_factory=list)


@dataclass
class ModuleConfig:
    """模块清单 module.json"""

    name: str
    version: str
    description: str = ""
    author: str = ""
    frameworks: list[str] | None = None  # compatibility.frameworks，None 表示不限
    scaffold_version: str = ""           # compatibility["scaffold-xrp"]
    files: ModuleFiles = field(default_factory=ModuleFiles)
    dependencies: ModuleDependencies = field(default_factory=ModuleDependencies)
    post_install: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ModuleConfig:
        """校验并构造清单，任何字段类型不符都整体拒绝

        Raises:
            ManifestError: 清单无效，details 列出全部问题
        """
        if not isinstance(data, dict):
            raise ManifestError("模块清单无效: module.json 顶层必须为对象")

        problems: list[str] = []
        for key in ("name", "version"):
            if not isinstance(data.get(key), str) or not data[key]:
                problems.append(f"{key} 为必填字符串")
        name = data.get("name")
        if isinstance(name, str) and name and not SAFE_MODULE_NAME_RE.match(name):
            problems.append(f"name 含非法字符: {name}")
        for key in ("description", "author", "postInstall"):
            if key in data and data[key] is not None and not isinstance(data[key], str):
                problems.append(f"{key} 必须为字符串")

        compat = _section(data, "compatibility", problems)
        frameworks = _str_list(compat, "frameworks", "compatibility", problems)
        scaffold_version = compat.get("scaffold-xrp", "")
        if not isinstance(scaffold_version, str):
            problems.append("compatibility.scaffold-xrp 必须为字符串")

        files_raw = _section(data, "files", problems)
        files = ModuleFiles(**{
            cat: _str_list(files_raw, cat, "files", problems) for cat in FILE_CATEGORIES
        })

        deps_raw = _section(data, "dependencies", problems)
        deps = ModuleDependencies(
            npm=_str_list(deps_raw, "npm", "dependencies", problems) or [],
            modules=_str_list(deps_raw, "modules", "dependencies", problems) or [],
        )

        if problems:
            raise ManifestError(f"模块清单无效: {problems[0]}", details=problems)

        return cls(
            name=data["name"],
            version=data["version"],
            description=data.get("description") or "",
            author=data.get("author") or "",
            frameworks=frameworks,
            scaffold_version=scaffold_version if isinstance(scaffold_version, str) else "",
            files=files,
            dependencies=deps,
            post_install=data.get("postInstall") or "",
        )


@dataclass
class RegistryEntry:
    """注册表中的单个模块"""

    repo: str
    description: str = ""
    author: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class Registry:
    """远程模块注册表（每次调用重新获取，不持久化）"""

    version: str = "0.0.0"
    modules: dict[str, RegistryEntry] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Registry:
        return cls()


@dataclass
class ResolvedSource:
    """模块引用解析结果: 可克隆地址 + 规范模块名"""

    url: str
    name: str

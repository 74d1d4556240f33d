"""项目结构探测与目录布局

- ProjectLayout: 模块落地的固定目录（不可配置，按项目根计算）
- detect_framework / detect_package_manager: 从配置或特征文件推断
- is_scaffold_project: 判断目录是否为 scaffold-xrp 项目
- validate_project_name: npm 包名规则校验
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from create_xrp.core.config_store import ScaffoldConfigStore
from create_xrp.core.exceptions import ValidationError
from create_xrp.core.models import Framework, PackageManager

logger = logging.getLogger(__name__)

_NPM_NAME_RE = re.compile(r"^(?:@[a-z0-9-~][a-z0-9-._~]*/)?[a-z0-9-~][a-z0-9-._~]*$")
_RESERVED_NAMES = frozenset(("node_modules", "favicon.ico"))
_MAX_NAME_LENGTH = 214


@dataclass(frozen=True)
class ProjectLayout:
    """项目内固定目录布局"""

    root: Path

    @property
    def web_dir(self) -> Path:
        return self.root / "apps" / "web"

    @property
    def bedrock_dir(self) -> Path:
        return self.root / "packages" / "bedrock"

    def web_module_dir(self, name: str) -> Path:
        """模块 UI 源码目录: apps/web/modules/<name>"""
        return self.web_dir / "modules" / name

    def bedrock_module_dir(self, name: str) -> Path:
        """模块合约源码目录: packages/bedrock/modules/<name>"""
        return self.bedrock_dir / "modules" / name


def detect_framework(store: ScaffoldConfigStore) -> Framework | None:
    """推断项目框架: 优先读项目配置，其次看 apps/web 下的框架配置文件"""
    config = store.read()
    if config is not None:
        return config.framework

    web_dir = ProjectLayout(store.project_dir).web_dir
    if (web_dir / "nuxt.config.ts").exists():
        return Framework.NUXT
    if (web_dir / "next.config.js").exists() or (web_dir / "next.config.mjs").exists():
        return Framework.NEXTJS
    return None


def detect_package_manager(project_dir: str | Path) -> PackageManager:
    """按 lock 文件推断包管理器，默认 npm"""
    root = Path(project_dir)
    if (root / "pnpm-lock.yaml").exists():
        return PackageManager.PNPM
    if (root / "yarn.lock").exists():
        return PackageManager.YARN
    return PackageManager.NPM


def is_scaffold_project(store: ScaffoldConfigStore) -> bool:
    """存在项目配置文件，或具备 apps/web + packages/bedrock + turbo.json 典型结构"""
    if store.exists():
        return True
    layout = ProjectLayout(store.project_dir)
    return (
        layout.web_dir.exists()
        and layout.bedrock_dir.exists()
        and (layout.root / "turbo.json").exists()
    )


def validate_project_name(name: str) -> None:
    """按 npm 新包命名规则校验项目名

    Raises:
        ValidationError: 名称不合法，details 列出全部问题
    """
    problems: list[str] = []
    if not name:
        problems.append("名称不能为空")
    else:
        if name != name.strip():
            problems.append("名称不能包含首尾空白")
        if len(name) > _MAX_NAME_LENGTH:
            problems.append(f"名称长度不能超过 {_MAX_NAME_LENGTH}")
        if name.startswith((".", "_")):
            problems.append("名称不能以 . 或 _ 开头")
        if name.lower() != name:
            problems.append("名称不能包含大写字母")
        if name.lower() in _RESERVED_NAMES:
            problems.append(f"{name} 是保留名称")
        if not _NPM_NAME_RE.match(name.strip()):
            problems.append("名称只能包含小写字母、数字、- . _ ~")
    if problems:
        raise ValidationError(f"项目名不合法: {problems[0]}", details=problems)

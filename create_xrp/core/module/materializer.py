"""模块文件落地器

按项目框架把模块中相关的文件分类复制到项目内固定目录:

  分类         来源                        目标
  components   components/<react|vue>      apps/web/modules/<name>/components
  hooks        hooks          (仅 nextjs)  apps/web/modules/<name>/hooks
  composables  composables    (仅 nuxt)    apps/web/modules/<name>/composables
  lib          lib                         apps/web/modules/<name>/lib
  pages        pages/<react|vue>           apps/web/modules/<name>/pages
  data         data                        apps/web/modules/<name>/data
  contracts    contracts                   packages/bedrock/modules/<name>

每个分类仅在清单 files 段声明时处理，来源目录不存在则跳过；
已复制的分类整体替换目标目录。module.json 总是复制到模块 UI 目录。
复制不是事务性的: 中途失败时已复制的分类保持原样。
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from create_xrp.core.exceptions import MaterializeError
from create_xrp.core.models import Framework
from create_xrp.core.module.models import ModuleConfig
from create_xrp.core.module.validator import MANIFEST_FILE
from create_xrp.core.project import ProjectLayout
from create_xrp.utils.fs import replace_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryRule:
    """单个文件分类的复制规则"""

    category: str
    per_framework: bool = False           # 来源为 <category>/<react|vue>
    only_for: Framework | None = None     # 仅对该框架复制
    to_bedrock: bool = False              # 目标为 bedrock 模块目录


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("components", per_framework=True),
    CategoryRule("hooks", only_for=Framework.NEXTJS),
    CategoryRule("composables", only_for=Framework.NUXT),
    CategoryRule("lib"),
    CategoryRule("pages", per_framework=True),
    CategoryRule("data"),
    CategoryRule("contracts", to_bedrock=True),
)


class FileMaterializer:
    """模块文件落地器"""

    def __init__(self, manifest_file: str = MANIFEST_FILE) -> None:
        self.manifest_file = manifest_file

    def materialize(
        self,
        module_dir: Path,
        project_dir: Path,
        manifest: ModuleConfig,
        framework: Framework,
    ) -> list[str]:
        """复制模块文件，返回实际复制的分类名

        Raises:
            MaterializeError: 复制失败（如权限不足），不回滚
        """
        layout = ProjectLayout(project_dir)
        web_dest = layout.web_module_dir(manifest.name)
        copied: list[str] = []
        try:
            web_dest.mkdir(parents=True, exist_ok=True)
            for rule in CATEGORY_RULES:
                src = self._source_for(rule, module_dir, manifest, framework)
                if src is None:
                    continue
                if rule.to_bedrock:
                    dest = layout.bedrock_module_dir(manifest.name)
                else:
                    dest = web_dest / rule.category
                replace_tree(src, dest)
                copied.append(rule.category)

            manifest_src = module_dir / self.manifest_file
            if manifest_src.is_file():
                shutil.copy2(manifest_src, web_dest / self.manifest_file)
        except OSError as e:
            raise MaterializeError(
                f"模块文件复制失败: {manifest.name} ({e})，已复制: {copied or '无'}"
            ) from e

        logger.info("模块文件已复制: %s [%s]", manifest.name, ", ".join(copied))
        return copied

    @staticmethod
    def _source_for(
        rule: CategoryRule, module_dir: Path,
        manifest: ModuleConfig, framework: Framework,
    ) -> Path | None:
        """计算分类的来源目录，不需要复制时返回 None"""
        if not manifest.files.declares(rule.category):
            return None
        if rule.only_for is not None and rule.only_for is not framework:
            return None
        src = module_dir / rule.category
        if rule.per_framework:
            src = src / framework.variant
        if not src.is_dir():
            logger.debug("  来源目录不存在，跳过 %s: %s", rule.category, src)
            return None
        return src

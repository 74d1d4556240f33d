"""安装步骤实现 - 线性流水线

步骤顺序（任一硬步骤失败即中止）:
1. resolve - 解析模块引用
2. clone - 浅克隆到临时目录
3. validate_manifest - 读取并校验 module.json
4. check_compatibility - 框架兼容性
5. copy_files - 文件落地
6. install_dependencies - npm 依赖（软失败）
7. run_post_install - post-install 脚本（软失败）
8. persist - 写入项目配置

硬步骤抛 ScaffoldError；软步骤只追加 warnings。
每个步骤向 result.steps 追加一条记录。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from create_xrp.core.exceptions import ConfigError, ModuleFetchError, ValidationError
from create_xrp.core.models import Framework, InstalledModule, PackageManager
from create_xrp.core.module.models import SAFE_MODULE_NAME_RE, ModuleConfig, Registry, ResolvedSource
from create_xrp.core.module.validator import check_compatibility, load_manifest

if TYPE_CHECKING:
    from create_xrp.core.config_store import ScaffoldConfigStore
    from create_xrp.core.module.dependencies import DependencyInstaller
    from create_xrp.core.module.fetcher import ModuleFetcher
    from create_xrp.core.module.materializer import FileMaterializer
    from create_xrp.core.module.post_install import PostInstallRunner
    from create_xrp.core.module.resolver import SourceResolver
    from create_xrp.services.installer.models import InstallResult

logger = logging.getLogger(__name__)


class InstallSteps:
    """安装步骤集合"""

    def __init__(
        self,
        resolver: SourceResolver,
        fetcher: ModuleFetcher,
        materializer: FileMaterializer,
        dependency_installer: DependencyInstaller,
        post_install: PostInstallRunner,
        manifest_file: str = "module.json",
    ) -> None:
        self.resolver = resolver
        self.fetcher = fetcher
        self.materializer = materializer
        self.dependency_installer = dependency_installer
        self.post_install = post_install
        self.manifest_file = manifest_file

    def resolve(
        self, source: str, registry: Registry | None, result: InstallResult,
    ) -> ResolvedSource:
        """步骤1: 模块引用 -> 仓库地址 + 模块名"""
        resolved = self.resolver.resolve(source, registry)
        if not SAFE_MODULE_NAME_RE.match(resolved.name):
            raise ValidationError(f"无法从地址推导有效的模块名: {source}")
        result.url = resolved.url
        result.module_name = resolved.name
        result.steps.append({"step": "resolve", "status": "done", "url": resolved.url})
        logger.info("[Step 1] 解析完成: %s -> %s", source, resolved.url)
        return resolved

    def clone(self, resolved: ResolvedSource, module_dir: Path, result: InstallResult) -> None:
        """步骤2: 浅克隆"""
        if not self.fetcher.fetch(resolved.url, module_dir):
            raise ModuleFetchError(resolved.url)
        result.steps.append({"step": "clone", "status": "done"})
        logger.info("[Step 2] 克隆完成: %s", module_dir)

    def validate_manifest(self, module_dir: Path, result: InstallResult) -> ModuleConfig:
        """步骤3: 读取模块清单"""
        manifest = load_manifest(module_dir, self.manifest_file)
        result.module_name = manifest.name
        result.version = manifest.version
        result.steps.append({"step": "validate_manifest", "status": "done"})
        return manifest

    def check_compatibility(
        self, manifest: ModuleConfig, framework: Framework, result: InstallResult,
    ) -> None:
        """步骤4: 框架兼容性（在任何副作用之前）"""
        check_compatibility(manifest, framework)
        result.steps.append({"step": "check_compatibility", "status": "done"})

    def copy_files(
        self, module_dir: Path, project_dir: Path,
        manifest: ModuleConfig, framework: Framework, result: InstallResult,
    ) -> None:
        """步骤5: 文件落地"""
        copied = self.materializer.materialize(module_dir, project_dir, manifest, framework)
        result.steps.append({
            "step": "copy_files", "status": "done", "categories": ",".join(copied),
        })
        logger.info("[Step 5] 文件落地完成: %s", copied)

    def install_dependencies(
        self, project_dir: Path, manifest: ModuleConfig,
        package_manager: PackageManager, result: InstallResult,
    ) -> None:
        """步骤6: npm 依赖（软失败）"""
        packages = manifest.dependencies.npm
        if not packages:
            result.steps.append({"step": "install_dependencies", "status": "skipped"})
            return
        if self.dependency_installer.install(project_dir, packages, package_manager):
            result.steps.append({"step": "install_dependencies", "status": "done"})
            return
        msg = f"部分依赖可能未安装: {' '.join(packages)}"
        result.warnings.append(msg)
        result.steps.append({"step": "install_dependencies", "status": "warning"})
        logger.warning("[Step 6] %s", msg)

    def run_post_install(
        self, module_dir: Path, project_dir: Path,
        manifest: ModuleConfig, framework: Framework, result: InstallResult,
    ) -> None:
        """步骤7: post-install 脚本（软失败）"""
        if self.post_install.run(module_dir, project_dir, manifest, framework):
            result.steps.append({"step": "run_post_install", "status": "done"})
            return
        msg = f"post-install 脚本失败: {manifest.name}"
        result.warnings.append(msg)
        result.steps.append({"step": "run_post_install", "status": "warning"})
        logger.warning("[Step 7] %s", msg)

    def persist(
        self, store: ScaffoldConfigStore, manifest: ModuleConfig,
        resolved: ResolvedSource, framework: Framework, result: InstallResult,
    ) -> None:
        """步骤8: 写入/覆盖安装记录"""
        record = InstalledModule(
            version=manifest.version, source=resolved.url, framework=framework,
        )
        try:
            store.record_install(manifest.name, record)
        except OSError as e:
            raise ConfigError(f"项目配置写入失败: {store.path} ({e})") from e
        result.steps.append({"step": "persist", "status": "done"})
        logger.info("[Step 8] 安装记录已写入: %s v%s", manifest.name, manifest.version)

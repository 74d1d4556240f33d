"""模块安装编排器 - 单模块流水线 + 批量安装

单模块:
  Resolve -> Clone -> ValidateManifest -> CheckCompatibility -> CopyFiles
  -> InstallDependencies(软) -> RunPostInstall(软) -> PersistConfig -> Cleanup

- 硬步骤失败立即中止，返回结构化失败结果，不向调用方抛异常
- 无论成功失败，临时根目录 <project>/.scaffold-xrp-temp 都会被删除
- 重复安装同名模块会完整重跑流水线并覆盖文件与记录（是否确认由调用方负责）

批量: 顺序执行（临时目录与包管理器命令都不能并发），单个失败不中止。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from create_xrp.core.exceptions import ScaffoldError
from create_xrp.core.models import Framework, PackageManager
from create_xrp.core.module.resolver import is_direct_source
from create_xrp.services.installer.models import (
    BatchInstallResult,
    InstallRequest,
    InstallResult,
)
from create_xrp.utils.fs import remove_tree

if TYPE_CHECKING:
    from create_xrp.core.config_store import ScaffoldConfigStore
    from create_xrp.core.module.models import Registry
    from create_xrp.core.module.registry import RegistryClient
    from create_xrp.services.installer.steps import InstallSteps

logger = logging.getLogger(__name__)

DEFAULT_TEMP_DIR = ".scaffold-xrp-temp"


class ModuleInstaller:
    """模块安装编排器"""

    def __init__(
        self,
        steps: InstallSteps,
        registry_client: RegistryClient | None = None,
        temp_dir_name: str = DEFAULT_TEMP_DIR,
    ) -> None:
        self.steps = steps
        self.registry_client = registry_client
        self.temp_dir_name = temp_dir_name

    def scratch_root(self, store: ScaffoldConfigStore) -> Path:
        return store.project_dir / self.temp_dir_name

    def install(
        self,
        store: ScaffoldConfigStore,
        request: InstallRequest,
        registry: Registry | None = None,
    ) -> InstallResult:
        """安装单个模块到 store 所属项目"""
        result = InstallResult(source=request.source)
        project_dir = store.project_dir
        scratch_root = self.scratch_root(store)
        s = self.steps

        try:
            resolved = s.resolve(request.source, registry, result)
            module_dir = scratch_root / resolved.name
            s.clone(resolved, module_dir, result)
            manifest = s.validate_manifest(module_dir, result)
            s.check_compatibility(manifest, request.framework, result)
            s.copy_files(module_dir, project_dir, manifest, request.framework, result)
            s.install_dependencies(project_dir, manifest, request.package_manager, result)
            s.run_post_install(module_dir, project_dir, manifest, request.framework, result)
            s.persist(store, manifest, resolved, request.framework, result)
            result.success = True
        except ScaffoldError as e:
            self._fail(result, str(e), e.code)
        except OSError as e:
            self._fail(result, f"文件系统错误: {e}", "IO_ERROR")
        finally:
            remove_tree(scratch_root)
            result.steps.append({"step": "cleanup", "status": "done"})

        if result.success:
            logger.info(
                "模块安装完成: %s v%s (%d 条警告)",
                result.module_name, result.version, len(result.warnings),
            )
        return result

    def install_many(
        self,
        store: ScaffoldConfigStore,
        sources: list[str],
        framework: Framework,
        package_manager: PackageManager = PackageManager.NPM,
    ) -> BatchInstallResult:
        """顺序安装多个模块，按结果划分 installed / failed"""
        batch = BatchInstallResult()
        registry = None
        if self.registry_client is not None and not all(is_direct_source(s) for s in sources):
            registry = self.registry_client.fetch()

        for source in sources:
            result = self.install(
                store,
                InstallRequest(source=source, framework=framework, package_manager=package_manager),
                registry=registry,
            )
            batch.results.append(result)
            if result.success and result.module_name:
                batch.installed.append(result.module_name)
            else:
                batch.failed.append(source)

        if batch.failed:
            logger.warning(
                "批量安装汇总: %d 成功, %d 失败 (%s)",
                len(batch.installed), len(batch.failed), ", ".join(batch.failed),
            )
        return batch

    @staticmethod
    def _fail(result: InstallResult, message: str, code: str) -> None:
        result.success = False
        result.error = message
        result.error_code = code
        result.steps.append({"step": "abort", "status": "error", "detail": message})
        logger.error("模块安装失败 %s: %s", result.source, message)

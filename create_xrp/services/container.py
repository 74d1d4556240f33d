"""服务容器 - 统一依赖注入，消除各命令里的裸构造

安装链路上的组件都通过容器获取，同一容器内的实例共享
（同一个命令执行器、同一个注册表客户端）。

依赖关系图（→ 表示依赖）:
  installer  → install_steps → resolver → registry
                             → fetcher / dependencies / post_install → executor
  scaffolder → installer, executor

用法:
    container = ServiceContainer()
    result = container.installer.install(store, request)

    # 测试中注入假执行器
    container = ServiceContainer(config=cfg, executor=FakeExecutor())

    # 全局单例（CLI 共享）
    from create_xrp.services.container import get_container
    svc = get_container().remover
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from create_xrp.core.config import Config
    from create_xrp.core.config_store import ScaffoldConfigStore
    from create_xrp.core.module import (
        DependencyInstaller,
        FileMaterializer,
        ModuleFetcher,
        PostInstallRunner,
        RegistryClient,
        SourceResolver,
    )
    from create_xrp.core.module.registry import HttpGetter
    from create_xrp.services.installer import InstallSteps, ModuleInstaller, ModuleRemover
    from create_xrp.services.scaffold_service import ProjectScaffolder
    from create_xrp.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器 - 每个实例持有一组共享的组件

    接受可选 Config / 执行器 / HTTP 获取函数，便于测试替换外部协作方。
    """

    def __init__(
        self,
        config: Config | None = None,
        executor: CommandExecutor | None = None,
        http_getter: HttpGetter | None = None,
    ) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from create_xrp.core.config import get_config
            config = get_config()
        if executor is None:
            from create_xrp.utils.shell import get_executor
            executor = get_executor()
        self._config = config
        self._executor = executor
        self._http_getter = http_getter

    @property
    def config(self) -> Config:
        return self._config

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def store(self, project_dir: str | Path) -> ScaffoldConfigStore:
        """项目配置存储（每个项目目录一个，不缓存）"""
        from create_xrp.core.config_store import ScaffoldConfigStore
        return ScaffoldConfigStore(project_dir, self._config.config_file_name)

    # ---- 安装组件 ----

    @property
    def registry(self) -> RegistryClient:
        if "registry" not in self._instances:
            from create_xrp.core.module import RegistryClient
            self._instances["registry"] = RegistryClient(
                self._config.effective_registry_url,
                timeout=self._config.registry_timeout,
                http_getter=self._http_getter,
            )
        return self._instances["registry"]  # type: ignore[return-value]

    @property
    def resolver(self) -> SourceResolver:
        if "resolver" not in self._instances:
            from create_xrp.core.module import SourceResolver
            self._instances["resolver"] = SourceResolver(self.registry)
        return self._instances["resolver"]  # type: ignore[return-value]

    @property
    def fetcher(self) -> ModuleFetcher:
        if "fetcher" not in self._instances:
            from create_xrp.core.module import ModuleFetcher
            self._instances["fetcher"] = ModuleFetcher(self._executor)
        return self._instances["fetcher"]  # type: ignore[return-value]

    @property
    def materializer(self) -> FileMaterializer:
        if "materializer" not in self._instances:
            from create_xrp.core.module import FileMaterializer
            self._instances["materializer"] = FileMaterializer(
                self._config.manifest_file_name,
            )
        return self._instances["materializer"]  # type: ignore[return-value]

    @property
    def dependencies(self) -> DependencyInstaller:
        if "dependencies" not in self._instances:
            from create_xrp.core.module import DependencyInstaller
            self._instances["dependencies"] = DependencyInstaller(self._executor)
        return self._instances["dependencies"]  # type: ignore[return-value]

    @property
    def post_install(self) -> PostInstallRunner:
        if "post_install" not in self._instances:
            from create_xrp.core.module import PostInstallRunner
            self._instances["post_install"] = PostInstallRunner(
                self._executor, self._config.default_post_install,
            )
        return self._instances["post_install"]  # type: ignore[return-value]

    # ---- 服务层 ----

    @property
    def install_steps(self) -> InstallSteps:
        if "install_steps" not in self._instances:
            from create_xrp.services.installer import InstallSteps
            self._instances["install_steps"] = InstallSteps(
                resolver=self.resolver,
                fetcher=self.fetcher,
                materializer=self.materializer,
                dependency_installer=self.dependencies,
                post_install=self.post_install,
                manifest_file=self._config.manifest_file_name,
            )
        return self._instances["install_steps"]  # type: ignore[return-value]

    @property
    def installer(self) -> ModuleInstaller:
        if "installer" not in self._instances:
            from create_xrp.services.installer import ModuleInstaller
            self._instances["installer"] = ModuleInstaller(
                self.install_steps,
                registry_client=self.registry,
                temp_dir_name=self._config.temp_dir_name,
            )
        return self._instances["installer"]  # type: ignore[return-value]

    @property
    def remover(self) -> ModuleRemover:
        if "remover" not in self._instances:
            from create_xrp.services.installer import ModuleRemover
            self._instances["remover"] = ModuleRemover()
        return self._instances["remover"]  # type: ignore[return-value]

    @property
    def scaffolder(self) -> ProjectScaffolder:
        if "scaffolder" not in self._instances:
            from create_xrp.services.scaffold_service import ProjectScaffolder
            self._instances["scaffolder"] = ProjectScaffolder(
                self.installer,
                template_repo=self._config.template_repo,
                executor=self._executor,
                config_file_name=self._config.config_file_name,
            )
        return self._instances["scaffolder"]  # type: ignore[return-value]


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def set_container(container: ServiceContainer) -> None:
    """替换全局容器（测试注入假协作方）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = container


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None

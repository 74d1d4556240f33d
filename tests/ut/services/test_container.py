"""ServiceContainer 单元测试"""

from __future__ import annotations

from pathlib import Path

import pytest

import create_xrp.core.config as cfgmod
from create_xrp.core.config import REGISTRY_URL_ENV, Config
from create_xrp.services.container import (
    ServiceContainer,
    get_container,
    reset_container,
    set_container,
)


class TestServiceContainer:
    def test_lazy_loading(self, executor) -> None:
        c = ServiceContainer(executor=executor)
        assert len(c._instances) == 0
        _ = c.installer
        assert {"installer", "install_steps", "resolver", "registry"} <= set(c._instances)

    def test_shared_instances(self, executor) -> None:
        c = ServiceContainer(executor=executor)
        assert c.installer is c.installer
        assert c.scaffolder.installer is c.installer
        assert c.install_steps.resolver.registry_client is c.registry
        assert c.installer.registry_client is c.registry

    def test_executor_injected_everywhere(self, executor) -> None:
        c = ServiceContainer(executor=executor)
        assert c.fetcher.executor is executor
        assert c.dependencies.executor is executor
        assert c.post_install.executor is executor
        assert c.scaffolder.executor is executor

    def test_config_propagates(self, executor) -> None:
        cfg = Config(
            registry_url="https://mirror/registry.json", registry_timeout=3,
            temp_dir_name=".tmp-xrp", config_file_name="xrp.json",
            manifest_file_name="xrp-module.json", default_post_install="setup.js",
            template_repo="https://mirror/template.git",
        )
        c = ServiceContainer(config=cfg, executor=executor)
        assert c.registry.url == "https://mirror/registry.json"
        assert c.registry.timeout == 3
        assert c.installer.temp_dir_name == ".tmp-xrp"
        assert c.store("/p").path == Path("/p/xrp.json")
        assert c.materializer.manifest_file == "xrp-module.json"
        assert c.install_steps.manifest_file == "xrp-module.json"
        assert c.post_install.default_script == "setup.js"
        assert c.scaffolder.template_repo == "https://mirror/template.git"

    def test_registry_url_env_override(self, executor, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(REGISTRY_URL_ENV, "https://env/registry.json")
        c = ServiceContainer(config=Config(registry_url="https://file/registry.json"), executor=executor)
        assert c.registry.url == "https://env/registry.json"

    def test_defaults_from_global_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        cfg = Config(temp_dir_name=".global-tmp")
        monkeypatch.setattr(cfgmod, "_current", cfg)
        assert ServiceContainer().config is cfg


class TestGlobalContainer:
    def test_singleton(self) -> None:
        assert get_container() is get_container()

    def test_set_and_reset(self, executor) -> None:
        c = ServiceContainer(executor=executor)
        set_container(c)
        assert get_container() is c
        reset_container()
        assert get_container() is not c

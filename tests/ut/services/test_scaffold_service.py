"""项目脚手架服务测试"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_xrp.core.config_store import ScaffoldConfigStore
from create_xrp.core.exceptions import ExecutionError, ValidationError
from create_xrp.core.models import Framework, PackageManager
from create_xrp.services.scaffold_service import INITIAL_COMMIT_MESSAGE, ScaffoldRequest


def _request(tmp_path: Path, **kw) -> ScaffoldRequest:
    return ScaffoldRequest(project_name=kw.pop("project_name", "my-app"), parent_dir=tmp_path / "out", **kw)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir()
    return d


class TestProjectScaffolder:
    def test_nextjs_project(self, container, executor, template, tmp_path: Path, out_dir: Path) -> None:
        report = container.scaffolder.create(_request(tmp_path))

        target = out_dir / "my-app"
        assert report.target_dir == target
        assert report.warnings == []
        assert not (target / ".git").exists()
        assert not (target / "packages/create-xrp").exists()
        assert not (target / "apps/web-nuxt").exists()
        assert (target / "apps/web/next.config.js").exists()
        assert json.loads((target / "package.json").read_text())["name"] == "my-app"

        cfg = ScaffoldConfigStore(target).read()
        assert cfg is not None and cfg.framework is Framework.NEXTJS
        assert cfg.installed_modules == {}

        assert ["pnpm", "install"] in executor.commands("pnpm")
        git = executor.commands("git")
        assert git[1:] == [["git", "init"], ["git", "add", "."], ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE]]

    def test_nuxt_project_swaps_web_app(self, container, template, tmp_path: Path, out_dir: Path) -> None:
        container.scaffolder.create(_request(tmp_path, framework=Framework.NUXT, package_manager=PackageManager.YARN))

        web = out_dir / "my-app/apps/web"
        assert (web / "nuxt.config.ts").exists()
        assert not (web / "next.config.js").exists()
        assert not (out_dir / "my-app/apps/web-nuxt").exists()
        assert json.loads((web / "package.json").read_text())["name"] == "web"
        assert ScaffoldConfigStore(out_dir / "my-app").read().framework is Framework.NUXT

    def test_with_modules(self, container, template, tmp_path: Path, out_dir: Path) -> None:
        report = container.scaffolder.create(_request(tmp_path, modules=["counter", "missing"]))

        assert report.modules is not None
        assert report.modules.installed == ["counter"]
        assert report.modules.failed == ["missing"]
        target = out_dir / "my-app"
        assert (target / "apps/web/modules/counter/components/Counter.tsx").exists()
        assert "counter" in ScaffoldConfigStore(target).installed_modules()
        assert not (target / ".scaffold-xrp-temp").exists()

    def test_existing_directory_rejected(self, container, template, tmp_path: Path, out_dir: Path) -> None:
        (out_dir / "my-app").mkdir()
        with pytest.raises(ValidationError, match="已存在"):
            container.scaffolder.create(_request(tmp_path))

    def test_invalid_name_rejected(self, container, executor, tmp_path: Path, out_dir: Path) -> None:
        with pytest.raises(ValidationError, match="项目名不合法"):
            container.scaffolder.create(_request(tmp_path, project_name="My App"))
        assert executor.calls == []

    def test_template_clone_failure_aborts(self, container, executor, tmp_path: Path, out_dir: Path) -> None:
        with pytest.raises(ExecutionError, match="克隆模板失败"):
            container.scaffolder.create(_request(tmp_path))
        assert not (out_dir / "my-app").exists()

    def test_soft_failures_become_warnings(self, container, executor, template, tmp_path: Path, out_dir: Path) -> None:
        executor.fail_prefixes["pnpm install"] = 1
        executor.fail_prefixes["git commit"] = 1
        report = container.scaffolder.create(_request(tmp_path))

        assert len(report.warnings) == 2
        assert "pnpm install" in report.warnings[0]
        assert ScaffoldConfigStore(out_dir / "my-app").exists()

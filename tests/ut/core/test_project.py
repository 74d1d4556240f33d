"""项目探测与命名校验测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from create_xrp.core.config_store import ScaffoldConfigStore
from create_xrp.core.exceptions import ValidationError
from create_xrp.core.models import Framework, PackageManager
from create_xrp.core.project import (
    ProjectLayout,
    detect_framework,
    detect_package_manager,
    is_scaffold_project,
    validate_project_name,
)


class TestProjectLayout:
    def test_paths(self, tmp_path: Path) -> None:
        layout = ProjectLayout(tmp_path)
        assert layout.web_module_dir("counter") == tmp_path / "apps" / "web" / "modules" / "counter"
        assert layout.bedrock_module_dir("counter") == tmp_path / "packages" / "bedrock" / "modules" / "counter"


class TestDetectFramework:
    def test_config_wins(self, tmp_path: Path) -> None:
        store = ScaffoldConfigStore(tmp_path)
        store.init(Framework.NUXT)
        web = tmp_path / "apps" / "web"
        web.mkdir(parents=True)
        (web / "next.config.js").write_text("")
        assert detect_framework(store) is Framework.NUXT

    @pytest.mark.parametrize(("marker", "expected"), [
        ("nuxt.config.ts", Framework.NUXT),
        ("next.config.js", Framework.NEXTJS),
        ("next.config.mjs", Framework.NEXTJS),
    ])
    def test_marker_files(self, tmp_path: Path, marker: str, expected: Framework) -> None:
        web = tmp_path / "apps" / "web"
        web.mkdir(parents=True)
        (web / marker).write_text("")
        assert detect_framework(ScaffoldConfigStore(tmp_path)) is expected

    def test_unknown(self, tmp_path: Path) -> None:
        assert detect_framework(ScaffoldConfigStore(tmp_path)) is None


class TestDetectPackageManager:
    @pytest.mark.parametrize(("lock", "expected"), [
        ("pnpm-lock.yaml", PackageManager.PNPM),
        ("yarn.lock", PackageManager.YARN),
        ("package-lock.json", PackageManager.NPM),
    ])
    def test_lock_files(self, tmp_path: Path, lock: str, expected: PackageManager) -> None:
        (tmp_path / lock).write_text("")
        assert detect_package_manager(tmp_path) is expected

    def test_default_npm(self, tmp_path: Path) -> None:
        assert detect_package_manager(tmp_path) is PackageManager.NPM


class TestIsScaffoldProject:
    def test_config_file(self, tmp_path: Path) -> None:
        store = ScaffoldConfigStore(tmp_path)
        store.init(Framework.NEXTJS)
        assert is_scaffold_project(store)

    def test_monorepo_structure(self, tmp_path: Path) -> None:
        (tmp_path / "apps" / "web").mkdir(parents=True)
        (tmp_path / "packages" / "bedrock").mkdir(parents=True)
        (tmp_path / "turbo.json").write_text("{}")
        assert is_scaffold_project(ScaffoldConfigStore(tmp_path))

    def test_plain_directory(self, tmp_path: Path) -> None:
        (tmp_path / "apps" / "web").mkdir(parents=True)
        assert not is_scaffold_project(ScaffoldConfigStore(tmp_path))


class TestValidateProjectName:
    @pytest.mark.parametrize("name", ["my-xrp-app", "app2", "@scope/app", "a.b_c~d"])
    def test_valid(self, name: str) -> None:
        validate_project_name(name)

    @pytest.mark.parametrize(("name", "problem"), [
        ("", "不能为空"),
        ("MyApp", "大写"),
        (".hidden", "不能以"),
        ("_private", "不能以"),
        ("node_modules", "保留名称"),
        ("my app", "只能包含"),
        ("a" * 215, "长度"),
    ])
    def test_invalid(self, name: str, problem: str) -> None:
        with pytest.raises(ValidationError, match="项目名不合法") as exc:
            validate_project_name(name)
        assert any(problem in d for d in exc.value.details)

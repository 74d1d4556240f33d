"""模块清单加载、校验与框架兼容性测试"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_xrp.core.exceptions import IncompatibleModuleError, ManifestError
from create_xrp.core.models import Framework
from create_xrp.core.module.models import ModuleConfig
from create_xrp.core.module.validator import check_compatibility, load_manifest


class TestModuleConfigFromDict:
    def test_full(self) -> None:
        m = ModuleConfig.from_dict({
            "name": "nft",
            "version": "0.2.0",
            "description": "NFT 铸造",
            "author": "xrpl",
            "compatibility": {"scaffold-xrp": ">=0.1.0", "frameworks": ["nextjs", "nuxt"]},
            "files": {"components": ["Mint.tsx"], "lib": []},
            "dependencies": {"npm": ["xrpl@^4"], "modules": ["wallet"]},
            "postInstall": "scripts/setup.js",
        })
        assert m.frameworks == ["nextjs", "nuxt"]
        assert m.scaffold_version == ">=0.1.0"
        assert m.files.declares("components")
        assert m.files.declares("lib")
        assert not m.files.declares("hooks")
        assert m.dependencies.npm == ["xrpl@^4"]
        assert m.dependencies.modules == ["wallet"]
        assert m.post_install == "scripts/setup.js"

    def test_minimal_defaults(self) -> None:
        m = ModuleConfig.from_dict({"name": "a", "version": "1.0.0"})
        assert m.frameworks is None
        assert m.files.to_dict() == {}
        assert m.dependencies.npm == []
        assert m.post_install == ""

    @pytest.mark.parametrize("data", [
        {"version": "1.0.0"},
        {"name": "a"},
        {"name": "", "version": "1.0.0"},
        {"name": 3, "version": "1.0.0"},
    ])
    def test_required_fields(self, data: dict) -> None:
        with pytest.raises(ManifestError, match="必填"):
            ModuleConfig.from_dict(data)

    def test_unsafe_name_rejected(self) -> None:
        with pytest.raises(ManifestError, match="非法字符"):
            ModuleConfig.from_dict({"name": "../evil", "version": "1.0.0"})

    def test_wrong_types_collected(self) -> None:
        with pytest.raises(ManifestError) as exc:
            ModuleConfig.from_dict({
                "name": "a", "version": "1.0.0",
                "files": {"lib": "utils.ts"},
                "dependencies": {"npm": [1, 2]},
                "compatibility": {"frameworks": "nextjs"},
            })
        assert exc.value.code == "INVALID_MANIFEST"
        assert len(exc.value.details) == 3

    def test_not_an_object(self) -> None:
        with pytest.raises(ManifestError, match="顶层必须为对象"):
            ModuleConfig.from_dict(["name"])


class TestLoadManifest:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="missing module.json"):
            load_manifest(tmp_path)

    def test_unparsable(self, tmp_path: Path) -> None:
        (tmp_path / "module.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestError, match="无法解析"):
            load_manifest(tmp_path)

    def test_ok(self, tmp_path: Path) -> None:
        (tmp_path / "module.json").write_text(
            json.dumps({"name": "counter", "version": "1.0.0"}), encoding="utf-8",
        )
        m = load_manifest(tmp_path)
        assert (m.name, m.version) == ("counter", "1.0.0")


class TestCheckCompatibility:
    def test_unrestricted(self) -> None:
        m = ModuleConfig(name="a", version="1")
        check_compatibility(m, Framework.NUXT)

    def test_allowed(self) -> None:
        m = ModuleConfig(name="a", version="1", frameworks=["nextjs"])
        check_compatibility(m, Framework.NEXTJS)

    def test_rejected(self) -> None:
        m = ModuleConfig(name="a", version="1", frameworks=["nuxt"])
        with pytest.raises(IncompatibleModuleError, match="不兼容 nextjs，支持的框架: nuxt"):
            check_compatibility(m, Framework.NEXTJS)

    def test_empty_list_rejects_all(self) -> None:
        m = ModuleConfig(name="a", version="1", frameworks=[])
        with pytest.raises(IncompatibleModuleError):
            check_compatibility(m, Framework.NUXT)

"""测试公共夹具: 假命令执行器、模块仓库构造、项目目录"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Callable

import pytest

import create_xrp.core.config as cfgmod
from create_xrp.core.config import DEFAULT_TEMPLATE_REPO, Config
from create_xrp.core.config_store import ScaffoldConfigStore
from create_xrp.core.models import Framework
from create_xrp.services.container import ServiceContainer, reset_container
from create_xrp.utils.shell import CommandResult


class FakeExecutor:
    """记录所有命令的假执行器

    - git clone <url> <dest>: 从 repos[url] 复制模块目录到 dest，未登记的地址返回 128
    - fail_prefixes 中任一前缀匹配的命令返回对应退出码
    - missing_programs 中的程序模拟"无法启动"（抛 OSError）
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.repos: dict[str, Path] = {}
        self.fail_prefixes: dict[str, int] = {}
        self.missing_programs: set[str] = set()

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str | Path = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        args = cmd.split() if isinstance(cmd, str) else list(cmd)
        self.calls.append({"cmd": args, "cwd": Path(cwd), "env": env})
        if args[0] in self.missing_programs:
            raise FileNotFoundError(args[0])

        line = " ".join(args)
        for prefix, rc in self.fail_prefixes.items():
            if line.startswith(prefix):
                return CommandResult(returncode=rc, stdout="", stderr=f"{prefix} failed")

        if args[:2] == ["git", "clone"]:
            url, dest = args[-2], Path(args[-1])
            src = self.repos.get(url)
            if src is None:
                return CommandResult(returncode=128, stdout="", stderr="repository not found")
            shutil.copytree(src, dest)
        return CommandResult(returncode=0, stdout="", stderr="")

    def commands(self, program: str) -> list[list[str]]:
        return [c["cmd"] for c in self.calls if c["cmd"][0] == program]


def write_module(
    root: Path,
    manifest: dict[str, Any] | None,
    files: dict[str, str] | None = None,
) -> Path:
    """在 root 下构造模块仓库目录；manifest 为 None 时不写 module.json"""
    root.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        (root / "module.json").write_text(json.dumps(manifest), encoding="utf-8")
    for rel, content in (files or {}).items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    return root


def counter_manifest(**overrides: Any) -> dict[str, Any]:
    manifest: dict[str, Any] = {
        "name": "counter",
        "version": "1.0.0",
        "files": {"components": ["Counter.tsx"], "contracts": ["counter.rs"]},
        "compatibility": {"frameworks": ["nextjs"]},
    }
    manifest.update(overrides)
    return manifest


COUNTER_FILES = {
    "components/react/Counter.tsx": "export const Counter = () => null\n",
    "components/vue/Counter.vue": "<template><div/></template>\n",
    "contracts/counter.rs": "// counter\n",
}


def registry_getter(payload: Any) -> Callable[..., bytes]:
    """返回固定内容的 HTTP 获取函数，payload 为异常时抛出"""
    def _get(url: str, *, timeout: int = 15) -> bytes:
        if isinstance(payload, BaseException):
            raise payload
        return json.dumps(payload).encode("utf-8")
    return _get


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """每个测试使用默认配置与干净的全局容器"""
    monkeypatch.setattr(cfgmod, "_current", Config())
    monkeypatch.delenv(cfgmod.REGISTRY_URL_ENV, raising=False)
    reset_container()
    yield
    reset_container()


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def project(tmp_path: Path) -> ScaffoldConfigStore:
    """已初始化的 nextjs 项目"""
    root = tmp_path / "app"
    (root / "apps" / "web").mkdir(parents=True)
    (root / "packages" / "bedrock").mkdir(parents=True)
    store = ScaffoldConfigStore(root)
    store.init(Framework.NEXTJS)
    return store


@pytest.fixture
def counter_repo(tmp_path: Path, executor: FakeExecutor) -> str:
    """登记 counter 模块仓库，返回其地址"""
    url = "https://x/counter.git"
    executor.repos[url] = write_module(tmp_path / "repos" / "counter", counter_manifest(), COUNTER_FILES)
    return url


@pytest.fixture
def container(executor: FakeExecutor, counter_repo: str) -> ServiceContainer:
    """注入假执行器和固定注册表 {counter: https://x/counter.git} 的容器"""
    registry = {"version": "1.0.0", "modules": {"counter": {"repo": counter_repo, "description": "计数器"}}}
    return ServiceContainer(
        config=Config(), executor=executor, http_getter=registry_getter(registry),
    )


@pytest.fixture
def make_module(tmp_path: Path) -> Callable[..., Path]:
    """模块仓库构造工厂: make_module(name, manifest, files=None)"""
    def _make(name: str, manifest: dict[str, Any] | None, files: dict[str, str] | None = None) -> Path:
        return write_module(tmp_path / "repos" / name, manifest, files)
    return _make


@pytest.fixture
def http_payload() -> Callable[[Any], Callable[..., bytes]]:
    """HTTP 获取函数工厂: http_payload(registry_dict 或异常)"""
    return registry_getter


def _pkg(name: str) -> str:
    return json.dumps({"name": name, "private": True})


@pytest.fixture
def template(executor: FakeExecutor, make_module: Callable[..., Path]) -> Path:
    """登记默认模板仓库: 两个 web 应用 + CLI 包 + .git"""
    root = make_module("template", None, {
        "package.json": _pkg("scaffold-xrp"),
        "turbo.json": "{}",
        ".git/HEAD": "ref: refs/heads/main\n",
        "apps/web/package.json": _pkg("web"),
        "apps/web/next.config.js": "",
        "apps/web-nuxt/package.json": _pkg("web-nuxt"),
        "apps/web-nuxt/nuxt.config.ts": "",
        "packages/bedrock/Cargo.toml": "",
        "packages/create-xrp/package.json": _pkg("create-xrp"),
    })
    executor.repos[DEFAULT_TEMPLATE_REPO] = root
    return root

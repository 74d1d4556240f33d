"""shell.py 执行器与 run_cmd 单元测试"""

from __future__ import annotations

import os

import pytest

from create_xrp.core.exceptions import ExecutionError
from create_xrp.utils.shell import LocalExecutor, get_executor, run_cmd


class TestRunCmd:
    def test_success(self, tmp_path) -> None:
        r = run_cmd("echo hello", cwd=str(tmp_path), label="test")
        assert r.returncode == 0
        assert "hello" in r.stdout

    def test_failure_raises(self, tmp_path) -> None:
        with pytest.raises(ExecutionError, match="cmd失败"):
            run_cmd("false", cwd=str(tmp_path))

    def test_custom_label_in_error(self, tmp_path) -> None:
        with pytest.raises(ExecutionError, match="克隆模板失败"):
            run_cmd("false", cwd=str(tmp_path), label="克隆模板")

    def test_unstartable_program(self, tmp_path) -> None:
        with pytest.raises(ExecutionError, match="无法启动"):
            run_cmd(["definitely-not-a-real-binary-xrp"], cwd=tmp_path)

    def test_env_passed(self, tmp_path) -> None:
        env = {**os.environ, "MY_TEST_VAR": "42"}
        r = run_cmd("env", cwd=str(tmp_path), env=env, label="env_test")
        assert "MY_TEST_VAR=42" in r.stdout

    def test_uses_injected_executor(self, executor) -> None:
        run_cmd(["git", "init"], cwd="/tmp", executor=executor)
        assert executor.commands("git") == [["git", "init"]]


class TestDefaultExecutor:
    def test_default_is_local(self) -> None:
        assert isinstance(get_executor(), LocalExecutor)

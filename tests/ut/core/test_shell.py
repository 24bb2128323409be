"""shell.py run_cmd 单元测试"""

from __future__ import annotations

import pytest

from haven.core.exceptions import ExecutionError
from haven.utils.shell import CommandResult, LocalExecutor, get_executor, run_cmd, set_executor


class _FakeExecutor:
    def __init__(self, result: CommandResult) -> None:
        self.result = result
        self.calls: list[tuple] = []

    def execute(self, args, *, cwd=".") -> CommandResult:
        self.calls.append((args, cwd))
        return self.result


class TestRunCmd:
    def test_success(self, tmp_path) -> None:
        r = run_cmd(["echo", "hello"], cwd=str(tmp_path), label="test")
        assert r.returncode == 0
        assert "hello" in r.stdout

    def test_failure_raises(self, tmp_path) -> None:
        with pytest.raises(ExecutionError, match="cmd失败"):
            run_cmd(["false"], cwd=str(tmp_path))

    def test_custom_label_in_error(self, tmp_path) -> None:
        with pytest.raises(ExecutionError, match="mvn dependency:tree失败"):
            run_cmd(["false"], cwd=str(tmp_path), label="mvn dependency:tree")

    def test_missing_executable(self, tmp_path) -> None:
        with pytest.raises(ExecutionError):
            run_cmd(["haven-no-such-binary-xyz"], cwd=str(tmp_path))

    def test_uses_installed_executor(self, use_executor) -> None:
        fake = use_executor(_FakeExecutor(CommandResult(returncode=0, stdout="ok", stderr="")))
        r = run_cmd(["mvn", "-v"], cwd="/work")
        assert r.stdout == "ok"
        assert fake.calls == [(["mvn", "-v"], "/work")]

    def test_installed_failure(self, use_executor) -> None:
        use_executor(_FakeExecutor(CommandResult(returncode=1, stdout="", stderr="BUILD FAILURE")))
        with pytest.raises(ExecutionError, match="BUILD FAILURE"):
            run_cmd(["mvn"])


class TestSetExecutor:
    def test_returns_previous(self) -> None:
        original = get_executor()
        fake = _FakeExecutor(CommandResult(0, "", ""))
        try:
            assert set_executor(fake) is original
            assert get_executor() is fake
        finally:
            set_executor(original)
        assert isinstance(get_executor(), LocalExecutor)

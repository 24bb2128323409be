"""子进程调用 — 供 mvn dependency:tree 使用

实际执行由可替换的 CommandExecutor 完成，测试中用 set_executor
装入假实现即可不依赖本机 Maven。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

from haven.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


class CommandExecutor(Protocol):
    def execute(self, args: list[str], *, cwd: str = ".") -> CommandResult: ...


class LocalExecutor:
    """subprocess 实现，继承当前进程环境"""

    def execute(self, args: list[str], *, cwd: str = ".") -> CommandResult:
        r = subprocess.run(args, capture_output=True, text=True, cwd=cwd, check=False)
        return CommandResult(r.returncode, r.stdout, r.stderr)


_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    return _executor


def set_executor(executor: CommandExecutor) -> CommandExecutor:
    """装入新的执行器，返回被替换的旧执行器以便恢复"""
    global _executor  # noqa: PLW0603
    previous, _executor = _executor, executor
    return previous


def run_cmd(args: list[str], *, cwd: str = ".", label: str = "cmd") -> CommandResult:
    """运行命令，无法启动或返回码非 0 时抛 ExecutionError（附 stderr 前 500 字符）"""
    logger.info("  %s: %s (cwd=%s)", label, shlex.join(args), cwd)
    try:
        r = get_executor().execute(args, cwd=cwd)
    except OSError as e:
        raise ExecutionError(f"{label}失败: {e}") from e
    if r.returncode != 0:
        raise ExecutionError(f"{label}失败 (rc={r.returncode}): {r.stderr[:500]}")
    return r

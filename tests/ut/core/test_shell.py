"""shell.py 执行器单元测试"""

from __future__ import annotations

import subprocess
import sys

import pytest

from vendorkit.utils import shell
from vendorkit.utils.shell import CommandResult, LocalExecutor, get_executor, set_executor


class TestLocalExecutor:
    def test_success(self, tmp_path) -> None:
        r = LocalExecutor().execute([sys.executable, "-c", "print('hello')"], cwd=str(tmp_path))
        assert r.success
        assert "hello" in r.stdout

    def test_failure_returns_code(self, tmp_path) -> None:
        r = LocalExecutor().execute(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"],
            cwd=str(tmp_path),
        )
        assert r.returncode == 3
        assert not r.success
        assert "boom" in r.stderr

    def test_missing_binary_raises_oserror(self) -> None:
        with pytest.raises(OSError):
            LocalExecutor().execute(["definitely-not-a-real-binary-xyz"])

    def test_timeout(self) -> None:
        with pytest.raises(subprocess.TimeoutExpired):
            LocalExecutor().execute([sys.executable, "-c", "import time; time.sleep(5)"], timeout=1)


class TestExecutorRegistry:
    def test_set_and_get(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(shell, "_default_executor", shell._default_executor)

        class Dummy:
            def execute(self, args, *, cwd=None, timeout=None) -> CommandResult:
                return CommandResult(0, "dummy", "")

        dummy = Dummy()
        set_executor(dummy)
        assert get_executor() is dummy

"""测试共享 fixture — 假 VCS 执行器 + 运行配置

FakeVcsExecutor 模拟 git / hg 客户端:
  clone  → 把 remotes 中登记的文件树写入目标目录，并创建 .git / .hg 元数据
  reset  → 校验 revision 是否存在
无需网络即可覆盖完整的拉取 → 改写流程。
"""

from __future__ import annotations

from pathlib import Path

import pytest

from vendorkit.core.config import Config, build_run_config
from vendorkit.core.models import RunConfig
from vendorkit.utils.shell import CommandResult

NAMESPACE = "example.com/me/proj"


class FakeVcsExecutor:
    """按 url 提供假远程仓库的命令执行器"""

    def __init__(self) -> None:
        self.remotes: dict[str, dict[str, str]] = {}
        self.revisions: dict[str, set[str]] = {}
        self.calls: list[tuple[list[str], str | None]] = []
        self._clones: dict[str, str] = {}

    def add_remote(self, url: str, files: dict[str, str], revisions: tuple[str, ...]) -> None:
        self.remotes[url] = files
        self.revisions[url] = set(revisions)

    def execute(self, args: list[str], *, cwd: str | None = None,
                timeout: int | None = None) -> CommandResult:
        self.calls.append((list(args), cwd))
        tool, sub = args[0], args[1]
        if sub == "clone":
            url, dest = args[-2], args[-1]
            if url not in self.remotes:
                return CommandResult(128, "", f"repository '{url}' not found")
            if tool == "hg":
                rev = args[args.index("--updaterev") + 1]
                if rev not in self.revisions[url]:
                    return CommandResult(255, "", f"abort: unknown revision '{rev}'")
            self._materialize(url, Path(dest), tool)
            return CommandResult(0, "", "")
        if tool == "git" and sub == "reset":
            url = self._clones[str(cwd)]
            if args[-1] not in self.revisions[url]:
                return CommandResult(128, "", f"fatal: ambiguous argument '{args[-1]}'")
            return CommandResult(0, "", "")
        return CommandResult(1, "", f"unexpected command: {args}")

    def _materialize(self, url: str, dest: Path, tool: str) -> None:
        dest.mkdir(parents=True, exist_ok=True)
        for rel, content in self.remotes[url].items():
            target = dest / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        meta = dest / f".{tool}"
        meta.mkdir()
        (meta / "HEAD").write_text("ref: refs/heads/master\n")
        self._clones[str(dest)] = url


@pytest.fixture()
def fake_executor() -> FakeVcsExecutor:
    return FakeVcsExecutor()


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "gopath" / "src" / NAMESPACE
    root.mkdir(parents=True)
    return root


@pytest.fixture()
def run_config(tmp_path: Path, project_root: Path) -> RunConfig:
    return build_run_config(
        Config(), project_root, environ={"GOPATH": str(tmp_path / "gopath")},
    )

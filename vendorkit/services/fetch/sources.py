"""VCS 来源适配器 - 支持 Git / Hg

职责：
- 把指定 revision 的文件树检出到空的目标目录
- 命令失败统一转换为 FetchError
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from vendorkit.core.exceptions import FetchError
from vendorkit.core.models import PackageSpec, VcsKind
from vendorkit.utils.shell import CommandExecutor, CommandResult, get_executor

logger = logging.getLogger(__name__)


class VcsSource(ABC):
    """VCS 来源基类"""

    kind: VcsKind
    metadata_dir: str

    def __init__(self, executor: CommandExecutor | None = None, timeout: int = 600) -> None:
        self.executor = executor or get_executor()
        self.timeout = timeout

    @abstractmethod
    def fetch(self, spec: PackageSpec, url: str, dest: Path) -> None:
        """把 spec.revision 的文件树检出到 dest"""

    def _run(self, args: list[str], *, cwd: Path | None = None) -> CommandResult:
        """执行 VCS 命令，失败抛 FetchError"""
        cmd = " ".join(args)
        logger.debug("  %s (cwd=%s)", cmd, cwd or ".")
        try:
            r = self.executor.execute(
                args, cwd=str(cwd) if cwd else None, timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise FetchError(f"命令超时 ({self.timeout}s): `{cmd}`") from e
        except OSError as e:
            raise FetchError(f"命令无法执行: `{cmd}` - {e}") from e
        if not r.success:
            raise FetchError(
                f"命令失败 (rc={r.returncode}): `{cmd}` - {r.stderr.strip()[:300]}"
            )
        return r


class GitSource(VcsSource):
    """Git 仓库来源: clone 不检出，再 reset 到指定 commit"""

    kind = VcsKind.GIT
    metadata_dir = ".git"

    def fetch(self, spec: PackageSpec, url: str, dest: Path) -> None:
        self._run(["git", "clone", "--quiet", "--no-checkout", url, str(dest)])
        self._run(["git", "reset", "--quiet", "--hard", spec.revision], cwd=dest)
        logger.info("Git 就绪: %s@%s", spec.location, spec.revision)


class HgSource(VcsSource):
    """Mercurial 仓库来源: clone 时直接更新到指定 changeset"""

    kind = VcsKind.HG
    metadata_dir = ".hg"

    def fetch(self, spec: PackageSpec, url: str, dest: Path) -> None:
        self._run(["hg", "clone", "--quiet", "--updaterev", spec.revision, url, str(dest)])
        logger.info("Hg 就绪: %s@%s", spec.location, spec.revision)

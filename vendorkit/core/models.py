"""核心数据模型

包定义、单次运行配置以及运行报告集中定义于此。
其他模块统一从此处导入 PackageSpec / RunConfig / RewriteReport。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class VcsKind(str, Enum):
    """版本控制类型"""

    GIT = "git"
    HG = "hg"


@dataclass(frozen=True)
class PackageSpec:
    """单个 vendor 包定义，以 location 作为唯一标识"""

    kind: VcsKind
    location: str   # 如 github.com/coreos/go-etcd
    revision: str   # 精确的 commit / changeset

    def url(self, scheme: str = "https") -> str:
        """远程仓库地址"""
        return f"{scheme}://{self.location}"

    def to_dict(self) -> dict[str, str]:
        return {
            "kind": self.kind.value,
            "location": self.location,
            "revision": self.revision,
        }


@dataclass(frozen=True)
class RunConfig:
    """单次运行的不可变配置，启动时构造一次，显式传递给拉取器和改写器"""

    project_root: Path
    workspace_src: Path      # $GOPATH/src
    vendor_dir: Path         # <project>/vendor，每次运行前整体清空
    vendor_root: Path        # <project>/vendor/src，包落地位置
    namespace_prefix: str    # 项目相对 workspace_src 的路径
    source_suffix: str = ".go"
    test_suffix: str = "_test.go"
    url_scheme: str = "https"
    command_timeout: int = 600

    @property
    def vendor_segment(self) -> str:
        """vendor 包在项目内的相对段，如 vendor/src"""
        return self.vendor_root.relative_to(self.project_root).as_posix()

    @property
    def import_prefix(self) -> str:
        """改写后 import 路径的公共前缀"""
        return f"{self.namespace_prefix}/{self.vendor_segment}"


@dataclass
class RewriteReport:
    """import 改写阶段的结果"""

    scanned: int = 0
    rewritten: list[str] = field(default_factory=list)
    removed_tests: list[str] = field(default_factory=list)
    substitutions: dict[str, list[str]] = field(default_factory=dict)

    @property
    def untouched(self) -> int:
        return self.scanned - len(self.rewritten)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scanned": self.scanned,
            "rewritten": list(self.rewritten),
            "untouched": self.untouched,
            "removed_tests": list(self.removed_tests),
            "substitutions": {k: list(v) for k, v in self.substitutions.items()},
        }


@dataclass
class VendorReport:
    """一次完整 vendor 运行的结果"""

    fetched: dict[str, Path] = field(default_factory=dict)
    rewrite: RewriteReport = field(default_factory=RewriteReport)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fetched": {k: str(v) for k, v in self.fetched.items()},
            "rewrite": self.rewrite.to_dict(),
        }

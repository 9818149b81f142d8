"""vendor 目录管理

职责：
- 运行前清空 vendor 目录
- 列出声明包在 vendor 树中的状态
- 提供 vendor 包成员视图
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from vendorkit.core.exceptions import FetchError
from vendorkit.core.rewriter import VendoredLocations
from vendorkit.utils.fs import remove_tree

if TYPE_CHECKING:
    from vendorkit.core.models import PackageSpec, RunConfig

logger = logging.getLogger(__name__)


class VendorWorkspace:
    """vendor 目录管理器"""

    def __init__(self, run_config: RunConfig) -> None:
        self.run_config = run_config

    def clear(self) -> bool:
        """删除整个 vendor 目录，返回是否实际删除"""
        try:
            removed = remove_tree(self.run_config.vendor_dir)
        except OSError as e:
            raise FetchError(f"清空 vendor 目录失败: {self.run_config.vendor_dir} - {e}") from e
        if not removed:
            logger.info("vendor 目录不存在，无需清理: %s", self.run_config.vendor_dir)
        return removed

    def vendored_locations(self) -> VendoredLocations:
        return VendoredLocations(self.run_config.vendor_root)

    def status(self, packages: list[PackageSpec]) -> list[dict[str, Any]]:
        """列出每个声明包在 vendor 树中的状态"""
        rc = self.run_config
        result: list[dict[str, Any]] = []
        for spec in packages:
            path = rc.vendor_root / spec.location
            present = path.is_dir()
            sources: list[str] = []
            if present:
                sources = [p.name for p in path.rglob(f"*{rc.source_suffix}") if p.is_file()]
            result.append({
                "location": spec.location,
                "kind": spec.kind.value,
                "revision": spec.revision,
                "path": str(path),
                "present": present,
                "source_files": sum(1 for n in sources if not n.endswith(rc.test_suffix)),
                "test_files": sum(1 for n in sources if n.endswith(rc.test_suffix)),
            })
        return result

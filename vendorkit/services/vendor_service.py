"""vendor 服务 — 串联清单校验、清空、拉取与 import 改写

流程（单线程、严格顺序）:
  1. 校验清单（ValidationError 在任何拉取之前抛出）
  2. 清空 vendor 目录
  3. 按声明顺序拉取全部包
  4. 全部拉取完成后执行 import 改写，后拉取的包可以被先拉取的包引用，反之亦然
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from vendorkit.core.manifest import validate_packages
from vendorkit.core.models import RewriteReport, VendorReport
from vendorkit.core.rewriter import ImportRewriter
from vendorkit.services.fetch.fetcher import PackageFetcher
from vendorkit.services.fetch.workspace import VendorWorkspace

if TYPE_CHECKING:
    from vendorkit.core.models import PackageSpec, RunConfig
    from vendorkit.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class VendorService:
    """vendor 流程入口"""

    def __init__(
        self,
        run_config: RunConfig,
        fetcher: PackageFetcher | None = None,
        rewriter: ImportRewriter | None = None,
        workspace: VendorWorkspace | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        self.run_config = run_config
        self.fetcher = fetcher or PackageFetcher(run_config, executor=executor)
        self.rewriter = rewriter or ImportRewriter.from_run_config(run_config)
        self.workspace = workspace or VendorWorkspace(run_config)

    def sync(self, packages: list[PackageSpec]) -> VendorReport:
        """完整运行: 清空 → 拉取 → 改写"""
        validate_packages(packages)
        self.workspace.clear()

        report = VendorReport()
        report.fetched = self.fetcher.fetch_all(packages)
        report.rewrite = self.rewrite()
        return report

    def rewrite(self) -> RewriteReport:
        """仅对现有 vendor 树执行 import 改写"""
        rc = self.run_config
        logger.info("改写 import: %s -> %s", rc.vendor_root, rc.import_prefix)
        return self.rewriter.rewrite_all(
            rc.vendor_root,
            rc.namespace_prefix,
            self.workspace.vendored_locations(),
        )

    def status(self, packages: list[PackageSpec]) -> list[dict[str, Any]]:
        return self.workspace.status(packages)

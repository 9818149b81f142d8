"""包拉取协调器

职责：
- 把包 location 映射到 vendor 根目录下的确定路径
- 拒绝已存在且非空的目标目录
- 按 VCS 类型分派到来源适配器
- 拉取后删除 VCS 元数据目录
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from vendorkit.core.exceptions import FetchError, ValidationError
from vendorkit.core.manifest import check_package
from vendorkit.services.fetch.sources import GitSource, HgSource
from vendorkit.utils.fs import is_empty_dir, remove_tree
from vendorkit.utils.shell import CommandExecutor, get_executor

if TYPE_CHECKING:
    from vendorkit.core.models import PackageSpec, RunConfig, VcsKind
    from vendorkit.services.fetch.sources import VcsSource

logger = logging.getLogger(__name__)


class PackageFetcher:
    """包拉取器 - 按声明顺序拉取，任一失败立即终止"""

    def __init__(
        self,
        run_config: RunConfig,
        executor: CommandExecutor | None = None,
        sources: dict[VcsKind, VcsSource] | None = None,
    ) -> None:
        self.run_config = run_config
        if sources is None:
            executor = executor or get_executor()
            timeout = run_config.command_timeout
            sources = {
                src.kind: src
                for src in (GitSource(executor, timeout), HgSource(executor, timeout))
            }
        self._sources = sources

    def local_path(self, spec: PackageSpec) -> Path:
        """计算包在 vendor 根目录下的路径"""
        root = self.run_config.vendor_root
        dest = root / spec.location
        if not dest.resolve().is_relative_to(root.resolve()):
            raise FetchError(f"目标路径超出 vendor 根目录: {spec.location}")
        return dest

    def fetch(self, spec: PackageSpec) -> Path:
        """拉取单个包，返回本地路径"""
        problems = check_package(spec)
        if problems:
            raise ValidationError(f"包定义无效: {spec.location}", details=problems)

        source = self._sources.get(spec.kind)
        if source is None:
            raise FetchError(f"不支持的来源类型: {spec.kind}")

        dest = self.local_path(spec)
        if dest.exists() and not is_empty_dir(dest):
            raise FetchError(f"目标目录已存在且非空，请先清空 vendor 目录: {dest}")
        dest.mkdir(parents=True, exist_ok=True)

        url = spec.url(self.run_config.url_scheme)
        logger.info("拉取: %s@%s (%s)", spec.location, spec.revision, url)
        source.fetch(spec, url, dest)

        try:
            remove_tree(dest / source.metadata_dir)
        except OSError as e:
            raise FetchError(f"删除 VCS 元数据失败: {dest / source.metadata_dir} - {e}") from e
        return dest

    def fetch_all(self, packages: list[PackageSpec]) -> dict[str, Path]:
        """按声明顺序拉取全部包，返回 {location: path}"""
        results: dict[str, Path] = {}
        for spec in packages:
            results[spec.location] = self.fetch(spec)
        logger.info("拉取完成: %d 个包", len(results))
        return results

"""vendor 包 import 路径改写

职责:
- 删除 vendor 树中的测试源文件
- 把引用其他 vendor 包的 import 字符串改写到项目命名空间下

改写是纯文本替换而非语法树变换:
  1. 只扫描文件中第一个 `import ( ... )` 块，提取其中的引号字符串作为候选
  2. 候选在 vendor 根目录下存在同名目录时才视为 vendor 包
  3. 命中的 "<loc>" 在整个文件范围内替换为 "<prefix>/vendor/src/<loc>"

第 3 步是全文件替换：第一个 import 块之外出现的同一字面量也会被改写。
"""

from __future__ import annotations

import logging
import re
from collections.abc import Container
from pathlib import Path
from typing import TYPE_CHECKING

from vendorkit.core.exceptions import RewriteError
from vendorkit.core.models import RewriteReport
from vendorkit.utils.fs import atomic_write, read_text

if TYPE_CHECKING:
    from vendorkit.core.models import RunConfig

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_SEGMENT = "vendor/src"

_IMPORT_BLOCK_RE = re.compile(r"(?<=import \()[^)]+")
_QUOTED_RE = re.compile(r'"([^"\n]+)"')


class VendoredLocations:
    """vendor 包成员视图: vendor_root/<location> 是已存在的目录即为成员

    结果在视图生命周期内缓存，一次改写过程使用一个视图。
    """

    def __init__(self, vendor_root: Path) -> None:
        self.vendor_root = vendor_root
        self._cache: dict[str, bool] = {}

    def __contains__(self, location: object) -> bool:
        if not isinstance(location, str):
            return False
        hit = self._cache.get(location)
        if hit is None:
            hit = _is_plain_relative(location) and (self.vendor_root / location).is_dir()
            self._cache[location] = hit
        return hit


def _is_plain_relative(location: str) -> bool:
    if not location or location.startswith("/"):
        return False
    return all(part not in ("", ".", "..") for part in location.split("/"))


# =========================================================================
# 纯函数: 不涉及文件 IO
# =========================================================================


def find_import_block(content: str) -> str | None:
    """返回第一个分组 import 块的内容，不存在时返回 None"""
    m = _IMPORT_BLOCK_RE.search(content)
    return m.group(0) if m else None


def scan_locations(block: str) -> list[str]:
    """按出现顺序提取 import 块中的引号字符串（去重）"""
    return list(dict.fromkeys(_QUOTED_RE.findall(block)))


def plan_rewrites(content: str, vendored: Container[str]) -> list[str]:
    """返回文件中需要改写的 vendor 包路径"""
    block = find_import_block(content)
    if block is None:
        return []
    return [loc for loc in scan_locations(block) if loc in vendored]


def vendored_import_path(location: str, namespace_prefix: str,
                         vendor_segment: str = DEFAULT_VENDOR_SEGMENT) -> str:
    """vendor 包在项目命名空间下的 import 路径"""
    return f"{namespace_prefix}/{vendor_segment}/{location}"


def rewrite_imports(
    content: str,
    vendored: Container[str],
    namespace_prefix: str,
    vendor_segment: str = DEFAULT_VENDOR_SEGMENT,
) -> str:
    """改写文件内容中引用 vendor 包的 import 字符串，无命中时原样返回"""
    for loc in plan_rewrites(content, vendored):
        new_path = vendored_import_path(loc, namespace_prefix, vendor_segment)
        content = content.replace(f'"{loc}"', f'"{new_path}"')
    return content


# =========================================================================
# 改写器: 遍历 vendor 树
# =========================================================================


class ImportRewriter:
    """vendor 树 import 改写器"""

    def __init__(
        self,
        source_suffix: str = ".go",
        test_suffix: str = "_test.go",
        vendor_segment: str = DEFAULT_VENDOR_SEGMENT,
    ) -> None:
        self.source_suffix = source_suffix
        self.test_suffix = test_suffix
        self.vendor_segment = vendor_segment

    @classmethod
    def from_run_config(cls, run_config: RunConfig) -> ImportRewriter:
        return cls(
            source_suffix=run_config.source_suffix,
            test_suffix=run_config.test_suffix,
            vendor_segment=run_config.vendor_segment,
        )

    def source_files(self, vendor_root: Path) -> list[Path]:
        """vendor 树下全部源文件，排序保证日志和报告稳定"""
        if not vendor_root.is_dir():
            return []
        return sorted(
            p for p in vendor_root.rglob(f"*{self.source_suffix}") if p.is_file()
        )

    def is_test_file(self, path: Path) -> bool:
        return path.name.endswith(self.test_suffix)

    def rewrite_all(
        self,
        vendor_root: Path,
        namespace_prefix: str,
        vendored: Container[str] | None = None,
    ) -> RewriteReport:
        """改写 vendor 树中全部源文件

        必须在所有包拉取完成后调用，成员判断需要看到完整的 vendor 集合。
        vendored 为 None 时按 vendor_root 下的目录是否存在判断。
        任一文件失败即抛 RewriteError，已改写的文件保持不变。
        """
        if vendored is None:
            vendored = VendoredLocations(vendor_root)
        report = RewriteReport()

        for path in self.source_files(vendor_root):
            rel = path.relative_to(vendor_root).as_posix()

            # vendor 包的测试可能引用未 vendor 的包，直接删除
            if self.is_test_file(path):
                try:
                    path.unlink()
                except OSError as e:
                    raise RewriteError(f"删除测试文件失败: {path} - {e}") from e
                report.removed_tests.append(rel)
                logger.info("已删除测试文件: %s", rel)
                continue

            report.scanned += 1
            locations = self._rewrite_file(path, vendored, namespace_prefix)
            if locations:
                report.rewritten.append(rel)
                report.substitutions[rel] = locations
                logger.info("已改写 %s: %s", rel, ", ".join(locations))
            else:
                logger.debug("无需改写: %s", rel)

        logger.info(
            "改写完成: 扫描 %d, 改写 %d, 删除测试文件 %d",
            report.scanned, len(report.rewritten), len(report.removed_tests),
        )
        return report

    def _rewrite_file(
        self, path: Path, vendored: Container[str], namespace_prefix: str,
    ) -> list[str]:
        try:
            content = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise RewriteError(f"读取源文件失败: {path} - {e}") from e

        locations = plan_rewrites(content, vendored)
        if not locations:
            return []

        new_content = rewrite_imports(content, vendored, namespace_prefix, self.vendor_segment)
        if new_content == content:
            return []

        try:
            atomic_write(path, new_content)
        except OSError as e:
            raise RewriteError(f"写回源文件失败: {path} - {e}") from e
        return locations

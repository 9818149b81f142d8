"""包拉取服务

拆分说明：
- sources.py: VCS 来源适配器 Git / Hg
- fetcher.py: 拉取协调器（路径映射、目标目录检查、元数据清理）
- workspace.py: vendor 目录管理（清空、状态、成员视图）
"""

from vendorkit.services.fetch.fetcher import PackageFetcher
from vendorkit.services.fetch.sources import GitSource, HgSource, VcsSource
from vendorkit.services.fetch.workspace import VendorWorkspace

__all__ = [
    "PackageFetcher",
    "VcsSource",
    "GitSource",
    "HgSource",
    "VendorWorkspace",
]

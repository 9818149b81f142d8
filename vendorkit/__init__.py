"""vendorkit - Go 依赖包 vendor 工具

按固定清单拉取指定版本的外部包到 vendor/src，并改写其 import 路径。
"""

__version__ = "0.1.0"

"""统一异常体系

所有业务异常继承 VendorError。CLI 层据此输出友好提示并以非零状态退出。
所有异常对本次运行都是终止性的：不重试、不回滚。
"""

from __future__ import annotations


class VendorError(Exception):
    """vendor 工具基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(VendorError):
    """环境变量缺失、项目路径无法解析或配置文件无效（在拉取之前检测）"""

    code = "CONFIG_ERROR"


class ValidationError(VendorError):
    """包清单校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        return base + "\n" + "\n".join(f"  - {d}" for d in self.details)


class FetchError(VendorError):
    """VCS 命令失败、版本不存在或目标目录已非空"""

    code = "FETCH_ERROR"


class RewriteError(VendorError):
    """改写阶段文件不可读、不可写或编码无效"""

    code = "REWRITE_ERROR"

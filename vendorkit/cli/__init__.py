"""vendorkit 命令行接口

命令按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import functools
import os
from collections.abc import Callable
from typing import Any, TypeVar

import click

from vendorkit import __version__
from vendorkit.core.exceptions import VendorError
from vendorkit.utils.logger import setup_logging

F = TypeVar("F", bound=Callable[..., Any])


def _handle_errors(func: F) -> F:
    """把 VendorError 转换为 ClickException：消息输出到 stderr，退出码 1"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except VendorError as e:
            raise click.ClickException(f"[{e.code}] {e}") from e

    return wrapper  # type: ignore[return-value]


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """vendorkit - 拉取固定版本的 Go 依赖包并改写 import 路径"""
    setup_logging(
        level=os.getenv("VENDORKIT_LOG_LEVEL", "INFO"),
        json_output=os.getenv("VENDORKIT_LOG_JSON", "") == "1",
    )


from vendorkit.cli.cmd_vendor import register as _reg_vendor  # noqa: E402

_reg_vendor(main)

"""文件系统工具 — 原子写入与目录清理"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write(path: Path, content: str) -> None:
    """原子写入文本文件：先写同目录临时文件再 rename

    - 目标文件已存在时保留其权限位
    - 不做换行符转换，CRLF 文件写回后保持原样
    - 失败时清理临时文件后重新抛出
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if path.exists():
            os.chmod(tmp, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp, str(path))
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def read_text(path: Path) -> str:
    """按 utf-8 读取文本文件，不做换行符转换"""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def is_empty_dir(path: Path) -> bool:
    """目录存在且为空"""
    return path.is_dir() and not any(path.iterdir())


def remove_tree(path: Path) -> bool:
    """删除目录树，返回是否实际删除"""
    if not path.exists():
        return False
    shutil.rmtree(path)
    logger.info("已删除: %s", path)
    return True

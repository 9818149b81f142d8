"""vendor 包清单

职责:
- 内置的默认包列表（按声明顺序拉取）
- 从 YAML 清单加载包定义
- 拉取前校验清单：类型、路径、版本号、重复与嵌套
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from vendorkit.core.exceptions import ValidationError
from vendorkit.core.models import PackageSpec, VcsKind
from vendorkit.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

_SAFE_LOCATION_RE = re.compile(r"^[a-zA-Z0-9_.~/\-]+$")
_SAFE_REVISION_RE = re.compile(r"^[a-zA-Z0-9_.@/][a-zA-Z0-9_./@\-]*$")

# 实际需要 vendor 的包，顺序即拉取顺序
DEFAULT_PACKAGES: tuple[PackageSpec, ...] = (
    PackageSpec(VcsKind.GIT, "github.com/coreos/go-etcd", "6aa2da5a7a905609c93036b9307185a04a5a84a5"),
    PackageSpec(VcsKind.GIT, "github.com/Sirupsen/logrus", "c0f7e35ed2e48f188c37581b4b743cf7383f85c6"),
)


def load_manifest(path: str | Path, required: bool = False) -> list[PackageSpec]:
    """加载包清单

    文件不存在时: required=True 抛 ValidationError，否则使用内置列表。
    """
    p = Path(path)
    if not p.exists():
        if required:
            raise ValidationError(f"清单文件不存在: {p}")
        logger.info("清单文件不存在，使用内置包列表: %s", p)
        packages = list(DEFAULT_PACKAGES)
    else:
        try:
            data = load_yaml(p)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ValidationError(f"清单文件无法读取: {p} - {e}") from e
        packages = parse_packages(data.get("packages"), source=str(p))
        logger.info("已加载 %d 个包: %s", len(packages), p)

    validate_packages(packages)
    return packages


def parse_packages(entries: Any, source: str = "<manifest>") -> list[PackageSpec]:
    """把清单中的 packages 段解析为 PackageSpec 列表"""
    if not isinstance(entries, list):
        raise ValidationError(f"{source}: packages 必须为列表")

    problems: list[str] = []
    packages: list[PackageSpec] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            problems.append(f"第 {idx + 1} 项不是映射")
            continue
        raw_kind = str(entry.get("kind", "")).strip()
        try:
            kind = VcsKind(raw_kind)
        except ValueError:
            problems.append(f"第 {idx + 1} 项: 不支持的类型 '{raw_kind}'")
            continue
        packages.append(PackageSpec(
            kind=kind,
            location=str(entry.get("location", "")).strip(),
            revision=str(entry.get("revision", "")).strip(),
        ))

    if problems:
        raise ValidationError(f"{source}: 清单格式错误", details=problems)
    return packages


def check_package(spec: PackageSpec) -> list[str]:
    """校验单个包定义，返回问题列表（为空表示合法）"""
    problems: list[str] = []
    loc = spec.location
    if not isinstance(spec.kind, VcsKind):
        problems.append(f"{loc or '<空>'}: 不支持的类型 '{spec.kind}'")
    if not loc:
        problems.append("location 为必填")
    elif not _SAFE_LOCATION_RE.match(loc):
        problems.append(f"{loc}: location 包含非法字符")
    else:
        parts = loc.split("/")
        if loc.startswith("/") or any(part in ("", ".", "..") for part in parts):
            problems.append(f"{loc}: location 必须是不含 . / .. 的相对路径")
    if not spec.revision:
        problems.append(f"{loc or '<空>'}: revision 为必填")
    elif not _SAFE_REVISION_RE.match(spec.revision):
        problems.append(f"{loc or '<空>'}: revision 包含非法字符: {spec.revision}")
    return problems


def validate_packages(packages: list[PackageSpec]) -> None:
    """校验整个清单，一次性报告全部问题"""
    problems: list[str] = []
    seen: set[str] = set()
    for spec in packages:
        problems.extend(check_package(spec))
        if spec.location in seen:
            problems.append(f"{spec.location}: location 重复")
        seen.add(spec.location)

    locations = sorted(loc for loc in seen if loc)
    for loc in locations:
        for other in locations:
            if other != loc and PurePosixPath(other).is_relative_to(loc):
                problems.append(f"{other}: 嵌套在 {loc} 之下")

    if problems:
        raise ValidationError("包清单校验失败", details=problems)

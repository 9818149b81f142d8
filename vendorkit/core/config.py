"""集中配置管理

Config 保存工具设置，可从 YAML 文件加载；
build_run_config 结合环境变量计算命名空间前缀，得到一次运行的不可变 RunConfig。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from vendorkit.core.exceptions import ConfigError
from vendorkit.core.models import RunConfig
from vendorkit.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("https", "http", "ssh")


@dataclass
class Config:
    """工具配置"""

    # 清单与目录
    manifest: str = "deps/vendor.yml"
    vendor_dir: str = "vendor"
    src_dir: str = "src"

    # 工作区根目录所在的环境变量
    workspace_env: str = "GOPATH"

    # 源文件约定
    source_suffix: str = ".go"
    test_suffix: str = "_test.go"

    # 拉取
    url_scheme: str = "https"
    command_timeout: int = 600

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/default.yml") -> Config:
        """从 YAML 文件加载配置，文件不存在则返回默认值"""
        try:
            data = load_yaml(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"配置文件无法读取: {path} - {e}") from e
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        cfg.validate()
        logger.info("配置已加载: %s", path)
        return cfg

    def validate(self) -> None:
        if self.url_scheme not in SUPPORTED_SCHEMES:
            raise ConfigError(
                f"不支持的 url_scheme: {self.url_scheme}，可选: {', '.join(SUPPORTED_SCHEMES)}"
            )
        if not self.source_suffix or not self.test_suffix.endswith(self.source_suffix):
            raise ConfigError(
                f"test_suffix ({self.test_suffix}) 必须以 source_suffix ({self.source_suffix}) 结尾"
            )
        if not isinstance(self.command_timeout, int) or self.command_timeout <= 0:
            raise ConfigError(f"command_timeout 必须为正整数: {self.command_timeout}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def resolve_namespace_prefix(project_root: Path, workspace_value: str) -> tuple[Path, str]:
    """计算项目相对工作区 src 目录的路径

    workspace_value 可包含多个以 os.pathsep 分隔的条目，取第一个包含项目根目录的条目。

    返回:
        (workspace_src, namespace_prefix)
    """
    entries = [e for e in workspace_value.split(os.pathsep) if e.strip()]
    if not entries:
        raise ConfigError("工作区路径为空")

    root = project_root.resolve()
    for entry in entries:
        src = (Path(entry.strip()).expanduser() / "src").resolve()
        try:
            rel = root.relative_to(src)
        except ValueError:
            continue
        if rel == Path("."):
            raise ConfigError(f"项目根目录不能是工作区 src 本身: {root}")
        return src, rel.as_posix()

    raise ConfigError(
        f"项目根目录 {root} 不在任何工作区 src 目录下: {workspace_value}"
    )


def build_run_config(
    config: Config,
    project_root: str | Path,
    environ: Mapping[str, str] | None = None,
) -> RunConfig:
    """构造一次运行的 RunConfig，任何问题都在拉取之前以 ConfigError 暴露"""
    env = os.environ if environ is None else environ
    workspace_value = env.get(config.workspace_env, "")
    if not workspace_value.strip():
        raise ConfigError(f"环境变量未设置: {config.workspace_env}")

    root = Path(project_root)
    if not root.is_dir():
        raise ConfigError(f"项目根目录不存在: {root}")
    root = root.resolve()

    workspace_src, prefix = resolve_namespace_prefix(root, workspace_value)
    vendor_dir = root / config.vendor_dir
    run_config = RunConfig(
        project_root=root,
        workspace_src=workspace_src,
        vendor_dir=vendor_dir,
        vendor_root=vendor_dir / config.src_dir,
        namespace_prefix=prefix,
        source_suffix=config.source_suffix,
        test_suffix=config.test_suffix,
        url_scheme=config.url_scheme,
        command_timeout=config.command_timeout,
    )
    logger.info("命名空间前缀: %s (工作区 %s)", prefix, workspace_src)
    return run_config

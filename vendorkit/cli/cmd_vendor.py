"""CLI — vendor 命令"""

from __future__ import annotations

from pathlib import Path

import click

from vendorkit.cli import _handle_errors
from vendorkit.core.config import Config, build_run_config
from vendorkit.core.manifest import load_manifest
from vendorkit.core.models import PackageSpec
from vendorkit.services.vendor_service import VendorService


def register(group: click.Group) -> None:
    group.add_command(sync)
    group.add_command(rewrite)
    group.add_command(list_packages)
    group.add_command(status)
    group.add_command(prefix)


_config_option = click.option(
    "--config", "-c", "config_path", default="configs/default.yml",
    help="配置文件路径（相对路径按项目根目录解析）",
)
_root_option = click.option(
    "--project-root", "-C", default=".", help="项目根目录",
)
_manifest_option = click.option(
    "--manifest", "-m", default=None, help="包清单路径（覆盖配置文件中的 manifest）",
)


def _under_root(path: str, project_root: str) -> Path:
    """相对路径按项目根目录解析"""
    p = Path(path)
    return p if p.is_absolute() else Path(project_root) / p


def _config(config_path: str, project_root: str) -> Config:
    return Config.from_file(str(_under_root(config_path, project_root)))


def _packages(cfg: Config, manifest: str | None, project_root: str) -> list[PackageSpec]:
    """显式指定的清单必须存在；配置中的清单缺失时使用内置列表"""
    if manifest:
        return load_manifest(manifest, required=True)
    return load_manifest(_under_root(cfg.manifest, project_root))


def _service(cfg: Config, project_root: str) -> VendorService:
    return VendorService(build_run_config(cfg, project_root))


@click.command()
@_config_option
@_root_option
@_manifest_option
@_handle_errors
def sync(config_path: str, project_root: str, manifest: str | None) -> None:
    """清空 vendor 目录，拉取全部包并改写 import"""
    cfg = _config(config_path, project_root)
    packages = _packages(cfg, manifest, project_root)
    svc = _service(cfg, project_root)
    report = svc.sync(packages)
    for location, path in report.fetched.items():
        click.echo(f"就绪: {location} -> {path}")
    rw = report.rewrite
    click.echo(
        f"改写完成: 扫描 {rw.scanned}, 改写 {len(rw.rewritten)}, "
        f"删除测试文件 {len(rw.removed_tests)}"
    )


@click.command()
@_config_option
@_root_option
@_handle_errors
def rewrite(config_path: str, project_root: str) -> None:
    """仅对现有 vendor 树执行 import 改写"""
    cfg = _config(config_path, project_root)
    report = _service(cfg, project_root).rewrite()
    for rel in report.rewritten:
        click.echo(f"  改写: {rel} ({', '.join(report.substitutions[rel])})")
    click.echo(
        f"改写完成: 扫描 {report.scanned}, 改写 {len(report.rewritten)}, "
        f"删除测试文件 {len(report.removed_tests)}"
    )


@click.command(name="list")
@_config_option
@_root_option
@_manifest_option
@_handle_errors
def list_packages(config_path: str, project_root: str, manifest: str | None) -> None:
    """列出清单中声明的包"""
    cfg = _config(config_path, project_root)
    for spec in _packages(cfg, manifest, project_root):
        click.echo(f"  {spec.kind.value:3s} {spec.location:40s} {spec.revision}")


@click.command()
@_config_option
@_root_option
@_manifest_option
@_handle_errors
def status(config_path: str, project_root: str, manifest: str | None) -> None:
    """查看声明包在 vendor 树中的状态"""
    cfg = _config(config_path, project_root)
    packages = _packages(cfg, manifest, project_root)
    for item in _service(cfg, project_root).status(packages):
        if item["present"]:
            state = f"已就绪 ({item['source_files']} 源文件, {item['test_files']} 测试文件)"
        else:
            state = "缺失"
        click.echo(f"  {item['location']:40s} {item['revision'][:12]}  {state}")


@click.command()
@_config_option
@_root_option
@_handle_errors
def prefix(config_path: str, project_root: str) -> None:
    """显示命名空间前缀和改写后的 import 前缀"""
    cfg = _config(config_path, project_root)
    rc = build_run_config(cfg, project_root)
    click.echo(f"namespace: {rc.namespace_prefix}")
    click.echo(f"import:    {rc.import_prefix}")

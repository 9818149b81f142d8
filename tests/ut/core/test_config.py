"""配置与运行配置测试"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from vendorkit.core.config import Config, build_run_config, resolve_namespace_prefix
from vendorkit.core.exceptions import ConfigError, VendorError


class TestConfigFile:
    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        cfg = Config.from_file(str(tmp_path / "nope.yml"))
        assert cfg.workspace_env == "GOPATH"
        assert cfg.source_suffix == ".go"

    def test_load_with_extra(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("vendor_dir: third_party\nurl_scheme: http\nteam: infra\n")
        cfg = Config.from_file(str(p))
        assert cfg.vendor_dir == "third_party"
        assert cfg.url_scheme == "http"
        assert cfg.extra == {"team": "infra"}

    def test_invalid_scheme(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("url_scheme: ftp\n")
        with pytest.raises(ConfigError, match="url_scheme"):
            Config.from_file(str(p))

    def test_test_suffix_must_match_source_suffix(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("source_suffix: .go\ntest_suffix: _test.py\n")
        with pytest.raises(ConfigError, match="test_suffix"):
            Config.from_file(str(p))

    def test_broken_yaml(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("a: [1, 2\n")
        with pytest.raises(ConfigError, match="无法读取"):
            Config.from_file(str(p))


class TestNamespacePrefix:
    def test_single_entry(self, tmp_path: Path) -> None:
        root = tmp_path / "go" / "src" / "github.com" / "me" / "proj"
        root.mkdir(parents=True)
        src, prefix = resolve_namespace_prefix(root, str(tmp_path / "go"))
        assert prefix == "github.com/me/proj"
        assert src == (tmp_path / "go" / "src").resolve()

    def test_first_containing_entry_wins(self, tmp_path: Path) -> None:
        root = tmp_path / "b" / "src" / "host" / "proj"
        root.mkdir(parents=True)
        value = os.pathsep.join([str(tmp_path / "a"), str(tmp_path / "b")])
        _, prefix = resolve_namespace_prefix(root, value)
        assert prefix == "host/proj"

    def test_outside_workspace(self, tmp_path: Path) -> None:
        root = tmp_path / "elsewhere"
        root.mkdir()
        with pytest.raises(ConfigError, match="不在任何工作区"):
            resolve_namespace_prefix(root, str(tmp_path / "go"))

    def test_project_is_src_itself(self, tmp_path: Path) -> None:
        root = tmp_path / "go" / "src"
        root.mkdir(parents=True)
        with pytest.raises(ConfigError, match="src 本身"):
            resolve_namespace_prefix(root, str(tmp_path / "go"))


class TestBuildRunConfig:
    def test_paths_and_prefixes(self, tmp_path: Path) -> None:
        root = tmp_path / "go" / "src" / "example.com" / "proj"
        root.mkdir(parents=True)
        rc = build_run_config(Config(), root, environ={"GOPATH": str(tmp_path / "go")})
        assert rc.namespace_prefix == "example.com/proj"
        assert rc.vendor_dir == root.resolve() / "vendor"
        assert rc.vendor_root == root.resolve() / "vendor" / "src"
        assert rc.vendor_segment == "vendor/src"
        assert rc.import_prefix == "example.com/proj/vendor/src"

    def test_custom_dirs(self, tmp_path: Path) -> None:
        root = tmp_path / "go" / "src" / "p"
        root.mkdir(parents=True)
        cfg = Config(vendor_dir="third_party", src_dir="pkgs", workspace_env="MY_WS")
        rc = build_run_config(cfg, root, environ={"MY_WS": str(tmp_path / "go")})
        assert rc.import_prefix == "p/third_party/pkgs"

    @pytest.mark.parametrize("environ", [{}, {"GOPATH": ""}, {"GOPATH": "   "}])
    def test_missing_env(self, tmp_path: Path, environ: dict[str, str]) -> None:
        with pytest.raises(ConfigError, match="GOPATH"):
            build_run_config(Config(), tmp_path, environ=environ)

    def test_missing_project_root(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="不存在"):
            build_run_config(Config(), tmp_path / "nope", environ={"GOPATH": str(tmp_path)})

    def test_uses_process_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        root = tmp_path / "go" / "src" / "x"
        root.mkdir(parents=True)
        monkeypatch.setenv("GOPATH", str(tmp_path / "go"))
        assert build_run_config(Config(), root).namespace_prefix == "x"

    def test_run_config_is_frozen(self, run_config) -> None:
        with pytest.raises(AttributeError):
            run_config.namespace_prefix = "other"

    def test_config_error_is_vendor_error(self) -> None:
        err = ConfigError("x")
        assert isinstance(err, VendorError)
        assert err.code == "CONFIG_ERROR"

"""
Tests for use cases — check, resolve-config, setup.
"""

from pathlib import Path

import pytest

from tests.fakes import ALL_TOOLS, FakeProbe
from toolplane.adapters.mock import MockActivator
from toolplane.adapters.registry import ActivatorRegistry
from toolplane.core.models.capability import CAPABILITIES
from toolplane.core.use_cases.check import run_check
from toolplane.core.use_cases.resolve_config import resolve_config
from toolplane.core.use_cases.setup import run_setup


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep config auto-discovery away from the real working tree."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("SHELL", "/bin/bash")


class TestRunCheck:
    def test_all_found(self, probe_all: FakeProbe):
        result = run_check(probe=probe_all)
        assert result.ok
        assert result.instructions == []

    def test_missing(self):
        result = run_check(probe=FakeProbe({"brew": "/opt/homebrew/bin/brew"}))
        assert not result.ok
        d = result.to_dict()
        assert d["ok"] is False
        assert d["package_manager"] == "brew"
        assert d["missing"] == ["bash", "shellcheck", "shfmt", "bash-language-server"]
        assert [i["command"] for i in d["instructions"]] == [
            "brew install shellcheck",
            "brew install shfmt",
            "npm install -g bash-language-server",
        ]

    def test_custom_tools(self, probe_all: FakeProbe):
        result = run_check(tools=["shfmt"], probe=probe_all)
        assert result.dependencies.names == ["shfmt"]


class TestResolveConfig:
    def test_defaults_only(self):
        result = resolve_config()
        assert result.ok
        assert result.sources == ["<defaults>"]
        assert result.config.shell_binary == "bash"

    def test_two_files(self, tmp_path: Path):
        user = tmp_path / "user.yml"
        user.write_text("shell_binary: zsh\nfeatures:\n  lsp: false\n")
        inv = tmp_path / "inv.yml"
        inv.write_text("shell_binary: sh\n")
        result = resolve_config([user, inv])
        assert result.config.shell_binary == "sh"
        assert result.to_dict()["features"]["lsp"] is False
        assert result.sources == ["<defaults>", str(user), str(inv)]

    def test_discovered_user_layer(self):
        Path("toolplane.yml").write_text("format_on_save: false\n")
        assert resolve_config().config.format_on_save is False
        assert resolve_config(discover=False).config.format_on_save is True

    def test_overrides(self):
        result = resolve_config(overrides=["features.linter=false"])
        assert result.to_dict()["features"]["linter"] is False

    def test_too_many_files(self, tmp_path: Path):
        result = resolve_config([tmp_path / "a", tmp_path / "b", tmp_path / "c"])
        assert not result.ok
        assert "At most two" in result.error

    def test_missing_file(self, tmp_path: Path):
        result = resolve_config([tmp_path / "missing.yml"])
        assert not result.ok
        assert "not found" in result.to_dict()["error"]

    def test_malformed(self, tmp_path: Path):
        bad = tmp_path / "bad.yml"
        bad.write_text("features: \"yes\"\n")
        result = resolve_config([bad])
        assert result.config is None
        assert result.error == "user: 'features': expected a mapping, got str"


class TestRunSetup:
    def test_mock_mode(self, probe_all: FakeProbe):
        result = run_setup(mock_mode=True, probe=probe_all)
        assert result.error is None
        assert result.setup.status == "ok"
        assert result.to_dict()["status"] == "ok"

    def test_custom_registry(self):
        registry = ActivatorRegistry()
        for cap in CAPABILITIES:
            registry.register(MockActivator(cap))
        probe = FakeProbe({k: v for k, v in ALL_TOOLS.items() if k != "shellcheck"})
        result = run_setup(registry=registry, probe=probe, presenter=lambda _: None)
        assert result.setup.status == "partial"
        assert [i.tool for i in result.setup.instructions] == ["shellcheck"]

    def test_config_error(self, tmp_path: Path, probe_all: FakeProbe):
        bad = tmp_path / "bad.yml"
        bad.write_text("tools: none\n")
        result = run_setup(config_path=bad, probe=probe_all)
        assert result.setup is None
        assert result.to_dict() == {"error": "user: 'tools': expected a mapping, got str"}

    def test_bad_override(self, probe_all: FakeProbe):
        result = run_setup(overrides=["nonsense"], probe=probe_all)
        assert "expected KEY=VALUE" in result.error

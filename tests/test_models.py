"""
Tests for domain models — tools, receipts, resolved config.
"""

import pytest
from pydantic import ValidationError

from toolplane.core.models import (
    CAPABILITIES,
    Capability,
    CapabilityRequest,
    DependencySet,
    FeatureActivation,
    InstallInstruction,
    ProbeResult,
    Receipt,
    ResolvedConfig,
    ToolDescriptor,
)

# ── Tools ────────────────────────────────────────────────────────────


class TestToolDescriptor:
    def test_probe_command_defaults_to_name(self):
        assert ToolDescriptor(name="shfmt").probe_command == "shfmt"

    def test_explicit_probe_command(self):
        d = ToolDescriptor(name="apt", probe_command="apt-get")
        assert d.name == "apt"
        assert d.probe_command == "apt-get"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ToolDescriptor(name="")

    def test_frozen(self):
        d = ToolDescriptor(name="bash")
        with pytest.raises(ValidationError):
            d.name = "zsh"


class TestProbeResult:
    def test_found_requires_path(self):
        with pytest.raises(ValidationError):
            ProbeResult(tool=ToolDescriptor(name="bash"), found=True)

    def test_absent_must_not_carry_path(self):
        with pytest.raises(ValidationError):
            ProbeResult(tool=ToolDescriptor(name="bash"), resolved_path="/bin/bash")

    def test_absent(self):
        r = ProbeResult.absent(ToolDescriptor(name="shfmt"), timed_out=True)
        assert not r.found
        assert r.resolved_path is None
        assert r.timed_out
        assert r.name == "shfmt"

    def test_to_dict_found(self):
        r = ProbeResult(tool=ToolDescriptor(name="bash"), found=True, resolved_path="/bin/bash")
        assert r.to_dict() == {"found": True, "path": "/bin/bash"}

    def test_to_dict_reports_error(self):
        r = ProbeResult.absent(ToolDescriptor(name="bash"), error="no shell")
        assert r.to_dict() == {"found": False, "path": None, "error": "no shell"}


def _deps(**found: str | None) -> DependencySet:
    results = {}
    for name, path in found.items():
        tool = ToolDescriptor(name=name.replace("_", "-"))
        results[tool.name] = (
            ProbeResult(tool=tool, found=True, resolved_path=path)
            if path else ProbeResult.absent(tool)
        )
    return DependencySet(results=results)


class TestDependencySet:
    def test_missing_keeps_order(self):
        deps = _deps(shfmt=None, bash="/bin/bash", shellcheck=None)
        assert deps.names == ["shfmt", "bash", "shellcheck"]
        assert deps.missing == ["shfmt", "shellcheck"]
        assert deps.found == ["bash"]
        assert not deps.all_found

    def test_lookup(self):
        deps = _deps(bash="/bin/bash", shfmt=None)
        assert "bash" in deps
        assert "zsh" not in deps
        assert deps["bash"].resolved_path == "/bin/bash"
        assert len(deps) == 2

    def test_path_and_is_found(self):
        deps = _deps(bash="/bin/bash", shfmt=None)
        assert deps.path("bash") == "/bin/bash"
        assert deps.path("shfmt") is None
        assert deps.path("unknown") is None
        assert deps.is_found("bash")
        assert not deps.is_found("unknown")

    def test_empty_is_all_found(self):
        assert DependencySet().all_found

    def test_to_dict(self):
        deps = _deps(bash="/bin/bash", shfmt=None)
        assert deps.to_dict() == {
            "bash": {"found": True, "path": "/bin/bash"},
            "shfmt": {"found": False, "path": None},
        }


class TestInstallInstruction:
    def test_label_falls_back_to_tool(self):
        inst = InstallInstruction(tool="shfmt", manager="brew", command="brew install shfmt")
        assert inst.to_dict() == {
            "tool": "shfmt",
            "label": "shfmt",
            "manager": "brew",
            "command": "brew install shfmt",
        }


# ── Receipts ─────────────────────────────────────────────────────────


class TestReceipt:
    def test_success(self):
        r = Receipt.success(Capability.LSP, output="started")
        assert r.ok
        assert not r.failed
        assert r.output == "started"
        assert r.started_at

    def test_failure(self):
        r = Receipt.failure(Capability.LINTER, error="boom")
        assert r.failed
        assert r.error == "boom"

    def test_skip(self):
        r = Receipt.skip(Capability.TREESITTER, reason="host has no grammar cache")
        assert r.skipped
        assert r.output == "host has no grammar cache"
        assert r.missing == []

    def test_skip_for_missing_tools(self):
        r = Receipt.skip(Capability.LSP, missing=["bash-language-server", "shellcheck"])
        assert r.output == "missing: bash-language-server, shellcheck"
        assert r.missing == ["bash-language-server", "shellcheck"]
        assert r.metadata == {"missing": ["bash-language-server", "shellcheck"]}

    def test_request_round_trip(self):
        request = CapabilityRequest(
            capability=Capability.LINTER,
            command=["/usr/bin/shellcheck", "--enable=all"],
            settings={"lint_on_save": True},
        )
        r = Receipt.success(Capability.LINTER, request=request, metadata={"host": "nvim"})
        assert r.metadata["host"] == "nvim"
        assert r.metadata["request"]["command"] == ["/usr/bin/shellcheck", "--enable=all"]
        assert r.request == request

    def test_no_request(self):
        assert Receipt.success(Capability.LSP).request is None


# ── Capabilities / config ────────────────────────────────────────────


class TestCapability:
    def test_fixed_order(self):
        assert [c.value for c in CAPABILITIES] == [
            "lsp", "formatter", "linter", "treesitter", "completion",
        ]

    def test_activation_defaults_inactive(self):
        assert FeatureActivation(capability=Capability.LSP).active is False


class TestResolvedConfig:
    def test_defaults(self):
        cfg = ResolvedConfig()
        assert cfg.shell_binary == "bash"
        assert cfg.features == {}
        assert not cfg.is_enabled(Capability.LSP)

    def test_feature_keys_are_capabilities(self):
        cfg = ResolvedConfig.model_validate({"features": {"lsp": True}})
        assert cfg.features == {Capability.LSP: True}
        assert cfg.is_enabled(Capability.LSP)

    @pytest.mark.parametrize("shell,dialect", [
        ("bash", "bash"),
        ("/usr/bin/zsh", "zsh"),
        ("zsh", "zsh"),
        ("/bin/sh", "bash"),
    ])
    def test_shell_dialect(self, shell: str, dialect: str):
        assert ResolvedConfig(shell_binary=shell).shell_dialect == dialect

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            ResolvedConfig.model_validate({"colour": "red"})

    def test_to_dict_uses_plain_keys(self):
        d = ResolvedConfig.model_validate({"features": {"linter": False}}).to_dict()
        assert d["features"] == {"linter": False}
        assert d["tools"]["completion"]["snippets"] is True

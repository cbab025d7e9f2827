"""
Tests for the orchestrator — full setup passes against fake hosts.
"""

import pytest

from tests.fakes import ALL_TOOLS, FakeProbe
from toolplane.adapters import default_registry
from toolplane.adapters.mock import MockActivator
from toolplane.adapters.registry import ActivatorRegistry
from toolplane.core.config.loader import ConfigShapeError
from toolplane.core.engine import Orchestrator
from toolplane.core.models.capability import CAPABILITIES, Capability


class _Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, instructions):
        self.calls.append(list(instructions))


def _mock_registry(**errors: str) -> ActivatorRegistry:
    registry = ActivatorRegistry()
    for cap in CAPABILITIES:
        registry.register(MockActivator(cap, error=errors.get(cap.value)))
    return registry


def _without(*names: str) -> FakeProbe:
    return FakeProbe({k: v for k, v in ALL_TOOLS.items() if k not in names})


class TestOrchestrator:
    def test_everything_present(self, defaults: dict, probe_all: FakeProbe):
        presenter = _Recorder()
        result = Orchestrator(default_registry(), probe_all, presenter=presenter).run(defaults)
        assert result.status == "ok"
        assert result.activated == list(CAPABILITIES)
        assert result.package_manager.name == "apt"
        assert result.instructions == []
        assert presenter.calls == []

    def test_degrades_when_nothing_is_installed(self, defaults: dict, probe_none: FakeProbe):
        presenter = _Recorder()
        result = Orchestrator(default_registry(), probe_none, presenter=presenter).run(defaults)

        assert result.package_manager is None
        assert result.skipped == [Capability.LSP, Capability.FORMATTER, Capability.LINTER]
        assert result.activated == [Capability.TREESITTER, Capability.COMPLETION]
        assert result.status == "partial"
        assert result.receipt(Capability.COMPLETION).output == "sources: luasnip, path, buffer"

        assert len(presenter.calls) == 1
        assert presenter.calls[0] == result.instructions
        assert [i.tool for i in result.instructions] == ["bash-language-server"]

    def test_skip_names_missing_tool(self, defaults: dict):
        result = Orchestrator(default_registry(), _without("shfmt")).run(defaults)
        receipt = result.receipt(Capability.FORMATTER)
        assert receipt.skipped
        assert receipt.output == "missing: shfmt"
        assert receipt.metadata == {"missing": ["shfmt"]}
        assert [i.command for i in result.instructions] == [
            "GO111MODULE=on go install mvdan.cc/sh/v3/cmd/shfmt@latest",
        ]

    def test_disabled_features_not_activated(self, defaults: dict, probe_all: FakeProbe):
        registry = _mock_registry()
        result = Orchestrator(registry, probe_all).run(
            defaults, {"features": {"lsp": False}}, {"features": {"completion": False}},
        )
        assert result.activated == [Capability.FORMATTER, Capability.LINTER, Capability.TREESITTER]
        assert result.receipt(Capability.LSP) is None
        assert registry.get(Capability.LSP).call_count == 0
        assert {a.capability: a.active for a in result.activations}[Capability.LSP] is False

    def test_no_features_means_nothing_activated(self, probe_all: FakeProbe):
        registry = _mock_registry()
        result = Orchestrator(registry, probe_all).run({})
        assert result.receipts == []
        assert result.status == "ok"
        assert all(registry.get(c).call_count == 0 for c in CAPABILITIES)

    def test_activation_failure_is_isolated(self, defaults: dict, probe_all: FakeProbe):
        registry = _mock_registry(linter="shellcheck crashed")
        result = Orchestrator(registry, probe_all).run(defaults)
        assert result.failed == [Capability.LINTER]
        assert len(result.activated) == 4
        assert result.receipt(Capability.LINTER).error == "shellcheck crashed"
        assert result.status == "partial"

    def test_all_failed(self, probe_all: FakeProbe):
        registry = _mock_registry(lsp="no server")
        result = Orchestrator(registry, probe_all).run({"features": {"lsp": True}})
        assert result.status == "failed"

    def test_all_skipped(self, probe_none: FakeProbe):
        result = Orchestrator(_mock_registry(), probe_none).run({"features": {"lsp": True}})
        assert result.status == "degraded"

    def test_activator_requirements_honoured(self, defaults: dict, probe_all: FakeProbe):
        registry = _mock_registry()
        registry.register(MockActivator(Capability.TREESITTER, requires=("tree-sitter",)))
        result = Orchestrator(registry, probe_all).run(defaults)
        assert result.receipt(Capability.TREESITTER).output == "missing: tree-sitter"
        assert registry.get(Capability.TREESITTER).call_count == 0

    def test_missing_activator_reported(self, defaults: dict, probe_all: FakeProbe):
        registry = _mock_registry()
        registry.unregister(Capability.COMPLETION)
        result = Orchestrator(registry, probe_all).run(defaults)
        assert result.failed == [Capability.COMPLETION]

    def test_shape_error_aborts_before_activation(self, defaults: dict, probe_all: FakeProbe):
        registry = _mock_registry()
        presenter = _Recorder()
        with pytest.raises(ConfigShapeError):
            Orchestrator(registry, probe_all, presenter=presenter).run(
                defaults, {"features": "yes"},
            )
        assert all(registry.get(c).call_count == 0 for c in CAPABILITIES)
        assert presenter.calls == []

    def test_mock_mode(self, defaults: dict, probe_all: FakeProbe):
        result = Orchestrator(default_registry(mock_mode=True), probe_all).run(defaults)
        assert result.status == "ok"
        assert all(r.metadata.get("mock") for r in result.receipts)

    def test_idempotent(self, defaults: dict):
        orchestrator = Orchestrator(default_registry(), _without("shellcheck"))
        first = orchestrator.run(defaults, {"shell_binary": "zsh"})
        second = orchestrator.run(defaults, {"shell_binary": "zsh"})
        assert first.config == second.config
        assert first.dependencies == second.dependencies
        assert first.instructions == second.instructions
        assert [(r.capability, r.status, r.output) for r in first.receipts] == [
            (r.capability, r.status, r.output) for r in second.receipts
        ]

    def test_reprobes_every_pass(self, defaults: dict):
        probe = _without("shfmt")
        orchestrator = Orchestrator(default_registry(), probe)
        assert orchestrator.run(defaults).receipt(Capability.FORMATTER).skipped

        probe.found["shfmt"] = "/usr/local/bin/shfmt"
        assert orchestrator.run(defaults).receipt(Capability.FORMATTER).ok

    def test_to_dict(self, defaults: dict):
        d = Orchestrator(default_registry(), _without("shfmt")).run(defaults).to_dict()
        assert d["status"] == "partial"
        assert d["package_manager"] == "apt"
        assert d["dependencies"]["shfmt"] == {"found": False, "path": None}
        assert d["features"]["formatter"] is True
        assert [r["status"] for r in d["receipts"]] == ["ok", "skipped", "ok", "ok", "ok"]
        assert d["config"]["shell_binary"] == "bash"

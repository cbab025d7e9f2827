"""
toolplane — CLI entrypoint.

Usage:
    orchestrate --help
    orchestrate --check
    orchestrate --resolve-config user.yml [--resolve-config invocation.yml]
    orchestrate setup --json
"""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path

import click
import yaml

from toolplane import __version__
from toolplane.core.models.tool import InstallInstruction
from toolplane.core.observability.logging_config import cli_level, setup_from_env

# Exit codes
EXIT_OK = 0
EXIT_MISSING = 1
EXIT_BAD_CONFIG = 2


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="orchestrate")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="User config layer (default: auto-detect toolplane.yml).",
)
@click.option("--check", "check_flag", is_flag=True, help="Same as the 'check' command.")
@click.option(
    "--resolve-config",
    "resolve_layers",
    multiple=True,
    metavar="LAYER",
    type=click.Path(dir_okay=False, path_type=Path),
    help=(
        "Layer file to resolve; repeat once per layer, user then invocation "
        "(--resolve-config user.yml --resolve-config inv.yml). "
        "Same as 'resolve LAYERS...'."
    ),
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: Path | None,
    check_flag: bool,
    resolve_layers: tuple[Path, ...],
) -> None:
    """toolplane — shell tooling availability, config, and activation."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_env(cli_level(debug, verbose, quiet), quiet_third_party=not debug)

    if ctx.invoked_subcommand is not None:
        return
    if check_flag:
        ctx.invoke(check)
    elif resolve_layers:
        ctx.invoke(resolve, layers=resolve_layers)
    else:
        click.echo(ctx.get_help())


def _echo_instructions(instructions: Sequence[InstallInstruction]) -> None:
    if not instructions:
        return
    click.echo()
    click.secho("⚠️  Some required tools are missing. Please install:", fg="yellow")
    for inst in instructions:
        via = f" (via {inst.manager})" if inst.manager else ""
        click.secho(f"   • {inst.tool}{via}", bold=True)
        click.echo(f"       {inst.command}")


# ── Check ───────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Probe required tools and show install instructions for the missing ones."""
    from toolplane.core.use_cases.check import run_check

    result = run_check()
    code = EXIT_OK if result.ok else EXIT_MISSING

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(code)

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        manager = result.package_manager.name if result.package_manager else "none"
        click.secho(f"\n🔍 Dependencies (package manager: {manager})", fg="cyan", bold=True)

    for name in result.dependencies.names:
        probe = result.dependencies[name]
        if probe.found:
            click.secho(f"   ✓ {name}", fg="green", nl=False)
            click.echo(f"  → {probe.resolved_path}")
        else:
            note = " (timed out)" if probe.timed_out else ""
            note = f" ({probe.error})" if probe.error else note
            click.secho(f"   ✗ {name}{note}", fg="red")

    _echo_instructions(result.instructions)
    click.echo()
    sys.exit(code)


# ── Resolve ─────────────────────────────────────────────────────


@cli.command()
@click.argument(
    "layers",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option("--set", "overrides", multiple=True, metavar="KEY=VALUE",
              help="Invocation override, e.g. features.lsp=false.")
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
    help="Output format.",
)
@click.option("--no-discover", is_flag=True, help="Don't auto-detect toolplane.yml.")
@click.pass_context
def resolve(
    ctx: click.Context,
    layers: tuple[Path, ...],
    overrides: tuple[str, ...],
    fmt: str,
    no_discover: bool,
) -> None:
    """Print the resolved configuration.

    LAYERS are up to two files: the user layer, then the invocation
    layer. Both sit on top of the compiled-in defaults.

    Examples:

        orchestrate resolve ~/.toolplane.yml

        orchestrate resolve --set features.lsp=false --format yaml
    """
    from toolplane.core.use_cases.resolve_config import resolve_config

    config_path: Path | None = ctx.obj.get("config_path")
    if not layers and config_path is not None:
        layers = (config_path,)

    result = resolve_config(
        layer_paths=layers,
        overrides=overrides,
        discover=not no_discover,
    )

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(EXIT_BAD_CONFIG)

    data = result.to_dict()
    if fmt == "yaml":
        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)
    else:
        click.echo(json.dumps(data, indent=2))


# ── Setup ───────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--set", "overrides", multiple=True, metavar="KEY=VALUE",
              help="Invocation override, e.g. shell_binary=zsh.")
@click.option("--mock", is_flag=True, help="Use mock activation (no collaborators).")
@click.pass_context
def setup(
    ctx: click.Context,
    as_json: bool,
    overrides: tuple[str, ...],
    mock: bool,
) -> None:
    """Run a full setup pass: probe, advise, gate, activate.

    Missing tools do not fail the pass; their capabilities are skipped.
    """
    from toolplane.core.use_cases.setup import run_setup

    result = run_setup(
        config_path=ctx.obj.get("config_path"),
        overrides=overrides,
        mock_mode=mock,
        presenter=lambda _instructions: None,  # rendered below
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(EXIT_BAD_CONFIG if result.error else EXIT_OK)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(EXIT_BAD_CONFIG)

    setup_result = result.setup
    assert setup_result is not None

    mode_label = "[mock] " if mock else ""
    click.secho(
        f"\n⚡ {mode_label}setup — shell: {setup_result.config.shell_binary}",
        fg="cyan",
        bold=True,
    )

    for activation in setup_result.activations:
        name = activation.capability.value
        receipt = setup_result.receipt(activation.capability)
        if receipt is None:
            click.secho(f"   ○ {name} (disabled)", dim=True)
        elif receipt.ok:
            click.secho(f"   ✓ {name}", fg="green", nl=False)
            click.echo(f"  {receipt.output}" if receipt.output else "")
        elif receipt.failed:
            click.secho(f"   ✗ {name}", fg="red", nl=False)
            click.echo(f"  {receipt.error}")
        else:
            click.secho(f"   ⊘ {name} ", fg="yellow", nl=False)
            click.echo(f"({receipt.output})")

    _echo_instructions(setup_result.instructions)

    status_color = {"ok": "green", "partial": "yellow"}.get(setup_result.status, "red")
    click.echo()
    click.secho(f"   Result: {setup_result.status}", fg=status_color, bold=True)
    click.echo()


if __name__ == "__main__":
    cli()

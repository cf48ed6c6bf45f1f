"""
sysup — CLI entrypoint.

Usage:
    sysup               # same as ``sysup update``
    sysup update
    sysup plan --json
    python -m sysup --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from sysup import __version__
from sysup.core.observability.logging_config import (
    LOG_FILE_ENV_VAR,
    LOG_FILE_LEVEL_ENV_VAR,
    resolve_level,
    setup_logging,
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="sysup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to the settings file (default: ~/.config/sysup/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """sysup — update every package manager on this machine."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV_VAR),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV_VAR),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(update)


@cli.command()
@click.pass_context
def update(ctx: click.Context) -> None:
    """Detect the platform and run its update plan."""
    from sysup.core.use_cases.update import run_update

    result = run_update(config_path=ctx.obj.get("config_path"))

    if result.error:
        click.echo()
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        click.echo()
        click.secho("✅ Update complete", fg="green", bold=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(ctx: click.Context, as_json: bool) -> None:
    """Show the update plan for this machine without running it."""
    from sysup.core.models.plan import (
        BestEffortStep,
        CargoStep,
        ChainedStep,
        PlainStep,
    )
    from sysup.core.use_cases.update import plan_update

    result = plan_update(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    update_plan = result.plan
    assert update_plan is not None

    target = update_plan.platform
    if update_plan.distribution:
        target = f"{target}/{update_plan.distribution}"
    click.secho(f"\n📋 Update plan: {target}", fg="cyan", bold=True)
    click.echo(f"   Steps: {len(update_plan.steps)}")
    click.echo()

    for step in update_plan.steps:
        click.secho(f"   • {step.id}", fg="white", bold=True, nl=False)
        click.echo(f" ({step.kind})")
        if isinstance(step, PlainStep):
            for command in step.commands:
                click.echo(f"       $ {command.display}")
        elif isinstance(step, BestEffortStep):
            click.echo(f"       $ {step.command.display}")
            if step.description:
                click.echo(f"       best effort: {step.description}")
        elif isinstance(step, ChainedStep):
            click.echo(f"       $ {step.probe.display}")
            click.echo(f"       → $ {step.follow_up.display.rstrip()} <output lines>")
        elif isinstance(step, CargoStep):
            click.echo(f"       $ {step.list_command.display}")
            click.echo(f"       → $ {step.install_command.display.rstrip()} <crate>  (per registry crate)")

    click.echo()


if __name__ == "__main__":
    cli()

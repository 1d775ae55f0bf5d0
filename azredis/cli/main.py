"""azredis command-line interface.

Commands:
    azredis plan MANIFEST [--observed FILE] [--json]   Compute a reconcile plan.
    azredis observe OBSERVED [--json]                  Print the status projection.
    azredis version                                    Print version and exit.

MANIFEST is a YAML or JSON Redis resource; OBSERVED is the provider's JSON
representation of the live cache.  Nothing is sent to the provider.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
import yaml

from azredis import __version__
from azredis.api.schemas import (
    ProviderResource,
    RedisManifest,
    create_request_document,
    observation_document,
    update_request_document,
)
from azredis.config import load_config
from azredis.errors import ReconcileError
from azredis.models.resources import CreateParameters, RedisResource, UpdateParameters
from azredis.observability.logging import bind_resource, setup_logging
from azredis.reconcile import PlanAction, ReconcilePlan, generate_observation, plan

# ---------------------------------------------------------------------------
# Colour helpers
# ---------------------------------------------------------------------------

_ACTION_COLORS: dict[str, str] = {
    "create": "cyan",
    "update": "yellow",
    "noop": "green",
}


def _styled_action(action: str) -> str:
    color = _ACTION_COLORS.get(action, "white")
    return click.style(action.upper(), fg=color, bold=True)


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------


def _load_document(path: Path) -> object:
    """Read a YAML or JSON file.

    Raises click.ClickException on unreadable or unparseable files.
    """
    try:
        with path.open(encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except OSError as err:
        raise click.ClickException(f"Cannot read {path}: {err.strerror or err}") from err
    except yaml.YAMLError as err:
        raise click.ClickException(f"Cannot parse {path}: {err}") from err


def _load_observed(path: Path) -> RedisResource:
    try:
        return ProviderResource.from_document(_load_document(path)).to_resource()
    except ReconcileError as err:
        raise click.ClickException(str(err)) from err


def _request_document(request: CreateParameters | UpdateParameters | None) -> dict[str, object] | None:
    if isinstance(request, CreateParameters):
        return create_request_document(request)
    if isinstance(request, UpdateParameters):
        return update_request_document(request)
    return None


def _plan_document(result: ReconcilePlan) -> dict[str, object]:
    return {
        "action": result.action.value,
        "request": _request_document(result.request),
        "lateInitialized": list(result.late_initialized),
        "drift": [{"field": d.field_path, "desired": d.desired, "observed": d.observed} for d in result.drift],
        "observation": observation_document(result.observation) if result.observation is not None else None,
    }


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """azredis: Azure Cache for Redis reconcile planner."""
    try:
        config = load_config()
    except ValueError as err:
        raise click.ClickException(str(err)) from err
    setup_logging(config.log.level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# ---------------------------------------------------------------------------
# azredis version
# ---------------------------------------------------------------------------


@cli.command("version")
def cmd_version() -> None:
    """Print the azredis version and exit."""
    click.echo(f"azredis {__version__}")


# ---------------------------------------------------------------------------
# azredis plan
# ---------------------------------------------------------------------------


@cli.command("plan")
@click.argument("manifest", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--observed",
    "observed_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Provider JSON of the live cache.  Omit if it does not exist yet.",
)
@click.option(
    "--no-late-init",
    is_flag=True,
    default=False,
    help="Skip late initialization regardless of AZREDIS_LATE_INIT_ENABLED.",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    default=False,
    help="Print the plan as JSON.",
)
@click.pass_context
def cmd_plan(
    ctx: click.Context,
    manifest: Path,
    observed_path: Path | None,
    no_late_init: bool,
    output_json: bool,
) -> None:
    """Decide whether the cache described by MANIFEST must be created or updated."""
    config = ctx.obj["config"]
    try:
        resource = RedisManifest.from_document(_load_document(manifest))
    except ReconcileError as err:
        raise click.ClickException(str(err)) from err
    bind_resource(resource.metadata.name if resource.metadata and resource.metadata.name else manifest.stem)
    spec = resource.to_parameters()
    observed = _load_observed(observed_path) if observed_path is not None else None

    late_init = config.reconcile.late_init_enabled and not no_late_init
    result = plan(spec, observed, late_init=late_init)
    document = _plan_document(result)

    if output_json:
        click.echo(json.dumps(document, indent=config.output.indent or None, sort_keys=True))
        return

    _print_plan(result, document, config.output.indent)


def _print_plan(result: ReconcilePlan, document: dict[str, object], indent: int) -> None:
    """Pretty-print a plan."""
    click.echo(click.style("Action: ", bold=True) + _styled_action(result.action.value))
    click.echo("")

    if result.late_initialized:
        click.echo(click.style("Late-initialized fields:", bold=True))
        for name in result.late_initialized:
            click.echo(f"  {name}")
        click.echo("")

    if result.drift:
        click.echo(click.style(f"Drift ({len(result.drift)}):", bold=True, fg="yellow"))
        for d in result.drift:
            click.echo(f"  {d.field_path}: {d.observed or 'null'} -> {click.style(d.desired or 'null', fg='yellow')}")
        click.echo("")
    elif result.action is PlanAction.NOOP:
        click.echo(click.style("No drift.", fg="green"))
        click.echo("")

    if document["request"] is not None:
        click.echo(click.style("Request:", bold=True))
        click.echo(json.dumps(document["request"], indent=indent or None, sort_keys=True))


# ---------------------------------------------------------------------------
# azredis observe
# ---------------------------------------------------------------------------


@cli.command("observe")
@click.argument("observed", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    default=False,
    help="Print the observation as JSON.",
)
@click.pass_context
def cmd_observe(ctx: click.Context, observed: Path, output_json: bool) -> None:
    """Print the status projection of the provider resource in OBSERVED."""
    config = ctx.obj["config"]
    document = observation_document(generate_observation(_load_observed(observed)))

    if output_json:
        click.echo(json.dumps(document, indent=config.output.indent or None, sort_keys=True))
        return

    click.echo(click.style("Observation", bold=True))
    for key, value in sorted(document.items()):
        padding = max(0, 20 - len(key)) * " "
        click.echo(f"  {key}{padding} {json.dumps(value, sort_keys=True)}")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()

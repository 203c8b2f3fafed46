"""Main CLI entry point for form-prefill."""

import json
import logging

import click
from rich.console import Console

from form_prefill import __version__, config

console = Console()


def _load(ctx):
    """Load the blueprint named on the group, once per invocation."""
    from form_prefill.blueprint import BlueprintError, load_blueprint

    if ctx.obj.get("blueprint_data") is None:
        try:
            ctx.obj["blueprint_data"] = load_blueprint(ctx.obj["blueprint"])
        except BlueprintError as exc:
            raise click.ClickException(str(exc)) from exc
    return ctx.obj["blueprint_data"]


def _require_form(blueprint, target):
    if target not in blueprint.graph:
        raise click.ClickException(f"Unknown form: {target}")


@click.group()
@click.version_option(version=__version__)
@click.option("-b", "--blueprint", type=click.Path(dir_okay=False),
              default=str(config.DEFAULT_BLUEPRINT_PATH), envvar=config.BLUEPRINT_ENV_VAR,
              show_default=True, help="Blueprint JSON file with forms and global data.")
@click.option("-v", "--verbose", is_flag=True, help="Log progress at INFO level.")
@click.pass_context
def main(ctx, blueprint, verbose):
    """Form Prefill: inspect form dependencies and the prefill sources they offer."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["blueprint"] = blueprint


@main.command()
@click.pass_context
def forms(ctx):
    """List every form in the blueprint with its dependencies."""
    from form_prefill.report import print_forms

    blueprint = _load(ctx)
    print_forms(console, blueprint.graph)


@main.command()
@click.argument("target")
@click.pass_context
def deps(ctx, target):
    """Show direct and transitive dependencies of TARGET."""
    from form_prefill.report import print_dependencies
    from form_prefill.resolution.dag import dependency_levels

    blueprint = _load(ctx)
    _require_form(blueprint, target)
    levels = dependency_levels(target, blueprint.graph)
    print_dependencies(console, target, levels, blueprint.graph)

    dangling = [form_id for form_id in levels if form_id not in blueprint.graph]
    if dangling:
        console.print(
            f"[yellow]Warning:[/yellow] {len(dangling)} dependencies have no form: "
            + ", ".join(dangling)
        )


@main.command()
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print the buckets as JSON.")
@click.pass_context
def sources(ctx, target, as_json):
    """Show the data sources available to prefill TARGET."""
    from form_prefill.categorize import categorize_sources
    from form_prefill.report import categorized_to_dict, print_categorized

    blueprint = _load(ctx)
    _require_form(blueprint, target)
    categorized = categorize_sources(target, blueprint.graph, blueprint.global_data)

    if as_json:
        click.echo(json.dumps(categorized_to_dict(categorized), indent=2))
    else:
        print_categorized(console, target, categorized)


@main.command()
@click.pass_context
def check(ctx):
    """Check the form graph for dependency cycles."""
    from form_prefill.resolution.dag import find_cycle

    blueprint = _load(ctx)
    cycle = find_cycle(blueprint.graph)
    if cycle is None:
        console.print(f"[green]No cycles[/green] in {len(blueprint.graph)} forms")
        return
    console.print(f"[red]Cycle detected:[/red] {' -> '.join(cycle)}")
    ctx.exit(1)


@main.command("map")
@click.argument("target")
@click.argument("field_id")
@click.argument("source_id")
@click.argument("source_field")
@click.option("--json", "as_json", is_flag=True, help="Print the mapping as JSON.")
@click.pass_context
def map_field(ctx, target, field_id, source_id, source_field, as_json):
    """Prefill TARGET's FIELD_ID from SOURCE_FIELD of data source SOURCE_ID.

    The source must be one of the sources categorized for TARGET.
    """
    from form_prefill.categorize import categorize_sources
    from form_prefill.mappings import build_mapping, validate_mapping
    from form_prefill.report import print_mapping

    blueprint = _load(ctx)
    _require_form(blueprint, target)
    categorized = categorize_sources(target, blueprint.graph, blueprint.global_data)

    source = next((s for s in categorized.all_sources() if s.id == source_id), None)
    if source is None:
        raise click.ClickException(f"Source {source_id} is not available for {target}")
    data_field = next((f for f in source.list_fields() if f.id == source_field), None)
    if data_field is None:
        raise click.ClickException(f"Source {source_id} has no field {source_field}")

    mapping = build_mapping(target, field_id, source, data_field)
    problems = validate_mapping(mapping, blueprint.graph, categorized)

    if as_json:
        click.echo(json.dumps({"mapping": mapping.to_dict(), "problems": problems}, indent=2))
    else:
        print_mapping(console, mapping, problems)
    if problems:
        ctx.exit(1)

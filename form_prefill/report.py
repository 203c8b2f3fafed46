"""Rich rendering of form graphs, dependencies and categorized sources."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from form_prefill.models import CategorizedSources, FormGraph, PrefillMapping
from form_prefill.sources.base import DataSource


def print_forms(console: Console, graph: FormGraph) -> None:
    table = Table(title=f"Forms ({len(graph)})", show_lines=False)
    table.add_column("Form ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Fields", justify="right")
    table.add_column("Depends on")

    for form in graph.values():
        table.add_row(
            form.id,
            form.name,
            str(len(form.fields)),
            ", ".join(form.dependencies) or "[dim]-[/dim]",
        )
    console.print(table)


def print_dependencies(
    console: Console,
    target: str,
    levels: dict[str, int],
    graph: FormGraph,
) -> None:
    """Print each dependency of ``target`` with its hop level."""
    if not levels:
        console.print(f"[yellow]{target} has no dependencies[/yellow]")
        return

    table = Table(title=f"Dependencies of {target}")
    table.add_column("Form ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Level", justify="right")

    for form_id, level in levels.items():
        form = graph.get(form_id)
        kind = "direct" if level == 1 else "transitive"
        name = form.name if form is not None else "[red]missing[/red]"
        table.add_row(form_id, name, kind, str(level))
    console.print(table)


def _source_table(title: str, sources: tuple[DataSource, ...]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Source", style="cyan")
    table.add_column("Field ID")
    table.add_column("Type")
    table.add_column("Path", style="green")

    for source in sources:
        fields = source.list_fields()
        if not fields:
            table.add_row(source.name, "[dim]-[/dim]", "", "")
            continue
        for idx, data_field in enumerate(fields):
            table.add_row(
                source.name if idx == 0 else "",
                data_field.id,
                data_field.type.value,
                data_field.path,
            )
    return table


def print_categorized(console: Console, target: str, categorized: CategorizedSources) -> None:
    console.print(
        Panel(
            f"Direct: [bold]{len(categorized.direct)}[/bold]  |  "
            f"Transitive: [bold]{len(categorized.transitive)}[/bold]  |  "
            f"Global: [bold]{len(categorized.global_sources)}[/bold]",
            title=f"Prefill sources for {target}",
            border_style="blue",
        )
    )
    for title, sources in (
        ("Direct dependencies", categorized.direct),
        ("Transitive dependencies", categorized.transitive),
        ("Global sources", categorized.global_sources),
    ):
        if sources:
            console.print(_source_table(title, sources))
        else:
            console.print(f"[dim]{title}: none[/dim]")


def categorized_to_dict(categorized: CategorizedSources) -> dict[str, Any]:
    """JSON-ready view of the three buckets with their field listings."""

    def _source(source: DataSource) -> dict[str, Any]:
        return {
            "id": source.id,
            "name": source.name,
            "category": source.category.value,
            "fields": [
                {"id": f.id, "label": f.label, "type": f.type.value, "path": f.path}
                for f in source.list_fields()
            ],
        }

    return {
        "direct": [_source(s) for s in categorized.direct],
        "transitive": [_source(s) for s in categorized.transitive],
        "global": [_source(s) for s in categorized.global_sources],
    }


def print_mapping(console: Console, mapping: PrefillMapping, problems: list[str]) -> None:
    target = f"{mapping.target_form_id}.{mapping.target_field_id}"
    if problems:
        body = "\n".join(f"[red]- {p}[/red]" for p in problems)
        console.print(Panel(body, title=f"Invalid mapping for {target}", border_style="red"))
        return
    console.print(
        Panel(
            f"{target} <- [green]{mapping.source_path}[/green] "
            f"([dim]{mapping.source_type.value}[/dim])",
            title="Prefill mapping",
            border_style="green",
        )
    )

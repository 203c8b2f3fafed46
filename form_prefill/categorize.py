"""Categorize the data sources available to a target form.

Builds a throwaway registry of form- and global-backed sources, then splits
the target's dependencies into direct and transitive buckets. Dependency ids
with no form behind them are dropped here; the resolver still reports them.
"""

from __future__ import annotations

import logging

from form_prefill.models import CategorizedSources, FormGraph, GlobalData, SourceCategory
from form_prefill.resolution.dag import dependency_levels, resolve_direct, resolve_transitive
from form_prefill.sources.base import DataSource, FormDataSource, global_sources_for
from form_prefill.sources.registry import DataSourceRegistry

logger = logging.getLogger(__name__)


def build_registry(graph: FormGraph, global_data: GlobalData | None = None) -> DataSourceRegistry:
    """Register one source per form in ``graph`` plus the global groups, if any."""
    registry = DataSourceRegistry()
    for form in graph.values():
        registry.register(FormDataSource(form.id, form.name, form))
    if global_data is not None:
        for source in global_sources_for(global_data):
            registry.register(source)
    return registry


def categorize_sources(
    target: str | None,
    graph: FormGraph,
    global_data: GlobalData | None = None,
) -> CategorizedSources:
    """Return the direct, transitive and global sources for ``target``.

    Parameters
    ----------
    target:
        Id of the form being prefilled. ``None`` or empty means nothing is
        selected and gives three empty buckets.
    graph:
        Mapping of form id -> Form. Never modified.
    global_data:
        Optional global property snapshot; without it the global bucket is empty.

    Returns
    -------
    CategorizedSources. Direct sources follow the target's declared dependency
    order, transitive sources follow breadth-first discovery order.
    """
    if not target:
        return CategorizedSources()

    direct_ids = resolve_direct(target, graph)
    transitive_ids = resolve_transitive(target, graph)
    ordered_ids = list(dependency_levels(target, graph))

    registry = build_registry(graph, global_data)

    direct = _lookup(registry, [dep_id for dep_id in ordered_ids if dep_id in direct_ids])
    transitive = _lookup(registry, [dep_id for dep_id in ordered_ids if dep_id in transitive_ids])
    global_sources = tuple(registry.get_by_category(SourceCategory.GLOBAL))

    logger.debug(
        "categorized %s: direct=%d transitive=%d global=%d",
        target, len(direct), len(transitive), len(global_sources),
    )
    return CategorizedSources(
        direct=direct,
        transitive=transitive,
        global_sources=global_sources,
    )


def _lookup(registry: DataSourceRegistry, source_ids: list[str]) -> tuple[DataSource, ...]:
    sources = []
    for source_id in source_ids:
        source = registry.get(source_id)
        if source is None:
            logger.debug("no data source for dependency %s, skipping", source_id)
            continue
        sources.append(source)
    return tuple(sources)

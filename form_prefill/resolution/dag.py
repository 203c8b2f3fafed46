"""Dependency resolution over the form graph.

Every function here is pure: the graph is read, never modified. Identifiers
that do not resolve to a form (dangling dependencies, unknown targets) are
not errors, they simply end the traversal at that node.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping

from form_prefill.models import FormGraph

logger = logging.getLogger(__name__)


def _require_mapping(graph: FormGraph) -> None:
    if not isinstance(graph, Mapping):
        raise TypeError(
            f"form graph must be a mapping of form id -> Form, got {type(graph).__name__}"
        )


# ---------------------------------------------------------------------------
# Reachability
# ---------------------------------------------------------------------------

def resolve_all(target: str, graph: FormGraph) -> set[str]:
    """Return every form id reachable from ``target`` via dependency edges.

    Breadth-first with an explicit queue. Visitation is deduplicated by
    form id, so cyclic or self-referencing graphs terminate. ``target``
    itself is never part of the result.
    """
    return set(dependency_levels(target, graph))


def resolve_direct(target: str, graph: FormGraph) -> set[str]:
    """Return the ids ``target`` declares as dependencies (one hop)."""
    _require_mapping(graph)
    form = graph.get(target)
    if form is None:
        return set()
    return {dep_id for dep_id in form.dependencies if dep_id != target}


def resolve_transitive(target: str, graph: FormGraph) -> set[str]:
    """Return ids reachable from ``target`` only through two or more hops.

    A form reachable both directly and through a longer path is direct.
    """
    return resolve_all(target, graph) - resolve_direct(target, graph)


def dependency_levels(target: str, graph: FormGraph) -> dict[str, int]:
    """Map each form id reachable from ``target`` to its shortest hop count.

    Keys are in breadth-first discovery order; direct dependencies have
    level 1 and appear in the order the target declares them.

    Parameters
    ----------
    target:
        Id of the form whose dependencies are wanted.
    graph:
        Mapping of form id -> Form.

    Returns
    -------
    Dict of form id -> hop distance. Dangling ids are included (they are
    declared dependencies) but never expanded.
    """
    _require_mapping(graph)
    levels: dict[str, int] = {}
    visited: set[str] = set()
    queue: deque[tuple[str, int]] = deque([(target, 0)])

    while queue:
        form_id, depth = queue.popleft()
        if form_id in visited:
            continue
        visited.add(form_id)

        form = graph.get(form_id)
        if form is None:
            if form_id != target:
                logger.debug("dangling dependency: %s (level %d)", form_id, depth)
            continue

        for dep_id in form.dependencies:
            # Target is the traversal root, never its own dependency
            if dep_id == target:
                continue
            if dep_id not in levels:
                levels[dep_id] = depth + 1
            queue.append((dep_id, depth + 1))

    logger.debug("resolved %d dependencies for %s", len(levels), target)
    return levels


# ---------------------------------------------------------------------------
# Cycle detection
# ---------------------------------------------------------------------------

def find_cycle(graph: FormGraph) -> list[str] | None:
    """Return the first dependency cycle found, or None for an acyclic graph.

    The cycle is reported as a path that starts and ends on the same id,
    e.g. ``["A", "B", "A"]``; a self-dependency gives ``["A", "A"]``.
    Every form is tried as a root since the graph need not be connected.
    Dangling references are terminal and never part of a cycle.
    """
    _require_mapping(graph)
    visited: set[str] = set()

    for root in graph:
        if root in visited:
            continue

        # Iterative DFS: stack of (form id, iterator over its dependencies)
        path: list[str] = [root]
        on_path: set[str] = {root}
        visited.add(root)
        stack = [(root, iter(graph[root].dependencies))]

        while stack:
            form_id, deps = stack[-1]
            advanced = False
            for dep_id in deps:
                if dep_id in on_path:
                    start = path.index(dep_id)
                    cycle = path[start:] + [dep_id]
                    logger.debug("cycle found: %s", " -> ".join(cycle))
                    return cycle
                if dep_id in visited:
                    continue
                visited.add(dep_id)
                dep_form = graph.get(dep_id)
                if dep_form is None:
                    continue
                path.append(dep_id)
                on_path.add(dep_id)
                stack.append((dep_id, iter(dep_form.dependencies)))
                advanced = True
                break

            if not advanced:
                stack.pop()
                on_path.discard(form_id)
                path.pop()

    return None


def has_cycle(graph: FormGraph) -> bool:
    """True when any dependency cycle exists anywhere in ``graph``."""
    return find_cycle(graph) is not None

"""Dependency resolution over the form graph."""
from form_prefill.resolution.dag import (
    dependency_levels,
    find_cycle,
    has_cycle,
    resolve_all,
    resolve_direct,
    resolve_transitive,
)

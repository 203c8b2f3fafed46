"""In-memory book of prefill mappings and helpers to build and check them."""

from __future__ import annotations

from typing import Any

from form_prefill.models import (
    CategorizedSources,
    DataField,
    FormGraph,
    PrefillMapping,
    SourceCategory,
)
from form_prefill.sources.base import DataSource


class PrefillMappingBook:
    """At most one mapping per (target form, target field), insertion ordered.

    Library API for hosts that keep mappings across calls; the CLI ``map``
    command checks a single mapping and does not hold a book.
    """

    def __init__(self, mappings: list[PrefillMapping] | None = None) -> None:
        self._mappings: dict[tuple[str, str], PrefillMapping] = {}
        for mapping in mappings or []:
            self.set_mapping(mapping)

    def set_mapping(self, mapping: PrefillMapping) -> None:
        key = (mapping.target_form_id, mapping.target_field_id)
        # Replacing moves the mapping to the end, like a fresh insert
        self._mappings.pop(key, None)
        self._mappings[key] = mapping

    def get_mapping(self, form_id: str, field_id: str) -> PrefillMapping | None:
        return self._mappings.get((form_id, field_id))

    def mappings_for_form(self, form_id: str) -> list[PrefillMapping]:
        return [m for m in self._mappings.values() if m.target_form_id == form_id]

    def clear_mapping(self, form_id: str, field_id: str) -> None:
        self._mappings.pop((form_id, field_id), None)

    def clear_form(self, form_id: str) -> None:
        for key in [k for k in self._mappings if k[0] == form_id]:
            del self._mappings[key]

    def clear(self) -> None:
        self._mappings.clear()

    def all(self) -> list[PrefillMapping]:
        return list(self._mappings.values())

    def to_dicts(self) -> list[dict[str, Any]]:
        return [m.to_dict() for m in self._mappings.values()]

    def __len__(self) -> int:
        return len(self._mappings)


def build_mapping(
    target_form_id: str,
    target_field_id: str,
    source: DataSource,
    data_field: DataField,
) -> PrefillMapping:
    """Create the mapping that prefills a target field from ``data_field``."""
    is_form = source.category == SourceCategory.FORM
    return PrefillMapping(
        target_form_id=target_form_id,
        target_field_id=target_field_id,
        source_type=source.category,
        source_form_id=source.id if is_form else None,
        source_field_id=data_field.id,
        source_path=data_field.path,
    )


def validate_mapping(
    mapping: PrefillMapping,
    graph: FormGraph,
    categorized: CategorizedSources,
) -> list[str]:
    """Return human-readable problems with ``mapping``; empty when it is usable.

    A mapping is usable when its target field exists and its source field is
    offered by one of the sources categorized for the target form.
    """
    problems: list[str] = []

    target_form = graph.get(mapping.target_form_id)
    if target_form is None:
        problems.append(f"unknown target form: {mapping.target_form_id}")
    elif target_form.field_by_id(mapping.target_field_id) is None:
        problems.append(
            f"form {mapping.target_form_id} has no field {mapping.target_field_id}"
        )

    for source in categorized.all_sources():
        if not _matches_source(mapping, source):
            continue
        if any(f.id == mapping.source_field_id for f in source.list_fields()):
            break
        problems.append(f"source {source.id} has no field {mapping.source_field_id}")
        break
    else:
        problems.append(f"no available source matches path {mapping.source_path}")

    return problems


def _matches_source(mapping: PrefillMapping, source: DataSource) -> bool:
    if mapping.source_type == SourceCategory.FORM:
        return source.category == SourceCategory.FORM and source.id == mapping.source_form_id
    return source.category == mapping.source_type and any(
        f.path == mapping.source_path for f in source.list_fields()
    )

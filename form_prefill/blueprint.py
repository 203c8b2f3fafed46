"""Blueprint loader: reads a form graph and global properties from JSON.

The file shape is::

    {
      "forms": [
        {"id": "form-a", "name": "Form A",
         "fields": [{"id": "email", "label": "Email", "type": "email"}],
         "dependencies": []}
      ],
      "global_data": {"action_properties": [...], "client_org_properties": [...]}
    }

Malformed form or field records are skipped with a warning rather than
failing the whole load. An unreadable file or invalid JSON raises
``BlueprintError``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from form_prefill import config
from form_prefill.models import Blueprint, FieldType, Form, FormField, GlobalData

logger = logging.getLogger(__name__)


class BlueprintError(ValueError):
    """Raised when a blueprint file cannot be read or parsed."""


# ---------------------------------------------------------------------------
# Record parsing
# ---------------------------------------------------------------------------

def _string_list(value: Any, context: str) -> tuple[str, ...]:
    """Keep the string items of a JSON list; anything else is warned about and dropped."""
    if value is None:
        return ()
    if not isinstance(value, list):
        logger.warning("%s is not a list, ignoring: %r", context, value)
        return ()
    items = []
    for item in value:
        if not isinstance(item, str) or not item:
            logger.warning("%s: skipping non-string entry %r", context, item)
            continue
        items.append(item)
    return tuple(items)


def _usable_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def parse_field(record: Any, form_id: str) -> FormField | None:
    """Parse one field record; None when it has no usable id."""
    if not isinstance(record, dict) or not _usable_id(record.get("id")):
        logger.warning("Form %s: skipping field without id: %r", form_id, record)
        return None

    field_id = record["id"]
    raw_type = str(record.get("type", config.FALLBACK_FIELD_TYPE))
    try:
        field_type = FieldType(raw_type)
    except ValueError:
        logger.warning(
            "Form %s: unknown type %r on field %s, using %s",
            form_id, raw_type, field_id, config.FALLBACK_FIELD_TYPE,
        )
        field_type = FieldType(config.FALLBACK_FIELD_TYPE)

    return FormField(
        id=field_id,
        label=str(record.get("label") or field_id),
        type=field_type,
    )


def parse_form(record: Any) -> Form | None:
    """Parse one form record; None when it has no usable id."""
    if not isinstance(record, dict) or not _usable_id(record.get("id")):
        logger.warning("Skipping form record without id: %r", record)
        return None

    form_id = record["id"]
    field_records = record.get("fields") or []
    if not isinstance(field_records, list):
        logger.warning("Form %s: fields is not a list, ignoring", form_id)
        field_records = []

    fields = []
    for field_record in field_records:
        form_field = parse_field(field_record, form_id)
        if form_field is not None:
            fields.append(form_field)

    return Form(
        id=form_id,
        name=str(record.get("name") or form_id),
        fields=tuple(fields),
        dependencies=_string_list(record.get("dependencies"), f"Form {form_id} dependencies"),
    )


def build_form_graph(records: list[Any]) -> dict[str, Form]:
    """Index parsed forms by id. A repeated id replaces the earlier form."""
    graph: dict[str, Form] = {}
    for record in records:
        form = parse_form(record)
        if form is None:
            continue
        if form.id in graph:
            logger.warning("Duplicate form id %s, keeping the last definition", form.id)
        graph[form.id] = form
    return graph


def parse_global_data(record: Any) -> GlobalData | None:
    """Parse the ``global_data`` block. ``"default"`` selects the built-in lists."""
    if record is None:
        return None
    if record == "default":
        return GlobalData(
            action_properties=tuple(config.DEFAULT_ACTION_PROPERTIES),
            client_org_properties=tuple(config.DEFAULT_CLIENT_ORG_PROPERTIES),
        )
    if not isinstance(record, dict):
        logger.warning("global_data is not an object, ignoring: %r", record)
        return None
    return GlobalData(
        action_properties=_string_list(
            record.get("action_properties"), "global_data.action_properties"),
        client_org_properties=_string_list(
            record.get("client_org_properties"), "global_data.client_org_properties"),
    )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def blueprint_from_dict(data: dict[str, Any]) -> Blueprint:
    if not isinstance(data, dict):
        raise BlueprintError(f"Blueprint must be a JSON object, got {type(data).__name__}")
    forms = data.get("forms") or []
    if not isinstance(forms, list):
        raise BlueprintError("Blueprint 'forms' must be a list")
    return Blueprint(
        graph=build_form_graph(forms),
        global_data=parse_global_data(data.get("global_data")),
    )


def load_blueprint(path: str | Path) -> Blueprint:
    """Read a blueprint JSON file.

    Parameters
    ----------
    path:
        Location of the blueprint file.

    Returns
    -------
    Blueprint with the form graph and optional global data.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise BlueprintError(f"Cannot read blueprint {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise BlueprintError(f"Invalid JSON in blueprint {path}: {exc}") from exc

    blueprint = blueprint_from_dict(data)
    logger.info("Loaded %d forms from %s", len(blueprint.graph), path.name)
    return blueprint

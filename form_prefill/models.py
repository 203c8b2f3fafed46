"""Shared data models for form-prefill."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from form_prefill.sources.base import DataSource


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    DATE = "date"
    CHECKBOX = "checkbox"
    BUTTON = "button"
    OBJECT = "object"
    NUMBER = "number"


class SourceCategory(str, Enum):
    FORM = "form"
    GLOBAL = "global"
    CUSTOM = "custom"


@dataclass(frozen=True)
class FormField:
    """A single typed, labeled slot within a form."""
    id: str
    label: str
    type: FieldType = FieldType.TEXT


@dataclass(frozen=True)
class Form:
    """A node in the dependency graph.

    ``dependencies`` lists the ids of forms this form depends on. A form
    naming itself is malformed but tolerated by the resolver.
    """
    id: str
    name: str
    fields: tuple[FormField, ...] = ()
    dependencies: tuple[str, ...] = ()

    def field_by_id(self, field_id: str) -> FormField | None:
        for form_field in self.fields:
            if form_field.id == field_id:
                return form_field
        return None


# form id -> Form. Treated as read-only by every consumer.
FormGraph = Mapping[str, Form]


@dataclass(frozen=True)
class DataField:
    """A field offered by a data source, qualified by its display path."""
    id: str
    label: str
    type: FieldType
    path: str


@dataclass(frozen=True)
class GlobalData:
    """Snapshot of the global property groups (snake_case names)."""
    action_properties: tuple[str, ...] = ()
    client_org_properties: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategorizedSources:
    """Direct, transitive and global sources available to one target form."""
    direct: tuple[DataSource, ...] = ()
    transitive: tuple[DataSource, ...] = ()
    global_sources: tuple[DataSource, ...] = ()

    def all_sources(self) -> tuple[DataSource, ...]:
        return self.direct + self.transitive + self.global_sources

    def is_empty(self) -> bool:
        return not (self.direct or self.transitive or self.global_sources)


@dataclass(frozen=True)
class PrefillMapping:
    """Operator's choice of prefill source for one target form field."""
    target_form_id: str
    target_field_id: str
    source_type: SourceCategory
    source_field_id: str
    source_path: str
    source_form_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_form_id": self.target_form_id,
            "target_field_id": self.target_field_id,
            "source_type": self.source_type.value,
            "source_form_id": self.source_form_id,
            "source_field_id": self.source_field_id,
            "source_path": self.source_path,
        }


@dataclass
class Blueprint:
    """A loaded form graph plus its optional global property snapshot."""
    graph: dict[str, Form] = field(default_factory=dict)
    global_data: GlobalData | None = None

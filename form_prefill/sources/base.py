"""Data source interface and the form- and global-backed implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from form_prefill import config
from form_prefill.models import DataField, FieldType, Form, GlobalData, SourceCategory


def format_property_name(prop: str) -> str:
    """Render a snake_case property name in Title Case (``created_at`` -> ``Created At``)."""
    return " ".join(word[:1].upper() + word[1:] for word in prop.split("_"))


class DataSource(ABC):
    """Anything that can offer a list of prefillable fields.

    Sources compare equal by value: same class, id, name, category and
    field listing.
    """

    id: str
    name: str
    category: SourceCategory

    @abstractmethod
    def list_fields(self) -> list[DataField]:
        raise NotImplementedError

    def _key(self) -> tuple:
        return (type(self), self.id, self.name, self.category, tuple(self.list_fields()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataSource):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self.id, self.category))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"


class FormDataSource(DataSource):
    """Offers every field of one form, stamped with ``<name>.<label>`` paths."""

    category = SourceCategory.FORM

    def __init__(self, source_id: str, name: str, form: Form) -> None:
        self.id = source_id
        self.name = name
        self._form = form

    @property
    def form(self) -> Form:
        return self._form

    def list_fields(self) -> list[DataField]:
        return [
            DataField(
                id=form_field.id,
                label=form_field.label,
                type=form_field.type,
                path=f"{self.name}.{form_field.label}",
            )
            for form_field in self._form.fields
        ]


class GlobalDataSource(DataSource):
    """Offers one property group as text fields under a fixed path prefix."""

    category = SourceCategory.GLOBAL

    def __init__(
        self,
        source_id: str,
        name: str,
        properties: Sequence[str],
        path_prefix: str,
    ) -> None:
        self.id = source_id
        self.name = name
        self.path_prefix = path_prefix
        self._properties = tuple(properties)

    def list_fields(self) -> list[DataField]:
        fields = []
        for prop in self._properties:
            label = format_property_name(prop)
            fields.append(
                DataField(
                    id=prop,
                    label=label,
                    type=FieldType.TEXT,
                    path=f"{self.path_prefix}.{label}",
                )
            )
        return fields


def action_properties_source(global_data: GlobalData) -> GlobalDataSource:
    return GlobalDataSource(
        config.ACTION_SOURCE_ID,
        config.ACTION_SOURCE_NAME,
        global_data.action_properties,
        config.ACTION_PATH_PREFIX,
    )


def organization_properties_source(global_data: GlobalData) -> GlobalDataSource:
    return GlobalDataSource(
        config.ORG_SOURCE_ID,
        config.ORG_SOURCE_NAME,
        global_data.client_org_properties,
        config.ORG_PATH_PREFIX,
    )


def global_sources_for(global_data: GlobalData) -> list[GlobalDataSource]:
    """Build one global source per property group, action group first."""
    return [action_properties_source(global_data), organization_properties_source(global_data)]

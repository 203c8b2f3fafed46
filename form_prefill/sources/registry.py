"""Keyed store of data sources, scoped to a single categorization."""

from __future__ import annotations

from form_prefill.models import SourceCategory
from form_prefill.sources.base import DataSource


class DataSourceRegistry:
    """Holds data sources by id in registration order.

    Registering an id that already exists replaces the source in place;
    no other validation is done.
    """

    def __init__(self) -> None:
        self._sources: dict[str, DataSource] = {}

    def register(self, source: DataSource) -> None:
        self._sources[source.id] = source

    def get(self, source_id: str) -> DataSource | None:
        return self._sources.get(source_id)

    def get_all(self) -> list[DataSource]:
        return list(self._sources.values())

    def get_by_category(self, category: SourceCategory | str) -> list[DataSource]:
        """Sources in ``category``, in registration order.

        A string that names no ``SourceCategory`` raises ``ValueError``.
        """
        category = SourceCategory(category)
        return [source for source in self._sources.values() if source.category == category]

    def clear(self) -> None:
        self._sources.clear()

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._sources

"""Data sources: uniform field listings over forms and global property groups."""
from form_prefill.sources.base import (
    DataSource,
    FormDataSource,
    GlobalDataSource,
    action_properties_source,
    format_property_name,
    global_sources_for,
    organization_properties_source,
)
from form_prefill.sources.registry import DataSourceRegistry

"""Form prefill configuration: dependency resolution and data source categorization."""

__version__ = "0.1.0"

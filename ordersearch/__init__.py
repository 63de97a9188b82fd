"""Order search: filter-driven document access over Elasticsearch."""

__version__ = "0.1.0"

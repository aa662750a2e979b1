"""
Search — backend abstraction, index schema, and index lifecycle.

Public surface
--------------
- :class:`SearchStore` — abstract backend (subclass for OpenSearch, fakes, etc.).
- :class:`ElasticsearchStore` — default Elasticsearch backend.
- :class:`IndexSchema`, :class:`FieldKind`, :data:`LIBRARY_SCHEMA` — field schema.
- :class:`SchemaManager` — drops and recreates the target index.
"""

from library_index.search.base import SearchStore
from library_index.search.schema import LIBRARY_SCHEMA, FieldKind, IndexSchema, SchemaManager

__all__ = [
    "ElasticsearchStore",
    "FieldKind",
    "IndexSchema",
    "LIBRARY_SCHEMA",
    "SchemaManager",
    "SearchStore",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ElasticsearchStore to avoid pulling in the client at import time."""
    if name == "ElasticsearchStore":
        from library_index.search.elastic_store import ElasticsearchStore

        return ElasticsearchStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

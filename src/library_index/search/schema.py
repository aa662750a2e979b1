"""Index schema declaration and the index reset lifecycle."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from library_index.config import Settings, settings
from library_index.search.base import SearchStore

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Field types used by the library index."""

    KEYWORD = "keyword"  # exact match, aggregatable
    INTEGER = "integer"
    TEXT = "text"  # analysed for full-text search


class IndexSchema(BaseModel):
    """Fixed mapping of field name → :class:`FieldKind`.

    ``strict`` rejects documents carrying fields the schema does not declare.
    """

    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldKind]
    strict: bool = True

    def to_mappings(self) -> dict[str, Any]:
        """Render the schema as an Elasticsearch ``mappings`` body."""
        return {
            "dynamic": "strict" if self.strict else True,
            "properties": {name: {"type": kind.value} for name, kind in self.fields.items()},
        }


LIBRARY_SCHEMA = IndexSchema(
    fields={
        "title": FieldKind.KEYWORD,
        "author": FieldKind.KEYWORD,
        "location": FieldKind.INTEGER,
        "text": FieldKind.TEXT,
    }
)


class SchemaManager:
    """Owns creation and destruction of the target index.

    Parameters
    ----------
    store:
        Backend the index lives in.
    config:
        Supplies the default index name.
    """

    def __init__(self, store: SearchStore, config: Settings = settings) -> None:
        self._store = store
        self._config = config

    def reset_index(self, name: str | None = None, schema: IndexSchema = LIBRARY_SCHEMA) -> None:
        """Drop *name* if it exists, then recreate it empty with *schema*.

        Every run starts from an empty index; there is no merge with existing
        documents.  The whole schema is sent with the create request, so the
        index never exists with a partial mapping.  Not safe to run while
        other processes read or write the same index.

        Raises :class:`~library_index.errors.IndexAdminError` on failure.
        """
        name = name or self._config.index_name
        if self._store.index_exists(name):
            logger.info("The index %r already exists, deleting it", name)
            self._store.delete_index(name)
        self._store.create_index(name, schema.to_mappings())
        logger.info("Index %r ready with fields %s", name, ", ".join(schema.fields))

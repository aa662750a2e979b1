"""Abstract base class for search-store backends.

The ingestion pipeline only needs index administration and bulk writes, so
adding a new backend (OpenSearch, an in-memory fake for tests …) means
subclassing :class:`SearchStore` and implementing the five abstract methods.
Implementations report failures with the :mod:`library_index.errors`
taxonomy instead of client-specific exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class SearchStore(ABC):
    """Backend-agnostic document-store interface."""

    # -- index administration -------------------------------------------------

    @abstractmethod
    def index_exists(self, name: str) -> bool:
        """Return ``True`` when index *name* exists.

        Raises :class:`~library_index.errors.IndexAdminError` when the check
        itself fails.
        """
        ...

    @abstractmethod
    def delete_index(self, name: str) -> None:
        """Drop index *name* and every document in it."""
        ...

    @abstractmethod
    def create_index(self, name: str, mappings: dict[str, Any]) -> None:
        """Create index *name* with its complete *mappings* in one request."""
        ...

    # -- health ---------------------------------------------------------------

    @abstractmethod
    def cluster_health(self) -> dict[str, Any]:
        """Return the backend's health payload (at least a ``"status"`` key).

        Raises :class:`~library_index.errors.ConnectivityError` when the
        backend cannot be reached.
        """
        ...

    # -- writes ---------------------------------------------------------------

    @abstractmethod
    def bulk_write(self, index: str, documents: Sequence[dict[str, Any]]) -> int:
        """Write *documents* to *index* in a single bulk request.

        The call is all-or-nothing from the caller's point of view: if the
        backend rejects the request or any item in it,
        :class:`~library_index.errors.BulkWriteError` is raised.

        Returns
        -------
        int
            Number of documents written.
        """
        ...

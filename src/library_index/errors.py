"""Exception hierarchy for the ingestion pipeline.

Administrative failures (:class:`ConnectivityError`, :class:`IndexAdminError`)
end the run because there is no valid destination to write to.  Per-file
failures (:class:`ParseError`, :class:`BulkWriteError`) are recorded by the
orchestrator and the run moves on to the next file.
"""

from __future__ import annotations


class IngestError(Exception):
    """Base class for every error raised by ``library_index``."""


class ParseError(IngestError):
    """A source file could not be read or its banners were not found."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class StoreError(IngestError):
    """The search backend rejected an operation or could not be reached."""


class ConnectivityError(StoreError):
    """The cluster is unreachable or reports an unhealthy status."""


class IndexAdminError(StoreError):
    """Index existence check, deletion or creation failed."""


class BulkWriteError(StoreError):
    """A bulk request was rejected, fully or for some of its items.

    Attributes
    ----------
    title:
        Title of the book being loaded (``None`` when raised by the store).
    indexed:
        Documents committed by earlier batches of the same book.  These stay
        in the index; there is no rollback across batches.
    first_location:
        ``location`` of the first document of the failed batch.
    failures:
        Per-item error payloads reported by the backend, when available.
    """

    def __init__(
        self,
        message: str,
        *,
        title: str | None = None,
        indexed: int = 0,
        first_location: int | None = None,
        failures: list[dict] | None = None,
    ) -> None:
        self.title = title
        self.indexed = indexed
        self.first_location = first_location
        self.failures = failures or []
        super().__init__(message)

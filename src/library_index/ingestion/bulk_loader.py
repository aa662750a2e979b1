"""Batched, size-bounded bulk loading of a book's paragraphs."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

from library_index.config import Settings, settings
from library_index.errors import BulkWriteError, StoreError
from library_index.ingestion.models import Book, LoadReport, ParagraphDocument
from library_index.search.base import SearchStore

logger = logging.getLogger(__name__)


def iter_documents(book: Book) -> Iterator[ParagraphDocument]:
    """Yield one :class:`ParagraphDocument` per paragraph, ``location`` 0..N-1."""
    for location, text in enumerate(book.paragraphs):
        yield ParagraphDocument(location=location, title=book.title, author=book.author, text=text)


class BulkLoader:
    """Writes a book's paragraphs to the store in bounded batches.

    A batch is flushed as soon as it holds ``batch_size`` documents, so no
    request ever carries more than ``batch_size`` documents; the tail of the
    book (1..batch_size documents) is flushed last.  Flushes are synchronous
    and run in paragraph order.

    Parameters
    ----------
    store:
        Destination backend.
    config:
        Supplies the default index name and batch size.
    index_name / batch_size:
        Per-instance overrides of the configured values.
    """

    def __init__(
        self,
        store: SearchStore,
        config: Settings = settings,
        *,
        index_name: str | None = None,
        batch_size: int | None = None,
    ) -> None:
        self._store = store
        self.index_name = index_name or config.index_name
        self.batch_size = config.batch_size if batch_size is None else batch_size
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")

    def load(self, book: Book) -> LoadReport:
        """Index every paragraph of *book*.

        Raises
        ------
        BulkWriteError
            A batch was rejected.  The remaining batches of the book are not
            sent; batches flushed before the failure stay indexed and are
            counted in ``BulkWriteError.indexed``.
        """
        report = LoadReport(title=book.title)
        batch: list[dict[str, Any]] = []

        for document in iter_documents(book):
            batch.append(document.model_dump())
            if len(batch) == self.batch_size:
                self._flush(book, batch, report)
                batch = []

        if batch:
            self._flush(book, batch, report)

        logger.info("Indexed %d paragraphs of %r in %d batches", report.indexed, book.title, report.batches)
        return report

    def _flush(self, book: Book, batch: list[dict[str, Any]], report: LoadReport) -> None:
        first = report.indexed
        last = first + len(batch) - 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Batch %d-%d estimated size %d bytes", first, last, _estimated_size(batch))
        try:
            self._store.bulk_write(self.index_name, batch)
        except StoreError as exc:
            raise BulkWriteError(
                f"Bulk write of paragraphs {first} - {last} of {book.title!r} failed "
                f"after {report.indexed} paragraphs were indexed: {exc}",
                title=book.title,
                indexed=report.indexed,
                first_location=first,
                failures=getattr(exc, "failures", None),
            ) from exc
        report.indexed += len(batch)
        report.batches += 1
        logger.info("Indexed paragraphs %d - %d", first, last)


def _estimated_size(batch: list[dict[str, Any]]) -> int:
    return sum(len(json.dumps(doc, ensure_ascii=False).encode()) for doc in batch)

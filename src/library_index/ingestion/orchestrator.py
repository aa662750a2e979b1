"""Corpus ingestion run — health check, index reset, parse and load each book.

Usage::

    from library_index.ingestion.orchestrator import IngestOrchestrator
    from library_index.search.elastic_store import ElasticsearchStore

    summary = IngestOrchestrator(ElasticsearchStore()).run("../books")
    print(summary.succeeded, summary.failed)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from library_index.config import Settings, settings
from library_index.errors import BulkWriteError, ConnectivityError, ParseError
from library_index.ingestion.bulk_loader import BulkLoader
from library_index.ingestion.models import FileResult, IngestSummary
from library_index.ingestion.parser import CorpusParser
from library_index.search.base import SearchStore
from library_index.search.schema import LIBRARY_SCHEMA, IndexSchema, SchemaManager

logger = logging.getLogger(__name__)


def discover_books(corpus_dir: str | Path, suffix: str = ".txt") -> list[Path]:
    """Return the regular files in *corpus_dir* whose name ends in *suffix*, sorted by name."""
    root = Path(corpus_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Corpus directory not found: {corpus_dir}")
    return sorted(p for p in root.iterdir() if p.is_file() and p.name.endswith(suffix))


class IngestOrchestrator:
    """Drives a full corpus run against one shared :class:`SearchStore`.

    Parameters
    ----------
    store:
        Backend used for the health check, the index reset and all writes.
    config:
        Run settings (index name, corpus location, workers, health policy).
    parser / loader / schema_manager:
        Collaborators; built from *store* and *config* when omitted.
    schema:
        Field schema applied when the index is recreated.
    """

    def __init__(
        self,
        store: SearchStore,
        config: Settings = settings,
        *,
        parser: CorpusParser | None = None,
        loader: BulkLoader | None = None,
        schema_manager: SchemaManager | None = None,
        schema: IndexSchema = LIBRARY_SCHEMA,
    ) -> None:
        self._store = store
        self._config = config
        self._parser = parser or CorpusParser()
        self._loader = loader or BulkLoader(store, config)
        self._schema_manager = schema_manager or SchemaManager(store, config)
        self._schema = schema

    # -- public API -----------------------------------------------------------

    def run(self, corpus_dir: str | Path | None = None) -> IngestSummary:
        """Reset the index and ingest every book found in *corpus_dir*.

        Raises
        ------
        ConnectivityError
            The cluster is unreachable or red and ``require_healthy`` is set.
        IndexAdminError
            The index could not be reset; nothing is ingested.
        FileNotFoundError
            *corpus_dir* does not exist.
        """
        corpus_dir = corpus_dir or self._config.corpus_dir
        index_name = self._config.index_name

        self.check_health()
        self._schema_manager.reset_index(index_name, self._schema)

        files = discover_books(corpus_dir, self._config.corpus_suffix)
        logger.info("Found %d books in %s", len(files), corpus_dir)

        workers = min(self._config.workers, len(files))
        if workers > 1:
            # Files fan out; each book's batches stay sequential in its worker.
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ingest") as pool:
                results = list(pool.map(self.ingest_file, files))
        else:
            results = [self.ingest_file(path) for path in files]

        summary = IngestSummary(index_name=index_name, results=results)
        _log_summary(summary)
        return summary

    def check_health(self) -> bool:
        """Return ``True`` when the cluster answers with a non-red status.

        When ``require_healthy`` is false an unhealthy cluster is only
        logged and ``False`` is returned.
        """
        try:
            health = self._store.cluster_health()
            if health.get("status") == "red":
                raise ConnectivityError(f"Cluster {health.get('cluster_name', '')!r} status is red")
        except ConnectivityError as exc:
            if self._config.require_healthy:
                raise
            logger.warning("Connection not healthy, continuing anyway: %s", exc)
            return False
        logger.info("Cluster health: %s", health.get("status"))
        return True

    def ingest_file(self, path: Path) -> FileResult:
        """Parse and load one file, converting per-file failures into a result."""
        logger.info("Ingesting %s", path.name)
        try:
            book = self._parser.parse(path)
        except ParseError as exc:
            logger.error("Skipping %s: %s", path.name, exc)
            return FileResult(path=str(path), ok=False, error=type(exc).__name__, message=str(exc))

        try:
            report = self._loader.load(book)
        except BulkWriteError as exc:
            logger.error(
                "Book %r partially indexed (%d of %d paragraphs): %s",
                book.title,
                exc.indexed,
                len(book.paragraphs),
                exc,
            )
            return FileResult(
                path=str(path),
                ok=False,
                title=book.title,
                author=book.author,
                paragraphs=len(book.paragraphs),
                indexed=exc.indexed,
                error=type(exc).__name__,
                message=str(exc),
            )

        return FileResult(
            path=str(path),
            ok=True,
            title=book.title,
            author=book.author,
            paragraphs=len(book.paragraphs),
            indexed=report.indexed,
        )


def _log_summary(summary: IngestSummary) -> None:
    logger.info(
        "Ingestion into %r finished: %d files succeeded, %d failed, %d paragraphs indexed",
        summary.index_name,
        summary.succeeded,
        summary.failed,
        summary.paragraphs_indexed,
    )
    for result in summary.failures:
        logger.error("Failed: %s", result.describe())

"""Command-line entry point — ``library-index``.

Exit codes: 0 when every book was indexed, 1 when at least one file failed,
2 when the run could not start (backend unhealthy, index reset failed, corpus
directory missing).
"""

from __future__ import annotations

import argparse
import logging
import sys

from library_index.config import Settings
from library_index.errors import StoreError

logger = logging.getLogger("library_index")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="library-index",
        description="Load a corpus of plain-text books into the library search index",
    )
    parser.add_argument("--corpus-dir", help="Directory holding the book files (env CORPUS_DIR)")
    parser.add_argument("--host", dest="es_host", help="Elasticsearch hostname (env ES_HOST)")
    parser.add_argument("--port", dest="es_port", type=int, help="Elasticsearch port (env ES_PORT)")
    parser.add_argument("--index", dest="index_name", help="Target index name (env INDEX_NAME)")
    parser.add_argument("--batch-size", type=int, help="Documents per bulk request (env BATCH_SIZE)")
    parser.add_argument("--workers", type=int, help="Books ingested concurrently (env WORKERS)")
    parser.add_argument(
        "--advisory-health",
        action="store_true",
        help="Log an unhealthy cluster instead of aborting",
    )
    parser.add_argument("--log-level", help="Logging level (env LOG_LEVEL)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Environment-backed settings with CLI flags taking precedence."""
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key != "advisory_health" and value is not None
    }
    if args.advisory_health:
        overrides["require_healthy"] = False
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = settings_from_args(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from library_index.ingestion.orchestrator import IngestOrchestrator
    from library_index.search.elastic_store import ElasticsearchStore

    store = ElasticsearchStore(config)
    try:
        summary = IngestOrchestrator(store, config).run()
    except (StoreError, FileNotFoundError) as exc:
        logger.error("Ingestion aborted: %s", exc)
        return 2
    finally:
        store.close()

    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())

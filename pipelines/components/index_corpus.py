"""KFP v2 component — Index a corpus of plain-text books.

Runs one full ingestion (health check → index reset → parse → bulk load)
against an Elasticsearch cluster and reports per-run statistics as KFP
Metrics.  The component runs in ``LIBRARY_INDEX_IMAGE``, built from the
repository ``Dockerfile``, which installs ``library_index`` and its
dependencies.  Build it and push it where the cluster can pull it::

    docker build -t library-index:latest .

Local testing
-------------
    from pipelines.components.index_corpus import index_corpus
    index_corpus.python_func(
        corpus_dir="/data/books",
        es_host="localhost",
        es_port=9200,
        index_name="library",
        metrics=_FakeArtifact("/tmp/metrics"),
    )
"""

from kfp import dsl

LIBRARY_INDEX_IMAGE = "library-index:latest"


@dsl.component(base_image=LIBRARY_INDEX_IMAGE)
def index_corpus(
    corpus_dir: str,
    es_host: str,
    es_port: int,
    index_name: str,
    metrics: dsl.Output[dsl.Metrics],
    batch_size: int = 500,
    workers: int = 1,
    require_healthy: bool = True,
) -> str:
    """Reset *index_name* and load every ``.txt`` book found in *corpus_dir*.

    Parameters
    ----------
    corpus_dir:
        Directory (mounted volume) holding the book files.
    es_host / es_port:
        Elasticsearch connection details.
    index_name:
        Target index; dropped and recreated on every run.
    metrics:
        Output Metrics artifact with ingestion statistics.
    batch_size:
        Max documents per bulk request.
    workers:
        Books ingested concurrently.
    require_healthy:
        Fail the step when the cluster is unreachable or red.

    Returns
    -------
    str
        Summary, e.g. ``"Indexed 5120 paragraphs from 3 books → index 'library' (0 failed)"``.
    """
    import logging

    from library_index.config import Settings
    from library_index.ingestion.orchestrator import IngestOrchestrator
    from library_index.search.elastic_store import ElasticsearchStore

    logging.basicConfig(level=logging.INFO)
    log = logging.getLogger("index_corpus")

    config = Settings(
        es_host=es_host,
        es_port=es_port,
        index_name=index_name,
        batch_size=batch_size,
        corpus_dir=corpus_dir,
        workers=workers,
        require_healthy=require_healthy,
    )

    store = ElasticsearchStore(config)
    try:
        summary = IngestOrchestrator(store, config).run(corpus_dir)
    finally:
        store.close()

    # KFP Metrics
    metrics.log_metric("files_indexed", summary.succeeded)
    metrics.log_metric("files_failed", summary.failed)
    metrics.log_metric("paragraphs_indexed", summary.paragraphs_indexed)
    metrics.log_metric("index_name", index_name)

    msg = (f"Indexed {summary.paragraphs_indexed} paragraphs from "
           f"{summary.succeeded} books → index '{index_name}' ({summary.failed} failed)")
    log.info(msg)
    return msg

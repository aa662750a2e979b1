"""KFP v2 pipeline — Library corpus ingestion.

Wraps a full corpus run in a single step so it can be scheduled and
re-run on a Kubeflow Pipelines backend.  The index is dropped and rebuilt
on every run, so re-running the pipeline always converges to the same
state.

Compile
-------
    python -m pipelines.ingestion_pipeline --compile
"""

from kfp import compiler, dsl

from pipelines.components.index_corpus import index_corpus


# ──────────────────────────────────────────────────────────────────────
# Pipeline definition
# ──────────────────────────────────────────────────────────────────────


@dsl.pipeline(
    name="library-ingestion-pipeline",
    description=(
        "Reset the library index and load every plain-text book of the "
        "corpus as paragraph documents."
    ),
)
def ingestion_pipeline(
    # ── Source ──────────────────────────────────────────────────────
    corpus_dir: str = "/data/books",
    # ── Elasticsearch ──────────────────────────────────────────────
    es_host: str = "elasticsearch.kubeflow.svc.cluster.local",
    es_port: int = 9200,
    index_name: str = "library",
    # ── Loading ────────────────────────────────────────────────────
    batch_size: int = 500,
    workers: int = 1,
    require_healthy: bool = True,
) -> None:
    """Single-step ingestion: health → reset index → parse → bulk load.

    Parameters
    ----------
    corpus_dir:
        Directory holding the ``.txt`` books (mounted volume).
    es_host / es_port / index_name:
        Elasticsearch connection details and target index.
    batch_size:
        Max documents per bulk request.
    workers:
        Books ingested concurrently.
    require_healthy:
        Fail fast when the cluster is unreachable or red.
    """
    index_corpus(
        corpus_dir=corpus_dir,
        es_host=es_host,
        es_port=es_port,
        index_name=index_name,
        batch_size=batch_size,
        workers=workers,
        require_healthy=require_healthy,
    )


# ──────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Library ingestion pipeline")
    parser.add_argument(
        "--compile",
        action="store_true",
        help="Compile pipeline to YAML",
    )
    parser.add_argument(
        "--output",
        default="pipelines/compiled/ingestion_pipeline.yaml",
        help="Output path for compiled YAML",
    )
    args = parser.parse_args()

    if args.compile:
        compiler.Compiler().compile(ingestion_pipeline, args.output)
        print(f"Pipeline compiled → {args.output}")

"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Ingestion settings, populated from env vars or .env file."""

    # Elasticsearch
    es_host: str = Field(default="127.0.0.1", description="Elasticsearch hostname")
    es_port: int = 9200
    request_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    require_healthy: bool = Field(
        default=True,
        description=(
            "Abort the run when the cluster is unreachable or red. "
            "Set to false to only log a warning and carry on."
        ),
    )

    # Index
    index_name: str = "library"
    batch_size: int = Field(default=500, gt=0, description="Max documents per bulk request")

    # Corpus
    corpus_dir: str = "../books"
    corpus_suffix: str = ".txt"
    workers: int = Field(default=1, ge=1, description="Files ingested concurrently")

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def es_url(self) -> str:
        return f"http://{self.es_host}:{self.es_port}"


# Singleton — import `settings` wherever needed.
settings = Settings()

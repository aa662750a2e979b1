"""Elasticsearch implementation of the search-store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from elasticsearch import ApiError, Elasticsearch, TransportError
from elasticsearch.helpers import BulkIndexError, bulk

from library_index.config import Settings, settings
from library_index.errors import BulkWriteError, ConnectivityError, IndexAdminError
from library_index.search.base import SearchStore

logger = logging.getLogger(__name__)

# Item errors copied onto BulkWriteError; the backend may report thousands.
_MAX_REPORTED_FAILURES = 10

# The helper splits at 100MB by default; one bulk_write must stay one request.
_MAX_REQUEST_BYTES = 2**62


class ElasticsearchStore(SearchStore):
    """Elasticsearch-backed search store.

    Parameters
    ----------
    config:
        Connection settings.  Defaults to the process-wide ``settings``.
    client:
        Pre-built client, mainly for tests.  When *None*, a client is created
        for ``config.es_url`` with sniffing disabled.
    """

    def __init__(
        self,
        config: Settings = settings,
        *,
        client: Elasticsearch | None = None,
    ) -> None:
        self._config = config
        if client is None:
            logger.info("Connecting to Elasticsearch at %s", config.es_url)
            client = Elasticsearch(
                hosts=[config.es_url],
                request_timeout=config.request_timeout,
            )
        self._client = client

    # -- SearchStore overrides ------------------------------------------------

    def index_exists(self, name: str) -> bool:
        try:
            return bool(self._client.indices.exists(index=name))
        except (ApiError, TransportError) as exc:
            raise IndexAdminError(f"Existence check for index {name!r} failed: {exc}") from exc

    def delete_index(self, name: str) -> None:
        try:
            self._client.indices.delete(index=name)
        except (ApiError, TransportError) as exc:
            raise IndexAdminError(f"Deleting index {name!r} failed: {exc}") from exc

    def create_index(self, name: str, mappings: dict[str, Any]) -> None:
        try:
            response = self._client.indices.create(index=name, mappings=mappings)
        except (ApiError, TransportError) as exc:
            raise IndexAdminError(f"Creating index {name!r} failed: {exc}") from exc
        logger.info("Created index %r: %s", name, _body(response))

    def cluster_health(self) -> dict[str, Any]:
        try:
            response = self._client.cluster.health()
        except (ApiError, TransportError) as exc:
            raise ConnectivityError(f"Cluster at {self._config.es_url} is unreachable: {exc}") from exc
        return _body(response)

    def bulk_write(self, index: str, documents: Sequence[dict[str, Any]]) -> int:
        actions = [{"_index": index, "_source": doc} for doc in documents]
        try:
            written, _ = bulk(
                self._client,
                actions,
                chunk_size=max(len(actions), 1),
                max_chunk_bytes=_MAX_REQUEST_BYTES,
                raise_on_error=True,
                refresh=False,
            )
        except BulkIndexError as exc:
            raise BulkWriteError(
                f"{len(exc.errors)} of {len(actions)} documents rejected by index {index!r}",
                failures=list(exc.errors[:_MAX_REPORTED_FAILURES]),
            ) from exc
        except (ApiError, TransportError) as exc:
            raise BulkWriteError(f"Bulk request to index {index!r} failed: {exc}") from exc
        return written

    # -- lifecycle ------------------------------------------------------------

    def close(self) -> None:
        self._client.close()


def _body(response: Any) -> dict[str, Any]:
    # ObjectApiResponse keeps the decoded JSON under ``.body``.
    return dict(getattr(response, "body", response))

"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from library_index.config import Settings
from library_index.errors import BulkWriteError, IndexAdminError
from library_index.search.base import SearchStore


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── In-memory search store ──────────────────────────────────────────────


class FakeSearchStore(SearchStore):
    """In-memory store recording every call.

    Parameters
    ----------
    existing:
        Indices that exist before the test starts.
    health:
        Payload returned by :meth:`cluster_health`, or an exception to raise.
    fail_when:
        Predicate ``(index, documents) -> bool``; when true the bulk call
        raises :class:`BulkWriteError` and nothing is stored.
    """

    def __init__(
        self,
        *,
        existing: Sequence[str] = (),
        health: dict[str, Any] | Exception | None = None,
        fail_when: Callable[[str, Sequence[dict[str, Any]]], bool] | None = None,
    ) -> None:
        self.mappings: dict[str, dict[str, Any]] = {name: {} for name in existing}
        self.documents: dict[str, list[dict[str, Any]]] = {name: [{"stale": True}] for name in existing}
        self.batches: list[list[dict[str, Any]]] = []
        self.calls: list[tuple[str, str]] = []
        self.health = health if health is not None else {"status": "green", "cluster_name": "test"}
        self.fail_when = fail_when
        self.closed = False

    def index_exists(self, name: str) -> bool:
        self.calls.append(("exists", name))
        return name in self.mappings

    def delete_index(self, name: str) -> None:
        self.calls.append(("delete", name))
        if name not in self.mappings:
            raise IndexAdminError(f"no such index {name!r}")
        del self.mappings[name]
        del self.documents[name]

    def create_index(self, name: str, mappings: dict[str, Any]) -> None:
        self.calls.append(("create", name))
        if name in self.mappings:
            raise IndexAdminError(f"index {name!r} already exists")
        self.mappings[name] = mappings
        self.documents[name] = []

    def cluster_health(self) -> dict[str, Any]:
        self.calls.append(("health", ""))
        if isinstance(self.health, Exception):
            raise self.health
        return dict(self.health)

    def bulk_write(self, index: str, documents: Sequence[dict[str, Any]]) -> int:
        self.calls.append(("bulk", index))
        if self.fail_when is not None and self.fail_when(index, documents):
            raise BulkWriteError(f"{len(documents)} documents rejected", failures=[{"index": {"status": 400}}])
        self.batches.append(list(documents))
        self.documents.setdefault(index, []).extend(documents)
        return len(documents)

    def close(self) -> None:
        self.closed = True


# ── Book files ──────────────────────────────────────────────────────────


def gutenberg_text(
    title: str | None,
    author: str | None,
    paragraphs: Sequence[str],
    *,
    banner_title: str | None = None,
) -> str:
    """Render a Project Gutenberg-style file with header and banners."""
    lines = ["The Project Gutenberg EBook", ""]
    if title is not None:
        lines.append(f"Title: {title}")
    if author is not None:
        lines.append(f"Author: {author}")
    head = "\n".join(lines)
    banner_title = (banner_title if banner_title is not None else title or "").upper()
    body = "\n\n".join(paragraphs)
    return (
        f"{head}\n\n"
        f"*** START OF THIS PROJECT GUTENBERG EBOOK {banner_title} ***\n\n\n"
        f"{body}\n\n\n"
        f"*** END OF THIS PROJECT GUTENBERG EBOOK {banner_title} ***\n"
        "End of the Project Gutenberg EBook\n"
    )


@pytest.fixture()
def store_factory() -> type[FakeSearchStore]:
    return FakeSearchStore


@pytest.fixture()
def fake_store() -> FakeSearchStore:
    return FakeSearchStore()


@pytest.fixture()
def config() -> Settings:
    return Settings(
        _env_file=None,
        es_host="127.0.0.1",
        es_port=9200,
        index_name="library",
        batch_size=500,
        corpus_suffix=".txt",
        workers=1,
        require_healthy=True,
    )


@pytest.fixture()
def write_book(tmp_path: Path) -> Callable[..., Path]:
    """Return ``write(name, title, author, paragraphs, **kw) -> Path``."""

    def _write(
        name: str,
        title: str | None,
        author: str | None,
        paragraphs: Sequence[str],
        **kwargs: Any,
    ) -> Path:
        path = tmp_path / name
        path.write_text(gutenberg_text(title, author, paragraphs, **kwargs), encoding="utf-8")
        return path

    return _write

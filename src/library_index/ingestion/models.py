"""Domain models for parsed books, indexed paragraphs and run reports."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_AUTHOR = "Unknown Author"


class Book(BaseModel):
    """One parsed source file.

    Attributes
    ----------
    title:
        Value of the ``Title:`` header line (empty when absent).
    author:
        Value of the ``Author:`` header line, or ``"Unknown Author"``.
    paragraphs:
        Body paragraphs in source order.
    source:
        Path of the file the book was parsed from.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    author: str = UNKNOWN_AUTHOR
    paragraphs: tuple[str, ...] = ()
    source: str = ""


class ParagraphDocument(BaseModel):
    """A single paragraph as stored in the index.

    ``location`` is the paragraph's zero-based ordinal inside its book.  It is
    not unique across books; together with ``title`` it orders a book's
    paragraphs for reconstruction.
    """

    model_config = ConfigDict(frozen=True)

    location: int = Field(ge=0)
    title: str
    author: str
    text: str


class LoadReport(BaseModel):
    """Outcome of loading one book into the index."""

    title: str
    indexed: int = 0
    batches: int = 0


class FileResult(BaseModel):
    """Outcome of ingesting one corpus file."""

    path: str
    ok: bool
    title: str | None = None
    author: str | None = None
    paragraphs: int = 0
    indexed: int = 0
    error: str | None = None
    message: str | None = None

    def describe(self) -> str:
        """Return a one-line, human-readable status for logs."""
        if self.ok:
            return f"{self.path}: {self.indexed} paragraphs indexed"
        return f"{self.path}: {self.error} ({self.indexed}/{self.paragraphs} indexed) {self.message}"


class IngestSummary(BaseModel):
    """Per-file results of a full corpus run, in file order."""

    index_name: str
    results: list[FileResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def paragraphs_indexed(self) -> int:
        return sum(r.indexed for r in self.results)

    @property
    def failures(self) -> list[FileResult]:
        return [r for r in self.results if not r.ok]

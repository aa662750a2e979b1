"""Plain-text book parsing — header metadata, body extraction, paragraphs.

Source files follow the Project Gutenberg layout: a header block carrying
``Title:`` and ``Author:`` lines, then the book body wrapped between a
"start of book" and an "end of book" banner.  Several historical spellings of
the banners exist; they are tried in priority order.

Usage::

    from library_index.ingestion.parser import CorpusParser

    book = CorpusParser().parse("books/moby-dick.txt")
    print(book.title, book.author, len(book.paragraphs))
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import NamedTuple

from library_index.errors import ParseError
from library_index.ingestion.models import UNKNOWN_AUTHOR, Book

logger = logging.getLogger(__name__)

TITLE_MARKER = "Title:"
AUTHOR_MARKER = "Author:"

# Any whitespace run containing at least one blank line.
PARAGRAPH_BREAK = re.compile(r"\s*\n[^\S\n]*\n\s*")


class BannerConvention(NamedTuple):
    """A pair of start/end banner templates; ``{title}`` is the book title."""

    start: str
    end: str

    def start_pattern(self, title: str) -> re.Pattern[str]:
        return _compile(self.start, title)

    def end_pattern(self, title: str) -> re.Pattern[str]:
        return _compile(self.end, title)


BANNER_CONVENTIONS: tuple[BannerConvention, ...] = (
    BannerConvention(
        "*** START OF THIS PROJECT GUTENBERG EBOOK {title} ***",
        "*** END OF THIS PROJECT GUTENBERG EBOOK {title} ***",
    ),
    BannerConvention(
        "*** START OF THE PROJECT GUTENBERG EBOOK {title} ***",
        "*** END OF THE PROJECT GUTENBERG EBOOK {title} ***",
    ),
    BannerConvention(
        "***START OF THE PROJECT GUTENBERG EBOOK {title}***",
        "***END OF THE PROJECT GUTENBERG EBOOK {title}***",
    ),
)


def _compile(template: str, title: str) -> re.Pattern[str]:
    return re.compile(re.escape(template.format(title=title)), re.IGNORECASE)


def read_header(text: str) -> tuple[str, str]:
    """Return ``(title, author)`` from the header lines of *text*.

    Scanning stops at the first ``Author:`` line, so a ``Title:`` line in the
    body can never replace the header title.  An empty author value falls back
    to the unknown-author placeholder.
    """
    title = ""
    author = ""
    for line in text.splitlines():
        if line.startswith(TITLE_MARKER):
            value = line[len(TITLE_MARKER):].strip()
            if value:
                title = value
        elif line.startswith(AUTHOR_MARKER):
            author = line[len(AUTHOR_MARKER):].strip()
            break
    return title, author or UNKNOWN_AUTHOR


def split_paragraphs(body: str) -> list[str]:
    """Split *body* into paragraphs separated by one or more blank lines.

    Leading and trailing whitespace of the body is dropped first.  The split
    is total: re-joining the paragraphs with ``PARAGRAPH_BREAK.findall`` of
    the stripped body gives the stripped body back.  A blank body has no
    paragraphs.
    """
    body = body.strip()
    if not body:
        return []
    return PARAGRAPH_BREAK.split(body)


class CorpusParser:
    """Turns one source file into a :class:`Book`.

    Parameters
    ----------
    conventions:
        Banner conventions in priority order.
    encoding:
        Text encoding of the corpus files.  A UTF-8 BOM is tolerated and
        undecodable bytes are replaced rather than failing the file.
    """

    def __init__(
        self,
        conventions: tuple[BannerConvention, ...] = BANNER_CONVENTIONS,
        *,
        encoding: str = "utf-8-sig",
    ) -> None:
        self.conventions = conventions
        self.encoding = encoding

    def parse(self, path: str | Path) -> Book:
        """Parse *path* into a :class:`Book`.

        Raises
        ------
        ParseError
            The file cannot be read, or no start/end banner matches.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding=self.encoding, errors="replace")
        except OSError as exc:
            raise ParseError(f"cannot read file: {exc}", path=str(path)) from exc

        title, author = read_header(text)
        logger.info("Reading book - %s by %s", title, author)

        body = self.extract_body(text, title, source=str(path))
        paragraphs = split_paragraphs(body)
        logger.info("Parsed %d paragraphs", len(paragraphs))

        return Book(title=title, author=author, paragraphs=tuple(paragraphs), source=str(path))

    def extract_body(self, text: str, title: str, *, source: str | None = None) -> str:
        """Return the text between the start and end banners of *text*.

        The body begins right after the matched start banner, whatever its
        length, and ends where the matched end banner begins.
        """
        start = self._search(text, title, 0, end=False)
        if start is None:
            raise ParseError("markers not found: no start-of-book banner", path=source)
        end = self._search(text, title, start.end(), end=True)
        if end is None:
            raise ParseError("markers not found: no end-of-book banner", path=source)
        return text[start.end():end.start()]

    def _search(self, text: str, title: str, pos: int, *, end: bool) -> re.Match[str] | None:
        for convention in self.conventions:
            pattern = convention.end_pattern(title) if end else convention.start_pattern(title)
            match = pattern.search(text, pos)
            if match is not None:
                return match
        return None

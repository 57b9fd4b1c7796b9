"""Flatten a book's chapter tree into table-of-contents entries.

The entries are a simplified schematic of the book, mainly for the ``toc``
helper but also exposed to themes through the ``chapters`` context key.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from book_pages._constants import SPACER
from book_pages.book import Book, Chapter

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class TocChapter:
    """A chapter's row in the table of contents."""

    name: str
    path: str
    section: str | None

    def to_dict(self) -> dict[str, str | None]:
        return {"name": self.name, "path": self.path, "section": self.section}


@dc.dataclass(frozen=True, slots=True)
class TocSpacer:
    """Placeholder row standing in for a separator."""

    def to_dict(self) -> dict[str, str | None]:
        return {"spacer": SPACER}


TocEntry: typ.TypeAlias = TocChapter | TocSpacer


def create_toc_info(book: Book) -> list[TocEntry]:
    """Return one entry per book item in depth-first reading order.

    Parameters
    ----------
    book : Book
        The book to summarise.

    Returns
    -------
    list[TocEntry]
        A :class:`TocChapter` for every chapter (its ``section`` is the
        dot-terminated number, or ``None`` for unnumbered chapters) and a
        :class:`TocSpacer` at the position of every separator.

    Examples
    --------
    >>> from book_pages.book import Chapter, SectionNumber, Separator
    >>> book = Book([Chapter("One", "", "one.html", SectionNumber((1,))), Separator()])
    >>> create_toc_info(book)
    [TocChapter(name='One', path='one.html', section='1.'), TocSpacer()]
    """
    entries: list[TocEntry] = []
    for item in book.iter():
        if isinstance(item, Chapter):
            section = str(item.number) if item.number is not None else None
            entries.append(TocChapter(name=item.name, path=item.path, section=section))
        else:
            entries.append(TocSpacer())
    return entries


def toc_as_dicts(entries: cabc.Iterable[TocEntry]) -> list[dict[str, str | None]]:
    """Return the JSON-like form of ``entries`` handed to templates."""
    return [entry.to_dict() for entry in entries]


__all__ = ["TocChapter", "TocEntry", "TocSpacer", "create_toc_info", "toc_as_dicts"]

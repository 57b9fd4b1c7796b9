"""Shared fixtures for the book_pages test suite."""

from __future__ import annotations

import pytest

from book_pages.book import Book, Chapter, SectionNumber, Separator


@pytest.fixture
def nested_book() -> Book:
    """Return a book with a nested chapter, a separator, and a sibling.

    The layout mirrors a typical summary file::

        1. First            first.html
           1.1. Nested      first/nested.html
        ---
        Second              second.html  (unnumbered)
    """
    first = Chapter("First", "<p>First chapter</p>", "first.html", SectionNumber((1,)))
    first.sub_items.append(
        Chapter(
            "Nested",
            "<p>Nested chapter</p>",
            "first/nested.html",
            SectionNumber((1, 1)),
        )
    )
    book = Book()
    book.push_item(first)
    book.push_item(Separator())
    book.push_item(Chapter("Second", "<p>Second chapter</p>", "second.html"))
    return book

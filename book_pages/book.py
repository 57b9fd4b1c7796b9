"""In-memory representation of a book: an ordered tree of chapters.

A :class:`Book` holds top-level :data:`BookItem` values (chapters or
separators) in reading order; each :class:`Chapter` owns its sub-items.
:meth:`Book.iter` walks the tree depth-first so parents come before their
children, which is the order used for the table of contents, navigation, and
rendering.

:func:`load_book` builds a book from the ``chapters`` manifest of a
``book.yaml`` file. Chapter bodies are read from pre-rendered HTML fragments;
no markdown conversion happens here.

Examples
--------
>>> book = Book()
>>> first = Chapter("First", "<p>one</p>", "first.html", SectionNumber((1,)))
>>> first.sub_items.append(
...     Chapter("Nested", "", "first/nested.html", SectionNumber((1, 1)))
... )
>>> book.push_item(first)
>>> [item.name for item in book.iter()]
['First', 'Nested']
>>> str(SectionNumber((1, 1)))
'1.1.'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path, PurePosixPath

from .config import ConfigError


@dc.dataclass(frozen=True, slots=True)
class SectionNumber:
    """Hierarchical chapter number such as ``1.2.``."""

    parts: tuple[int, ...]

    def __str__(self) -> str:
        return "".join(f"{part}." for part in self.parts)

    @property
    def depth(self) -> int:
        """Return the nesting level (``1.`` is depth 1, ``1.2.`` depth 2)."""
        return len(self.parts)


@dc.dataclass(frozen=True, slots=True)
class Separator:
    """A visual break between chapters in the table of contents."""


@dc.dataclass(slots=True)
class Chapter:
    """A single page of the book and the chapters nested beneath it."""

    name: str
    content: str
    path: str
    number: SectionNumber | None = None
    sub_items: list[BookItem] = dc.field(default_factory=list)


BookItem: typ.TypeAlias = Chapter | Separator


@dc.dataclass(slots=True)
class Book:
    """An ordered collection of top-level book items."""

    sections: list[BookItem] = dc.field(default_factory=list)

    def push_item(self, item: BookItem) -> Book:
        """Append ``item`` to the top level and return the book for chaining."""
        self.sections.append(item)
        return self

    def iter(self) -> cabc.Iterator[BookItem]:
        """Yield every item depth-first, each chapter before its sub-items."""
        stack: list[cabc.Iterator[BookItem]] = [iter(self.sections)]
        while stack:
            item = next(stack[-1], None)
            if item is None:
                stack.pop()
                continue
            yield item
            if isinstance(item, Chapter) and item.sub_items:
                stack.append(iter(item.sub_items))

    def chapters(self) -> cabc.Iterator[Chapter]:
        """Yield only the chapters, in :meth:`iter` order."""
        for item in self.iter():
            if isinstance(item, Chapter):
                yield item


def load_book(entries: cabc.Sequence[typ.Any], src_dir: Path) -> Book:
    """Build a :class:`Book` from a chapter manifest.

    Parameters
    ----------
    entries : Sequence
        Manifest entries. A chapter is a mapping with ``name`` plus either
        ``source`` (an HTML fragment relative to ``src_dir``) or ``path``.
        Optional keys are ``path`` (output path, defaulting to ``source`` with
        an ``.html`` suffix), ``number`` (a list of positive integers or a
        dotted string like ``"1.2"``), and ``sub_items``. A separator is
        ``{"separator": true}`` or the string ``"---"``.
    src_dir : Path
        Directory that ``source`` paths are resolved against.

    Returns
    -------
    Book
        The book with chapters in manifest order.

    Raises
    ------
    ConfigError
        If an entry is malformed, a section number is invalid, or two
        chapters share an output path.
    FileNotFoundError
        If a chapter's ``source`` file does not exist.
    """
    seen: set[str] = set()
    book = Book()
    for idx, entry in enumerate(entries):
        book.push_item(_build_item(entry, src_dir, f"chapters[{idx}]", seen))
    return book


def _build_item(
    entry: typ.Any, src_dir: Path, key: str, seen: set[str]
) -> BookItem:
    match entry:
        case "---":
            return Separator()
        case {"separator": True}:
            return Separator()
        case cabc.Mapping():
            return _build_chapter(entry, src_dir, key, seen)
        case _:
            msg = f"'{key}' must be a chapter table or a separator, got {entry!r}"
            raise ConfigError(msg)


def _build_chapter(
    entry: cabc.Mapping[str, typ.Any], src_dir: Path, key: str, seen: set[str]
) -> Chapter:
    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        msg = f"'{key}.name' must be a non-empty string."
        raise ConfigError(msg)

    source = entry.get("source")
    content = ""
    if source is not None:
        source_path = src_dir / str(source)
        if not source_path.exists():
            msg = f"Chapter source '{source_path}' for '{name}' not found."
            raise FileNotFoundError(msg)
        content = source_path.read_text(encoding="utf-8")

    path = _output_path(entry.get("path"), source, key)
    if path in seen:
        msg = f"Duplicate chapter path '{path}' at '{key}'."
        raise ConfigError(msg)
    seen.add(path)

    sub_entries = entry.get("sub_items") or []
    if not isinstance(sub_entries, list):
        msg = f"'{key}.sub_items' must be a list."
        raise ConfigError(msg)

    return Chapter(
        name=name.strip(),
        content=content,
        path=path,
        number=_parse_number(entry.get("number"), f"{key}.number"),
        sub_items=[
            _build_item(sub, src_dir, f"{key}.sub_items[{idx}]", seen)
            for idx, sub in enumerate(sub_entries)
        ],
    )


def _output_path(path: object | None, source: object | None, key: str) -> str:
    """Return the POSIX output path for a chapter entry."""
    if path is not None:
        text = str(path).strip().replace("\\", "/")
    elif source is not None:
        source_path = PurePosixPath(str(source).replace("\\", "/"))
        text = source_path.with_suffix(".html").as_posix()
    else:
        text = ""
    if not text:
        msg = f"'{key}' needs a 'path' or a 'source'."
        raise ConfigError(msg)
    if ".." in PurePosixPath(text).parts:
        msg = f"'{key}' output path {text!r} must stay inside the destination."
        raise ConfigError(msg)
    return text.lstrip("/")


def _parse_number(value: object | None, key: str) -> SectionNumber | None:
    """Parse ``[1, 2]`` or ``"1.2."`` into a :class:`SectionNumber`."""
    if value is None:
        return None
    match value:
        case str():
            segments = [segment for segment in value.strip().split(".") if segment]
            try:
                parts = tuple(int(segment) for segment in segments)
            except ValueError as exc:
                msg = f"'{key}' must be a dotted number such as '1.2', got {value!r}"
                raise ConfigError(msg) from exc
        case list() | tuple():
            if not all(isinstance(part, int) and not isinstance(part, bool) for part in value):
                msg = f"'{key}' must contain only integers, got {value!r}"
                raise ConfigError(msg)
            parts = tuple(value)
        case _:
            msg = f"'{key}' must be a list of integers or a dotted string."
            raise ConfigError(msg)
    if not parts or any(part < 1 for part in parts):
        msg = f"'{key}' must be a non-empty sequence of positive integers."
        raise ConfigError(msg)
    return SectionNumber(parts)


__all__ = [
    "Book",
    "BookItem",
    "Chapter",
    "SectionNumber",
    "Separator",
    "load_book",
]

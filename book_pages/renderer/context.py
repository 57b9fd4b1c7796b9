"""Template context shared by every page and the per-chapter additions.

The context handed to theme templates is the de-facto interface other themes
code against. :class:`GlobalContext` fixes the book-wide keys and is built
once per render; :class:`ChapterContext` fixes the keys that change from page
to page. Themes needing more data can read it from ``GlobalContext.extra``,
whose keys never override the fixed ones.

Examples
--------
>>> path_to_root("guide/setup/install.html")
'../../'
>>> path_to_root("index.html")
''
"""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ
from pathlib import PurePosixPath

import msgspec.json as msgspec_json

from book_pages._constants import FAVICON, LANGUAGE, PLAYPEN_EDITOR_ASSETS

from .toc import create_toc_info, toc_as_dicts

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from book_pages.book import Book, Chapter
    from book_pages.config import BookConfig, HtmlConfig

    from .toc import TocEntry


def path_to_root(path: str) -> str:
    """Return the relative prefix leading from ``path``'s directory to the root."""
    parent = PurePosixPath(path.replace("\\", "/")).parent
    return "".join("../" for part in parent.parts if part not in ("", ".", "/"))


@dc.dataclass(frozen=True, slots=True)
class GlobalContext:
    """Book-wide template data shared, unmodified, by every chapter render."""

    book_title: str | None
    description: str | None
    authors: tuple[str, ...]
    livereload: str | None
    google_analytics: str | None
    mathjax_support: bool
    chapters: tuple[TocEntry, ...]
    playpens_editable: bool
    additional_css: tuple[str, ...] = ()
    additional_js: tuple[str, ...] = ()
    language: str = LANGUAGE
    favicon: str = FAVICON
    extra: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: types.MappingProxyType({})
    )

    def as_dict(self) -> dict[str, typ.Any]:
        """Return the mapping exposed to templates.

        The editor asset keys are present only when playpens are editable so
        themes can tell "feature off" apart from an empty asset path.
        """
        data: dict[str, typ.Any] = dict(self.extra)
        data.update(
            {
                "language": self.language,
                "book_title": self.book_title,
                "description": self.description,
                "livereload": self.livereload,
                "authors": list(self.authors),
                "google_analytics": self.google_analytics,
                "favicon": self.favicon,
                "mathjax_support": self.mathjax_support,
                "chapters": toc_as_dicts(self.chapters),
                "playpens_editable": self.playpens_editable,
                "additional_css": list(self.additional_css),
                "additional_js": list(self.additional_js),
            }
        )
        if self.playpens_editable:
            data.update(PLAYPEN_EDITOR_ASSETS)
        return data

    def to_json(self) -> bytes:
        """Serialize :meth:`as_dict` to JSON bytes."""
        return msgspec_json.encode(self.as_dict())


@dc.dataclass(frozen=True, slots=True)
class ChapterContext:
    """Template data specific to one chapter page."""

    path: str
    content: str
    chapter_title: str
    title: str
    path_to_root: str

    @classmethod
    def for_chapter(cls, chapter: Chapter, book_title: str | None) -> ChapterContext:
        """Build the context for ``chapter``, prefixing the book title if set."""
        title = f"{book_title} - {chapter.name}" if book_title else chapter.name
        return cls(
            path=chapter.path,
            content=chapter.content,
            chapter_title=chapter.name,
            title=title,
            path_to_root=path_to_root(chapter.path),
        )

    def merge(self, global_data: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
        """Return ``global_data`` overlaid with this chapter's keys.

        ``global_data`` is copied, never modified.
        """
        merged = dict(global_data)
        merged.update(
            {
                "path": self.path,
                "content": self.content,
                "chapter_title": self.chapter_title,
                "title": self.title,
                "path_to_root": self.path_to_root,
            }
        )
        return merged


def construct_global_context(
    book_config: BookConfig,
    html_config: HtmlConfig,
    book: Book,
    *,
    extra: cabc.Mapping[str, typ.Any] | None = None,
) -> GlobalContext:
    """Combine book metadata, renderer options, and the TOC into one context.

    Parameters
    ----------
    book_config : BookConfig
        Title, description, and authors of the book.
    html_config : HtmlConfig
        Renderer options (analytics, MathJax, playpen, livereload).
    book : Book
        The book whose table of contents is embedded.
    extra : Mapping, optional
        Additional theme data; fixed keys take precedence over it.

    Returns
    -------
    GlobalContext
        An immutable context; equal inputs give equal contexts.
    """
    return GlobalContext(
        book_title=book_config.title,
        description=book_config.description,
        authors=tuple(book_config.authors),
        livereload=html_config.livereload_url,
        google_analytics=html_config.google_analytics,
        mathjax_support=html_config.mathjax_support,
        chapters=tuple(create_toc_info(book)),
        playpens_editable=html_config.playpen.editable,
        additional_css=tuple(path.as_posix() for path in html_config.additional_css),
        additional_js=tuple(path.as_posix() for path in html_config.additional_js),
        extra=types.MappingProxyType(dict(extra or {})),
    )


__all__ = [
    "ChapterContext",
    "GlobalContext",
    "construct_global_context",
    "path_to_root",
]

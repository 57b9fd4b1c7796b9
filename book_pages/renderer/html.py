"""High-level orchestration for rendering a book into HTML pages.

:class:`HtmlRenderer` resolves the ``output.html`` settings, builds the
global template context and the template engine once, then renders every
chapter in reading order and writes it to ``<destination>/<chapter.path>``.
The first failure aborts the render; a partially written tree is never
reported as success.

Example
-------
>>> from pathlib import Path
>>> from book_pages.book import load_book
>>> from book_pages.config import load_config
>>> from book_pages.renderer import HtmlRenderer, RenderContext
>>> config = load_config(Path("book.yaml"))  # doctest: +SKIP
>>> book = load_book(config.chapters, config.root / "src")  # doctest: +SKIP
>>> ctx = RenderContext(config.root, book, config, Path("book"))  # doctest: +SKIP
>>> HtmlRenderer().render(ctx)  # doctest: +SKIP
[PosixPath('book/intro.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from pathlib import Path, PurePosixPath

from jinja2 import TemplateError
from loguru import logger

from book_pages._constants import INDEX_TEMPLATE
from book_pages.book import Book, Chapter
from book_pages.config import Config, HtmlConfig, load_html_config
from book_pages.theme import Theme

from .context import ChapterContext, construct_global_context
from .engine import TemplateEngine, load_template_engine
from .errors import RenderError, WriteError

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class RenderStage(enum.Enum):
    """Progress of a single :meth:`HtmlRenderer.render` call."""

    INIT = "init"
    CONTEXT_BUILT = "context-built"
    ENGINE_LOADED = "engine-loaded"
    RENDERING_CHAPTER = "rendering-chapter"
    DONE = "done"
    FAILED = "failed"


@dc.dataclass(slots=True)
class RenderContext:
    """Everything a renderer needs for one run.

    Attributes
    ----------
    root : Path
        Book root; relative theme paths resolve against it.
    book : Book
        The chapters to render.
    config : Config
        Loaded book configuration.
    destination : Path
        Output directory for the generated pages.
    html_config : HtmlConfig, optional
        Pre-resolved renderer options; when omitted they are read from the
        ``output.html`` table of ``config``.
    """

    root: Path
    book: Book
    config: Config
    destination: Path
    html_config: HtmlConfig | None = None


class HtmlRenderer:
    """Render each chapter of a book through the theme's index template."""

    name = "html"

    def __init__(self) -> None:
        self.stage = RenderStage.INIT

    def render(self, ctx: RenderContext) -> list[Path]:
        """Render and write every chapter, returning the written paths.

        Parameters
        ----------
        ctx : RenderContext
            Book, configuration, and destination for this run.

        Returns
        -------
        list[Path]
            Paths of the generated HTML documents, in reading order.

        Raises
        ------
        ConfigError
            If the ``output.html`` settings contain a mistyped value.
        TemplateLoadError
            If the theme templates cannot be decoded or compiled.
        RenderError
            If a chapter fails to render.
        WriteError
            If a chapter's output cannot be written.
        """
        self.stage = RenderStage.INIT
        try:
            html_config = ctx.html_config or load_html_config(ctx.config)
            global_ctx = construct_global_context(ctx.config.book, html_config, ctx.book)
            self.stage = RenderStage.CONTEXT_BUILT

            theme = Theme.load(html_config.theme_dir(ctx.root))
            engine = load_template_engine(theme, html_config)
            self.stage = RenderStage.ENGINE_LOADED

            written = self.render_chapters(
                engine,
                ctx.book,
                global_ctx.as_dict(),
                ctx.destination,
                ctx.config.book.title,
            )
            self.stage = RenderStage.DONE
            return written
        finally:
            if self.stage is not RenderStage.DONE:
                logger.error("Rendering failed during stage '{}'", self.stage.value)
                self.stage = RenderStage.FAILED

    def render_chapters(
        self,
        engine: TemplateEngine,
        book: Book,
        global_data: cabc.Mapping[str, typ.Any],
        destination: Path,
        book_title: str | None,
    ) -> list[Path]:
        """Render every chapter in ``book`` and write it under ``destination``."""
        written: list[Path] = []
        root = destination.resolve()
        for chapter in book.chapters():
            self.stage = RenderStage.RENDERING_CHAPTER
            html = self.render_chapter(engine, chapter, global_data, book_title)
            output_path = destination.joinpath(*PurePosixPath(chapter.path).parts)
            if not output_path.resolve().is_relative_to(root):
                msg = f"chapter '{chapter.name}' resolves outside {root}"
                raise WriteError(output_path, msg)
            write_all(output_path, html)
            logger.debug("Rendered {} -> {}", chapter.name, output_path)
            written.append(output_path)
        return written

    def render_chapter(
        self,
        engine: TemplateEngine,
        chapter: Chapter,
        global_data: cabc.Mapping[str, typ.Any],
        book_title: str | None,
    ) -> str:
        """Render a single chapter as a complete HTML document."""
        chapter_ctx = ChapterContext.for_chapter(chapter, book_title)
        try:
            return engine.render(INDEX_TEMPLATE, chapter_ctx.merge(global_data))
        except TemplateError as exc:
            raise RenderError(chapter.name, chapter.path, str(exc)) from exc
        except Exception as exc:
            # Runtime failures inside the template or a helper.
            reason = f"{type(exc).__name__}: {exc}"
            raise RenderError(chapter.name, chapter.path, reason) from exc


def write_all(location: Path, data: str) -> None:
    """Write ``data`` to ``location``, creating parent directories first."""
    try:
        location.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(location, f"unable to create parent directories ({exc})") from exc
    try:
        location.write_text(data, encoding="utf-8")
    except OSError as exc:
        raise WriteError(location, str(exc)) from exc


__all__ = ["HtmlRenderer", "RenderContext", "RenderStage", "write_all"]

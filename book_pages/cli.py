"""Cyclopts CLI entrypoint for rendering a book into HTML pages.

The ``book-pages`` console script defined here loads ``book.yaml``, builds the
book from its chapter manifest, and renders one HTML page per chapter. The
``context`` subcommand prints the book-wide template context as JSON, which is
handy when writing a theme.

Examples
--------
Render the book described by ``book.yaml`` into ``book/``:

>>> from book_pages.cli import main
>>> main()  # doctest: +SKIP

Render into a custom directory:

>>> from book_pages.cli import app
>>> app(["build", "--config", "docs/book.yaml", "--dest", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .book import load_book
from .config import load_config, load_html_config
from .renderer import HtmlRenderer, RenderContext, construct_global_context

DEFAULT_CONFIG = Path("book.yaml")
DEFAULT_DEST = Path("book")
DEFAULT_SRC = Path("src")

app = App(name="book-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render every chapter of the book into HTML pages.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to book config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    dest: typ.Annotated[
        Path | None,
        Parameter(
            help="Output folder (relative to the book root)", env_var="INPUT_DEST"
        ),
    ] = None,
    src: typ.Annotated[
        Path,
        Parameter(help="Chapter source folder (relative to the book root)"),
    ] = DEFAULT_SRC,
    livereload_url: typ.Annotated[
        str | None,
        Parameter(help="WebSocket URL pages reconnect to for live reload"),
    ] = None,
) -> None:
    """Render the book described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``book.yaml`` file (overridable via ``INPUT_CONFIG``).
    dest : Path or None, optional
        Output directory, relative to the book root; defaults to ``book/``
        beside the config file.
    src : Path, optional
        Directory holding the chapter HTML fragments, relative to the book root.
    livereload_url : str or None, optional
        Injected into every page for the serving command; not a user setting.

    Returns
    -------
    None
        Writes rendered pages and prints the generated paths.

    Raises
    ------
    ConfigError
        If the configuration or chapter manifest is invalid.
    BookPagesError
        If a template fails to load or a chapter fails to render or write.
    """
    book_config = load_config(config)
    root = book_config.root
    book = load_book(book_config.chapters, root / src)
    html_config = load_html_config(book_config)
    if livereload_url:
        html_config.livereload_url = livereload_url

    ctx = RenderContext(
        root=root,
        book=book,
        config=book_config,
        destination=root / (dest if dest is not None else DEFAULT_DEST),
        html_config=html_config,
    )
    for path in HtmlRenderer().render(ctx):
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the book-wide template context as JSON.")
def context(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to book config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    src: typ.Annotated[
        Path,
        Parameter(help="Chapter source folder (relative to the book root)"),
    ] = DEFAULT_SRC,
) -> None:
    """Print the global template context for the book described by ``config``."""
    book_config = load_config(config)
    book = load_book(book_config.chapters, book_config.root / src)
    global_ctx = construct_global_context(
        book_config.book, load_html_config(book_config), book
    )
    sys.stdout.write(global_ctx.to_json().decode("utf-8") + "\n")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``book-pages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

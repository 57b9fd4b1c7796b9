"""Render a tree of book chapters into themed HTML pages.

This package exposes the CLI entry points used by ``book-pages`` to turn a
``book.yaml`` manifest into one HTML file per chapter, complete with a
table of contents and previous/next navigation.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from book_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]

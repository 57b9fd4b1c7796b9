"""Typed dataclasses describing book and HTML renderer configuration."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path


class ConfigError(ValueError):
    """Raised when the book configuration is invalid or has mistyped values."""


@dc.dataclass(slots=True)
class Playpen:
    """Settings for the editable code snippet ("playpen") feature."""

    editor: Path = Path("ace")
    editable: bool = False


@dc.dataclass(slots=True)
class HtmlConfig:
    """Options controlling how the HTML renderer builds pages.

    Attributes
    ----------
    theme : Path or None
        Theme directory, relative to the book root. ``None`` selects the
        built-in theme.
    curly_quotes : bool
        Use typographic quotes instead of ``"``.
    mathjax_support : bool
        Load MathJax on every page.
    google_analytics : str or None
        Optional analytics tracking code.
    additional_css : list[Path]
        Extra stylesheets linked from each page ``<head>``.
    additional_js : list[Path]
        Extra scripts loaded at the bottom of each page ``<body>``.
    playpen : Playpen
        Editable snippet settings.
    livereload_url : str or None
        Set by the serving command only; users should not configure it.
    no_section_label : bool
        Hide section numbers in the table of contents.
    """

    theme: Path | None = None
    curly_quotes: bool = False
    mathjax_support: bool = False
    google_analytics: str | None = None
    additional_css: list[Path] = dc.field(default_factory=list)
    additional_js: list[Path] = dc.field(default_factory=list)
    playpen: Playpen = dc.field(default_factory=Playpen)
    livereload_url: str | None = None
    no_section_label: bool = False

    def theme_dir(self, root: Path) -> Path | None:
        """Return the theme directory resolved against ``root``, if any."""
        if self.theme is None:
            return None
        return root / self.theme


@dc.dataclass(slots=True)
class BookConfig:
    """Descriptive metadata for the book being rendered."""

    title: str | None = None
    description: str | None = None
    authors: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Config:
    """Loaded book configuration.

    ``settings`` keeps the full nested mapping so renderer-specific tables
    (such as ``output.html``) can be deserialized on demand. ``chapters`` holds
    the raw chapter manifest and ``root`` the directory the file was read from.
    """

    book: BookConfig = dc.field(default_factory=BookConfig)
    settings: dict[str, typ.Any] = dc.field(default_factory=dict)
    chapters: list[typ.Any] = dc.field(default_factory=list)
    root: Path = dc.field(default_factory=Path)

    def get(self, key: str) -> typ.Any | None:
        """Return the value at dotted ``key`` (e.g. ``output.html``) or None.

        Raises
        ------
        ConfigError
            If an intermediate table along ``key`` is present but not a mapping.
        """
        current: typ.Any = self.settings
        walked: list[str] = []
        for segment in key.split("."):
            if not isinstance(current, cabc.Mapping):
                prefix = ".".join(walked)
                msg = f"'{prefix}' must be a table, got {type(current).__name__}"
                raise ConfigError(msg)
            walked.append(segment)
            current = current.get(segment)
            if current is None:
                return None
        return current


__all__ = ["BookConfig", "Config", "ConfigError", "HtmlConfig", "Playpen"]

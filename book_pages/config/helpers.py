"""Utility helpers shared by the book configuration loader.

Each coercion helper takes the dotted key of the value it reads so a
:class:`ConfigError` can point at the offending setting. Missing values always
resolve to their defaults; only a present value of the wrong type is an error.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from .models import BookConfig, ConfigError, HtmlConfig, Playpen


def _mismatch(key: str, expected: str, value: object) -> ConfigError:
    msg = f"'{key}' must be {expected}, got {type(value).__name__} ({value!r})"
    return ConfigError(msg)


def _expect_bool(key: str, value: object) -> bool:
    """Return ``value`` when it is a real boolean."""
    if isinstance(value, bool):
        return value
    raise _mismatch(key, "a boolean", value)


def _expect_str(key: str, value: object) -> str:
    if isinstance(value, str):
        return value
    raise _mismatch(key, "a string", value)


def _optional_str(key: str, value: object | None) -> str | None:
    """Return a string, or None when the value is absent."""
    if value is None:
        return None
    return _expect_str(key, value)


def _expect_path(key: str, value: object) -> Path:
    """Return ``value`` as a :class:`Path` when it is a string or path."""
    match value:
        case Path():
            return value
        case str():
            return Path(value)
        case _:
            raise _mismatch(key, "a path string", value)


def _optional_path(key: str, value: object | None) -> Path | None:
    if value is None:
        return None
    return _expect_path(key, value)


def _expect_list(key: str, value: object, expected: str) -> cabc.Sequence[object]:
    if isinstance(value, str) or not isinstance(value, cabc.Sequence):
        raise _mismatch(key, expected, value)
    return value


def _path_list(key: str, value: object | None) -> list[Path]:
    """Return a list of paths; a missing value yields an empty list."""
    if value is None:
        return []
    items = _expect_list(key, value, "a list of paths")
    return [_expect_path(f"{key}[{idx}]", item) for idx, item in enumerate(items)]


def _str_list(key: str, value: object | None) -> list[str]:
    if value is None:
        return []
    items = _expect_list(key, value, "a list of strings")
    return [_expect_str(f"{key}[{idx}]", item) for idx, item in enumerate(items)]


def _expect_mapping(key: str, value: object | None) -> cabc.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping; a missing value yields an empty one."""
    if value is None:
        return {}
    if isinstance(value, cabc.Mapping):
        return value
    raise _mismatch(key, "a table", value)


def _build_playpen(key: str, value: object | None) -> Playpen:
    """Build a Playpen from the ``playpen`` table, applying defaults."""
    payload = _expect_mapping(key, value)
    base = Playpen()
    editor = payload.get("editor")
    editable = payload.get("editable")
    return Playpen(
        editor=base.editor if editor is None else _expect_path(f"{key}.editor", editor),
        editable=(
            base.editable
            if editable is None
            else _expect_bool(f"{key}.editable", editable)
        ),
    )


def _build_html_config(payload: object | None, *, key: str) -> HtmlConfig:
    """Build an HtmlConfig from a kebab-case settings table.

    Unknown keys are ignored so newer settings files keep loading.
    """
    table = _expect_mapping(key, payload)
    base = HtmlConfig()

    def _flag(name: str, default: bool) -> bool:
        value = table.get(name)
        return default if value is None else _expect_bool(f"{key}.{name}", value)

    return HtmlConfig(
        theme=_optional_path(f"{key}.theme", table.get("theme")),
        curly_quotes=_flag("curly-quotes", base.curly_quotes),
        mathjax_support=_flag("mathjax-support", base.mathjax_support),
        google_analytics=_optional_str(
            f"{key}.google-analytics", table.get("google-analytics")
        ),
        additional_css=_path_list(f"{key}.additional-css", table.get("additional-css")),
        additional_js=_path_list(f"{key}.additional-js", table.get("additional-js")),
        playpen=_build_playpen(f"{key}.playpen", table.get("playpen")),
        livereload_url=_optional_str(
            f"{key}.livereload-url", table.get("livereload-url")
        ),
        no_section_label=_flag("no-section-label", base.no_section_label),
    )


def _build_book_config(payload: object | None) -> BookConfig:
    """Build the book metadata block; ``author`` is accepted as a single name."""
    table = _expect_mapping("book", payload)
    authors = table.get("authors")
    if authors is None and table.get("author") is not None:
        authors = [_expect_str("book.author", table["author"])]
    return BookConfig(
        title=_optional_str("book.title", table.get("title")),
        description=_optional_str("book.description", table.get("description")),
        authors=_str_list("book.authors", authors),
    )


__all__ = [
    "_build_book_config",
    "_build_html_config",
    "_build_playpen",
    "_expect_bool",
    "_expect_mapping",
    "_expect_path",
    "_expect_str",
    "_optional_path",
    "_optional_str",
    "_path_list",
    "_str_list",
]

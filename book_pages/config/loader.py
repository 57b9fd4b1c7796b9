"""Load book configuration YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path

from loguru import logger
from ruamel.yaml import YAML

from .._constants import HTML_CONFIG_NAMESPACE
from .helpers import _build_book_config, _build_html_config
from .models import Config, ConfigError, HtmlConfig


def load_config(path: Path) -> Config:
    """Load the YAML file describing a book and its renderer settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the book configuration (for example, ``book.yaml``).

    Returns
    -------
    Config
        Book metadata, the full settings mapping, the raw chapter manifest,
        and the directory containing the file (used to resolve relative paths).

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the top-level document is not a mapping, or a present value has
        the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from book_pages.config import load_config
    >>> config = load_config(Path("book.yaml"))  # doctest: +SKIP
    >>> config.book.title  # doctest: +SKIP
    'The Guide'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    chapters = raw.get("chapters") or []
    if not isinstance(chapters, list):
        msg = f"'chapters' must be a list, got {type(chapters).__name__}"
        raise ConfigError(msg)

    return Config(
        book=_build_book_config(raw.get("book")),
        settings=raw,
        chapters=chapters,
        root=path.parent,
    )


def html_config_from_settings(settings: cabc.Mapping[str, typ.Any]) -> HtmlConfig:
    """Deserialize the ``output.html`` table of a generic settings mapping.

    A missing namespace yields the all-default :class:`HtmlConfig`; unknown
    keys inside it are ignored.

    Raises
    ------
    ConfigError
        If a present setting has the wrong type.
    """
    config = Config(settings=dict(settings))
    return load_html_config(config)


def load_html_config(config: Config) -> HtmlConfig:
    """Return the :class:`HtmlConfig` stored under ``output.html`` in ``config``."""
    html_config = _build_html_config(
        config.get(HTML_CONFIG_NAMESPACE), key=HTML_CONFIG_NAMESPACE
    )
    for field in dc.fields(html_config):
        logger.debug(
            "{}.{} = {!r}",
            HTML_CONFIG_NAMESPACE,
            field.name,
            getattr(html_config, field.name),
        )
    return html_config


__all__ = ["html_config_from_settings", "load_config", "load_html_config"]

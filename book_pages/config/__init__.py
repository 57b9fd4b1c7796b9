"""Load and validate book configuration for HTML rendering.

This subpackage parses the book's ``book.yaml`` file and deserializes the
``output.html`` settings table into strongly typed dataclasses
(:class:`BookConfig`, :class:`HtmlConfig`, :class:`Playpen`) consumed by the
renderer. Every setting has a default; only a present value of the wrong type
raises :class:`ConfigError`.

Examples
--------
>>> from book_pages.config import html_config_from_settings
>>> html_config_from_settings({}).playpen.editable
False
>>> cfg = html_config_from_settings({"output": {"html": {"mathjax-support": True}}})
>>> cfg.mathjax_support
True
"""

from .loader import html_config_from_settings, load_config, load_html_config
from .models import BookConfig, Config, ConfigError, HtmlConfig, Playpen

__all__ = [
    "BookConfig",
    "Config",
    "ConfigError",
    "HtmlConfig",
    "Playpen",
    "html_config_from_settings",
    "load_config",
    "load_html_config",
]

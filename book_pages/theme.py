"""Raw template sources for the HTML renderer.

A theme directory may override the index template (``index.jinja``) and the
header partial (``header.jinja``); any file it lacks falls back to the copy
packaged under ``book_pages/templates``. The bytes are handed to the template
engine loader untouched so decoding problems surface there, attributed to the
template that caused them.
"""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from loguru import logger

from ._constants import HEADER_PARTIAL_FILE, INDEX_TEMPLATE_FILE

DEFAULT_THEME_DIR = Path(__file__).parent / "templates"


@dc.dataclass(frozen=True, slots=True)
class Theme:
    """Template bytes for one render."""

    index: bytes
    header: bytes

    @classmethod
    def load(cls, theme_dir: Path | None = None) -> Theme:
        """Read theme templates from ``theme_dir``, using built-ins when absent.

        Parameters
        ----------
        theme_dir : Path, optional
            Directory containing theme overrides. ``None`` selects the
            built-in theme.

        Returns
        -------
        Theme
            The raw index template and header partial.
        """
        return cls(
            index=_read_template(theme_dir, INDEX_TEMPLATE_FILE),
            header=_read_template(theme_dir, HEADER_PARTIAL_FILE),
        )


def _read_template(theme_dir: Path | None, filename: str) -> bytes:
    if theme_dir is not None:
        candidate = theme_dir / filename
        if candidate.is_file():
            logger.debug("Using theme override {}", candidate)
            return candidate.read_bytes()
    return (DEFAULT_THEME_DIR / filename).read_bytes()


__all__ = ["DEFAULT_THEME_DIR", "Theme"]

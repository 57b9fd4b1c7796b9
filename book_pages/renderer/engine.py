"""Build the Jinja environment used to render chapter pages.

:func:`load_template_engine` decodes the theme's template bytes, registers
the index template and header partial under fixed names, installs the
``toc``/``previous``/``next`` helpers, and compiles every template up front so
a broken theme fails before any page is written.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from jinja2 import DictLoader, Environment, TemplateSyntaxError, pass_context
from loguru import logger

from book_pages._constants import HEADER_PARTIAL, INDEX_TEMPLATE

from .errors import TemplateEncodingError, TemplateSyntaxInvalidError
from .helpers import RenderToc, next_chapter, previous

if typ.TYPE_CHECKING:
    from jinja2.runtime import Context

    from book_pages.config import HtmlConfig
    from book_pages.theme import Theme

HELPER_NAMES = ("next", "previous", "toc")


@dc.dataclass(frozen=True, slots=True)
class TemplateEngine:
    """A loaded Jinja environment; read-only once built."""

    env: Environment

    @property
    def templates(self) -> list[str]:
        """Return the names of the registered templates and partials."""
        return sorted(self.env.list_templates())

    @property
    def helpers(self) -> list[str]:
        """Return the names of the registered template helpers."""
        return [name for name in HELPER_NAMES if name in self.env.globals]

    def render(self, name: str, data: cabc.Mapping[str, typ.Any]) -> str:
        """Render the template registered as ``name`` with ``data``."""
        return self.env.get_template(name).render(data)


def _context_helper(
    helper: cabc.Callable[[Context], typ.Any],
) -> cabc.Callable[..., typ.Any]:
    """Wrap ``helper`` so Jinja passes it the active template context."""

    @pass_context
    def _call(context: Context) -> typ.Any:
        return helper(context)

    return _call


def _decode(name: str, raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TemplateEncodingError(name, str(exc)) from exc


def load_template_engine(theme: Theme, html_config: HtmlConfig) -> TemplateEngine:
    """Return an engine with the theme templates and helpers registered.

    Parameters
    ----------
    theme : Theme
        Raw bytes of the index template and header partial.
    html_config : HtmlConfig
        Renderer options; ``no_section_label`` is captured by the ``toc``
        helper here and not read again.

    Returns
    -------
    TemplateEngine
        Engine holding ``index`` and ``header`` plus the ``toc``,
        ``previous`` and ``next`` helpers.

    Raises
    ------
    TemplateEncodingError
        If either template is not valid UTF-8.
    TemplateSyntaxInvalidError
        If either template fails to compile.
    """
    logger.debug("Loading the template engine")
    sources = {
        INDEX_TEMPLATE: _decode(INDEX_TEMPLATE, theme.index),
        HEADER_PARTIAL: _decode(HEADER_PARTIAL, theme.header),
    }
    env = Environment(
        loader=DictLoader(sources),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals["toc"] = _context_helper(
        RenderToc(no_section_label=html_config.no_section_label)
    )
    env.globals["previous"] = _context_helper(previous)
    env.globals["next"] = _context_helper(next_chapter)

    for name in sources:
        try:
            env.get_template(name)
        except TemplateSyntaxError as exc:
            reason = f"{exc.message} (line {exc.lineno})"
            raise TemplateSyntaxInvalidError(name, reason) from exc

    return TemplateEngine(env)


__all__ = ["TemplateEngine", "load_template_engine"]

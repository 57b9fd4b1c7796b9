"""Template context, engine loading, and chapter rendering for HTML output."""

from .context import ChapterContext, GlobalContext, construct_global_context, path_to_root
from .engine import TemplateEngine, load_template_engine
from .errors import (
    BookPagesError,
    RenderError,
    TemplateEncodingError,
    TemplateLoadError,
    TemplateSyntaxInvalidError,
    WriteError,
)
from .helpers import NavLink, RenderToc, next_chapter, previous
from .html import HtmlRenderer, RenderContext, RenderStage, write_all
from .toc import TocChapter, TocEntry, TocSpacer, create_toc_info

__all__ = [
    "BookPagesError",
    "ChapterContext",
    "GlobalContext",
    "HtmlRenderer",
    "NavLink",
    "RenderContext",
    "RenderError",
    "RenderStage",
    "RenderToc",
    "TemplateEncodingError",
    "TemplateEngine",
    "TemplateLoadError",
    "TemplateSyntaxInvalidError",
    "TocChapter",
    "TocEntry",
    "TocSpacer",
    "WriteError",
    "construct_global_context",
    "create_toc_info",
    "load_template_engine",
    "next_chapter",
    "path_to_root",
    "previous",
    "write_all",
]

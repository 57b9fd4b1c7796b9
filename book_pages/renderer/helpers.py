"""Context-aware template helpers: the table of contents and page navigation.

Helpers receive the active template context and read the ``chapters`` and
``path`` keys from it. The engine loader registers them as Jinja globals, so
templates call ``{{ toc() }}``, ``previous()`` and ``next()``.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup, escape

from .context import path_to_root

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TemplateData: typ.TypeAlias = "cabc.Mapping[str, typ.Any]"


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """Target of a previous/next navigation link."""

    name: str
    path: str
    link: str


def _current_path(context: TemplateData) -> str:
    return str(context.get("path") or "")


def _chapter_entries(context: TemplateData) -> list[cabc.Mapping[str, typ.Any]]:
    """Return the TOC entries that point at a page, skipping spacers."""
    return [
        entry
        for entry in context.get("chapters") or []
        if "spacer" not in entry and entry.get("path")
    ]


@dc.dataclass(frozen=True, slots=True)
class RenderToc:
    """Render the ``chapters`` list as nested ordered lists.

    ``no_section_label`` is fixed when the helper is registered.
    """

    no_section_label: bool = False

    def __call__(self, context: TemplateData) -> Markup:
        current = _current_path(context)
        prefix = path_to_root(current)
        out: list[str] = ['<ol class="chapter">']
        current_level = 1

        for item in context.get("chapters") or []:
            if "spacer" in item:
                out.append('<li class="spacer"></li>')
                continue

            section = item.get("section")
            level = section.count(".") if section else 1
            while level > current_level:
                out.append('<li><ol class="section">')
                current_level += 1
            while level < current_level:
                out.append("</ol></li>")
                current_level -= 1
            out.append('<li class="affix">' if section is None else "<li>")

            path = item.get("path")
            if path:
                active = ' class="active"' if path == current else ""
                out.append(f'<a href="{escape(prefix + path)}"{active}>')
            if section and not self.no_section_label:
                out.append(f'<strong aria-hidden="true">{escape(section)}</strong> ')
            out.append(str(escape(item.get("name") or "")))
            if path:
                out.append("</a>")
            out.append("</li>")

        while current_level > 1:
            out.append("</ol></li>")
            current_level -= 1
        out.append("</ol>")
        return Markup("".join(out))


def _neighbour(context: TemplateData, offset: int) -> NavLink | None:
    current = _current_path(context)
    entries = _chapter_entries(context)
    paths = [str(entry["path"]) for entry in entries]
    try:
        index = paths.index(current)
    except ValueError:
        return None
    target = index + offset
    if not 0 <= target < len(entries):
        return None
    entry = entries[target]
    return NavLink(
        name=str(entry.get("name") or ""),
        path=paths[target],
        link=path_to_root(current) + paths[target],
    )


def previous(context: TemplateData) -> NavLink | None:
    """Return the chapter before the current one, or None on the first page."""
    return _neighbour(context, -1)


def next_chapter(context: TemplateData) -> NavLink | None:
    """Return the chapter after the current one, or None on the last page."""
    return _neighbour(context, 1)


__all__ = ["NavLink", "RenderToc", "next_chapter", "previous"]

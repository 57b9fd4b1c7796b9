"""Exceptions raised while loading templates and rendering chapters."""

from __future__ import annotations

from pathlib import Path


class BookPagesError(RuntimeError):
    """Base class for render pipeline failures."""


class TemplateLoadError(BookPagesError):
    """Raised when a theme template cannot be registered with the engine."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Unable to load template '{template}': {reason}")


class TemplateEncodingError(TemplateLoadError):
    """Raised when a template's bytes are not valid UTF-8."""


class TemplateSyntaxInvalidError(TemplateLoadError):
    """Raised when a template fails the engine's syntax validation."""


class RenderError(BookPagesError):
    """Raised when the engine fails to render a chapter."""

    def __init__(self, chapter_name: str, chapter_path: str, reason: str) -> None:
        self.chapter_name = chapter_name
        self.chapter_path = chapter_path
        super().__init__(
            f'Unable to render "{chapter_name}" ({chapter_path}): {reason}'
        )


class WriteError(BookPagesError):
    """Raised when rendered output cannot be written to disk."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f'Writing chapter content to "{path}" failed: {reason}')


__all__ = [
    "BookPagesError",
    "RenderError",
    "TemplateEncodingError",
    "TemplateLoadError",
    "TemplateSyntaxInvalidError",
    "WriteError",
]

"""End-to-end tests for rendering a book with :class:`HtmlRenderer`.

These tests render small in-memory books through the packaged theme and
assert on the written files with BeautifulSoup: one page per chapter at its
declared path, titles built from the book title, relative links for nested
pages, stage tracking, and fail-fast error reporting for template, render,
and write failures.

Usage
-----
Run ``pytest tests/test_html_renderer.py -v``. Only pytest's built-in
``tmp_path`` fixture is required.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from book_pages.book import Book, Chapter, SectionNumber, Separator
from book_pages.config import BookConfig, Config, ConfigError
from book_pages.renderer import (
    HtmlRenderer,
    RenderContext,
    RenderError,
    RenderStage,
    TemplateSyntaxInvalidError,
    WriteError,
)


def _config(
    title: str | None = "The Guide", html: dict[str, object] | None = None
) -> Config:
    settings: dict[str, object] = {"output": {"html": html}} if html else {}
    return Config(book=BookConfig(title=title, authors=["Ada"]), settings=settings)


def _render(
    tmp_path: Path, book: Book, config: Config
) -> tuple[HtmlRenderer, list[Path]]:
    renderer = HtmlRenderer()
    ctx = RenderContext(
        root=tmp_path, book=book, config=config, destination=tmp_path / "out"
    )
    return renderer, renderer.render(ctx)


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_renders_one_file_per_chapter(tmp_path: Path, nested_book: Book) -> None:
    renderer, written = _render(tmp_path, nested_book, _config())
    out = tmp_path / "out"
    assert written == [
        out / "first.html",
        out / "first" / "nested.html",
        out / "second.html",
    ], f"Unexpected output paths: {written}"
    assert all(path.is_file() for path in written)
    assert renderer.stage is RenderStage.DONE


def test_book_of_separators_writes_nothing(tmp_path: Path) -> None:
    book = Book([Separator(), Separator()])
    _, written = _render(tmp_path, book, _config())
    assert written == []
    assert not (tmp_path / "out").exists() or not any((tmp_path / "out").iterdir())


def test_page_content_and_titles(tmp_path: Path, nested_book: Book) -> None:
    _, written = _render(tmp_path, nested_book, _config())
    soup = _soup(written[1])
    assert soup.title.get_text() == "The Guide - Nested"
    main = soup.find("main")
    assert main is not None and main.find("p").get_text() == "Nested chapter"
    assert soup.find("h1", class_="menu-title").get_text() == "The Guide"
    assert soup.find("p", class_="menu-authors").get_text() == "Ada"


def test_title_falls_back_to_chapter_name(tmp_path: Path, nested_book: Book) -> None:
    _, written = _render(tmp_path, nested_book, _config(title=None))
    assert _soup(written[0]).title.get_text() == "First"


def test_nested_page_links_are_relative(tmp_path: Path, nested_book: Book) -> None:
    _, written = _render(tmp_path, nested_book, _config())
    soup = _soup(written[1])
    favicon = soup.find("link", rel="icon")
    assert favicon["href"] == "../favicon.ico"
    prev_link = soup.find("a", rel="prev")
    next_link = soup.find("a", rel="next")
    assert prev_link["href"] == "../first.html"
    assert next_link["href"] == "../second.html"
    sidebar = soup.find("nav", id="sidebar")
    assert sidebar.find("a", class_="active")["href"] == "../first/nested.html"


def test_boundary_pages_have_single_nav_link(tmp_path: Path, nested_book: Book) -> None:
    _, written = _render(tmp_path, nested_book, _config())
    first, last = _soup(written[0]), _soup(written[-1])
    assert first.find("a", rel="prev") is None
    assert first.find("a", rel="next")["href"] == "first/nested.html"
    assert last.find("a", rel="next") is None
    assert last.find("a", rel="prev")["href"] == "first/nested.html"


def test_editable_playpen_loads_editor_scripts(tmp_path: Path, nested_book: Book) -> None:
    config = _config(html={"playpen": {"editable": True}, "mathjax-support": True})
    _, written = _render(tmp_path, nested_book, config)
    scripts = [tag.get("src") for tag in _soup(written[0]).find_all("script")]
    for asset in ("ace.js", "editor.js", "mode-rust.js", "theme-dawn.js"):
        assert asset in scripts, f"Expected {asset} in {scripts}"
    assert any(src and "MathJax" in src for src in scripts)


def test_theme_directory_overrides_index(tmp_path: Path, nested_book: Book) -> None:
    theme_dir = tmp_path / "theme"
    theme_dir.mkdir()
    (theme_dir / "index.jinja").write_text(
        "{% include 'header' %}[{{ title }}|{{ path_to_root }}]", encoding="utf-8"
    )
    _, written = _render(tmp_path, nested_book, _config(html={"theme": "theme"}))
    text = written[1].read_text(encoding="utf-8")
    assert text.endswith("[The Guide - Nested|../]"), text
    assert "menu-title" in text, "Built-in header partial should still be used"


def test_invalid_theme_fails_before_writing(tmp_path: Path, nested_book: Book) -> None:
    theme_dir = tmp_path / "theme"
    theme_dir.mkdir()
    (theme_dir / "index.jinja").write_text("{% for %}", encoding="utf-8")
    renderer = HtmlRenderer()
    ctx = RenderContext(
        root=tmp_path,
        book=nested_book,
        config=_config(html={"theme": "theme"}),
        destination=tmp_path / "out",
    )
    with pytest.raises(TemplateSyntaxInvalidError):
        renderer.render(ctx)
    assert renderer.stage is RenderStage.FAILED
    assert not (tmp_path / "out").exists()


def test_render_failure_names_chapter(tmp_path: Path) -> None:
    theme_dir = tmp_path / "theme"
    theme_dir.mkdir()
    (theme_dir / "index.jinja").write_text(
        "{{ content }}{{ missing.attribute }}", encoding="utf-8"
    )
    book = Book([Chapter("Broken", "body", "broken.html", SectionNumber((1,)))])
    renderer = HtmlRenderer()
    ctx = RenderContext(
        root=tmp_path,
        book=book,
        config=_config(html={"theme": "theme"}),
        destination=tmp_path / "out",
    )
    with pytest.raises(RenderError) as excinfo:
        renderer.render(ctx)
    assert excinfo.value.chapter_name == "Broken"
    assert excinfo.value.chapter_path == "broken.html"
    assert '"Broken"' in str(excinfo.value)
    assert renderer.stage is RenderStage.FAILED


def test_runtime_template_failure_names_chapter(tmp_path: Path) -> None:
    theme_dir = tmp_path / "theme"
    theme_dir.mkdir()
    (theme_dir / "index.jinja").write_text("{{ content + 1 }}", encoding="utf-8")
    book = Book([Chapter("Broken", "body", "broken.html", SectionNumber((1,)))])
    renderer = HtmlRenderer()
    ctx = RenderContext(
        root=tmp_path,
        book=book,
        config=_config(html={"theme": "theme"}),
        destination=tmp_path / "out",
    )
    with pytest.raises(RenderError) as excinfo:
        renderer.render(ctx)
    assert excinfo.value.chapter_name == "Broken"
    assert excinfo.value.chapter_path == "broken.html"
    assert isinstance(excinfo.value.__cause__, TypeError)
    assert renderer.stage is RenderStage.FAILED
    assert not (tmp_path / "out" / "broken.html").exists()


def test_chapter_path_outside_destination_is_refused(tmp_path: Path) -> None:
    book = Book([Chapter("Escape", "x", "../escaped.html")])
    renderer = HtmlRenderer()
    out = tmp_path / "out"
    ctx = RenderContext(root=tmp_path, book=book, config=_config(), destination=out)
    with pytest.raises(WriteError, match="outside"):
        renderer.render(ctx)
    assert not (tmp_path / "escaped.html").exists()
    assert renderer.stage is RenderStage.FAILED


def test_script_settings_are_json_encoded(tmp_path: Path) -> None:
    book = Book([Chapter("Only", "", "only.html")])
    html = {
        "livereload-url": "ws://localhost:3000/?a=1&b=2",
        "google-analytics": "UA-1&x",
    }
    _, written = _render(tmp_path, book, _config(html=html))
    text = written[0].read_text(encoding="utf-8")
    assert 'new WebSocket("ws://localhost:3000/?a=1\\u0026b=2")' in text, text
    assert 'gtag("config", "UA-1\\u0026x")' in text, text


def test_write_failure_aborts_render(tmp_path: Path) -> None:
    out = tmp_path / "out"
    out.mkdir()
    (out / "blocked").write_text("not a directory", encoding="utf-8")
    book = Book(
        [
            Chapter("Blocked", "", "blocked/page.html"),
            Chapter("Later", "", "later.html"),
        ]
    )
    renderer = HtmlRenderer()
    ctx = RenderContext(root=tmp_path, book=book, config=_config(), destination=out)
    with pytest.raises(WriteError) as excinfo:
        renderer.render(ctx)
    assert excinfo.value.path == out / "blocked" / "page.html"
    assert not (out / "later.html").exists(), "Render should stop at the first failure"


def test_mistyped_setting_fails_render(tmp_path: Path, nested_book: Book) -> None:
    renderer = HtmlRenderer()
    ctx = RenderContext(
        root=tmp_path,
        book=nested_book,
        config=_config(html={"no-section-label": "no"}),
        destination=tmp_path / "out",
    )
    with pytest.raises(ConfigError):
        renderer.render(ctx)
    assert renderer.stage is RenderStage.FAILED

"""Unit tests for core/highlight.py"""

import html
import re

import pytest
from pygments.lexers import PythonLexer
from pygments.lexers.special import TextLexer

from mdview.core.highlight import (
    DARK_CLASS,
    LIGHT_CLASS,
    Highlighter,
    LexerRegistry,
    available_themes,
    theme_css,
)
from mdview.core import highlight as highlight_module
from mdview.core.models import CodeBlockSpan, HighlightedBlock
from mdview.errors import HighlighterUnavailableError


# --- LexerRegistry ---

def test_registry_known_language():
    assert isinstance(LexerRegistry().lookup("python"), PythonLexer)


def test_registry_is_case_insensitive():
    assert isinstance(LexerRegistry().lookup("Python"), PythonLexer)


@pytest.mark.parametrize("language", [None, "", "no-such-language-xyz", "plaintext", "txt"])
def test_registry_falls_back_to_text(language):
    """Absent, unknown and plain-text tags all get the TextLexer."""
    assert isinstance(LexerRegistry().lookup(language), TextLexer)


def test_registry_explicit_registration_wins():
    """Registered factories take precedence over Pygments aliases."""
    registry = LexerRegistry({"mylang": PythonLexer, "python": TextLexer})
    assert isinstance(registry.lookup("mylang"), PythonLexer)
    assert isinstance(registry.lookup("python"), TextLexer)


def test_registry_returns_fresh_lexers():
    registry = LexerRegistry()
    assert registry.lookup("python") is not registry.lookup("python")


# --- Highlighter ---

def test_highlight_produces_both_themes(highlighter):
    block = highlighter.highlight('print("hi")\n', "python")
    assert isinstance(block, HighlightedBlock)
    assert block.language == "python"
    assert LIGHT_CLASS in block.light
    assert DARK_CLASS in block.dark


def test_highlight_themes_differ(highlighter):
    """Light and dark renderings carry different inline token colours."""
    block = highlighter.highlight("def f():\n    return 1\n", "python")
    assert 'style="' in block.light
    assert block.light.replace(LIGHT_CLASS, "") != block.dark.replace(DARK_CLASS, "")


def test_highlight_html_wraps_both(highlighter):
    block = highlighter.highlight("x = 1\n", "python")
    assert block.html.startswith('<div class="code-block" data-language="python">')
    assert block.light in block.html
    assert block.dark in block.html
    assert block.html.endswith("</div>")


@pytest.mark.parametrize("language", [None, "definitely-not-a-language"])
def test_highlight_fallback_still_themed(highlighter, language):
    """Unknown or missing languages still produce a light and a dark fragment."""
    block = highlighter.highlight("just text\n", language)
    assert block.language == "text"
    assert LIGHT_CLASS in block.light
    assert DARK_CLASS in block.dark
    assert "just text" in block.light


def test_highlight_decodes_entities_once(highlighter):
    """Escaped input is decoded before tokenizing and re-escaped exactly once on output."""
    block = highlighter.highlight("&lt;script&gt;alert(1)&lt;/script&gt;", None)
    for fragment in (block.light, block.dark):
        assert "<script>" not in fragment
        assert "&lt;script&gt;" in fragment
        assert "&amp;lt;" not in fragment


def test_highlight_span(highlighter):
    span = CodeBlockSpan(start=0, end=10, language="python", escaped_code="x = 1\n")
    assert highlighter.highlight_span(span).language == "python"


@pytest.mark.parametrize("workers", [1, 4])
def test_highlight_all_keeps_order(highlighter, workers):
    """Results come back in input order whether or not a pool is used."""
    spans = [
        CodeBlockSpan(0, 1, "python", "x = 1\n"),
        CodeBlockSpan(2, 3, "go", "func f() {}\n"),
        CodeBlockSpan(4, 5, None, "plain\n"),
    ]
    blocks = highlighter.highlight_all(spans, workers=workers)
    assert [b.language for b in blocks] == ["python", "go", "text"]


def test_highlight_all_empty(highlighter):
    assert highlighter.highlight_all([], workers=4) == []


def test_highlight_all_sequential_equals_concurrent(highlighter):
    spans = [CodeBlockSpan(i, i + 1, "python", f"v{i} = {i}\n") for i in range(6)]
    assert highlighter.highlight_all(spans, 1) == highlighter.highlight_all(spans, 3)


@pytest.mark.parametrize("light,dark", [
    ("no-such-theme", "github-dark"),
    ("default", "no-such-theme"),
])
def test_missing_theme_is_infrastructure_error(light, dark):
    """An unavailable theme raises HighlighterUnavailableError, a RuntimeError."""
    with pytest.raises(HighlighterUnavailableError, match="no-such-theme"):
        Highlighter(light, dark)
    with pytest.raises(RuntimeError):
        Highlighter(light, dark)


def test_custom_themes():
    block = Highlighter("friendly", "monokai").highlight("x = 1\n", "python")
    assert LIGHT_CLASS in block.light


def test_available_themes():
    themes = available_themes()
    assert "default" in themes
    assert "github-dark" in themes
    assert themes == sorted(themes)


def test_theme_css_targets_both_renderings():
    css = theme_css()
    assert ".highlight-light" in css
    assert ".highlight-dark" in css
    assert "prefers-color-scheme: dark" in css


# --- source fidelity ---

def _visible_text(fragment: str) -> str:
    return html.unescape(re.sub(r"<[^>]+>", "", fragment))


@pytest.mark.parametrize("language", ["python", None, "plaintext"])
def test_highlight_keeps_leading_blank_lines(highlighter, language):
    """Blank lines at the top of a block survive highlighting in both themes."""
    source = "\n\nx = 1\n"
    block = highlighter.highlight(source, language)
    assert _visible_text(block.light) == source
    assert _visible_text(block.dark) == source


def test_registry_factories_receive_lexer_options():
    """Registered factories are built with the same options as Pygments lookups."""
    lexer = LexerRegistry({"mylang": PythonLexer}).lookup("mylang")
    assert lexer.stripnl is False


# --- backend failures ---

def test_backend_io_failure_is_infrastructure_error(highlighter, monkeypatch):
    def _broken(*args, **kwargs):
        raise OSError("style file unreadable")

    monkeypatch.setattr(highlight_module, "pygments_highlight", _broken)
    with pytest.raises(HighlighterUnavailableError, match="unreadable"):
        highlighter.highlight("x = 1\n", "python")


def test_programming_errors_are_not_masked(highlighter, monkeypatch):
    """Bugs surface as themselves, not as an unavailable backend."""
    def _buggy(*args, **kwargs):
        raise TypeError("bad call")

    monkeypatch.setattr(highlight_module, "pygments_highlight", _buggy)
    with pytest.raises(TypeError):
        highlighter.highlight("x = 1\n", "python")


def test_bad_registry_factory_propagates():
    def _factory(**options):
        raise KeyError("missing grammar table")

    highlighter = Highlighter(registry=LexerRegistry({"broken": _factory}))
    with pytest.raises(KeyError):
        highlighter.highlight("x\n", "broken")


# --- theme palette ---

def test_theme_css_without_themes_has_no_palette():
    assert "background-color" not in theme_css()


def test_theme_css_palette_per_theme():
    """Named themes add each rendering's background colour."""
    from pygments.styles import get_style_by_name

    css = theme_css("default", "monokai")
    light_bg = get_style_by_name("default").background_color
    dark_bg = get_style_by_name("monokai").background_color
    assert f".code-block .highlight-light {{ background-color: {light_bg};" in css
    assert f".code-block .highlight-dark {{ background-color: {dark_bg};" in css


def test_theme_css_unknown_theme():
    with pytest.raises(HighlighterUnavailableError):
        theme_css(dark_theme="no-such-theme")

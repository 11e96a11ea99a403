"""Dual-theme syntax highlighting of extracted code blocks with Pygments"""

import html
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound, OptionError

from mdview.core.models import CodeBlockSpan, HighlightedBlock
from mdview.errors import HighlighterUnavailableError


logger = logging.getLogger(__name__)

LexerFactory = Callable[..., Lexer]

# Keep leading blank lines of a block; Pygments strips them by default.
LEXER_OPTIONS = {"stripnl": False}

LIGHT_CLASS = "highlight highlight-light"
DARK_CLASS = "highlight highlight-dark"

# Fence tags that mean "no highlighting" but which Pygments does not know.
PLAIN_ALIASES = ("plain", "plaintext", "txt", "none", "nohighlight")

_SWITCH_CSS = """\
.code-block .highlight-dark { display: none; }
.dark .code-block .highlight-light { display: none; }
.dark .code-block .highlight-dark { display: block; }
@media (prefers-color-scheme: dark) {
  :root:not(.light) .code-block .highlight-light { display: none; }
  :root:not(.light) .code-block .highlight-dark { display: block; }
}
.code-block pre { margin: 0; padding: 0.75em 1em; overflow-x: auto; }
"""


class LexerRegistry:
    """Language identifier -> lexer lookup with a fixed plain-text fallback.

    Explicit registrations win over Pygments' own aliases. Lookups always
    return a fresh lexer so concurrent highlight calls share no lexer state.
    """

    def __init__(self, factories: dict[str, LexerFactory] = None):
        self._factories: dict[str, LexerFactory] = {name: TextLexer for name in PLAIN_ALIASES}
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: LexerFactory) -> None:
        """Map name to factory; the factory is called with Pygments lexer options."""
        self._factories[name.lower()] = factory

    def lookup(self, language: Optional[str]) -> Lexer:
        """Return a lexer for language, or a TextLexer when absent or unknown."""
        if not language:
            return TextLexer(**LEXER_OPTIONS)
        key = language.lower()
        if key in self._factories:
            return self._factories[key](**LEXER_OPTIONS)
        try:
            return get_lexer_by_name(key, **LEXER_OPTIONS)
        except ClassNotFound:
            logger.debug("No lexer for %r; falling back to plain text", language)
            return TextLexer(**LEXER_OPTIONS)


def _load_style(name: str):
    try:
        return get_style_by_name(name)
    except ClassNotFound as e:
        raise HighlighterUnavailableError(f"Theme {name!r} is not available: {e}") from e


def available_themes() -> list[str]:
    """Return sorted names of the Pygments styles usable as themes."""
    return sorted(get_all_styles())


class Highlighter:
    """Renders code as a light and a dark themed fragment with inline token styles."""

    def __init__(
        self,
        light_theme: str = "default",
        dark_theme: str = "github-dark",
        registry: LexerRegistry = None,
        ):
        self.light_style = _load_style(light_theme)
        self.dark_style = _load_style(dark_theme)
        self.registry = registry or LexerRegistry()

    def _format(self, code: str, lexer: Lexer, style, cssclass: str) -> str:
        formatter = HtmlFormatter(style=style, noclasses=True, cssclass=cssclass)
        return pygments_highlight(code, lexer, formatter).rstrip("\n")

    def highlight(self, code: str, language: Optional[str] = None) -> HighlightedBlock:
        """Highlight entity-escaped code (as extracted from HTML) for both themes."""
        source = html.unescape(code)
        lexer = self.registry.lookup(language)
        alias = lexer.aliases[0] if lexer.aliases else "text"
        try:
            light = self._format(source, lexer, self.light_style, LIGHT_CLASS)
            dark = self._format(source, lexer, self.dark_style, DARK_CLASS)
        except (ClassNotFound, OptionError, OSError) as e:
            raise HighlighterUnavailableError(f"Highlighting failed for {alias!r} block: {e}") from e
        return HighlightedBlock(language=html.escape(alias), light=light, dark=dark)

    def highlight_span(self, span: CodeBlockSpan) -> HighlightedBlock:
        return self.highlight(span.escaped_code, span.language)

    def highlight_all(self, spans: Sequence[CodeBlockSpan], workers: int = 1) -> list[HighlightedBlock]:
        """Highlight independent blocks, concurrently when workers > 1; results keep input order."""
        if workers <= 1 or len(spans) <= 1:
            return [self.highlight_span(s) for s in spans]
        with ThreadPoolExecutor(max_workers=min(workers, len(spans))) as executor:
            return list(executor.map(self.highlight_span, spans))


def _palette_rule(selector: str, theme: str) -> str:
    style = _load_style(theme)
    decls = [f"background-color: {style.background_color};"]
    text = style.style_for_token(Token.Text).get("color")
    if text:
        decls.append(f"color: #{text};")
    return f"{selector} {{ {' '.join(decls)} }}\n"


def theme_css(light_theme: str = None, dark_theme: str = None) -> str:
    """Stylesheet showing one rendering per block.

    A `dark` or `light` class on an ancestor (usually <html>) forces a theme;
    without either, the reader's colour-scheme preference decides. Token
    colours are inline, so themes only add each rendering's page colours.
    """
    palette = ""
    if light_theme:
        palette += _palette_rule(".code-block .highlight-light", light_theme)
    if dark_theme:
        palette += _palette_rule(".code-block .highlight-dark", dark_theme)
    return _SWITCH_CSS + palette

"""mdview: Markdown -> embeddable HTML with dual-theme highlighted code blocks.

Raw HTML in the source is passed through unsanitized. Render only documents
from trusted authors.
"""

from mdview.core.pipeline import Renderer, render, render_async
from mdview.errors import HighlighterUnavailableError, InvalidSourceError, RenderError

__all__ = [
    "HighlighterUnavailableError",
    "InvalidSourceError",
    "RenderError",
    "Renderer",
    "render",
    "render_async",
]

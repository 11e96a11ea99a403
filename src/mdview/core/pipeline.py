"""Render pipeline: parse -> serialize -> extract -> highlight -> assemble, plus file output"""

import asyncio
import html
import logging
from pathlib import Path

from mdview.config import Settings
from mdview.core.assemble import assemble
from mdview.core.extract import extract
from mdview.core.highlight import Highlighter, theme_css
from mdview.core.parse import decode_source, discover_files, parse
from mdview.core.serialize import serialize
from mdview.core.utils.slug import slugify


logger = logging.getLogger(__name__)


class Renderer:
    """Markdown source -> embeddable HTML fragment with dual-theme code blocks.

    Holds configuration and resolved themes only; each call builds its own
    parser and worker pool, so one Renderer may serve concurrent callers.
    """

    def __init__(self, settings: Settings = None):
        self.settings = settings or Settings()
        self.highlighter = Highlighter(self.settings.light_theme, self.settings.dark_theme)

    def render(self, source: str | bytes) -> str:
        text = decode_source(source)
        doc = parse(text, self.settings.parser_config, self.settings.task_lists)
        rendered = serialize(doc)
        spans = extract(rendered)
        if not spans:
            return rendered
        blocks = self.highlighter.highlight_all(spans, self.settings.highlight_workers)
        logger.debug("Highlighted %d code block(s)", len(blocks))
        return assemble(rendered, list(zip(spans, blocks)))

    async def render_async(self, source: str | bytes) -> str:
        """Render in a worker thread so an event loop can serve other documents meanwhile."""
        return await asyncio.to_thread(self.render, source)


def render(source: str | bytes, settings: Settings = None) -> str:
    """Render markdown source to an HTML fragment."""
    return Renderer(settings).render(source)


async def render_async(source: str | bytes, settings: Settings = None) -> str:
    return await Renderer(settings).render_async(source)


def build_page(fragment: str, title: str, light_theme: str = None, dark_theme: str = None) -> str:
    """Wrap a rendered fragment in a minimal standalone HTML page with the theme stylesheet."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>\n{theme_css(light_theme, dark_theme)}</style>\n"
        "</head>\n<body>\n<main class=\"markdown-body\">\n"
        f"{fragment}"
        "</main>\n</body>\n</html>\n"
    )


def run_render(path: str, output_dir: Path, settings: Settings) -> list[tuple[Path, Path]]:
    """Render every markdown file under path into output_dir. Returns (source, html_path) pairs.

    Output mirrors the source layout relative to path, with slugified file names.
    Two sources that slugify to the same output file raise RuntimeError.
    """
    root = Path(path)
    base = root.parent if root.is_file() else root
    renderer = Renderer(settings)
    written: dict[Path, Path] = {}
    results = []
    for p in discover_files(root):
        dest_dir = output_dir / p.parent.relative_to(base)
        out_file = dest_dir / f"{slugify(p.stem) or 'index'}.html"
        if out_file in written:
            raise RuntimeError(f"{written[out_file]} and {p} both render to {out_file}")
        try:
            fragment = renderer.render(p.read_bytes())
        except Exception as e:
            raise RuntimeError(f"Failed to render {p}: {e}") from e
        dest_dir.mkdir(parents=True, exist_ok=True)
        if settings.standalone:
            content = build_page(fragment, p.stem, settings.light_theme, settings.dark_theme)
        else:
            content = fragment
        out_file.write_text(content, encoding='utf-8')
        written[out_file] = p
        results.append((p, out_file))
    return results

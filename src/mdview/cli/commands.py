"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdview.config import Settings, load_config
from mdview.core.highlight import available_themes, theme_css
from mdview.core.pipeline import run_render
from mdview.errors import RenderError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
    return settings


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    standalone: Annotated[Optional[bool], typer.Option("--standalone/--fragment", help="Write full HTML pages or bare fragments")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Threads used to highlight code blocks")] = None,
    light: Annotated[Optional[str], typer.Option("--light-theme", help="Pygments style for light mode")] = None,
    dark: Annotated[Optional[str], typer.Option("--dark-theme", help="Pygments style for dark mode")] = None,
    ):
    """Render markdown files to HTML with highlighted code blocks."""
    settings = _settings(overrides={
        "output_dir": out, "standalone": standalone, "highlight_workers": workers,
        "light_theme": light, "dark_theme": dark,
    })
    if not Path(path).exists():
        _fail(f"Path not found: {path}")
    output_dir = Path(settings.output_dir)

    try:
        results = run_render(path, output_dir, settings)
    except RenderError as e:
        _fail("Render failed", e)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo("No .md/.mdx files found.")
        raise typer.Exit(1)

    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Rendered {len(results)} document(s) to {output_dir}/")


def css_cmd(
    light: Annotated[Optional[str], typer.Option("--light-theme", help="Pygments style for light mode")] = None,
    dark: Annotated[Optional[str], typer.Option("--dark-theme", help="Pygments style for dark mode")] = None,
    ):
    """Print the stylesheet that switches code blocks between light and dark renderings."""
    settings = _settings(overrides={"light_theme": light, "dark_theme": dark})
    try:
        css = theme_css(settings.light_theme, settings.dark_theme)
    except RenderError as e:
        _fail("Cannot build stylesheet", e)
    typer.echo(css, nl=False)


def themes_cmd():
    """List the Pygments styles that can be used as light or dark themes."""
    settings = _settings()
    for name in available_themes():
        marker = ""
        if name == settings.light_theme:
            marker = "  (light)"
        elif name == settings.dark_theme:
            marker = "  (dark)"
        typer.echo(f"{name}{marker}")

"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdview.cli.commands import css_cmd, render_cmd, themes_cmd


app = typer.Typer(name="mdview", no_args_is_help=True, help="Render markdown to HTML with dual-theme code highlighting")

app.command(name="render")(render_cmd)
app.command(name="css")(css_cmd)
app.command(name="themes")(themes_cmd)

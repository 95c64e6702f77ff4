"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdarticles.cli.commands import build_cmd, categories_cmd, list_cmd, show_cmd


app = typer.Typer(name="mdarticles", no_args_is_help=True, help="Static article corpus: load, list, and render")

app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="categories")(categories_cmd)

"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdvet.cli.commands import check_cmd, extract_cmd, languages_cmd, show_cmd


app = typer.Typer(name="mdvet", no_args_is_help=True, help="Load tutorial pages and check their code samples")

app.command(name="check")(check_cmd)
app.command(name="extract")(extract_cmd)
app.command(name="show")(show_cmd)
app.command(name="languages")(languages_cmd)

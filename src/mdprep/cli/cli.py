"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdprep.cli.commands import (
    commit_cmd, init_cmd, precompute_cmd, refresh_cmd, strip_esm_cmd, verify_cmd,
)


app = typer.Typer(name="mdprep", no_args_is_help=True, help="MDX artifact precompute and render sanitizing")

app.command(name="init")(init_cmd)
app.command(name="precompute")(precompute_cmd)
app.command(name="strip-esm")(strip_esm_cmd)
app.command(name="commit")(commit_cmd)
app.command(name="verify")(verify_cmd)
app.command(name="refresh")(refresh_cmd)

# src/ephemeral_exporter/cli/main.py
"""
Entry point for the exporter CLI. The only subcommand is `serve`.
"""

from typing import Optional

import typer
from typing_extensions import Annotated

from .. import __version__
from . import serve

app = typer.Typer(
    name="ephemeral-storage-exporter",
    help="Export per-pod ephemeral storage usage of a Kubernetes node as Prometheus metrics.",
    add_completion=False,
)


def _print_version(value: bool):
    if value:
        typer.echo(f"ephemeral-storage-exporter version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_print_version, is_eager=True, help="Show the version and exit."),
    ] = None,
):
    """
    Exporter CLI main entry point.
    """


app.add_typer(serve.app, name="serve")


if __name__ == "__main__":
    app()

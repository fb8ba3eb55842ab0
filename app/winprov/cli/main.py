"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from winprov import __version__
from winprov.cli.commands import dotfiles, history, init, install, link, provision, purge
from winprov.core.logsetup import configure_logging
from winprov.utils.formatting import print_error

app = typer.Typer(
    name="winprov",
    help="Declarative provisioning for Windows workstations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"winprov version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show progress logging."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log errors."),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write a detailed log to this file."),
    ] = None,
    manifest: Annotated[
        Path | None,
        typer.Option("--manifest", "-m", help="Manifest to use instead of the default."),
    ] = None,
) -> None:
    """winprov - Declarative provisioning for Windows workstations.

    Describe packages, dotfiles links and cleanup patterns in a
    manifest and converge the machine to it.
    """
    try:
        configure_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["manifest"] = manifest


app.add_typer(init.app, name="init")
app.add_typer(install.app, name="install")
app.add_typer(dotfiles.app, name="dotfiles")
app.add_typer(link.app, name="link")
app.add_typer(purge.app, name="purge")
app.add_typer(provision.app, name="provision")
app.add_typer(history.app, name="history")


if __name__ == "__main__":
    app()

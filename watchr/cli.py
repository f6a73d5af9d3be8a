import logging
from typing import Optional

import typer

from . import __version__
from .config import resolve_config
from .errors import ConfigError, WatchError
from .interrupt import catch_interrupt, terminate
from .supervisor import run_all


app = typer.Typer(add_completion=False, no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"watchr {__version__}")
        raise typer.Exit()


@app.command()
def main(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(
        None,
        "--file",
        help="Path to the file to watch for modifications, eg. foobar.go",
    ),
    cmd: Optional[str] = typer.Option(
        None,
        "--cmd",
        help="Command to execute when a modification is detected, eg. 'make build' (optional)",
    ),
    cfg: Optional[str] = typer.Option(
        None,
        "--cfg",
        help="Config file (.json, .yaml, .toml) listing several files and commands; not usable with the other flags",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", help="Suppress all output except fatal errors (not usable with --verbose)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Print command output and modification stats (not usable with --quiet)"
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        min=0.0,
        help="Seconds to wait between polls of each file (default 0.1)",
        envvar="WATCHR_INTERVAL",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Watch files for modifications and execute a command when one is detected.

    - Detection polls each file's modification time; every file gets its own thread.
    - A missing file or a failing command stops watchr with a non-zero status.
    - Ctrl+C exits immediately with status 0.
    """
    # Logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    catch_interrupt()

    try:
        config = resolve_config(cfg, file, cmd, quiet, verbose, interval)
    except ConfigError as e:
        typer.echo(f"Error: {e}\n", err=True)
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=1)

    try:
        run_all(config)
    except WatchError:
        # already reported by the supervisor; sibling tasks may still be
        # inside a command, so do not wait for them
        terminate(1)


if __name__ == "__main__":
    app()

"""
Main CLI entry point.
"""

from pathlib import Path

import typer

from sqlblob import __version__
from sqlblob.cli import decode, encode, inspect
from sqlblob.exceptions import ConfigurationError


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"sqlblob version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="sqlblob",
    help="sqlblob - Binary-safe tokens for single-quoted SQL literals",
    add_completion=False,
)

# Register commands
app.command("encode")(encode.encode)
app.command("decode")(decode.decode)
app.command("inspect")(inspect.inspect)


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_dir: Path | None = typer.Option(
        None, "--config-dir", "-c", help="Directory holding config.yaml", file_okay=False
    ),
    env: str | None = typer.Option(None, help="Environment overlay (config.{env}.yaml)"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"),
):
    """
    sqlblob - Binary-safe tokens for single-quoted SQL literals.

    Run 'sqlblob <command> --help' for help on a specific command.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    from sqlblob.config.loader import load_config
    from sqlblob.config.singleton import GlobalConfig
    from sqlblob.utils.logging import setup_logging_from_config

    settings: dict = {}
    if config_dir is not None:
        try:
            config_obj = load_config(config_dir, env=env)
        except ConfigurationError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e
        GlobalConfig.set_config(config_obj)
        settings = dict(config_obj.data)

    if log_level is not None:
        # Command-line level wins over the config file
        settings["logging"] = {**(settings.get("logging") or {}), "level": log_level}

    if settings.get("logging") is not None:
        setup_logging_from_config(settings, project_dir=config_dir)


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()

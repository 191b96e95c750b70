"""Main Typer application for the Prometheus CLI.

This module contains the main Typer app instance and registers all command
groups. It provides the entry point for the CLI and handles global options
like the configuration file, debug mode and output formatting.
"""

import functools
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from . import __version__
from .config import CONFIG_PATH_ENV, ConfigRepository, resolve_config_path
from .exceptions import PromCliError
from .render import OUTPUT_FORMATS, OutputFormatter
from .utils.exceptions import exit_code_for, format_error_for_user
from .utils.logging import setup_logging

app = typer.Typer(
    name="prom",
    help="Command-line tool for querying Prometheus servers",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)
output_formatter = OutputFormatter(console)

_commands_registered = False


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"prom {__version__}")
        raise typer.Exit()


def validate_output_callback(value: Optional[str]) -> Optional[str]:
    """Reject unknown output formats early."""
    if value is not None and value.lower() not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"must be one of: {', '.join(OUTPUT_FORMATS)}")
    return value.lower() if value else value


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar=CONFIG_PATH_ENV,
        help="Configuration file to use",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format (table, json, yaml)",
        callback=validate_output_callback,
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """prom - Command-line tool for querying Prometheus servers.

    Server connections are kept as named profiles; one of them is active
    and used by every command.

    Examples:
        # Add a profile (the first one becomes active)
        prom config add production https://prometheus.example.com

        # Switch profiles
        prom config use staging

        # Show the active profile
        prom config current
    """
    setup_logging(debug, err_console)

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["output_format"] = output_format
    ctx.obj["console"] = console
    ctx.obj["output_formatter"] = output_formatter
    ctx.obj["repository"] = ConfigRepository(resolve_config_path(config_path))

    if debug:
        err_console.print(f"[dim]Configuration file: {ctx.obj['repository'].config_path}[/dim]")


def handle_exceptions(func):
    """Decorator to handle common exceptions in commands."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        ctx = kwargs.get("ctx")
        debug = ctx.obj.get("debug", False) if ctx and ctx.obj else False
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort):
            raise
        except PromCliError as e:
            err_console.print(format_error_for_user(e, debug), style="red", highlight=False)
            raise typer.Exit(exit_code_for(e))
        except KeyboardInterrupt:
            err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(130)
        except Exception as e:
            if debug:
                err_console.print_exception(show_locals=True)
            else:
                err_console.print(f"[red]Unexpected error: {e}[/red]")
                err_console.print("[dim]Use --debug for more details[/dim]")
            raise typer.Exit(1)
    return wrapper


def register_commands() -> None:
    """Register all command groups with the main app."""
    global _commands_registered
    if _commands_registered:
        return

    from .cmds import config_app

    app.add_typer(config_app, name="config", help="Manage Prometheus server profiles")
    _commands_registered = True


def cli() -> None:
    """Entry point for the CLI."""
    register_commands()

    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli()

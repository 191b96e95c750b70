"""Configuration management commands for the Prometheus CLI.

This module provides commands for managing Prometheus server profiles:
adding, listing, switching, inspecting and removing them.
"""

from typing import Any, Dict, Optional

import typer
from rich.console import Console

from ..app import handle_exceptions
from ..client import check_server_health
from ..config import ConfigRepository
from ..exceptions import PromCliError
from ..models import Profile
from ..render import OUTPUT_FORMATS, OutputFormatter
from ..validators import normalize_server_url, validate_profile

app = typer.Typer()
console = Console()

AUTH_LABELS = {
    "none": "none",
    "basic": "basic auth",
    "bearer": "bearer token",
}


def mask_secret(value: Optional[str]) -> str:
    """Hide a secret for display."""
    if not value:
        return "(not set)"
    return "*" * 8


def describe_profile(name: str, profile: Profile, active: bool) -> Dict[str, Any]:
    """Build the display record for a profile without exposing secrets."""
    return {
        "name": name,
        "server_url": profile.server_url,
        "auth": AUTH_LABELS[profile.auth_type],
        "username": profile.username,
        "active": active,
    }


def resolve_output_format(ctx: typer.Context) -> str:
    """Resolve the output format from --output, the environment or the terminal."""
    formatter: OutputFormatter = ctx.obj["output_formatter"]
    format_name = formatter.determine_format(ctx.obj["output_format"])
    if format_name not in OUTPUT_FORMATS:
        raise PromCliError(
            f"Unknown output format: {format_name}. Choose one of: {', '.join(OUTPUT_FORMATS)}"
        )
    return format_name


@app.command()
@handle_exceptions
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name"),
    url: str = typer.Argument(..., help="Prometheus server URL"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Basic auth username"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Basic auth password"),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Bearer token"),
    validate: bool = typer.Option(False, "--validate", help="Check the server is reachable before saving"),
) -> None:
    """Add a new server profile.

    The first profile added becomes the active one.

    Examples:
        # Add a profile without authentication
        prom config add local http://localhost:9090

        # Add a profile with basic auth
        prom config add production https://prom.example.com -u admin -p secret

        # Add a profile with a bearer token and check the connection
        prom config add staging https://staging.example.com -t abc123 --validate
    """
    repository: ConfigRepository = ctx.obj["repository"]

    profile = Profile(server_url=url, username=username, password=password, token=token)

    if validate:
        candidate = profile.model_copy(update={"server_url": normalize_server_url(url)})
        validate_profile(name, candidate)
        console.print("[blue]Testing connection...[/blue]")
        check_server_health(candidate, timeout=10)
        console.print("[green]✓ Connection successful[/green]")

    store = repository.load()
    store = repository.add(store, name, profile)

    console.print(f"[green]Profile '{name}' added successfully.[/green]")
    if store.active_profile == name:
        console.print(f"Active profile: {name}")
    else:
        console.print(f"Run 'prom config use {name}' to switch to this profile.")


@app.command("list")
@handle_exceptions
def list_profiles(
    ctx: typer.Context,
) -> None:
    """List all server profiles.

    Examples:
        # List all profiles
        prom config list

        # List profiles in JSON format
        prom --output json config list
    """
    repository: ConfigRepository = ctx.obj["repository"]
    formatter: OutputFormatter = ctx.obj["output_formatter"]
    output_format = resolve_output_format(ctx)

    store = repository.load()
    names = repository.list_names(store)
    rows = [
        describe_profile(name, store.profiles[name], name == store.active_profile)
        for name in names
    ]

    if output_format != "table":
        formatter.render(
            {"active_profile": store.active_profile, "profiles": rows},
            format=output_format,
        )
        return

    if not names:
        console.print("[yellow]No profiles found.[/yellow]")
        console.print()
        console.print("Add your first profile:")
        console.print("  prom config add <name> <url>")
        return

    formatter.render(
        rows,
        format="table",
        columns=["active", "name", "server_url", "auth"],
        title="Server Profiles",
    )
    console.print(f"Active: {store.active_profile or 'none'}")
    console.print(f"Total: {len(names)} profile{'' if len(names) == 1 else 's'}")


@app.command("use")
@handle_exceptions
def use_profile(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name to activate"),
) -> None:
    """Switch the active profile.

    Examples:
        # Use the staging server
        prom config use staging
    """
    repository: ConfigRepository = ctx.obj["repository"]

    store = repository.load()
    store = repository.set_active(store, name)

    console.print(f"[green]Switched to profile '{name}'.[/green]")
    console.print(f"Server: {store.profiles[name].server_url}", highlight=False)


@app.command("current")
@handle_exceptions
def current_profile(
    ctx: typer.Context,
) -> None:
    """Show the active profile.

    Examples:
        # Show the active profile
        prom config current

        # Show it as YAML
        prom --output yaml config current
    """
    repository: ConfigRepository = ctx.obj["repository"]
    formatter: OutputFormatter = ctx.obj["output_formatter"]
    output_format = resolve_output_format(ctx)

    store = repository.load()
    profile = repository.get_active(store)

    if output_format != "table":
        data = describe_profile(store.active_profile, profile, True) if profile else None
        formatter.render({"active_profile": data}, format=output_format)
        return

    if profile is None:
        console.print("[yellow]No active profile.[/yellow]")
        console.print()
        if store.profiles:
            console.print("Switch to a profile:")
            console.print("  prom config use <name>")
        else:
            console.print("Add a profile:")
            console.print("  prom config add <name> <url>")
        return

    console.print(f"Current profile: [bold]{store.active_profile}[/bold]")
    console.print()
    console.print(f"Server URL: {profile.server_url}", highlight=False)
    if profile.auth_type == "bearer":
        console.print(f"Authentication: Bearer token ({mask_secret(profile.token)})")
    elif profile.auth_type == "basic":
        console.print(f"Authentication: Basic (username: {profile.username})")
    else:
        console.print("Authentication: None")


@app.command("remove")
@handle_exceptions
def remove_profile(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name to remove"),
    force: bool = typer.Option(False, "--force", "-f", help="Allow removing the active profile"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Remove a server profile.

    Examples:
        # Remove with confirmation
        prom config remove old-server

        # Remove the active profile without prompting
        prom config remove production --force --yes
    """
    repository: ConfigRepository = ctx.obj["repository"]

    store = repository.load()
    repository.get_profile(store, name)

    if store.active_profile == name and not force:
        console.print(f"[red]Error: Cannot remove active profile '{name}'.[/red]")
        console.print("Switch to another profile first, or use --force to remove anyway:")
        console.print(f"  prom config remove {name} --force")
        raise typer.Exit(1)

    if not yes:
        confirmed = typer.confirm(f"Are you sure you want to remove profile '{name}'?")
        if not confirmed:
            console.print("[yellow]Operation cancelled.[/yellow]")
            raise typer.Exit(1)

    store = repository.remove(store, name)
    console.print(f"[green]Profile '{name}' removed successfully.[/green]")

    if store.active_profile is None and store.profiles:
        console.print("No active profile set.")
        console.print("Run 'prom config use <name>' to activate a profile.")


@app.command("show")
@handle_exceptions
def show_config(
    ctx: typer.Context,
) -> None:
    """Show configuration file location and status.

    Examples:
        # Show config file info
        prom config show

        # Show in JSON format
        prom --output json config show
    """
    repository: ConfigRepository = ctx.obj["repository"]
    formatter: OutputFormatter = ctx.obj["output_formatter"]
    output_format = resolve_output_format(ctx)

    config_file = repository.config_path
    backup_file = repository.backup_path
    config_exists = config_file.exists()
    config_size = config_file.stat().st_size if config_exists else 0
    backup_exists = backup_file.exists()

    if output_format != "table":
        formatter.render({
            "config_file": str(config_file),
            "config_exists": config_exists,
            "config_size": config_size,
            "backup_file": str(backup_file) if backup_exists else None,
        }, format=output_format)
        return

    rows = [
        {"property": "Config File", "value": str(config_file)},
        {"property": "Exists", "value": "✓ Yes" if config_exists else "✗ No"},
    ]
    if config_exists:
        rows.append({"property": "Size", "value": f"{config_size} bytes"})
    rows.append({"property": "Backup", "value": str(backup_file) if backup_exists else "none"})

    formatter.render(rows, format="table", title="Configuration Status")


if __name__ == "__main__":
    app()

"""
CLI commands: ``frank config init``, ``frank config show`` and ``frank config path``.
"""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape

from frank.core.config import (
    FrankConfig,
    _config_file_path,
    load_config_or_default,
    save_config,
)
from frank.core.constants import ExitCode
from frank.core.exceptions import ConfigError

console = Console()
err_console = Console(stderr=True)


@click.group("config")
def config_group() -> None:
    """Write and inspect the configuration file."""


@config_group.command("path")
def config_path() -> None:
    """Print where the configuration file is read from."""
    click.echo(str(_config_file_path()))


@config_group.command("init")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
@click.option("--db-path", default="", help="Where to keep paused progress.")
@click.option("--rules-path", default="", help="Rules file to load on startup.")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
def config_init(force: bool, db_path: str, rules_path: str, log_format: str) -> None:
    """Write a config file with the default settings."""
    cfg_path = _config_file_path()
    if cfg_path.exists() and not force:
        err_console.print(f"Config already exists: [cyan]{cfg_path}[/cyan]")
        err_console.print("Pass [bold]--force[/bold] to overwrite it.")
        raise SystemExit(ExitCode.ERROR)

    data = FrankConfig().model_dump()
    data["logging"]["format"] = log_format
    data["store"]["path"] = db_path
    data["rules"]["path"] = rules_path

    try:
        cfg_path = save_config(data, cfg_path)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {escape(str(exc))}")
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc
    console.print(f"[green]Config saved:[/green] {cfg_path}")


@config_group.command("show")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON")
def config_show(as_json: bool) -> None:
    """Show the settings in effect (file plus FRANK_* environment overrides)."""
    try:
        config = load_config_or_default()
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {escape(str(exc))}")
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc

    data = config.model_dump()
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    source = _config_file_path()
    exists = "" if source.exists() else "  [dim](not written yet, defaults shown)[/dim]"
    console.print(f"[bold]Config[/bold]  {source}{exists}")
    console.print(f"  Log level:       {config.logging.level}")
    console.print(f"  Log format:      {config.logging.format}")
    console.print(f"  Database:        {config.db_path}")
    console.print(f"  Rules file:      {config.rules_path or 'built-in'}")
    console.print(f"  Save on pause:   {config.conversation.save_on_pause}")
    console.print(f"  Show checklists: {config.conversation.show_checklists}")

"""
CLI commands: ``frank rules show`` and ``frank rules check``.
"""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from frank.core.config import FrankConfig, load_config_or_default
from frank.core.constants import ExitCode
from frank.core.exceptions import ConfigError, RulesError
from frank.core.rules import RuleConfig, load_rules, parse_rules_file

console = Console()
err_console = Console(stderr=True)


def load_runtime() -> tuple[FrankConfig, RuleConfig]:
    """Config plus the rule set it points at.  Exits on a broken config file."""
    try:
        config = load_config_or_default()
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc
    return config, load_rules(config.rules_path)


def _section_counts(rules: RuleConfig) -> list[tuple[str, str, int]]:
    rows: list[tuple[str, str, int]] = []
    data = rules.model_dump()
    for section, fields in data.items():
        if not isinstance(fields, dict):
            continue
        for name, value in fields.items():
            if isinstance(value, list):
                rows.append((section, name, len(value)))
    return rows


@click.group("rules")
def rules_group() -> None:
    """Inspect and validate rule vocabulary files."""


@rules_group.command("show")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output the full rule set.")
def rules_show(as_json: bool) -> None:
    """Show the active rule set (built-in defaults plus any configured rules file)."""
    config, rules = load_runtime()

    if as_json:
        click.echo(rules.model_dump_json(indent=2))
        return

    source = str(config.rules_path) if config.rules_path else "built-in"
    console.print(f"[bold]Rules[/bold] {rules.name!r}  [dim]({source})[/dim]")
    console.print(f"Version: {rules.rules_version}   Hash: [cyan]{rules.content_hash()}[/cyan]\n")

    table = Table(show_lines=False)
    table.add_column("Section", style="bold")
    table.add_column("List")
    table.add_column("Entries", justify="right", style="cyan")
    for section, name, count in _section_counts(rules):
        table.add_row(section, name, str(count))
    console.print(table)


@rules_group.command("check")
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False))
def rules_check(rules_file: str) -> None:
    """
    Validate a rules YAML file.

    Exits 0 if valid, 2 if invalid.
    """
    try:
        rules = parse_rules_file(rules_file)
    except RulesError as exc:
        click.echo(str(exc), err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc

    categories = [c.name for c in rules.content_policy.categories]
    click.echo(
        f"✓  Rules {rules.name!r} are valid "
        f"(version={rules.rules_version}, "
        f"categories={json.dumps(categories)}, "
        f"hash={rules.content_hash()})"
    )

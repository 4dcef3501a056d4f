"""frank saved — list, inspect and delete paused progress."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from frank.core.config import FrankConfig
from frank.core.constants import ExitCode
from frank.core.exceptions import StoreError
from frank.core.store.progress import ProgressStore

console = Console()
err_console = Console(stderr=True)


def open_store(config: FrankConfig) -> ProgressStore:
    """Connect to the configured progress database.  Exits on failure."""
    store = ProgressStore(config.db_path)
    try:
        store.connect()
    except StoreError as exc:
        err_console.print(f"[red]Store error:[/red] {exc}")
        raise SystemExit(ExitCode.STORE_ERROR) from exc
    return store


def _open_existing() -> ProgressStore | None:
    """Open the progress database if it exists, or return None."""
    from frank.cli._rules import load_runtime

    config, _ = load_runtime()
    if not config.db_path.exists():
        return None
    return open_store(config)


@click.group("saved", invoke_without_command=True)
@click.pass_context
def saved_group(ctx: click.Context) -> None:
    """Paused tasks you can come back to."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(saved_list)


@saved_group.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON")
@click.option("--limit", default=50, show_default=True, help="Max rows to show")
def saved_list(as_json: bool = False, limit: int = 50) -> None:
    """List paused tasks, most recent first."""
    store = _open_existing()
    if store is None:
        if as_json:
            click.echo("[]")
        else:
            console.print("  [dim]Nothing saved yet.[/dim]")
        return

    try:
        rows = store.list(limit=limit)
    finally:
        store.close()

    if as_json:
        click.echo(json.dumps([r.model_dump() for r in rows], indent=2))
        return

    if not rows:
        console.print("  [dim]Nothing saved yet.[/dim]")
        return

    table = Table(title="Saved progress", show_lines=False)
    table.add_column("ID", style="cyan", justify="right", no_wrap=True)
    table.add_column("Task", style="bold")
    table.add_column("Type")
    table.add_column("Step", justify="right")
    table.add_column("Saved", style="dim")
    for row in rows:
        task = escape(row.original_input)
        if len(task) > 48:
            task = task[:45] + "..."
        table.add_row(
            str(row.id),
            task,
            row.task_type or "-",
            str(row.current_step_index + 1),
            (row.saved_at or "")[:19],
        )
    console.print(table)


@saved_group.command("show")
@click.argument("progress_id", type=int)
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON")
def saved_show(progress_id: int, as_json: bool = False) -> None:
    """Show one paused task."""
    store = _open_existing()
    snapshot = None
    if store is not None:
        try:
            snapshot = store.get(progress_id)
        finally:
            store.close()
    if snapshot is None:
        err_console.print(f"[red]No saved progress with id {progress_id}[/red]")
        raise SystemExit(ExitCode.ERROR)

    if as_json:
        click.echo(snapshot.model_dump_json(indent=2))
        return

    console.print(f"[bold]Task:[/bold]  {escape(snapshot.original_input)}")
    console.print(f"Type:  {snapshot.task_type or '-'}")
    console.print(f"Step:  {snapshot.current_step_index + 1}")
    console.print(f"Saved: {snapshot.saved_at}")
    if snapshot.answers:
        console.print("\n[bold]Answers so far[/bold]")
        for n, answer in enumerate(snapshot.answers, start=1):
            console.print(f"  {n}. {escape(answer) if answer else '[dim](skipped)[/dim]'}")
    console.print(f"\nResume with [cyan]frank chat --resume {snapshot.id}[/cyan]")


@saved_group.command("delete")
@click.argument("progress_id", type=int)
def saved_delete(progress_id: int) -> None:
    """Delete one paused task."""
    store = _open_existing()
    deleted = False
    if store is not None:
        try:
            deleted = store.delete(progress_id)
        finally:
            store.close()
    if not deleted:
        err_console.print(f"[red]No saved progress with id {progress_id}[/red]")
        raise SystemExit(ExitCode.ERROR)
    console.print(f"[green]Deleted[/green] saved progress {progress_id}.")

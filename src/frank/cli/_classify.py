"""
CLI commands: ``frank classify`` and ``frank breakdown``.

Both run one piece of the engine in isolation so a rule change can be
checked without a full conversation.
"""

from __future__ import annotations

import json

import click
from rich.console import Console

from frank.cli._render import render_breakdown
from frank.cli._rules import load_runtime
from frank.core.constants import ExitCode
from frank.core.dialogue.classifier import InputClassifier
from frank.core.dialogue.models import Mode
from frank.core.planner.breakdown import TaskBreakdownPlanner
from frank.core.planner.models import TaskType

console = Console()
err_console = Console(stderr=True)

_MODES = [str(m) for m in Mode]
_TASK_TYPES = [str(t) for t in TaskType]


@click.command("classify")
@click.argument("text")
@click.option(
    "--prior-mode",
    type=click.Choice(_MODES),
    default=None,
    help="Mode the conversation was in before this turn.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON")
def classify_cmd(text: str, prior_mode: str | None, as_json: bool) -> None:
    """
    Show the signal, certainty and matching rule for TEXT.

    \b
    Examples:
      frank classify "I can't think at all"
      frank classify "the reading is confusing" --prior-mode clarifying
    """
    _require_text(text)
    _, rules = load_runtime()
    classifier = InputClassifier(rules)
    signal = classifier.classify(text, Mode(prior_mode) if prior_mode else None)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "signal": str(signal.type),
                    "certainty": str(signal.certainty_level),
                    "loss_of_function": signal.has_loss_of_function,
                    "rule": signal.rule,
                },
                indent=2,
            )
        )
        return

    console.print(f"Signal:    [bold]{signal.type}[/bold]")
    console.print(f"Certainty: {signal.certainty_level}")
    if signal.has_loss_of_function:
        console.print("Loss of function: [red]yes[/red]")
    console.print(f"Rule:      [cyan]{signal.rule}[/cyan]")


@click.command("breakdown")
@click.argument("text")
@click.option(
    "--type",
    "task_type",
    type=click.Choice(_TASK_TYPES),
    default=None,
    help="Use this task type instead of classifying TEXT.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON")
def breakdown_cmd(text: str, task_type: str | None, as_json: bool) -> None:
    """Show the guided steps Frank would use for TEXT."""
    _require_text(text)
    _, rules = load_runtime()
    planner = TaskBreakdownPlanner(rules)
    breakdown = planner.generate(text, TaskType(task_type) if task_type else None)

    if as_json:
        click.echo(json.dumps(breakdown.to_dict(), indent=2))
        return

    render_breakdown(console, breakdown)


def _require_text(text: str) -> None:
    if not text.strip():
        err_console.print("[red]Error:[/red] TEXT is empty.")
        raise SystemExit(ExitCode.INPUT_ERROR)

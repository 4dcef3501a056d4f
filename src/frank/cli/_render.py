"""Terminal rendering for Responses and task breakdowns."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from frank.core.dialogue.models import Mode, Response, StepPayload
from frank.core.planner.models import TaskBreakdown

_MODE_STYLE = {
    Mode.LISTENING: "cyan",
    Mode.CLARIFYING: "magenta",
    Mode.OFFERING_DIRECTION: "green",
    Mode.CALMING: "blue",
    Mode.STEPPING: "yellow",
}


def render_step(
    console: Console,
    step: StepPayload,
    *,
    checklist_progress: dict[str, bool] | None = None,
    show_checklist: bool = True,
) -> None:
    if step.lead_in:
        console.print(escape(step.lead_in))
    body = Text(step.description)
    if show_checklist and step.checklist:
        ticks = checklist_progress or {}
        for i, item in enumerate(step.checklist):
            mark = "x" if ticks.get(f"{step.step_index}:{i}") else " "
            body.append(f"\n  [{mark}] {item}")
    title = f"Step {step.step_index + 1} of {step.total_steps}: {step.title}"
    console.print(Panel(body, title=title, title_align="left", border_style="yellow"))


def render_response(
    console: Console,
    response: Response,
    *,
    checklist_progress: dict[str, bool] | None = None,
    show_checklist: bool = True,
) -> None:
    """Print one Response: message, optional question, numbered actions."""
    style = _MODE_STYLE.get(response.mode, "")
    console.print(f"[dim]({response.mode})[/dim]", style=style)

    if isinstance(response.message, StepPayload):
        render_step(
            console,
            response.message,
            checklist_progress=checklist_progress,
            show_checklist=show_checklist,
        )
    elif response.message:
        console.print(f"[bold {style}]{escape(response.message)}[/bold {style}]")

    if response.question:
        console.print(escape(response.question))

    for n, action in enumerate(response.actions, start=1):
        console.print(f"  [cyan]{n}[/cyan]  {escape(action.label)}")


def render_breakdown(console: Console, breakdown: TaskBreakdown) -> None:
    console.print(f"[bold]{breakdown.persona_message}[/bold]\n")
    console.print(f"[bold]{breakdown.how_to_start.title}[/bold]")
    console.print(f"{breakdown.how_to_start.content}\n")

    table = Table(title=f"{breakdown.type} ({len(breakdown)} steps)", show_lines=True)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Step", style="bold")
    table.add_column("What to do")
    table.add_column("Input", justify="center")

    for i, step in enumerate(breakdown.steps, start=1):
        detail = step.description
        if step.checklist:
            detail += "\n" + "\n".join(f"• {item}" for item in step.checklist)
        if step.analogy:
            detail += f"\n[dim]{step.analogy}[/dim]"
        table.add_row(str(i), step.title, detail, "yes" if step.needs_input else "")

    console.print(table)

"""frank chat — talk through a task in the terminal."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from frank.cli._render import render_response
from frank.cli._rules import load_runtime
from frank.cli._saved import open_store
from frank.core.constants import ExitCode
from frank.core.dialogue.models import Response
from frank.core.exceptions import EmptyInputError, FrankError, SessionError
from frank.core.session.conversation import ConversationSession
from frank.core.store.progress import ProgressStore

console = Console()

_HELP = (
    "[dim]Type to talk, or a number to pick an option.  "
    "Commands: /tick N, /pause, /new, /help, /quit[/dim]"
)


@click.command("chat")
@click.option("--task", default=None, help="Open the conversation with this text.")
@click.option(
    "--resume",
    "resume_id",
    type=int,
    default=None,
    help="Pick up a paused task (see 'frank saved list').",
)
def chat_cmd(task: str | None, resume_id: int | None) -> None:
    """Start a conversation.

    \b
    Examples:
      frank chat
      frank chat --task "I have to write an essay on Macbeth"
      frank chat --resume 3
    """
    config, rules = load_runtime()
    store = open_store(config)
    show_checklists = config.conversation.show_checklists
    session = ConversationSession(
        rules,
        store=store,
        save_on_pause=config.conversation.save_on_pause,
    )

    try:
        console.print("[bold]Frank[/bold]  " + _HELP)

        if resume_id is not None:
            snapshot = store.get(resume_id)
            if snapshot is None:
                console.print(f"[red]No saved progress with id {resume_id}[/red]")
                raise SystemExit(ExitCode.ERROR)
            _show(session, session.resume(snapshot), show_checklists)

        if task:
            _show(session, session.submit(task), show_checklists)

        _loop(session, store, show_checklists)
    except FrankError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(ExitCode.ERROR) from exc
    finally:
        store.close()


def _loop(session: ConversationSession, store: ProgressStore, show_checklists: bool) -> None:
    while True:
        try:
            line = click.prompt(_prompt_label(session), default="", show_default=False)
        except click.Abort:
            console.print()
            return

        text = line.strip()
        if not text:
            continue

        match text.split(maxsplit=1):
            case ["/quit" | "/exit"]:
                return
            case ["/help"]:
                console.print(_HELP)
                continue
            case ["/new"]:
                session.reset()
                console.print("[dim]Starting fresh.[/dim]")
                continue
            case ["/pause"]:
                session.pause()
                _say_paused(session, store)
                return
            case ["/tick", arg] if arg.isdigit():
                session.tick(int(arg) - 1)
                console.print(f"[green]Ticked[/green] item {arg}.")
                continue

        try:
            response = _dispatch(session, text)
        except EmptyInputError:
            continue
        except SessionError as exc:
            console.print(f"[yellow]{escape(str(exc))}[/yellow]")
            continue

        _show(session, response, show_checklists)
        if session.is_paused:
            _say_paused(session, store)
            return


def _dispatch(session: ConversationSession, text: str) -> Response:
    """A bare number picks that action from the last response."""
    last = session.last_response
    if last is not None and text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(last.actions):
            return session.select_action(last.actions[index].action_id)
    return session.submit(text)


def _prompt_label(session: ConversationSession) -> str:
    if session.awaiting_step_input:
        last = session.last_response
        step = last.message if last is not None else None
        prompt = getattr(step, "input_prompt", None)
        return prompt or "When you're done, tell me how it went"
    return "You"


def _show(session: ConversationSession, response: Response, show_checklists: bool) -> None:
    render_response(
        console,
        response,
        checklist_progress=session.progress.checklist_progress,
        show_checklist=show_checklists,
    )


def _say_paused(session: ConversationSession, store: ProgressStore) -> None:
    task = session.progress.task_input
    saved = store.find_by_input(task) if task else None
    if saved is not None:
        console.print(
            f"[dim]Saved. Pick it up later with[/dim] [cyan]frank chat --resume {saved.id}[/cyan]"
        )
    else:
        console.print("[dim]Paused.[/dim]")

"""
Stepwise CLI - run quizzes and workouts from the terminal.

Usage:
    stepwise catalog                  # List available sessions
    stepwise run sports-nutrition     # Take a quiz
    stepwise run animal-adventure     # Do a workout
    stepwise history                  # Past results, most recent first
    stepwise stats                    # Best scores, streak, points and level
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from config import get_settings
from src.stepwise import (
    CompletionRecord,
    Exercise,
    ItemKind,
    Question,
    SessionKind,
    SessionResult,
    SessionService,
    SessionStatus,
    StepwiseError,
    get_handler,
)
from src.stepwise.clock import MonotonicTicker

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="stepwise",
    help="Stepwise - timed quizzes and workouts in your terminal",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def get_service() -> SessionService:
    """Build the session service from settings."""
    return SessionService.from_settings(get_settings())


def format_time(seconds: float) -> str:
    """Render seconds as mm:ss."""
    total = int(seconds)
    return f"{total // 60}:{total % 60:02d}"


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]✗ {error}[/]")
    raise typer.Exit(code=1)


# =============================================================================
# Catalog & History Commands
# =============================================================================


@app.command()
def catalog(
    kind: Annotated[
        SessionKind | None, typer.Option("--kind", "-k", help="Only assessments or workouts")
    ] = None,
) -> None:
    """List available quizzes and workouts."""
    service = get_service()
    aggregates = service.aggregates()

    table = Table(title="Sessions", box=box.SIMPLE_HEAVY)
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Kind")
    table.add_column("Items", justify="right")
    table.add_column("Pass", justify="right")
    table.add_column("Best", justify="right", style="green")
    table.add_column("Done", justify="center")

    for definition in service.catalog.list_sessions(kind):
        best = aggregates.best_score(definition.id)
        table.add_row(
            definition.id,
            definition.title,
            definition.kind.value,
            str(definition.item_count),
            f"{definition.pass_threshold}%" if definition.pass_threshold is not None else "-",
            str(best) if best is not None else "-",
            "✓" if definition.id in aggregates.completed else "",
        )
    console.print(table)


@app.command()
def history(
    session_id: Annotated[str | None, typer.Argument(help="Only this session")] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Records to show")] = 20,
) -> None:
    """Show completed sessions, most recent first."""
    service = get_service()
    records = service.history(session_id)[:limit]
    if not records:
        console.print("[yellow]No completed sessions yet.[/]")
        return

    table = Table(title="History", box=box.SIMPLE_HEAVY)
    table.add_column("Date", style="dim")
    table.add_column("Session", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Result")
    table.add_column("Time", justify="right")
    table.add_column("Points", justify="right", style="green")

    for record in records:
        table.add_row(
            record.completed_at.strftime("%Y-%m-%d %H:%M"),
            record.title or record.session_id,
            _score_label(record),
            _result_label(record),
            format_time(record.time_spent_seconds),
            f"+{record.points}",
        )
    console.print(table)


@app.command()
def stats() -> None:
    """Show best scores, streak, points and level."""
    service = get_service()
    aggregates = service.aggregates()

    table = Table(title="Progress", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Completed sessions", str(len(aggregates.completed)))
    table.add_row("Quizzes passed", str(len(aggregates.passed)))
    table.add_row(
        "Average quiz score",
        f"{aggregates.average_score}%" if aggregates.average_score is not None else "-",
    )
    table.add_row("Streak", f"{aggregates.streak} day(s)")
    table.add_row("Total points", str(aggregates.total_points))
    table.add_row("Level", f"{aggregates.level} ({aggregates.level_progress:.0%} to next)")
    console.print(table)


@app.command("clear-history")
def clear_history(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
) -> None:
    """Delete all stored results."""
    service = get_service()
    if not yes and not Confirm.ask("Delete all stored results?", default=False):
        return
    removed = service.repository.clear()
    console.print(f"[green]Removed {removed} record(s).[/]")


def _score_label(record: CompletionRecord) -> str:
    if record.session_kind == SessionKind.ASSESSMENT:
        return f"{record.score}%"
    return str(record.score)


def _result_label(record: CompletionRecord) -> str:
    if record.passed is None:
        return f"quality {record.quality_score}"
    return "[green]passed[/]" if record.passed else "[red]failed[/]"


# =============================================================================
# Run Command
# =============================================================================


@app.command()
def run(
    session_id: Annotated[str, typer.Argument(help="Session to run (see 'stepwise catalog')")],
) -> None:
    """
    Run a quiz or workout interactively.

    Answers: option numbers (e.g. 3), comma lists for multi-select
    (e.g. 1,2,4 or '-' for none), t/f for true/false, enter to finish
    an exercise. 'p' pauses or resumes, 'q' abandons.
    """
    service = get_service()
    try:
        service.start_session(session_id)
    except StepwiseError as e:
        _fail(e)

    definition = service.definition
    console.print(
        Panel(
            f"[bold]{definition.title}[/]\n{definition.description}",
            title=definition.kind.value.upper(),
            border_style="cyan",
            box=box.HEAVY,
        )
    )

    controller = service.controller
    while not controller.status.is_terminal:
        _poll(service)
        if controller.status == SessionStatus.PAUSED:
            choice = Prompt.ask("[yellow]Paused[/] - [r]esume or [q]uit", default="r")
            if choice.strip().lower() == "q":
                service.abandon()
            else:
                service.resume()
            continue
        try:
            _step(service)
        except StepwiseError as e:
            console.print(f"[red]{e}[/]")

    if controller.status == SessionStatus.ABANDONED:
        console.print("[yellow]Session abandoned. Nothing was recorded.[/]")
        return
    _show_result(service, service.last_result)


def _poll(service: SessionService) -> None:
    ticker = service.controller.ticker
    if isinstance(ticker, MonotonicTicker):
        ticker.poll()


def _step(service: SessionService) -> None:
    """Present the current item and act on one line of input."""
    progress = service.progress()
    item = service.controller.current_item
    header = f"[{progress.current_index + 1}/{progress.item_count}] {format_time(progress.elapsed_seconds)}"

    if isinstance(item, Exercise):
        console.print(
            Panel(
                f"{item.instructions}\n[dim]{item.duration_seconds}s • {item.points} pts[/]",
                title=f"{header} {item.name}",
                border_style="magenta",
            )
        )
        raw = Prompt.ask("Enter when done ([p]ause, [q]uit)", default="")
    else:
        _present_question(item, header)
        raw = Prompt.ask(_prompt_for(item))

    raw = raw.strip().lower()
    _poll(service)
    if raw == "p":
        service.pause()
        return
    if raw == "q":
        service.abandon()
        return

    if isinstance(item, Question):
        response = _parse_answer(item, raw)
        if response is None:
            console.print("[yellow]Could not read that answer, try again.[/]")
            return
        service.submit_response(item.id, response)
    service.advance()


def _present_question(item: Question, header: str) -> None:
    table = Table(box=box.MINIMAL, show_header=False)
    table.add_column("Index", style="cyan", justify="right", width=4)
    table.add_column("Option", style="white")
    if item.kind == ItemKind.TRUE_FALSE:
        table.add_row("[t]", "True")
        table.add_row("[f]", "False")
    else:
        for i, option in enumerate(item.options):
            table.add_row(f"[{i + 1}]", option)
    title = {
        ItemKind.SINGLE_CHOICE: "MULTIPLE CHOICE",
        ItemKind.MULTI_SELECT: "SELECT ALL THAT APPLY",
        ItemKind.TRUE_FALSE: "TRUE OR FALSE",
    }[item.kind]
    console.print(Panel(item.prompt, title=f"{header} {title}", border_style="cyan"))
    console.print(table)


def _prompt_for(item: Question) -> str:
    if item.kind == ItemKind.TRUE_FALSE:
        return "[T/F]"
    if item.kind == ItemKind.MULTI_SELECT:
        return f"Choices 1-{len(item.options)}, comma separated"
    return f"[1-{len(item.options)}]"


def _parse_answer(item: Question, raw: str):
    """Turn one line of input into a response. None when unreadable."""
    if item.kind == ItemKind.TRUE_FALSE:
        if raw in ("t", "true"):
            return True
        if raw in ("f", "false"):
            return False
        return None
    if item.kind == ItemKind.MULTI_SELECT:
        if raw == "-":
            return frozenset()
        parts = raw.replace(",", " ").split()
        if not parts or not all(p.isdigit() for p in parts):
            return None
        return frozenset(int(p) - 1 for p in parts)
    if not raw.isdigit():
        return None
    return int(raw) - 1


def _show_result(service: SessionService, result: SessionResult | None) -> None:
    if result is None:
        return
    record = result.record
    aggregates = result.aggregates
    definition = service.definition

    lines = []
    if record.session_kind == SessionKind.ASSESSMENT:
        verdict = "[bold green]PASSED[/]" if record.passed else "[bold red]NOT PASSED[/]"
        lines.append(f"Score: [bold]{record.score}%[/] {verdict} (pass mark {definition.pass_threshold}%)")
        lines.append(f"{record.correct_count}/{record.total_items} correct answers")
    else:
        lines.append(f"Points earned: [bold]{record.points}[/]")
        lines.append(f"Quality: {record.quality_score} [dim](time-based placeholder)[/]")
        if definition.calories:
            lines.append(f"Calories: ~{definition.calories}")
    if record.time_expired:
        lines.append("[yellow]Time ran out[/]")
    lines.append(f"Time: {format_time(record.time_spent_seconds)}")
    lines.append(f"Best: {aggregates.best_score(record.session_id)} • Streak: {aggregates.streak} day(s)")
    lines.append(f"Level {aggregates.level} • {aggregates.total_points} total points")

    console.print(Panel("\n".join(lines), title="RESULT", border_style="green", box=box.HEAVY))

    for outcome, item in zip(record.items, definition.items):
        if isinstance(item, Question) and not outcome.correct:
            handler = get_handler(item.kind)
            console.print(
                f"[red]✗[/] {item.prompt}\n"
                f"  you: {handler.format_response(item, outcome.response)} • "
                f"answer: {handler.format_response(item, item.correct)}\n"
                f"  [dim]{item.explanation}[/]"
            )

    if service.pending:
        console.print(f"[yellow]⚠ {len(service.pending)} result(s) could not be saved yet.[/]")


# =============================================================================
# Entry Point
# =============================================================================


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Verbose output")
    ] = False,
) -> None:
    """
    Stepwise - timed quizzes and workouts in your terminal.

    \b
    Quick Start:
      stepwise catalog                  # What can I do?
      stepwise run sports-nutrition     # Take a quiz
      stepwise stats                    # How am I doing?
    """
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB")


def run_cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()

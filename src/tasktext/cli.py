"""CLI for parsing and converting markdown task lines."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import settings
from .models.enums import MainDialect
from .models.task import TaskRecord
from .services.dialect import detect_field_format
from .services.inline_fields import item_from_text
from .services.markdown_index import scan_task_lines
from .services.parser import text_to_task
from .services.serializer import convert_task

app = typer.Typer(help="Parse and convert markdown task lines")
console = Console()

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def _read_note(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _show_task(task: TaskRecord) -> None:
    table = Table(title=task.id or "Task", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("title", task.title)
    table.add_row("status", repr(task.status))
    for name in ("scheduled", "due", "start", "created", "completion", "reminder", "repeat"):
        value = getattr(task, name)
        if value:
            table.add_row(name, value)
    if task.length:
        table.add_row("length", f"{task.length.hour}h {task.length.minute}m")
    table.add_row("priority", task.priority.key)
    if task.tags:
        table.add_row("tags", " ".join(task.tags))
    for key, value in sorted(task.extra_fields.items()):
        table.add_row(f"[dim]{key}[/dim]", value)
    console.print(table)


@app.command()
def parse(
    line: str = typer.Argument(..., help="Task text, e.g. '- [ ] Buy milk 2024-03-01 14:00 !!'"),
    path: str = typer.Option("", "--path", "-p", help="Path of the note the task lives in"),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON"),
):
    """Parse one task line into a structured record."""
    task = text_to_task(item_from_text(line, path=path))
    if as_json:
        console.print_json(task.model_dump_json(exclude_none=True))
    else:
        _show_task(task)


@app.command()
def detect(
    line: str = typer.Argument(..., help="Task text"),
    default: MainDialect = typer.Option(
        settings.default_dialect, "--default", "-d", help="Dialect used when no markers are found"
    ),
):
    """Show which dialects a task line uses."""
    field_format = detect_field_format(line, default)
    console.print(
        f"main: [bold]{field_format.main.value}[/bold]  "
        f"reminder: [bold]{field_format.reminder.value}[/bold]"
    )


@app.command()
def scan(
    note: Path = typer.Argument(..., help="Markdown note to scan"),
    show_completed: bool = typer.Option(False, "--completed", help="Include completed tasks"),
):
    """List the tasks of a note."""
    content = _read_note(note)
    task_lines = scan_task_lines(content, path=str(note))

    table = Table(title=f"Tasks in {note.name}")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Scheduled", style="green")
    table.add_column("Length", justify="right")
    table.add_column("Due", style="yellow")
    table.add_column("Priority")
    table.add_column("Format", style="dim")

    shown = 0
    for task_line in task_lines:
        task = text_to_task(task_line.item)
        if task.completed and not show_completed:
            continue
        length = f"{task.length.hour}:{task.length.minute:02d}" if task.length else ""
        table.add_row(
            str(task_line.line + 1),
            task.title,
            task.scheduled or "",
            length,
            task.due or "",
            task.priority.key,
            detect_field_format(task.original_text, settings.default_dialect).main.value,
        )
        shown += 1

    console.print(table)
    console.print(f"{shown} of {len(task_lines)} tasks")


@app.command()
def convert(
    note: Path = typer.Argument(..., help="Markdown note to convert"),
    dialect: MainDialect = typer.Option(..., "--dialect", "-d", help="Dialect to write tasks in"),
):
    """Print a note with every task line rewritten in another dialect.

    The note itself is left untouched.
    """
    content = _read_note(note)
    lines = content.split("\n")

    task_lines = scan_task_lines(content, path=str(note))
    for task_line in task_lines:
        task = text_to_task(task_line.item)
        lines[task_line.line] = task_line.indent + convert_task(task, dialect)

    logger.info(f"Converted {len(task_lines)} tasks to {dialect.value}")
    typer.echo("\n".join(lines))


if __name__ == "__main__":
    app()

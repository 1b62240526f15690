"""Turn a task record back into a line of text in its original dialect."""

import logging
from datetime import datetime
from typing import Callable

from ..models.enums import (
    KEY_TO_TASKS_EMOJI,
    PRIORITY_NUMBER_TO_SIMPLE,
    MainDialect,
    ReminderDialect,
    TaskPriority,
)
from ..models.task import FieldFormat, TaskLength, TaskRecord
from .dates import clock_text, is_date_iso, parse_date_from_path
from .dialect import detect_field_format

logger = logging.getLogger(__name__)

# Length of "- [ ] "
CHECKBOX_WIDTH = 6


def format_length(length: TaskLength) -> str:
    """Format a length as ``1h30m``, ``2h`` or ``45m``."""
    return f"{f'{length.hour}h' if length.hour else ''}{f'{length.minute}m' if length.minute else ''}"


def format_reminder(task: TaskRecord, reminder: ReminderDialect) -> str:
    if not task.reminder:
        return ""
    if reminder == ReminderDialect.KANBAN:
        return f" @{{{task.reminder}}}"
    if reminder == ReminderDialect.TASKS:
        return f" {KEY_TO_TASKS_EMOJI['reminder']} {task.reminder}"
    return f" (@{task.reminder})"


def _has_priority(task: TaskRecord) -> bool:
    return task.priority != TaskPriority.DEFAULT


def _has_length(task: TaskRecord) -> bool:
    return task.length is not None and not task.length.is_empty


def _end_time(task: TaskRecord) -> datetime:
    start = datetime.fromisoformat(task.scheduled)
    if task.length is None:
        return start
    return start + task.length.to_timedelta()


def _emit_simple(draft: str, task: TaskRecord, reminder: ReminderDialect) -> str:
    if task.scheduled:
        scheduled_date = task.scheduled[:10]
        page_date = parse_date_from_path(task.path)
        parts: list[str] = []
        if page_date is None or page_date.isoformat() != scheduled_date:
            parts.append(scheduled_date)
        if not is_date_iso(task.scheduled):
            scheduled_time = clock_text(datetime.fromisoformat(task.scheduled), pad_hour=False)
            if _has_length(task):
                scheduled_time += f" - {clock_text(_end_time(task), pad_hour=False)}"
            parts.append(scheduled_time)
        if parts:
            draft = (
                draft[:CHECKBOX_WIDTH]
                + " ".join(parts)
                + " "
                + draft[CHECKBOX_WIDTH:].lstrip()
            )
    if task.due:
        draft += f"  > {task.due}"
    # Priority has to close the simple part of the line
    if _has_priority(task):
        draft += f" {PRIORITY_NUMBER_TO_SIMPLE[task.priority]}"
    draft += format_reminder(task, reminder)
    if task.repeat:
        draft += f"  [repeat:: {task.repeat}]"
    if task.start:
        draft += f"  [start:: {task.start}]"
    if task.created:
        draft += f"  [created:: {task.created}]"
    if task.completion:
        draft += f"  [completion:: {task.completion}]"
    return draft


def _emit_bracket(draft: str, task: TaskRecord, reminder: ReminderDialect) -> str:
    if task.scheduled:
        draft += f"  [scheduled:: {task.scheduled}]"
    draft += format_reminder(task, reminder)
    if task.due:
        draft += f"  [due:: {task.due}]"
    if _has_length(task):
        draft += f"  [length:: {format_length(task.length)}]"
    if task.repeat:
        draft += f"  [repeat:: {task.repeat}]"
    if task.start:
        draft += f"  [start:: {task.start}]"
    if task.created:
        draft += f"  [created:: {task.created}]"
    if _has_priority(task):
        draft += f"  [priority:: {task.priority.key}]"
    if task.completion:
        draft += f"  [completion:: {task.completion}]"
    return draft


def _emit_calendar(draft: str, task: TaskRecord, reminder: ReminderDialect) -> str:
    if task.scheduled:
        draft += f"  [date:: {task.scheduled[:10]}]"
        if task.is_all_day:
            draft += "  [allDay:: true]"
        else:
            draft += f"  [startTime:: {task.scheduled[11:16]}]"
    draft += format_reminder(task, reminder)
    if task.due:
        draft += f"  [due:: {task.due}]"
    if _has_length(task) and task.scheduled and not task.is_all_day:
        draft += f"  [endTime:: {clock_text(_end_time(task))}]"
    if task.repeat:
        draft += f"  [repeat:: {task.repeat}]"
    if task.start:
        draft += f"  [start:: {task.start}]"
    if task.created:
        draft += f"  [created:: {task.created}]"
    if _has_priority(task):
        draft += f"  [priority:: {task.priority.key}]"
    if task.completion:
        draft += f"  [completion:: {task.completion}]"
    return draft


def _emit_tasks(draft: str, task: TaskRecord, reminder: ReminderDialect) -> str:
    if _has_length(task):
        draft += f"  [length:: {format_length(task.length)}]"
    if task.scheduled and not task.is_all_day:
        draft += f"  [startTime:: {task.scheduled[11:16]}]"
    draft += format_reminder(task, reminder)
    if _has_priority(task):
        draft += f" {KEY_TO_TASKS_EMOJI[task.priority.key]}"
    if task.repeat:
        draft += f" {KEY_TO_TASKS_EMOJI['repeat']} {task.repeat}"
    if task.start:
        draft += f" {KEY_TO_TASKS_EMOJI['start']} {task.start}"
    if task.scheduled:
        draft += f" {KEY_TO_TASKS_EMOJI['scheduled']} {task.scheduled[:10]}"
    if task.due:
        draft += f" {KEY_TO_TASKS_EMOJI['due']} {task.due}"
    if task.created:
        draft += f" {KEY_TO_TASKS_EMOJI['created']} {task.created}"
    if task.completion:
        draft += f" {KEY_TO_TASKS_EMOJI['completion']} {task.completion}"
    return draft


EMITTERS: dict[MainDialect, Callable[[str, TaskRecord, ReminderDialect], str]] = {
    MainDialect.SIMPLE: _emit_simple,
    MainDialect.BRACKET: _emit_bracket,
    MainDialect.CALENDAR: _emit_calendar,
    MainDialect.TASKS: _emit_tasks,
}


def task_to_text(
    task: TaskRecord,
    default_format: MainDialect,
    dialect: MainDialect | None = None,
) -> str:
    """Serialize a task record as a markdown task line.

    The dialect is detected from ``task.original_text`` so an edited task is
    written back the way it was authored.

    Args:
        task: Task record to serialize
        default_format: Dialect used when the original text has no markers
        dialect: Force this main dialect instead of detecting it

    Returns:
        Task line, starting with its ``- [ ]`` checkbox
    """
    status = "x" if task.completion else (task.status or " ")
    draft = f"- [{status}] {(task.original_title or '').rstrip()}"
    if task.tags:
        draft += " " + " ".join(task.tags)

    for key, value in sorted(task.extra_fields.items()):
        draft += f"  [{key}:: {value}]"

    field_format = detect_field_format(task.original_text, default_format)
    if dialect is not None:
        field_format = FieldFormat(main=dialect, reminder=field_format.reminder)

    draft = EMITTERS[field_format.main](draft, task, field_format.reminder)

    if task.block_reference:
        draft += " " + task.block_reference

    logger.debug(f"Serialized task {task.id} as {field_format.main.value}")
    return draft


def convert_task(task: TaskRecord, dialect: MainDialect) -> str:
    """Re-emit a task in another main dialect, keeping its reminder style."""
    return task_to_text(task, dialect, dialect=dialect)

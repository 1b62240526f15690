"""Detect which textual convention a line of task text uses."""

import logging
import re

from ..models.enums import KEY_TO_TASKS_EMOJI, TASKS_EMOJI_TO_KEY, MainDialect, ReminderDialect
from ..models.task import FieldFormat
from .dates import parse_clock
from .patterns import (
    BLOCK_REFERENCE,
    BRACKET_KEYS,
    CALENDAR_KEYS,
    CHECKBOX_PREFIX,
    INLINE_FIELD_SEARCH,
    KANBAN_REMINDER,
    NATIVE_REMINDER,
    SIMPLE_DUE,
    SIMPLE_SCHEDULED_DATE,
    SIMPLE_SCHEDULED_TIME,
    SIMPLE_TIME_SEPARATOR,
    SIMPLE_TRAILING_SCHEDULE,
    TAG_SEARCH,
    TASKS_EMOJI_SEARCH,
    TASKS_REMINDER,
    TASKS_REPEAT_SEARCH,
)

logger = logging.getLogger(__name__)


def has_marked_fields(text: str) -> bool:
    """Whether a line carries emoji markers or bracket/calendar schedule keys."""
    return bool(
        any(emoji in text for emoji in TASKS_EMOJI_TO_KEY)
        or CALENDAR_KEYS.search(text)
        or BRACKET_KEYS.search(text)
    )


def find_trailing_schedule(line: str) -> re.Match[str] | None:
    """Find a ``YYYY-MM-DD[ H:MM[ - H:MM]]`` block closing a markup-free line.

    Lines that start with a date never have a trailing one. A trailing time is
    only taken when the line does not start with a time and the clock is valid;
    otherwise the whole block is left as title text.
    """
    if SIMPLE_SCHEDULED_DATE.match(line):
        return None
    match = SIMPLE_TRAILING_SCHEDULE.search(line)
    if match is None or match.group(2) is None:
        return match
    if SIMPLE_SCHEDULED_TIME.match(line):
        return None
    start_text = SIMPLE_TIME_SEPARATOR.split(match.group(2), maxsplit=1)[0]
    return match if parse_clock(start_text) is not None else None


def _without_markup(text: str) -> str:
    """First line of ``text`` with everything but simple-dialect markup removed."""
    line = CHECKBOX_PREFIX.sub("", text.split("\n", 1)[0])
    for pattern in (
        BLOCK_REFERENCE,
        INLINE_FIELD_SEARCH,
        TASKS_REPEAT_SEARCH,
        TASKS_EMOJI_SEARCH,
        TAG_SEARCH,
        TASKS_REMINDER,
        NATIVE_REMINDER,
        KANBAN_REMINDER,
    ):
        line = pattern.sub("", line).rstrip()
    return line


def _is_simple(text: str) -> bool:
    line = _without_markup(text)
    return bool(
        SIMPLE_SCHEDULED_DATE.search(line)
        or SIMPLE_SCHEDULED_TIME.search(line)
        or SIMPLE_DUE.search(line)
        or (not has_marked_fields(text) and find_trailing_schedule(line))
    )


def detect_main_dialect(text: str, default_format: MainDialect) -> MainDialect:
    """Classify date/priority encoding. First match wins."""
    if _is_simple(text):
        return MainDialect.SIMPLE
    if any(emoji in text for emoji in TASKS_EMOJI_TO_KEY):
        return MainDialect.TASKS
    if CALENDAR_KEYS.search(text):
        return MainDialect.CALENDAR
    if BRACKET_KEYS.search(text):
        return MainDialect.BRACKET
    return MainDialect(default_format)


def detect_reminder_dialect(text: str) -> ReminderDialect:
    if KEY_TO_TASKS_EMOJI["reminder"] in text:
        return ReminderDialect.TASKS
    if KANBAN_REMINDER.search(text):
        return ReminderDialect.KANBAN
    return ReminderDialect.NATIVE


def detect_field_format(text: str, default_format: MainDialect) -> FieldFormat:
    """Detect the main and reminder dialects of a task's source text.

    Args:
        text: Original task text (checkbox prefix optional)
        default_format: Dialect to use when the text has no recognizable markers

    Returns:
        FieldFormat with the main and reminder dialects
    """
    field_format = FieldFormat(
        main=detect_main_dialect(text, default_format),
        reminder=detect_reminder_dialect(text),
    )
    logger.debug(f"Detected {field_format.main.value}/{field_format.reminder.value} for {text!r}")
    return field_format

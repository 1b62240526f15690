"""Parse a raw task item into a structured task record.

The title is cleaned by an ordered pipeline of strip steps. Later steps rely
on earlier ones having removed their matches (the simple-dialect date and
time are only found at either end of the line once everything else is gone).
"""

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, NamedTuple

from ..models.enums import (
    PRIORITY_EMOJI_ORDER,
    PRIORITY_KEY_TO_NUMBER,
    RESERVED_FIELDS,
    SIMPLE_PRIORITY_TO_NUMBER,
    TASKS_EMOJI_TO_KEY,
    TaskPriority,
)
from ..models.task import TaskItem, TaskLength, TaskRecord
from .dates import (
    format_scheduled,
    is_date_iso,
    parse_clock,
    parse_date_from_path,
    parse_duration,
    parse_iso,
    to_date,
)
from .dialect import find_trailing_schedule, has_marked_fields
from .patterns import (
    BLOCK_REFERENCE,
    CHECKBOX_PREFIX,
    INLINE_FIELD_SEARCH,
    LINK_SEARCH,
    REMINDER_SEARCH,
    SIMPLE_DUE,
    SIMPLE_PRIORITY,
    SIMPLE_SCHEDULED_DATE,
    SIMPLE_SCHEDULED_TIME,
    SIMPLE_TIME_SEPARATOR,
    TAG_SEARCH,
    TASKS_DATE_SEARCH,
    TASKS_EMOJI_SEARCH,
    TASKS_REPEAT_SEARCH,
    WIKI_LINK_SEARCH,
)

logger = logging.getLogger(__name__)

ID_SEPARATOR = "::"


# --- Title pipeline ---


def strip_block_reference(line: str) -> str:
    return BLOCK_REFERENCE.sub("", line)


def strip_inline_fields(line: str) -> str:
    return INLINE_FIELD_SEARCH.sub("", line)


def strip_tasks_repeat(line: str) -> str:
    return TASKS_REPEAT_SEARCH.sub("", line, count=1)


def strip_tasks_emoji(line: str) -> str:
    return TASKS_EMOJI_SEARCH.sub("", line)


def strip_tags(line: str) -> str:
    return TAG_SEARCH.sub("", line)


def strip_reminder(line: str) -> str:
    for pattern in REMINDER_SEARCH:
        if pattern.search(line):
            return pattern.sub("", line, count=1)
    return line


def strip_leading_simple_date(line: str) -> str:
    return SIMPLE_SCHEDULED_DATE.sub("", line, count=1)


def strip_simple_date(line: str) -> str:
    """Remove a leading ``YYYY-MM-DD `` or a trailing date (and time range)."""
    trailing = find_trailing_schedule(line)
    if trailing is None:
        return strip_leading_simple_date(line)
    return line[:trailing.start()] + line[trailing.end():]


def strip_simple_time(line: str) -> str:
    return SIMPLE_SCHEDULED_TIME.sub("", line, count=1)


def strip_simple_due(line: str) -> str:
    return SIMPLE_DUE.sub("", line, count=1)


def strip_simple_priority(line: str) -> str:
    return SIMPLE_PRIORITY.sub("", line)


MARKUP_STEPS: tuple[Callable[[str], str], ...] = (
    strip_block_reference,
    strip_inline_fields,
    strip_tasks_repeat,
    strip_tasks_emoji,
    strip_tags,
    strip_reminder,
)

SIMPLE_STEPS: tuple[Callable[[str], str], ...] = (
    strip_simple_date,
    strip_simple_time,
    strip_simple_due,
    strip_simple_priority,
)


def _simple_steps(trailing: bool, keep_time: bool) -> tuple[Callable[[str], str], ...]:
    steps = SIMPLE_STEPS
    if not trailing:
        steps = (strip_leading_simple_date,) + steps[1:]
    if keep_time:
        steps = tuple(step for step in steps if step is not strip_simple_time)
    return steps


def _run_steps(line: str, steps: tuple[Callable[[str], str], ...]) -> str:
    for step in steps:
        line = step(line).rstrip()
    return line


def strip_markup(line: str) -> str:
    """Remove every non-simple dialect annotation from a title line."""
    return _run_steps(line, MARKUP_STEPS)


def strip_title(line: str) -> str:
    """Run the whole pipeline, producing the original title."""
    return _run_steps(strip_markup(line), SIMPLE_STEPS).strip()


def resolve_links(title: str) -> str:
    """Replace ``[[target|alias]]`` and ``[label](url)`` with their display text."""
    title = WIKI_LINK_SEARCH.sub(lambda m: m.group(2) or m.group(1), title)
    return LINK_SEARCH.sub(r"\1", title)


def find_tags(line: str) -> list[str]:
    """Hashtags in a title line, outside of inline fields."""
    return [tag.strip() for tag in TAG_SEARCH.findall(strip_inline_fields(line))]


def split_checkbox(line: str) -> tuple[str | None, str]:
    """Split ``- [x] text`` into ("x", "text"). Lines without a checkbox keep their text."""
    match = CHECKBOX_PREFIX.match(line)
    if not match:
        return None, line
    return match.group(1), line[match.end():]


# --- Simple dialect schedule ---


class SimpleSchedule(NamedTuple):
    date: str | None = None
    start: tuple[int, int] | None = None
    end: tuple[int, int] | None = None
    # Raw text of a time range at the start of the line
    leading_time: str | None = None


def parse_simple_schedule(line: str, trailing: bool = True) -> SimpleSchedule:
    """Read the simple-dialect date and time range from a markup-free line.

    The date (and time range) may also close the line, unless ``trailing`` is
    off because the line carries its schedule in another dialect.
    """
    date_str: str | None = None
    time_str: str | None = None
    leading_time: str | None = None

    date_match = SIMPLE_SCHEDULED_DATE.match(line)
    if date_match:
        date_str = date_match.group(1)
        line = line[date_match.end():]

    time_match = SIMPLE_SCHEDULED_TIME.match(line)
    if time_match:
        time_str = leading_time = time_match.group(1)

    if not date_str and trailing:
        trailing_match = find_trailing_schedule(line)
        if trailing_match:
            date_str = trailing_match.group(1)
            time_str = time_str or trailing_match.group(2)

    if not time_str:
        return SimpleSchedule(date=date_str)

    parts = SIMPLE_TIME_SEPARATOR.split(time_str, maxsplit=1)
    end = parse_clock(parts[1]) if len(parts) > 1 else None
    return SimpleSchedule(
        date=date_str, start=parse_clock(parts[0]), end=end, leading_time=leading_time
    )


# --- Field resolution ---


def _coerce_date(value: Any) -> str | None:
    if isinstance(value, date):
        return to_date(value).isoformat()
    if isinstance(value, str) and value.strip():
        parsed = parse_iso(value)
        return to_date(parsed).isoformat() if parsed else None
    return None


def _coerce_length(value: Any) -> TaskLength | None:
    if isinstance(value, TaskLength):
        return value
    if isinstance(value, timedelta):
        return TaskLength.from_timedelta(value)
    if isinstance(value, str):
        duration = parse_duration(value)
        return TaskLength.from_timedelta(duration) if duration is not None else None
    return None


def _field_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(_field_to_str(v) for v in value)
    return str(value)


def parse_id(item: TaskItem) -> str:
    """Stable id of a task: its section path without ``.md`` plus its line number."""
    section = item.section_path or item.path
    return re.sub(r"\.md$", "", section) + ID_SEPARATOR + str(item.line)


def parse_scheduled_and_length(
    item: TaskItem, title_line: str, simple: SimpleSchedule
) -> tuple[str | None, TaskLength | None]:
    """Resolve the scheduled date(-time) and length of a task.

    Sources, first success wins: the index's scheduled value, an inline
    emoji or simple-dialect date, then the date of the containing document.
    Clock times come from the index's start/end times or the simple time range.
    """
    raw_scheduled: date | None = item.scheduled
    is_date = not isinstance(raw_scheduled, datetime)
    length = _coerce_length(item.length)

    if raw_scheduled is None:
        emoji_match = TASKS_DATE_SEARCH["scheduled"].search(title_line)
        inline = emoji_match.group(1) if emoji_match else simple.date
        if inline:
            raw_scheduled = parse_iso(inline)
            is_date = is_date_iso(inline)

    if raw_scheduled is None:
        raw_scheduled = item.date or parse_date_from_path(item.path)
        is_date = True

    if raw_scheduled is None:
        return None, length

    start: tuple[int, int] | None = None
    end: tuple[int, int] | None = None
    if item.start_time:
        start = parse_clock(item.start_time)
        end = parse_clock(item.end_time)
    elif simple.start:
        start, end = simple.start, simple.end
    elif item.end_time and isinstance(raw_scheduled, datetime) and not is_date:
        start = (raw_scheduled.hour, raw_scheduled.minute)
        end = parse_clock(item.end_time)

    if start:
        raw_scheduled = datetime.combine(to_date(raw_scheduled), time(*start))
        is_date = False
        if end:
            end_at = raw_scheduled.replace(hour=end[0], minute=end[1])
            if end_at < raw_scheduled:
                end_at += timedelta(days=1)
            length = TaskLength.from_timedelta(end_at - raw_scheduled)

    return format_scheduled(raw_scheduled, is_date), length


def parse_date_key(item: TaskItem, key: str, title_line: str, bare: str) -> str | None:
    """Resolve due/created/start/completion from the index, an emoji, or (due) ``> date``."""
    value = _coerce_date(getattr(item, key))
    if value:
        return value
    emoji_match = TASKS_DATE_SEARCH[key].search(title_line)
    if emoji_match:
        return _coerce_date(emoji_match.group(1))
    if key == "due":
        due_match = SIMPLE_DUE.search(bare)
        if due_match:
            return _coerce_date(due_match.group(1))
    return None


def parse_reminder(title_line: str) -> tuple[str | None, str | None]:
    """Find a reminder. Returns (reminder, matched token)."""
    for pattern in REMINDER_SEARCH:
        match = pattern.search(title_line)
        if match:
            return match.group(1), match.group(0).strip()
    return None, None


def parse_priority(item: TaskItem, title_line: str, bare: str) -> TaskPriority:
    value = item.priority
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return TaskPriority(value)
        except ValueError:
            return TaskPriority.DEFAULT
    if isinstance(value, str) and value.strip():
        return PRIORITY_KEY_TO_NUMBER.get(value.strip().lower(), TaskPriority.DEFAULT)

    for emoji in PRIORITY_EMOJI_ORDER:
        if emoji in title_line:
            return PRIORITY_KEY_TO_NUMBER[TASKS_EMOJI_TO_KEY[emoji]]

    simple_match = SIMPLE_PRIORITY.search(strip_simple_due(bare).rstrip())
    if simple_match:
        return SIMPLE_PRIORITY_TO_NUMBER[simple_match.group(1)]

    return TaskPriority.DEFAULT


def parse_repeat(item: TaskItem, title_line: str) -> str | None:
    if item.repeat:
        return item.repeat
    match = TASKS_REPEAT_SEARCH.search(title_line)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def text_to_task(item: TaskItem) -> TaskRecord:
    """Parse a raw task item into a task record.

    Never raises for malformed task text: anything that cannot be recognized
    is left unset and stays part of the title.
    """
    first_line, newline, rest = item.text.partition("\n")
    checkbox_status, title_line = split_checkbox(first_line)
    notes = rest if newline else None

    bare = strip_markup(title_line)
    trailing = not has_marked_fields(title_line)
    simple = parse_simple_schedule(bare, trailing=trailing)
    scheduled, length = parse_scheduled_and_length(item, title_line, simple)

    # A leading time with no valid clock or no date to attach to stays in the title
    keep_time = simple.leading_time is not None and (simple.start is None or scheduled is None)
    original_title = _run_steps(bare, _simple_steps(trailing, keep_time)).strip()
    title = resolve_links(original_title)

    reminder, reminder_token = parse_reminder(title_line)
    if reminder_token:
        title = title.replace(reminder_token, "").strip()

    block_match = BLOCK_REFERENCE.search(title_line)
    extra_fields = {
        key: _field_to_str(value)
        for key, value in item.fields.items()
        if key not in RESERVED_FIELDS and value is not None
    }

    record = TaskRecord(
        id=parse_id(item),
        status=(item.status or checkbox_status or " ")[:1],
        title=title,
        original_title=original_title,
        original_text=item.text,
        notes=notes,
        tags=list(item.tags) or find_tags(title_line),
        children=[parse_id(child) for child in item.children if not child.completed],
        scheduled=scheduled,
        length=length,
        due=parse_date_key(item, "due", title_line, bare),
        start=parse_date_key(item, "start", title_line, bare),
        created=parse_date_key(item, "created", title_line, bare),
        completion=parse_date_key(item, "completion", title_line, bare),
        reminder=reminder,
        priority=parse_priority(item, title_line, bare),
        repeat=parse_repeat(item, title_line),
        block_reference=block_match.group(1) if block_match else None,
        extra_fields=extra_fields,
        position=item.position,
        heading=item.heading,
        path=item.path,
    )
    logger.debug(f"Parsed task {record.id}: scheduled={record.scheduled} priority={record.priority.key}")
    return record

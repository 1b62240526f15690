"""Read ``[key:: value]`` annotations the way the document index does.

The parser expects the index to hand over bracketed fields already typed
(dates as dates, lengths as durations). These helpers do that for callers
that only have a line of text.
"""

from __future__ import annotations

from typing import Any

from ..models.task import TaskItem, TaskPosition
from .dates import parse_duration, parse_iso, to_date
from .patterns import CHECKBOX_PREFIX, INLINE_FIELD_CAPTURE

DATE_KEYS = ("due", "created", "start", "completion", "date")


def extract_inline_fields(text: str) -> dict[str, str]:
    """Get the bracketed fields of the first line of ``text``.

    Example:
        "Call  [due:: 2024-03-10]  (project:: Home)"
        -> {"due": "2024-03-10", "project": "Home"}
    """
    first_line = text.split("\n", 1)[0]
    return {
        match.group(1).strip(): match.group(2).strip()
        for match in INLINE_FIELD_CAPTURE.finditer(first_line)
    }


def typed_fields(raw: dict[str, str]) -> dict[str, Any]:
    """Convert known field values to the types the index would produce.

    Values that do not parse are dropped so the parser falls back to
    the next source for that field.
    """
    fields: dict[str, Any] = dict(raw)
    typed: dict[str, Any] = {}

    scheduled = fields.pop("scheduled", None)
    if scheduled:
        typed["scheduled"] = parse_iso(scheduled)

    for key in DATE_KEYS:
        value = fields.pop(key, None)
        parsed = parse_iso(value) if value else None
        if parsed is not None:
            typed[key] = to_date(parsed)

    length = fields.pop("length", None)
    if length:
        typed["length"] = parse_duration(length)

    for source, target in (("startTime", "start_time"), ("endTime", "end_time")):
        value = fields.pop(source, None)
        if value:
            typed[target] = value

    for key in ("priority", "repeat"):
        value = fields.pop(key, None)
        if value:
            typed[key] = value

    fields.pop("allDay", None)
    typed["fields"] = fields
    return {key: value for key, value in typed.items() if value is not None}


def item_from_text(
    text: str,
    *,
    path: str = "",
    line: int = 0,
    heading: str | None = None,
    status: str | None = None,
    tags: list[str] | None = None,
    section_path: str | None = None,
    end_line: int | None = None,
) -> TaskItem:
    """Build a task item from raw text, extracting its inline fields."""
    if status is None:
        checkbox = CHECKBOX_PREFIX.match(text)
        status = checkbox.group(1) if checkbox else None

    kwargs = typed_fields(extract_inline_fields(text))

    return TaskItem(
        text=text,
        path=path,
        line=line,
        section_path=section_path,
        heading=heading,
        position=TaskPosition(start_line=line, end_line=end_line if end_line is not None else line),
        status=status,
        tags=list(tags) if tags else [],
        **kwargs,
    )

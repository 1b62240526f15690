"""Task item and task record models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_type
from datetime import timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..services.dates import is_date_iso, is_valid_scheduled
from .enums import RESERVED_FIELDS, MainDialect, ReminderDialect, TaskPriority


class TaskLength(BaseModel):
    """Duration of a scheduled task."""

    hour: int = Field(..., ge=0)
    minute: int = Field(..., ge=0)

    @classmethod
    def from_timedelta(cls, value: timedelta) -> TaskLength | None:
        """Build a length from a timedelta, or None for negative durations."""
        total_minutes = int(value.total_seconds() // 60)
        if total_minutes < 0:
            return None
        hour, minute = divmod(total_minutes, 60)
        return cls(hour=hour, minute=minute)

    def to_timedelta(self) -> timedelta:
        return timedelta(hours=self.hour, minutes=self.minute)

    @property
    def is_empty(self) -> bool:
        return self.hour + self.minute == 0


class TaskPosition(BaseModel):
    """Line span of a task in its document (0-based, inclusive)."""

    start_line: int = Field(..., ge=0)
    end_line: int = Field(..., ge=0)


@dataclass
class TaskItem:
    """A raw task as supplied by the document index.

    ``text`` is the task's source line (with or without its list checkbox),
    followed by any continuation lines. The typed attributes hold fields the
    index already understood; ``fields`` holds every other annotation.
    """

    text: str
    path: str = ""
    line: int = 0
    section_path: str | None = None  # defaults to path
    heading: str | None = None
    position: TaskPosition | None = None
    status: str | None = None
    tags: list[str] = field(default_factory=list)
    children: list[TaskItem] = field(default_factory=list)

    # Pre-extracted fields
    scheduled: date_type | None = None  # date or datetime
    length: timedelta | str | None = None
    start_time: str | None = None
    end_time: str | None = None
    date: date_type | None = None  # date metadata of the containing document
    due: date_type | str | None = None
    created: date_type | str | None = None
    start: date_type | str | None = None
    completion: date_type | str | None = None
    priority: str | int | None = None
    repeat: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def completed(self) -> bool:
        return self.completion is not None or (self.status or "").lower() == "x"


class TaskRecord(BaseModel):
    """Canonical, dialect-independent representation of one task."""

    id: str = ""
    type: Literal["task"] = "task"
    status: str = Field(" ", max_length=1)
    title: str
    original_title: str | None = Field(
        None, description="Title with markup stripped but markdown links kept"
    )
    original_text: str = Field("", description="Untouched source text")
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)
    children: list[str] = Field(default_factory=list)
    scheduled: str | None = Field(None, description="ISO date or date-time")
    length: TaskLength | None = None
    due: str | None = None
    start: str | None = None
    created: str | None = None
    completion: str | None = None
    reminder: str | None = None
    priority: TaskPriority = TaskPriority.DEFAULT
    repeat: str | None = None
    block_reference: str | None = None
    extra_fields: dict[str, str] = Field(default_factory=dict)
    position: TaskPosition | None = None
    heading: str | None = None
    path: str = ""

    @field_validator("scheduled")
    @classmethod
    def _check_scheduled(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_scheduled(value):
            raise ValueError(f"scheduled is not an ISO date or date-time: {value!r}")
        return value

    @field_validator("extra_fields")
    @classmethod
    def _check_extra_fields(cls, value: dict[str, str]) -> dict[str, str]:
        reserved = sorted(RESERVED_FIELDS.intersection(value))
        if reserved:
            raise ValueError(f"extra_fields may not use reserved keys: {', '.join(reserved)}")
        return value

    @model_validator(mode="after")
    def _default_original_title(self) -> TaskRecord:
        if self.original_title is None:
            self.original_title = self.title
        return self

    @property
    def is_all_day(self) -> bool:
        """Whether ``scheduled`` is a pure date."""
        return self.scheduled is not None and is_date_iso(self.scheduled)

    @property
    def completed(self) -> bool:
        return self.completion is not None or self.status.lower() == "x"


class FieldFormat(BaseModel):
    """Dialects detected for a line of task text."""

    model_config = ConfigDict(frozen=True)

    main: MainDialect
    reminder: ReminderDialect


# --- API schemas ---


class TaskParseRequest(BaseModel):
    """Request to parse one line of task text."""

    text: str = Field(
        ...,
        description="Task text, e.g. '- [ ] Buy milk #errand 2024-03-01 14:00 - 15:30 !!'",
        min_length=1,
    )
    path: str = Field("", description="Path of the containing note")
    line: int = Field(0, ge=0, description="0-based line number in the note")
    heading: str | None = Field(None, description="Heading the task sits under")
    status: str | None = Field(None, max_length=1, description="Checkbox status override")
    tags: list[str] | None = Field(None, description="Tags override (default: read from text)")


class TaskSerializeRequest(BaseModel):
    """Request to turn a task record back into text."""

    task: TaskRecord
    default_format: MainDialect | None = Field(
        None, description="Dialect used when the original text has no markers"
    )


class TaskDetectRequest(BaseModel):
    """Request to detect the dialects of a line."""

    text: str
    default_format: MainDialect | None = None


class TaskConvertRequest(BaseModel):
    """Request to re-emit a line of task text in another dialect."""

    text: str = Field(..., min_length=1)
    dialect: MainDialect
    path: str = ""


class TaskTextResponse(BaseModel):
    """Serialized task text."""

    text: str
    format: FieldFormat

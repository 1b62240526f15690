"""Task models, dialect enums and lookup tables."""

from .enums import MainDialect, ReminderDialect, TaskPriority
from .task import (
    FieldFormat,
    TaskConvertRequest,
    TaskDetectRequest,
    TaskItem,
    TaskLength,
    TaskParseRequest,
    TaskPosition,
    TaskRecord,
    TaskSerializeRequest,
    TaskTextResponse,
)

__all__ = [
    "MainDialect",
    "ReminderDialect",
    "TaskPriority",
    "FieldFormat",
    "TaskItem",
    "TaskLength",
    "TaskPosition",
    "TaskRecord",
    "TaskParseRequest",
    "TaskSerializeRequest",
    "TaskDetectRequest",
    "TaskConvertRequest",
    "TaskTextResponse",
]

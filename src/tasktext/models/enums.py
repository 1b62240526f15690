"""Dialect names, priority tiers, and the static lookup tables shared by every call."""

from enum import Enum, IntEnum
from types import MappingProxyType


class TaskPriority(IntEnum):
    """Priority tiers, ordered so that a larger value is more urgent."""

    LOWEST = 0
    LOW = 1
    DEFAULT = 2
    MEDIUM = 3
    HIGH = 4
    HIGHEST = 5

    @property
    def key(self) -> str:
        return self.name.lower()


class MainDialect(str, Enum):
    """Textual conventions for dates, priority, and durations."""

    SIMPLE = "simple"  # 2024-03-01 14:00 - 15:30 Title  > 2024-03-10 !!
    BRACKET = "bracket"  # Title  [scheduled:: 2024-03-01]  [due:: 2024-03-10]
    CALENDAR = "calendar"  # Title  [date:: 2024-03-01]  [startTime:: 14:00]
    TASKS = "tasks"  # Title ⏫ ⏳ 2024-03-01 📅 2024-03-10


class ReminderDialect(str, Enum):
    """Textual conventions for reminders."""

    NATIVE = "native"  # (@2024-03-01 09:00)
    KANBAN = "kanban"  # @{2024-03-01 09:00}
    TASKS = "tasks"  # ⏰ 2024-03-01 09:00


# Field name -> emoji used by the inline-emoji dialect
KEY_TO_TASKS_EMOJI: MappingProxyType[str, str] = MappingProxyType({
    "scheduled": "⏳",
    "due": "📅",
    "start": "🛫",
    "created": "➕",
    "completion": "✅",
    "reminder": "⏰",
    "repeat": "🔁",
    "highest": "🔺",
    "high": "⏫",
    "medium": "🔼",
    "low": "🔽",
    "lowest": "⏬",
})

TASKS_EMOJI_TO_KEY: MappingProxyType[str, str] = MappingProxyType(
    {emoji: key for key, emoji in KEY_TO_TASKS_EMOJI.items()}
)

# Checked in this order when scanning text for a priority emoji
PRIORITY_EMOJI_ORDER: tuple[str, ...] = tuple(
    KEY_TO_TASKS_EMOJI[p.key]
    for p in sorted(TaskPriority, reverse=True)
    if p is not TaskPriority.DEFAULT
)

PRIORITY_KEY_TO_NUMBER: MappingProxyType[str, TaskPriority] = MappingProxyType({
    **{p.key: p for p in TaskPriority},
    "normal": TaskPriority.DEFAULT,
    "none": TaskPriority.DEFAULT,
})

SIMPLE_PRIORITY_TO_NUMBER: MappingProxyType[str, TaskPriority] = MappingProxyType({
    "?": TaskPriority.LOW,
    "!": TaskPriority.MEDIUM,
    "!!": TaskPriority.HIGH,
    "!!!": TaskPriority.HIGHEST,
})

PRIORITY_NUMBER_TO_SIMPLE: MappingProxyType[TaskPriority, str] = MappingProxyType(
    {number: suffix for suffix, number in SIMPLE_PRIORITY_TO_NUMBER.items()}
)

# Keys owned by structured fields or by the document index itself.
# None of these may appear in TaskRecord.extra_fields.
RESERVED_FIELDS: frozenset[str] = frozenset({
    # structured fields
    "scheduled",
    "due",
    "length",
    "repeat",
    "start",
    "created",
    "priority",
    "completion",
    "reminder",
    # calendar dialect
    "date",
    "allDay",
    "startTime",
    "endTime",
    # index bookkeeping
    "text",
    "status",
    "tags",
    "children",
    "path",
    "section",
    "line",
    "position",
    "heading",
    "completed",
    "blockId",
})

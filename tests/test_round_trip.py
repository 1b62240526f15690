"""Tests that parsing then serializing keeps the task intact."""

import pytest

from tasktext.models.enums import MainDialect
from tasktext.models.task import TaskRecord
from tasktext.services.inline_fields import item_from_text
from tasktext.services.parser import text_to_task
from tasktext.services.serializer import task_to_text

STRUCTURED_FIELDS = (
    "status",
    "title",
    "original_title",
    "tags",
    "scheduled",
    "length",
    "due",
    "start",
    "created",
    "completion",
    "reminder",
    "priority",
    "repeat",
    "block_reference",
    "extra_fields",
)


def parse_line(text: str, path: str = "") -> TaskRecord:
    return text_to_task(item_from_text(text, path=path))


def structured(task: TaskRecord) -> dict:
    return {name: getattr(task, name) for name in STRUCTURED_FIELDS}


@pytest.mark.parametrize(
    "line",
    [
        "- [ ] 2024-03-01 14:00 - 15:30 Buy milk #errand  > 2024-03-10 !!",
        "- [ ] 2024-03-01 Pay rent !!! (@2024-03-01 09:00)  [repeat:: every month]",
        "- [ ] Call dentist  [scheduled:: 2024-03-05]  [due:: 2024-03-10]",
        "- [ ] Call dentist  [project:: Health]  [scheduled:: 2024-03-05T14:00]"
        " (@2024-03-05 09:00)  [due:: 2024-03-10]  [length:: 1h30m]  [priority:: high]",
        "- [ ] Standup  [date:: 2024-03-05]  [startTime:: 09:30]  [endTime:: 10:15]",
        "- [ ] Offsite  [date:: 2024-03-05]  [allDay:: true]  [priority:: lowest]",
        "- [ ] Water plants ⏫ 🔁 every week ⏳ 2024-03-01 📅 2024-03-10 ^abc123",
        "- [ ] Focus #deep  [length:: 2h]  [startTime:: 09:00] ⏰ 2024-03-01 08:45 🔼 ⏳ 2024-03-01",
        "- [x] Ship it 🛫 2024-02-01 ⏳ 2024-03-01 ➕ 2024-01-15 ✅ 2024-03-02",
    ],
)
def test_canonical_lines_are_reproduced(line: str) -> None:
    """Test that a line in canonical form serializes back to itself."""
    task = parse_line(line)
    assert task_to_text(task, MainDialect.BRACKET) == line


@pytest.mark.parametrize("dialect", list(MainDialect))
def test_fields_survive_every_dialect(dialect: MainDialect) -> None:
    """Test that a record rebuilt from any dialect keeps its fields."""
    task = parse_line("- [ ] Buy milk #errand 2024-03-01 14:00 - 15:30 !!")

    text = task_to_text(task, dialect, dialect=dialect)
    reparsed = parse_line(text)

    assert structured(reparsed) == structured(task)


def test_daily_note_round_trip(daily_note_path: str) -> None:
    """Test a simple-dialect task whose date comes from its daily note."""
    line = "- [ ] 9:00 - 9:30 Standup"
    task = parse_line(line, path=daily_note_path)

    assert task.scheduled == "2024-03-01T09:00"
    assert task_to_text(task, MainDialect.BRACKET) == line


def test_edit_keeps_untouched_prose() -> None:
    """Test that editing one field leaves the rest of the line alone."""
    line = "- [ ] Read [[Deep Work|the book]] #reading  [scheduled:: 2024-03-05]  [due:: 2024-03-10] ^read"
    task = parse_line(line)

    edited = task.model_copy(update={"due": "2024-03-12"})

    assert task_to_text(edited, MainDialect.BRACKET) == (
        "- [ ] Read [[Deep Work|the book]] #reading  [scheduled:: 2024-03-05]  [due:: 2024-03-12] ^read"
    )


def test_leading_time_and_trailing_date_survive() -> None:
    """Test that a time before the title and a date after it are both kept."""
    task = parse_line("- [ ] 10:00 Call 2024-03-01")

    assert task.scheduled == "2024-03-01T10:00"
    assert task.original_title == "Call"

    text = task_to_text(task, MainDialect.BRACKET)
    assert text == "- [ ] 2024-03-01 10:00 Call"
    assert structured(parse_line(text)) == structured(task)


@pytest.mark.parametrize(
    "line",
    [
        "- [ ] 10:00 Call",
        "- [ ] 9:00 Call 2024-03-01 10:00",
        "- [ ] Review minutes of 2024-03-01  [due:: 2024-03-10]",
        "- [ ] Review minutes of 2024-03-01 📅 2024-03-10",
        "- [ ] Write report ^abc",
    ],
)
def test_unanchored_dates_and_times_stay_in_the_line(line: str) -> None:
    """Test lines whose dates or times cannot be scheduled."""
    task = parse_line(line)

    assert task_to_text(task, MainDialect.BRACKET) == line

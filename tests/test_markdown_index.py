"""Tests for inline field extraction and markdown scanning."""

from datetime import date, datetime, timedelta

from tasktext.services.inline_fields import extract_inline_fields, item_from_text, typed_fields
from tasktext.services.markdown_index import scan_task_lines, scan_tasks
from tasktext.services.parser import text_to_task

NOTE = """# Today
- [ ] Parent task ⏳ 2024-03-01
    - [ ] Child one
    - [x] Child done
      extra note
- [ ] Other  [due:: 2024-03-10]
## Later
Some prose
- [ ] Under later
"""


def test_extract_inline_fields() -> None:
    """Test reading bracketed and parenthesized fields from the first line."""
    fields = extract_inline_fields("Call  [due:: 2024-03-10]  (project:: Home)\n[ignored:: yes]")
    assert fields == {"due": "2024-03-10", "project": "Home"}


def test_typed_fields() -> None:
    """Test conversion of known fields to index types."""
    typed = typed_fields({
        "scheduled": "2024-03-05T14:00",
        "due": "2024-03-10",
        "length": "1h",
        "startTime": "14:00",
        "allDay": "true",
        "priority": "high",
        "created": "not a date",
        "project": "Home",
    })

    assert typed["scheduled"] == datetime(2024, 3, 5, 14, 0)
    assert typed["due"] == date(2024, 3, 10)
    assert typed["length"] == timedelta(hours=1)
    assert typed["start_time"] == "14:00"
    assert typed["priority"] == "high"
    assert "created" not in typed
    assert typed["fields"] == {"project": "Home"}


def test_item_from_text_reads_checkbox_status() -> None:
    """Test that the checkbox status is used when none is given."""
    assert item_from_text("- [x] Done").status == "x"
    assert item_from_text("- [x] Done", status="-").status == "-"
    assert item_from_text("No checkbox").status is None


def test_scan_tasks_structure() -> None:
    """Test headings, nesting, notes and line numbers."""
    task_lines = scan_task_lines(NOTE, path="Daily/Plan.md")

    assert [t.line for t in task_lines] == [1, 2, 3, 5, 8]
    parent, child_one, child_done, other, later = (t.item for t in task_lines)

    assert parent.heading == "Today"
    assert later.heading == "Later"
    assert parent.children == [child_one, child_done]
    assert other.children == []
    assert child_done.text == "Child done\nextra note"
    assert child_done.status == "x"
    assert task_lines[2].end_line == 4
    assert task_lines[1].indent == "    "


def test_scanned_tasks_parse() -> None:
    """Test that scanned items parse into records."""
    records = [text_to_task(item) for item in scan_tasks(NOTE, path="Daily/Plan.md")]
    parent, _, child_done, other, _ = records

    assert parent.id == "Daily/Plan::1"
    assert parent.scheduled == "2024-03-01"
    assert parent.children == ["Daily/Plan::2"]
    assert child_done.notes == "extra note"
    assert other.due == "2024-03-10"
    assert other.title == "Other"

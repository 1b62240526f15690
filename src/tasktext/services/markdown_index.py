"""Scan markdown content for task lines."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ..models.task import TaskItem, TaskPosition
from .inline_fields import item_from_text

logger = logging.getLogger(__name__)

HEADING = re.compile(r"^(#{1,6})\s+(.*?)\s*$")
TASK_LINE = re.compile(r"^(\s*)((?:[-*+]|\d+[.)]) \[(.)\] ?)(.*)$")


@dataclass
class TaskLine:
    """Where a task sits in its document."""

    item: TaskItem
    indent: str
    line: int
    end_line: int


def _indent_width(indent: str) -> int:
    return len(indent.replace("\t", "    "))


def scan_task_lines(content: str, path: str = "") -> list[TaskLine]:
    """Find every task in a markdown document, in document order.

    Nested tasks are attached to their parent's ``children``. Indented
    non-task lines directly under a task become part of its text (notes).
    Line numbers are 0-based.
    """
    lines = content.split("\n")
    results: list[TaskLine] = []
    stack: list[tuple[int, TaskLine]] = []
    heading: str | None = None

    for number, line in enumerate(lines):
        heading_match = HEADING.match(line)
        if heading_match:
            heading = heading_match.group(2)
            stack.clear()
            continue

        task_match = TASK_LINE.match(line)
        if not task_match:
            width = _indent_width(line[: len(line) - len(line.lstrip())])
            if line.strip() and stack and width > stack[-1][0]:
                owner = stack[-1][1]
                owner.item.text += "\n" + line.strip()
                owner.end_line = number
                owner.item.position = TaskPosition(start_line=owner.line, end_line=number)
            elif line.strip() and width == 0:
                stack.clear()
            continue

        indent, _, status, body = task_match.groups()
        width = _indent_width(indent)
        item = item_from_text(
            body,
            path=path,
            line=number,
            heading=heading,
            status=status,
            section_path=path,
        )
        task_line = TaskLine(item=item, indent=indent, line=number, end_line=number)

        while stack and stack[-1][0] >= width:
            stack.pop()
        if stack:
            stack[-1][1].item.children.append(item)
        stack.append((width, task_line))
        results.append(task_line)

    logger.debug(f"Found {len(results)} tasks in {path or '<content>'}")
    return results


def scan_tasks(content: str, path: str = "") -> list[TaskItem]:
    """Task items of a markdown document, in document order."""
    return [task_line.item for task_line in scan_task_lines(content, path)]

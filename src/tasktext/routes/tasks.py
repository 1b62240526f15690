"""Task parsing and serialization endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..models.task import (
    FieldFormat,
    TaskConvertRequest,
    TaskDetectRequest,
    TaskParseRequest,
    TaskRecord,
    TaskSerializeRequest,
    TaskTextResponse,
)
from ..services.dialect import detect_field_format
from ..services.inline_fields import item_from_text
from ..services.parser import text_to_task
from ..services.serializer import convert_task, task_to_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


@router.post("/parse", response_model=TaskRecord)
async def parse_task(request: TaskParseRequest) -> TaskRecord:
    """
    Parse a line of task text into a structured record.

    Recognizes every supported dialect:
    - Simple: `2024-03-01 14:00 - 15:30 Buy milk  > 2024-03-10 !!`
    - Bracket: `Buy milk  [scheduled:: 2024-03-01]  [due:: 2024-03-10]`
    - Calendar: `Buy milk  [date:: 2024-03-01]  [startTime:: 14:00]`
    - Tasks: `Buy milk ⏫ ⏳ 2024-03-01 📅 2024-03-10`
    """
    item = item_from_text(
        request.text,
        path=request.path,
        line=request.line,
        heading=request.heading,
        status=request.status,
        tags=request.tags,
    )
    return text_to_task(item)


@router.post("/serialize", response_model=TaskTextResponse)
async def serialize_task(request: TaskSerializeRequest) -> TaskTextResponse:
    """
    Write a task record back as text, in the dialect of its original text.

    Falls back to `default_format` (or the configured default dialect) when
    the original text has no dialect markers.
    """
    default_format = request.default_format or settings.default_dialect
    try:
        text = task_to_text(request.task, default_format)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error serializing task")
        raise HTTPException(status_code=500, detail=f"Failed to serialize task: {e}")

    return TaskTextResponse(
        text=text,
        format=detect_field_format(request.task.original_text, default_format),
    )


@router.post("/detect", response_model=FieldFormat)
async def detect_format(request: TaskDetectRequest) -> FieldFormat:
    """Detect the main and reminder dialects of a line of task text."""
    return detect_field_format(request.text, request.default_format or settings.default_dialect)


@router.post("/convert", response_model=TaskTextResponse)
async def convert(request: TaskConvertRequest) -> TaskTextResponse:
    """
    Re-emit a line of task text in another dialect.

    Convenience endpoint that combines /parse and /serialize with a forced dialect.
    """
    try:
        task = text_to_task(item_from_text(request.text, path=request.path))
        text = convert_task(task, request.dialect)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error converting task")
        raise HTTPException(status_code=500, detail=f"Failed to convert task: {e}")

    return TaskTextResponse(
        text=text,
        format=FieldFormat(
            main=request.dialect,
            reminder=detect_field_format(request.text, request.dialect).reminder,
        ),
    )

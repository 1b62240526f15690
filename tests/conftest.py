"""Shared test fixtures."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from tasktext.main import app


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def daily_note_path() -> str:
    """Path of a daily note for 2024-03-01."""
    return "20 - Journal/21 - Daily/2024/2024-03-01 Fri.md"

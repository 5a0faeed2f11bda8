# ==============================
# Testing Fixtures
# ==============================
from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from core.config import Settings
from core.records import Record


SAMPLE_CSV = (
    "ID,Name,Email,Age,City\n"
    "1,Alice,alice@example.com,30,Berlin\n"
    "2,bob,bob@example.com,25,Paris\n"
    "10,Carol,carol@example.com,41,Lisbon\n"
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        region="us-east-1",
        access_key_id="AKIDEXAMPLE",
        secret_access_key="secret",
        bucket="table-bucket",
        key="data/people.csv",
    )


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


def make_records(n: int) -> List[Record]:
    return [
        Record(id=str(i), name=f"Person {i}", email=f"p{i}@example.com", age=str(20 + i % 50), city="Oslo")
        for i in range(1, n + 1)
    ]


class FakeBody(io.BytesIO):
    """Streaming body stand-in that records whether it was closed."""


class FakeSource:
    def __init__(self, body: Optional[bytes] = None, error: Optional[Exception] = None):
        self.body = body
        self.error = error
        self.calls = 0
        self.opened: List[FakeBody] = []

    def open_object(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        if self.body is None:
            return None
        stream = FakeBody(self.body)
        self.opened.append(stream)
        return stream


@pytest.fixture
def source_factory():
    return FakeSource


@pytest.fixture
def records_factory():
    return make_records

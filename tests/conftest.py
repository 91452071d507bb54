"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pyarrow as pa
import pytest

from df_metrics.core.batch import from_rows
from df_metrics.engines import ArrowQueryRunner, DuckDBQueryRunner


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def dataset() -> pa.RecordBatch:
    """Three rows over id, value and category; one null value."""
    return from_rows(
        columns=["id", "value", "category"],
        rows=[
            [1, 10, "A"],
            [2, None, "A"],
            [3, 5, "B"],
        ],
    )


@pytest.fixture
def split_dataset(dataset) -> list[pa.RecordBatch]:
    """The same dataset as two batches."""
    return [dataset.slice(0, 2), dataset.slice(2)]


@pytest.fixture(params=["duckdb", "arrow"])
def runner(request):
    """Each built-in query runner."""
    if request.param == "duckdb":
        return DuckDBQueryRunner()
    return ArrowQueryRunner()


class RecordingRunner:
    """Query runner that records calls and returns a canned (or input) table."""

    def __init__(self, result: pa.Table | None = None, error: Exception | None = None):
        self.calls = []
        self._result = result
        self._error = error

    def run(self, table, plan):
        self.calls.append((table, plan))
        if self._error is not None:
            raise self._error
        return self._result if self._result is not None else table


@pytest.fixture
def recording_runner():
    return RecordingRunner()


@pytest.fixture
def make_runner():
    """Factory for RecordingRunner with a canned result or error."""
    return RecordingRunner

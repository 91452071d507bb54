"""Helpers for the Arrow record batches flowing through a pipeline."""

from typing import Any, Iterable, Sequence

import pyarrow as pa

from df_metrics.core.exceptions import ComputeError

TabularData = pa.RecordBatch | pa.Table


def as_record_batches(data: Iterable[TabularData]) -> tuple[pa.RecordBatch, ...]:
    """Flatten record batches and tables into a tuple of record batches.

    Tables are split into their own record batches, in order. Nothing is
    copied or modified.

    Raises:
        TypeError: If an element is neither a RecordBatch nor a Table
    """
    batches: list[pa.RecordBatch] = []
    for item in data:
        if isinstance(item, pa.RecordBatch):
            batches.append(item)
        elif isinstance(item, pa.Table):
            batches.extend(item.to_batches())
        else:
            raise TypeError(
                f"Expected pyarrow.RecordBatch or pyarrow.Table, got {type(item).__name__}"
            )
    return tuple(batches)


def common_schema(batches: Sequence[pa.RecordBatch]) -> pa.Schema:
    """Return the schema shared by all batches.

    Raises:
        ComputeError: If the batches do not agree on one schema
    """
    if not batches:
        raise ComputeError("Cannot determine schema of an empty batch list")

    schema = batches[0].schema
    for index, batch in enumerate(batches[1:], start=1):
        if not batch.schema.equals(schema):
            raise ComputeError(
                f"Batch {index} schema does not match the first batch",
                context={
                    "batch_index": index,
                    "expected": schema.names,
                    "actual": batch.schema.names,
                },
            )
    return schema


def combine(batches: Sequence[pa.RecordBatch]) -> pa.Table:
    """Concatenate batches, in input order, into one logical table."""
    schema = common_schema(batches)
    return pa.Table.from_batches(batches, schema=schema)


def from_rows(columns: list[str], rows: list[list[Any]]) -> pa.RecordBatch:
    """Create a record batch from column names and row values.

    PyArrow infers column types; None values become nulls.

    Raises:
        ValueError: If columns is empty or row lengths don't match column count
    """
    if len(columns) == 0:
        raise ValueError("columns cannot be empty")

    for i, row in enumerate(rows):
        if len(row) != len(columns):
            raise ValueError(
                f"Row {i} length {len(row)} does not match column count {len(columns)}"
            )

    if rows:
        row_dicts = [dict(zip(columns, row)) for row in rows]
        return pa.RecordBatch.from_pylist(row_dicts)

    empty_arrays = [pa.array([], type=pa.null()) for _ in columns]
    return pa.RecordBatch.from_arrays(empty_arrays, names=columns)


def to_rows(batches: Iterable[pa.RecordBatch]) -> list[tuple[Any, ...]]:
    """Return all rows of the batches as tuples in column order."""
    rows: list[tuple[Any, ...]] = []
    for batch in batches:
        columns = batch.schema.names
        rows.extend(tuple(row[col] for col in columns) for row in batch.to_pylist())
    return rows

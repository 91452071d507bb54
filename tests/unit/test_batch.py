"""Unit tests for record batch helpers."""

import pyarrow as pa
import pytest

from df_metrics.core.batch import as_record_batches, combine, common_schema, from_rows, to_rows
from df_metrics.core.exceptions import ComputeError


class TestFromRows:
    """Tests for from_rows()."""

    def test_basic(self):
        batch = from_rows(["id", "name"], [[1, "Alice"], [2, "Bob"]])
        assert batch.schema.names == ["id", "name"]
        assert batch.num_rows == 2
        assert batch.schema.field("id").type == pa.int64()
        assert batch.schema.field("name").type == pa.string()

    def test_nulls(self, dataset):
        assert dataset.column(1).null_count == 1

    def test_empty_rows(self):
        batch = from_rows(["id", "name"], [])
        assert batch.schema.names == ["id", "name"]
        assert batch.num_rows == 0

    def test_empty_columns_rejected(self):
        with pytest.raises(ValueError, match="columns cannot be empty"):
            from_rows([], [])

    def test_row_length_mismatch(self):
        with pytest.raises(ValueError, match="Row 1 length 1"):
            from_rows(["id", "name"], [[1, "a"], [2]])


class TestAsRecordBatches:
    """Tests for as_record_batches()."""

    def test_batches_kept_in_order(self, split_dataset):
        batches = as_record_batches(split_dataset)
        assert batches == tuple(split_dataset)

    def test_tables_are_split(self, dataset):
        table = pa.Table.from_batches([dataset, dataset])
        batches = as_record_batches([table])
        assert sum(b.num_rows for b in batches) == 6

    def test_rejects_other_types(self):
        with pytest.raises(TypeError, match="dict"):
            as_record_batches([{"id": [1]}])


class TestCombine:
    """Tests for schema agreement and concatenation."""

    def test_combine_preserves_order(self, split_dataset):
        table = combine(split_dataset)
        assert table.column("id").to_pylist() == [1, 2, 3]

    def test_incompatible_schemas(self):
        first = from_rows(["id"], [[1]])
        second = from_rows(["id"], [["x"]])
        with pytest.raises(ComputeError) as exc_info:
            combine([first, second])
        assert exc_info.value.context["batch_index"] == 1

    def test_common_schema_empty(self):
        with pytest.raises(ComputeError):
            common_schema([])


def test_to_rows(split_dataset):
    assert to_rows(split_dataset) == [(1, 10, "A"), (2, None, "A"), (3, 5, "B")]

"""Unit tests for the DuckDB and Arrow query runners and the runner registry."""

import pyarrow as pa
import pytest

from df_metrics.core.batch import to_rows
from df_metrics.core.definition import (
    AggregateType,
    BuiltInMetricsBuilder,
    Transformation,
    TransformationBuilder,
)
from df_metrics.core.exceptions import EngineError
from df_metrics.core.plan import QueryPlan, compile_plan
from df_metrics.engines import (
    ArrowQueryRunner,
    DuckDBQueryRunner,
    build_sql,
    clear_registry,
    get_runner,
    list_runner_types,
    register_runner,
    reregister_builtins,
)


@pytest.fixture
def table(dataset) -> pa.Table:
    return pa.Table.from_batches([dataset])


def _run(runner, table, transformation):
    return runner.run(table, compile_plan(transformation))


# ============================================================================
# Runner behavior (both engines)
# ============================================================================


class TestRunners:
    """Shared behavior of the built-in runners."""

    def test_empty_plan_returns_input(self, runner, table):
        result = runner.run(table, QueryPlan())
        assert result.column_names == ["id", "value", "category"]
        assert result.num_rows == 3

    def test_select_restricts_and_reorders(self, runner, table):
        result = _run(runner, table, TransformationBuilder().select(["category", "id"]).build())
        assert result.column_names == ["category", "id"]
        assert sorted(to_rows(result.to_batches())) == [("A", 1), ("A", 2), ("B", 3)]

    def test_grouped_sum_excludes_nulls(self, runner, table):
        transformation = (
            TransformationBuilder()
            .select(["id", "value", "category"])
            .aggregate(AggregateType.SUM, ["value"])
            .group_by(["category"])
            .build()
        )
        result = _run(runner, table, transformation)

        assert result.column_names == ["category", "sum(value)"]
        sums = dict(zip(result.column("category").to_pylist(), result.column("sum(value)").to_pylist()))
        assert sums == {"A": 10, "B": 5}

    def test_count_null(self, runner, table):
        result = _run(runner, table, BuiltInMetricsBuilder().count_null("value"))
        assert result.column_names == ["count_null(value)"]
        assert result.column("count_null(value)").to_pylist() == [1]

    def test_count_null_alias(self, runner, table):
        result = _run(runner, table, BuiltInMetricsBuilder().count_null("category", alias="missing"))
        assert result.column("missing").to_pylist() == [0]

    def test_grouped_count_null(self, runner, table):
        transformation = Transformation(
            stages=TransformationBuilder().group_by(["category"]).build().stages
            + BuiltInMetricsBuilder().count_null("value").stages
        )
        result = _run(runner, table, transformation)
        counts = dict(zip(result.column("category").to_pylist(), result.column("count_null(value)").to_pylist()))
        assert counts == {"A": 1, "B": 0}

    def test_global_aggregates(self, runner, table):
        transformation = (
            TransformationBuilder()
            .aggregate(AggregateType.COUNT, ["value"])
            .aggregate(AggregateType.MIN, ["id"])
            .aggregate(AggregateType.MAX, ["id"])
            .aggregate(AggregateType.AVG, ["value"])
            .build()
        )
        result = _run(runner, table, transformation)
        row = result.to_pylist()[0]
        assert row["count(value)"] == 2
        assert row["min(id)"] == 1
        assert row["max(id)"] == 3
        assert row["avg(value)"] == pytest.approx(7.5)

    def test_group_by_only_yields_distinct_keys(self, runner, table):
        result = _run(runner, table, TransformationBuilder().group_by(["category"]).build())
        assert sorted(result.column("category").to_pylist()) == ["A", "B"]

    def test_missing_column_raises(self, runner, table):
        with pytest.raises(Exception):
            _run(runner, table, TransformationBuilder().select(["nope"]).build())

    def test_input_table_not_modified(self, runner, table):
        before = table.to_pylist()
        _run(runner, table, BuiltInMetricsBuilder().count_null("value"))
        assert table.to_pylist() == before


# ============================================================================
# SQL generation
# ============================================================================


class TestBuildSql:
    """Tests for DuckDB SQL generation."""

    def test_empty_plan(self):
        assert build_sql(QueryPlan()) == 'SELECT * FROM "input_data"'

    def test_grouped_aggregate(self):
        plan = compile_plan(
            TransformationBuilder()
            .select(["value", "category"])
            .aggregate(AggregateType.SUM, ["value"])
            .group_by(["category"])
            .build()
        )
        sql = build_sql(plan)
        assert '"stage_0" AS (SELECT "value", "category" FROM "input_data")' in sql
        assert 'SUM("value") AS "sum(value)"' in sql
        assert 'GROUP BY "category"' in sql
        assert sql.endswith('SELECT * FROM "stage_1"')

    def test_count_null_sql(self):
        sql = build_sql(compile_plan(BuiltInMetricsBuilder().count_null("value")))
        assert 'COUNT(*) FILTER (WHERE "value" IS NULL) AS "count_null(value)"' in sql

    def test_identifiers_escaped(self):
        sql = build_sql(compile_plan(TransformationBuilder().select(['we"ird']).build()))
        assert '"we""ird"' in sql


# ============================================================================
# Registry
# ============================================================================


@pytest.fixture
def restore_runners():
    yield
    clear_registry()
    reregister_builtins()


class TestRunnerRegistry:
    """Tests for the runner registry."""

    def test_builtins_registered(self):
        assert list_runner_types() == ["arrow", "duckdb"]

    def test_get_runner(self):
        assert isinstance(get_runner("duckdb"), DuckDBQueryRunner)
        assert isinstance(get_runner("arrow"), ArrowQueryRunner)

    def test_unknown_engine(self):
        with pytest.raises(EngineError) as exc_info:
            get_runner("spark")
        assert "spark" in str(exc_info.value)
        assert "available_engines" in exc_info.value.context

    def test_register_duplicate_raises(self, restore_runners):
        with pytest.raises(EngineError, match="already registered"):
            register_runner("duckdb", DuckDBQueryRunner)

    def test_register_custom(self, restore_runners):
        @register_runner("custom")
        def create_custom():
            return ArrowQueryRunner()

        assert "custom" in list_runner_types()
        assert isinstance(get_runner("custom"), ArrowQueryRunner)

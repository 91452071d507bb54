"""PyArrow query runner built on pyarrow.compute and Table.group_by."""

import pyarrow as pa
import pyarrow.compute as pc

from df_metrics.core.plan import AggregateNode, Measure, ProjectNode, QueryPlan
from df_metrics.engines.registry import register_runner

# Hash aggregate names used by Table.group_by().aggregate()
_GROUPED_FUNCTIONS: dict[str, str] = {
    "sum": "sum",
    "count": "count",
    "avg": "mean",
    "min": "min",
    "max": "max",
    # count_null sums a boolean-to-int64 null mask, see _grouped_input
    "count_null": "sum",
}


def _scalar(measure: Measure, column: pa.ChunkedArray) -> pa.Scalar:
    function = measure.function
    if function == "sum":
        return pc.sum(column)
    if function == "count":
        return pc.count(column, mode="only_valid")
    if function == "avg":
        return pc.mean(column)
    if function == "min":
        return pc.min(column)
    if function == "max":
        return pc.max(column)
    if function == "count_null":
        return pc.count(column, mode="only_null")
    raise ValueError(f"Unsupported aggregate function: {function}")


def _grouped_input(measure: Measure, column: pa.ChunkedArray) -> pa.ChunkedArray:
    if measure.function == "count_null":
        return pc.cast(pc.is_null(column), pa.int64())
    if measure.function not in _GROUPED_FUNCTIONS:
        raise ValueError(f"Unsupported aggregate function: {measure.function}")
    return column


class ArrowQueryRunner:
    """Evaluates query plans with PyArrow compute kernels only."""

    def run(self, table: pa.Table, plan: QueryPlan) -> pa.Table:
        for node in plan.nodes:
            if isinstance(node, ProjectNode):
                table = table.select(list(node.columns))
            else:
                table = self._aggregate(table, node)
        return table

    def _aggregate(self, table: pa.Table, node: AggregateNode) -> pa.Table:
        if not node.keys:
            return self._aggregate_global(table, node)

        # One helper column per measure keeps output names collision free
        work = table.select(list(node.keys))
        aggregations = []
        for index, measure in enumerate(node.measures):
            helper = f"__measure_{index}"
            work = work.append_column(
                helper, _grouped_input(measure, table.column(measure.column))
            )
            aggregations.append((helper, _GROUPED_FUNCTIONS[measure.function]))

        grouped = work.group_by(list(node.keys)).aggregate(aggregations)

        arrays = [grouped.column(key) for key in node.keys]
        for (helper, function), measure in zip(aggregations, node.measures):
            arrays.append(grouped.column(f"{helper}_{function}"))
        return pa.Table.from_arrays(arrays, names=list(node.output_columns))

    def _aggregate_global(self, table: pa.Table, node: AggregateNode) -> pa.Table:
        arrays = []
        for measure in node.measures:
            scalar = _scalar(measure, table.column(measure.column))
            arrays.append(pa.array([scalar.as_py()], type=scalar.type))
        return pa.Table.from_arrays(arrays, names=list(node.output_columns))


@register_runner("arrow")
def create_arrow_runner() -> ArrowQueryRunner:
    """Factory function for ArrowQueryRunner."""
    return ArrowQueryRunner()

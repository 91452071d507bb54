"""DuckDB query runner: compiles a plan to SQL over a registered Arrow table."""

import logging

import duckdb
import pyarrow as pa

from df_metrics.core.plan import AggregateNode, Measure, PlanNode, ProjectNode, QueryPlan
from df_metrics.engines.registry import register_runner

logger = logging.getLogger(__name__)

INPUT_RELATION = "input_data"

_AGGREGATE_SQL: dict[str, str] = {
    "sum": "SUM({column})",
    "count": "COUNT({column})",
    "avg": "AVG({column})",
    "min": "MIN({column})",
    "max": "MAX({column})",
    "count_null": "COUNT(*) FILTER (WHERE {column} IS NULL)",
}


def quote_identifier(name: str) -> str:
    """Quote a column or relation name for DuckDB."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def _measure_sql(measure: Measure) -> str:
    template = _AGGREGATE_SQL.get(measure.function)
    if template is None:
        raise ValueError(f"Unsupported aggregate function: {measure.function}")
    expression = template.format(column=quote_identifier(measure.column))
    return f"{expression} AS {quote_identifier(measure.alias)}"


def _node_sql(node: PlanNode, source: str) -> str:
    if isinstance(node, ProjectNode):
        columns = ", ".join(quote_identifier(c) for c in node.columns)
        return f"SELECT {columns} FROM {source}"

    select_items = [quote_identifier(k) for k in node.keys]
    select_items.extend(_measure_sql(m) for m in node.measures)
    sql = f"SELECT {', '.join(select_items)} FROM {source}"
    if node.keys:
        sql += " GROUP BY " + ", ".join(quote_identifier(k) for k in node.keys)
    return sql


def build_sql(plan: QueryPlan, relation: str = INPUT_RELATION) -> str:
    """Build one SQL statement with a CTE per plan node."""
    source = quote_identifier(relation)
    if not plan.nodes:
        return f"SELECT * FROM {source}"

    ctes = []
    for index, node in enumerate(plan.nodes):
        name = quote_identifier(f"stage_{index}")
        ctes.append(f"{name} AS ({_node_sql(node, source)})")
        source = name

    return f"WITH {', '.join(ctes)} SELECT * FROM {source}"


class DuckDBQueryRunner:
    """Runs query plans in a fresh in-memory DuckDB connection per call."""

    def __init__(self, database: str = ":memory:"):
        self._database = database

    def run(self, table: pa.Table, plan: QueryPlan) -> pa.Table:
        sql = build_sql(plan)
        logger.debug(f"Running DuckDB query: {sql}")

        conn = duckdb.connect(self._database)
        try:
            conn.register(INPUT_RELATION, table)
            return conn.execute(sql).fetch_arrow_table()
        finally:
            conn.close()


@register_runner("duckdb")
def create_duckdb_runner() -> DuckDBQueryRunner:
    """Factory function for DuckDBQueryRunner."""
    return DuckDBQueryRunner()

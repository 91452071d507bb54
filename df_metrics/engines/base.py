"""Protocol for the compute engines that execute query plans."""

from typing import Protocol, runtime_checkable

import pyarrow as pa

from df_metrics.core.plan import QueryPlan


@runtime_checkable
class QueryRunner(Protocol):
    """Executes a query plan against an in-memory Arrow table.

    Implementations plan, run and collect in one call. They may raise any
    exception; the execution adapter wraps failures into ComputeError.

    Example:
        class MyRunner:
            def run(self, table: pa.Table, plan: QueryPlan) -> pa.Table:
                ...
    """

    def run(self, table: pa.Table, plan: QueryPlan) -> pa.Table:
        """Run ``plan`` over ``table`` and return the materialized result."""
        ...

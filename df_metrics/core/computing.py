"""Execution adapter: the only place that hands data to a compute engine."""

import asyncio
import logging
from concurrent.futures import Executor
from typing import Optional, Sequence

import pyarrow as pa

from df_metrics.core.batch import combine, common_schema
from df_metrics.core.definition import Transformation
from df_metrics.core.exceptions import ComputeError
from df_metrics.core.plan import compile_plan
from df_metrics.engines.base import QueryRunner
from df_metrics.engines.duckdb_runner import DuckDBQueryRunner

logger = logging.getLogger(__name__)


def default_runner() -> QueryRunner:
    """Return the default engine (DuckDB)."""
    return DuckDBQueryRunner()


async def execute(
    batches: Sequence[pa.RecordBatch],
    transformation: Transformation,
    runner: Optional[QueryRunner] = None,
    executor: Optional[Executor] = None,
) -> list[pa.RecordBatch]:
    """Apply a transformation to batches and return the result batches.

    The batches are treated as one logical table, concatenated in input
    order. The engine call runs in ``executor`` (the loop's default executor
    when None), which is where this coroutine suspends.

    Args:
        batches: Input record batches sharing one schema
        transformation: Plan to apply
        runner: Compute engine; DuckDB when None
        executor: Executor for the blocking engine call

    Returns:
        Result batches in engine order. Empty input yields an empty list.

    Raises:
        ComputeError: If the batch schemas disagree or the engine fails
    """
    if not batches:
        return []

    if transformation.is_identity:
        common_schema(batches)
        return list(batches)

    table = combine(batches)
    plan = compile_plan(transformation)
    runner = runner or default_runner()

    logger.debug(
        f"Executing {len(plan.nodes)} plan nodes over {table.num_rows} rows",
        extra={"context": {"engine": type(runner).__name__}},
    )

    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(executor, runner.run, table, plan)
    except ComputeError:
        raise
    except Exception as e:
        raise ComputeError(
            f"Query execution failed: {e}",
            context={
                "engine": type(runner).__name__,
                "stages": len(transformation.stages),
            },
        ) from e

    return result.to_batches()

"""Compute engines that execute query plans.

Runners register themselves by name on import: ``duckdb`` and ``arrow``.
"""

from df_metrics.engines.base import QueryRunner

# Registry must be imported first (runner modules use register_runner on import)
from df_metrics.engines.registry import (
    RunnerFactory,
    clear_registry,
    get_runner,
    list_runner_types,
    register_runner,
)
from df_metrics.engines.arrow_runner import ArrowQueryRunner, create_arrow_runner
from df_metrics.engines.duckdb_runner import (
    DuckDBQueryRunner,
    build_sql,
    create_duckdb_runner,
)


def reregister_builtins() -> None:
    """Re-register built-in runners after the registry is cleared (tests)."""
    current = list_runner_types()
    if "duckdb" not in current:
        register_runner("duckdb", create_duckdb_runner)
    if "arrow" not in current:
        register_runner("arrow", create_arrow_runner)


__all__ = [
    "QueryRunner",
    "RunnerFactory",
    "register_runner",
    "get_runner",
    "list_runner_types",
    "clear_registry",
    "reregister_builtins",
    "ArrowQueryRunner",
    "DuckDBQueryRunner",
    "build_sql",
    "create_arrow_runner",
    "create_duckdb_runner",
]

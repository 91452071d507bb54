"""Registry of query runner factories, keyed by engine name."""

from typing import Callable, overload

from df_metrics.core.exceptions import EngineError
from df_metrics.engines.base import QueryRunner

RunnerFactory = Callable[[], QueryRunner]

_runner_registry: dict[str, RunnerFactory] = {}


@overload
def register_runner(engine: str) -> Callable[[RunnerFactory], RunnerFactory]: ...


@overload
def register_runner(engine: str, factory: RunnerFactory) -> None: ...


def register_runner(
    engine: str,
    factory: RunnerFactory | None = None,
) -> Callable[[RunnerFactory], RunnerFactory] | None:
    """Register a query runner factory.

    Can be used as a decorator or called directly:

        @register_runner("duckdb")
        def create_duckdb_runner():
            return DuckDBQueryRunner()

        register_runner("duckdb", create_duckdb_runner)

    Raises:
        EngineError: If a runner with the same name is already registered.
    """

    def _register(f: RunnerFactory) -> RunnerFactory:
        if engine in _runner_registry:
            raise EngineError(
                f"Query runner '{engine}' is already registered",
                context={"engine": engine},
            )
        _runner_registry[engine] = f
        return f

    if factory is not None:
        _register(factory)
        return None

    return _register


def get_runner(engine: str) -> QueryRunner:
    """Create a query runner for the named engine.

    Raises:
        EngineError: If the engine is not registered.
    """
    factory = _runner_registry.get(engine)
    if factory is None:
        available = ", ".join(sorted(_runner_registry.keys())) or "(none)"
        raise EngineError(
            f"Unknown engine: '{engine}'",
            context={"engine": engine, "available_engines": available},
        )
    return factory()


def list_runner_types() -> list[str]:
    """Return the sorted names of all registered engines."""
    return sorted(_runner_registry.keys())


def clear_registry() -> None:
    """Remove all registered runners. Intended for testing only."""
    _runner_registry.clear()

"""MetricsManager: stages a transformation and batches, then publishes.

Example:
    >>> manager = (
    ...     MetricsManager()
    ...     .transform(BuiltInMetricsBuilder().count_null("value"))
    ...     .execute([record_batch])
    ... )
    >>> await manager.publish(StorageBackend.STDOUT)
"""

import asyncio
import logging
import time
from concurrent.futures import Executor
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional

import pyarrow as pa

from df_metrics.core.batch import TabularData, as_record_batches
from df_metrics.core.computing import default_runner, execute
from df_metrics.core.definition import Transformation
from df_metrics.core.stats import RunStats
from df_metrics.engines.base import QueryRunner
from df_metrics.storage import StorageBackend, get_sink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricsManager:
    """Immutable pipeline facade.

    ``transform`` and ``execute`` only stage configuration and return a new
    manager; nothing is computed until ``publish``. Managers can be forked
    freely to try several transformations or backends.
    """

    transformation: Transformation = field(default_factory=Transformation)
    batches: tuple[pa.RecordBatch, ...] = ()
    runner: QueryRunner = field(default_factory=default_runner)

    def transform(self, transformation: Transformation) -> "MetricsManager":
        """Return a manager configured with ``transformation``."""
        return replace(self, transformation=transformation)

    def execute(self, batches: Iterable[TabularData]) -> "MetricsManager":
        """Return a manager with ``batches`` staged.

        This only attaches the data; the computation runs in ``publish``.
        Tables are accepted and split into their record batches.
        """
        return replace(self, batches=as_record_batches(batches))

    def with_runner(self, runner: QueryRunner) -> "MetricsManager":
        """Return a manager that computes with ``runner``."""
        return replace(self, runner=runner)

    async def publish(
        self,
        storage_backend: StorageBackend | str,
        executor: Optional[Executor] = None,
        **sink_options: Any,
    ) -> None:
        """Run the staged transformation and write the results to a backend.

        The sink is resolved before any computation, so an unsupported
        backend fails without running the query. The engine call and the
        sink write both run in ``executor``.

        Args:
            storage_backend: Where to publish the result batches
            executor: Executor for blocking work; loop default when None
            **sink_options: Passed to the sink factory (e.g. ``stream``)

        Raises:
            UnsupportedStorageBackend: If the backend has no sink
            ComputeError: If the engine fails
            PublishError: If the sink fails to write
        """
        sink = get_sink(storage_backend, **sink_options)
        backend = str(storage_backend)
        stats = RunStats(backend=backend)
        stats.record_input(
            len(self.batches), sum(batch.num_rows for batch in self.batches)
        )

        logger.info(
            f"Publishing {len(self.transformation.stages)} stages over "
            f"{stats.input_rows} rows",
            extra={"backend": backend},
        )

        compute_start = time.time()
        results = await execute(
            self.batches, self.transformation, runner=self.runner, executor=executor
        )
        stats.record_compute(
            len(results),
            sum(batch.num_rows for batch in results),
            time.time() - compute_start,
        )

        write_start = time.time()
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(executor, sink.write, results)
        stats.record_write(time.time() - write_start)

        stats.finish()
        logger.info(f"Published: {stats.get_summary()}", extra={"backend": backend})

    def publish_sync(
        self,
        storage_backend: StorageBackend | str,
        executor: Optional[Executor] = None,
        **sink_options: Any,
    ) -> None:
        """Blocking variant of ``publish`` for callers without an event loop."""
        asyncio.run(self.publish(storage_backend, executor=executor, **sink_options))

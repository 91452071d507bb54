"""Publish result batches to a storage backend."""

from typing import Any, Sequence

import pyarrow as pa

from df_metrics.storage.backend import StorageBackend
from df_metrics.storage.registry import get_sink


def publish(
    batches: Sequence[pa.RecordBatch],
    backend: StorageBackend | str,
    **options: Any,
) -> None:
    """Write batches, in order, to ``backend``.

    Args:
        batches: Result batches to write
        backend: Target storage backend
        **options: Sink options (e.g. ``stream`` for stdout)

    Raises:
        UnsupportedStorageBackend: If the backend has no sink; nothing is written
        PublishError: If the sink fails to write
    """
    sink = get_sink(backend, **options)
    sink.write(batches)

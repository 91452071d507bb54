"""Protocol for storage sinks."""

from typing import Protocol, Sequence, runtime_checkable

import pyarrow as pa


@runtime_checkable
class Sink(Protocol):
    """Writes result batches to one storage backend.

    A sink either writes every batch, in order, or raises PublishError.
    """

    def write(self, batches: Sequence[pa.RecordBatch]) -> None:
        """Write all batches to the backend."""
        ...

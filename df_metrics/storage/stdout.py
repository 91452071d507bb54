"""Stdout sink: human-readable dump of each result batch."""

import sys
from typing import Optional, Sequence, TextIO

import pyarrow as pa

from df_metrics.core.exceptions import PublishError
from df_metrics.storage.backend import StorageBackend
from df_metrics.storage.registry import register_sink


def render_batch(batch: pa.RecordBatch) -> str:
    """Textual form of a batch. Not a stable format."""
    return str(pa.Table.from_batches([batch]))


class StdoutSink:
    """Writes batches to standard output (or any text stream)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def write(self, batches: Sequence[pa.RecordBatch]) -> None:
        """Render every batch first, then write them in order.

        Raises:
            PublishError: If the stream cannot be written.
        """
        rendered = [render_batch(batch) for batch in batches]
        # resolved at write time so redirected sys.stdout is honoured
        stream = self._stream if self._stream is not None else sys.stdout
        try:
            for text in rendered:
                stream.write(text + "\n")
            stream.flush()
        except OSError as e:
            raise PublishError(
                f"Failed to write to stdout: {e}",
                context={"backend": StorageBackend.STDOUT.value},
            ) from e


@register_sink(StorageBackend.STDOUT)
def create_stdout_sink(stream: Optional[TextIO] = None) -> StdoutSink:
    """Factory function for StdoutSink."""
    return StdoutSink(stream=stream)

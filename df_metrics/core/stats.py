"""Run statistics collected during one publish call."""

import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RunStats:
    """Collects timings and row counts for a pipeline run."""

    backend: str
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    input_batches: int = 0
    input_rows: int = 0
    output_batches: int = 0
    output_rows: int = 0
    compute_time: float = 0.0
    write_time: float = 0.0
    execution_time: float = 0.0

    def record_input(self, batch_count: int, row_count: int) -> None:
        self.input_batches = batch_count
        self.input_rows = row_count

    def record_compute(self, batch_count: int, row_count: int, elapsed: float) -> None:
        """Record the result of the execution adapter.

        Args:
            batch_count: Number of result batches
            row_count: Total rows across result batches
            elapsed: Seconds spent in the compute engine
        """
        self.output_batches = batch_count
        self.output_rows = row_count
        self.compute_time = elapsed

    def record_write(self, elapsed: float) -> None:
        self.write_time = elapsed

    def finish(self) -> None:
        """Mark the run as finished and compute the total time."""
        self.end_time = time.time()
        self.execution_time = self.end_time - self.start_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "backend": self.backend,
            "input_batches": self.input_batches,
            "input_rows": self.input_rows,
            "output_batches": self.output_batches,
            "output_rows": self.output_rows,
            "compute_time": self.compute_time,
            "write_time": self.write_time,
            "execution_time": self.execution_time,
        }

    def get_summary(self) -> str:
        """Get human-readable summary of the run."""
        if not self.end_time:
            self.finish()

        return " | ".join(
            [
                f"Backend: {self.backend}",
                f"Input: {self.input_rows} rows in {self.input_batches} batches",
                f"Output: {self.output_rows} rows in {self.output_batches} batches",
                f"Compute: {self.compute_time:.3f}s",
                f"Time: {self.execution_time:.3f}s",
            ]
        )

"""Read input files into Arrow record batches."""

from pathlib import Path

import pyarrow as pa
import pyarrow.csv as pa_csv
import pyarrow.parquet as pq

from df_metrics.core.exceptions import RecipeError

SUPPORTED_EXTENSIONS = (".csv", ".parquet")


def read_batches(path: str) -> list[pa.RecordBatch]:
    """Read a CSV or Parquet file into record batches.

    Raises:
        RecipeError: If the file is missing, unreadable or has an unsupported extension
    """
    file_path = Path(path)
    if not file_path.exists():
        raise RecipeError(f"Input file not found: {path}")

    suffix = file_path.suffix.lower()
    try:
        if suffix == ".csv":
            table = pa_csv.read_csv(file_path)
        elif suffix == ".parquet":
            table = pq.read_table(file_path)
        else:
            raise RecipeError(
                f"Unsupported input format: {suffix or '(none)'}",
                context={"path": str(path), "supported": list(SUPPORTED_EXTENSIONS)},
            )
    except (pa.ArrowInvalid, OSError) as e:
        raise RecipeError(
            f"Failed to read input file: {e}", context={"path": str(path)}
        ) from e

    return table.to_batches()

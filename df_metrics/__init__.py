"""df-metrics - declarative data-quality metrics over Arrow batches.

Declare select / aggregate / group-by / built-in metric stages, stage them
with record batches on a MetricsManager, and publish the results to a
storage backend.
"""

__version__ = "0.1.0"

# Core classes
from df_metrics.core.computing import execute
from df_metrics.core.definition import (
    AggregateType,
    BuiltInMetric,
    BuiltInMetricsBuilder,
    Transformation,
    TransformationBuilder,
)

# Exceptions
from df_metrics.core.exceptions import (
    ComputeError,
    EngineError,
    MetricsError,
    PublishError,
    RecipeError,
    UnsupportedStorageBackend,
)
from df_metrics.engines import ArrowQueryRunner, DuckDBQueryRunner, QueryRunner
from df_metrics.metrics import MetricsManager
from df_metrics.storage import StorageBackend, publish

# Public API
from df_metrics.api import from_yaml, run_recipe, run_recipe_from_yaml
from df_metrics.models.recipe import MetricsRecipe

__all__ = [
    # Version
    "__version__",
    # Public API
    "from_yaml",
    "run_recipe",
    "run_recipe_from_yaml",
    # Core classes
    "MetricsManager",
    "MetricsRecipe",
    "Transformation",
    "TransformationBuilder",
    "BuiltInMetricsBuilder",
    "AggregateType",
    "BuiltInMetric",
    "StorageBackend",
    "QueryRunner",
    "DuckDBQueryRunner",
    "ArrowQueryRunner",
    "execute",
    "publish",
    # Exceptions
    "MetricsError",
    "ComputeError",
    "PublishError",
    "UnsupportedStorageBackend",
    "RecipeError",
    "EngineError",
]

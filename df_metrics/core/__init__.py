"""Core module for df_metrics package."""

from df_metrics.core.batch import as_record_batches, combine, from_rows, to_rows
from df_metrics.core.computing import execute
from df_metrics.core.definition import (
    AggregateStage,
    AggregateType,
    BuiltInMetric,
    BuiltInMetricsBuilder,
    BuiltInMetricStage,
    GroupByStage,
    SelectStage,
    Transformation,
    TransformationBuilder,
)
from df_metrics.core.exceptions import (
    ComputeError,
    EngineError,
    MetricsError,
    PublishError,
    RecipeError,
    UnsupportedStorageBackend,
)
from df_metrics.core.plan import AggregateNode, Measure, ProjectNode, QueryPlan, compile_plan
from df_metrics.core.stats import RunStats

__all__ = [
    "AggregateStage",
    "AggregateType",
    "BuiltInMetric",
    "BuiltInMetricStage",
    "BuiltInMetricsBuilder",
    "GroupByStage",
    "SelectStage",
    "Transformation",
    "TransformationBuilder",
    "execute",
    "compile_plan",
    "QueryPlan",
    "ProjectNode",
    "AggregateNode",
    "Measure",
    "RunStats",
    "as_record_batches",
    "combine",
    "from_rows",
    "to_rows",
    "MetricsError",
    "ComputeError",
    "PublishError",
    "UnsupportedStorageBackend",
    "RecipeError",
    "EngineError",
]

"""Declarative transformation model and the builders that assemble it.

A Transformation is an ordered, immutable list of stages:

    TransformationBuilder()
        .select(["id", "value", "category"])
        .aggregate(AggregateType.SUM, ["value"])
        .group_by(["category"])
        .build()

Nothing here touches data. Column references are resolved when the
transformation is executed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AggregateType(str, Enum):
    """Aggregate functions supported by aggregate stages."""

    SUM = "sum"
    COUNT = "count"
    AVG = "avg"
    MIN = "min"
    MAX = "max"


class BuiltInMetric(str, Enum):
    """Predefined metrics computed by built-in metric stages."""

    COUNT_NULL = "count_null"


def output_name(function: str, column: str) -> str:
    """Default output column name for an aggregate or metric, e.g. ``sum(value)``."""
    return f"{function}({column})"


def _ordered_unique(columns: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(columns))


class _Stage(BaseModel):
    model_config = ConfigDict(frozen=True)


class _ColumnsStage(_Stage):
    columns: tuple[str, ...] = Field(description="Ordered set of column names")

    @field_validator("columns", mode="before")
    @classmethod
    def dedupe_columns(cls, v):
        """Keep the first occurrence of each column name."""
        if isinstance(v, str):
            return (v,)
        return _ordered_unique(v)


class SelectStage(_ColumnsStage):
    """Restrict and reorder the columns of the current relation."""

    type: Literal["select"] = "select"


class AggregateStage(_ColumnsStage):
    """Compute ``function`` over each target column."""

    type: Literal["aggregate"] = "aggregate"
    function: AggregateType = Field(description="Aggregate function")


class GroupByStage(_ColumnsStage):
    """Partition rows by the given columns before aggregation."""

    type: Literal["group_by"] = "group_by"


class BuiltInMetricStage(_Stage):
    """Compute a predefined statistic for one column."""

    type: Literal["builtin_metric"] = "builtin_metric"
    metric: BuiltInMetric = Field(description="Built-in metric kind")
    column: str = Field(description="Source column")
    alias: Optional[str] = Field(default=None, description="Output column name")

    @property
    def output_name(self) -> str:
        return self.alias or output_name(self.metric.value, self.column)


Stage = Annotated[
    Union[SelectStage, AggregateStage, GroupByStage, BuiltInMetricStage],
    Field(discriminator="type"),
]


class Transformation(BaseModel):
    """Immutable, ordered plan of stages.

    An empty transformation is the identity: batches pass through unchanged.
    """

    model_config = ConfigDict(frozen=True)

    stages: tuple[Stage, ...] = Field(
        default_factory=tuple, description="Stages in the order they were added"
    )

    @property
    def is_identity(self) -> bool:
        return len(self.stages) == 0


@dataclass(frozen=True)
class TransformationBuilder:
    """Fluent, immutable builder for Transformation.

    Each method returns a new builder, so any intermediate builder can be
    branched from without affecting the others.
    """

    stages: tuple[Stage, ...] = ()

    def _append(self, stage: Stage) -> "TransformationBuilder":
        return TransformationBuilder(self.stages + (stage,))

    def select(self, columns: Iterable[str]) -> "TransformationBuilder":
        """Append a select stage."""
        return self._append(SelectStage(columns=columns))

    def aggregate(
        self, kind: AggregateType | str, columns: Iterable[str]
    ) -> "TransformationBuilder":
        """Append an aggregate stage computing ``kind`` over each column."""
        return self._append(AggregateStage(function=kind, columns=columns))

    def group_by(self, columns: Iterable[str]) -> "TransformationBuilder":
        """Append a group-by stage."""
        return self._append(GroupByStage(columns=columns))

    def build(self) -> Transformation:
        """Return the accumulated transformation. Executes nothing."""
        return Transformation(stages=self.stages)


class BuiltInMetricsBuilder:
    """Factory for ready-made single-stage transformations."""

    def count_null(self, column: str, alias: Optional[str] = None) -> Transformation:
        """Count null values of ``column`` across all input rows.

        The result column is named ``alias`` or, by default,
        ``count_null(<column>)``.
        """
        stage = BuiltInMetricStage(
            metric=BuiltInMetric.COUNT_NULL, column=column, alias=alias
        )
        return Transformation(stages=(stage,))

"""Engine-neutral query plan compiled from a Transformation.

Stage order maps onto plan nodes as follows:

- every select stage becomes a ProjectNode;
- every contiguous run of group-by, aggregate and built-in metric stages
  becomes a single AggregateNode whose keys are the run's group-by columns
  and whose measures are the run's aggregates and metrics.

Query runners execute the nodes in order against the input table.
"""

from dataclasses import dataclass
from typing import Union

from df_metrics.core.definition import (
    AggregateStage,
    BuiltInMetricStage,
    GroupByStage,
    SelectStage,
    Transformation,
    output_name,
)


@dataclass(frozen=True)
class Measure:
    """One output column of an aggregation: ``function(column) AS alias``."""

    function: str
    column: str
    alias: str


@dataclass(frozen=True)
class ProjectNode:
    columns: tuple[str, ...]


@dataclass(frozen=True)
class AggregateNode:
    """Grouped (or global, when ``keys`` is empty) aggregation.

    Output columns are the keys followed by the measures.
    """

    keys: tuple[str, ...]
    measures: tuple[Measure, ...]

    @property
    def output_columns(self) -> tuple[str, ...]:
        return self.keys + tuple(m.alias for m in self.measures)


PlanNode = Union[ProjectNode, AggregateNode]


@dataclass(frozen=True)
class QueryPlan:
    nodes: tuple[PlanNode, ...] = ()


class _AggregateRun:
    """Accumulates one contiguous run of aggregation stages."""

    def __init__(self) -> None:
        self.keys: dict[str, None] = {}
        self.measures: dict[str, Measure] = {}

    def add(self, stage: AggregateStage | GroupByStage | BuiltInMetricStage) -> None:
        if isinstance(stage, GroupByStage):
            self.keys.update(dict.fromkeys(stage.columns))
        elif isinstance(stage, AggregateStage):
            function = stage.function.value
            for column in stage.columns:
                alias = output_name(function, column)
                self.measures.setdefault(alias, Measure(function, column, alias))
        else:
            alias = stage.output_name
            self.measures.setdefault(
                alias, Measure(stage.metric.value, stage.column, alias)
            )

    def to_node(self) -> AggregateNode | None:
        if not self.keys and not self.measures:
            return None
        return AggregateNode(
            keys=tuple(self.keys), measures=tuple(self.measures.values())
        )


def compile_plan(transformation: Transformation) -> QueryPlan:
    """Translate the stage list of a transformation into plan nodes."""
    nodes: list[PlanNode] = []
    run: _AggregateRun | None = None

    def flush() -> None:
        nonlocal run
        if run is not None:
            node = run.to_node()
            if node is not None:
                nodes.append(node)
            run = None

    for stage in transformation.stages:
        if isinstance(stage, SelectStage):
            flush()
            nodes.append(ProjectNode(columns=stage.columns))
        else:
            if run is None:
                run = _AggregateRun()
            run.add(stage)
    flush()

    return QueryPlan(nodes=tuple(nodes))

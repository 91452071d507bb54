"""Unit tests for the transformation model and builders."""

import pytest
from pydantic import ValidationError

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


class TestTransformation:
    """Tests for the Transformation value."""

    def test_default_is_identity(self):
        """An empty transformation is the identity."""
        transformation = Transformation()
        assert transformation.stages == ()
        assert transformation.is_identity
        assert len(transformation.stages) == 0

    def test_is_frozen(self):
        """Transformations cannot be modified after creation."""
        transformation = TransformationBuilder().select(["id"]).build()
        with pytest.raises(ValidationError):
            transformation.stages = ()

    def test_from_dict_discriminates_stages(self):
        """Stage dicts are parsed by their 'type' field."""
        transformation = Transformation.model_validate(
            {
                "stages": [
                    {"type": "select", "columns": ["id", "value"]},
                    {"type": "aggregate", "function": "sum", "columns": ["value"]},
                    {"type": "group_by", "columns": ["category"]},
                    {"type": "builtin_metric", "metric": "count_null", "column": "value"},
                ]
            }
        )
        assert [type(s) for s in transformation.stages] == [
            SelectStage,
            AggregateStage,
            GroupByStage,
            BuiltInMetricStage,
        ]
        assert transformation.stages[1].function is AggregateType.SUM

    def test_unknown_stage_type_rejected(self):
        """Unknown stage types fail validation."""
        with pytest.raises(ValidationError):
            Transformation.model_validate({"stages": [{"type": "pivot", "columns": ["a"]}]})


class TestTransformationBuilder:
    """Tests for TransformationBuilder."""

    def test_stages_recorded_in_order(self):
        """Stages appear in the order the methods were called."""
        transformation = (
            TransformationBuilder()
            .select(["id", "value", "category"])
            .aggregate(AggregateType.SUM, ["value"])
            .group_by(["category"])
            .build()
        )
        assert transformation.stages == (
            SelectStage(columns=("id", "value", "category")),
            AggregateStage(function=AggregateType.SUM, columns=("value",)),
            GroupByStage(columns=("category",)),
        )

    def test_build_is_pure(self):
        """Building twice yields equal transformations."""
        builder = TransformationBuilder().select(["id"]).group_by(["id"])
        assert builder.build() == builder.build()

    def test_build_empty_builder(self):
        """An unused builder builds the identity transformation."""
        assert TransformationBuilder().build() == Transformation()

    def test_builder_branches_are_independent(self):
        """Appending to one branch never affects another."""
        base = TransformationBuilder().select(["id", "value"])
        summed = base.aggregate(AggregateType.SUM, ["value"])
        grouped = base.group_by(["id"])

        assert len(base.build().stages) == 1
        assert isinstance(summed.build().stages[1], AggregateStage)
        assert isinstance(grouped.build().stages[1], GroupByStage)

    def test_built_transformation_unaffected_by_later_calls(self):
        """A returned transformation does not change when the builder grows."""
        builder = TransformationBuilder().select(["id"])
        first = builder.build()
        builder.group_by(["id"]).build()
        assert first == Transformation(stages=(SelectStage(columns=("id",)),))

    def test_aggregate_accepts_string_kind(self):
        """Aggregate kind may be given by value."""
        transformation = TransformationBuilder().aggregate("max", ["value"]).build()
        assert transformation.stages[0].function is AggregateType.MAX

    def test_columns_deduplicated_in_order(self):
        """Column lists are ordered sets."""
        transformation = TransformationBuilder().select(["b", "a", "b"]).build()
        assert transformation.stages[0].columns == ("b", "a")

    def test_unknown_columns_accepted(self):
        """Builders never check columns against a schema."""
        transformation = (
            TransformationBuilder().select(["missing"]).group_by(["nowhere"]).build()
        )
        assert len(transformation.stages) == 2


class TestBuiltInMetricsBuilder:
    """Tests for BuiltInMetricsBuilder."""

    def test_count_null_single_stage(self):
        """count_null yields one built-in metric stage."""
        transformation = BuiltInMetricsBuilder().count_null("value")
        (stage,) = transformation.stages
        assert stage.metric is BuiltInMetric.COUNT_NULL
        assert stage.column == "value"
        assert stage.alias is None

    def test_count_null_default_output_name(self):
        """Without alias the output is named count_null(<column>)."""
        stage = BuiltInMetricsBuilder().count_null("value").stages[0]
        assert stage.output_name == "count_null(value)"

    def test_count_null_alias(self):
        """An alias renames the output column."""
        stage = BuiltInMetricsBuilder().count_null("value", alias="missing_values").stages[0]
        assert stage.output_name == "missing_values"

    def test_calls_are_independent(self):
        """Each call returns a fresh, equal-by-value transformation."""
        builder = BuiltInMetricsBuilder()
        first = builder.count_null("value")
        second = builder.count_null("value")
        assert first == second
        assert first is not second
        assert builder.count_null("id") != first

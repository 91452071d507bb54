"""Configuration models for metrics recipes."""

from df_metrics.models.loader import load_recipe
from df_metrics.models.recipe import MetricsRecipe
from df_metrics.models.runtime_config import RuntimeConfig

__all__ = ["MetricsRecipe", "RuntimeConfig", "load_recipe"]

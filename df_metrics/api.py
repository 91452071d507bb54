"""Public Python API for running metrics recipes.

This module provides the main entry points for loading and executing recipes.
"""

from typing import Iterable, Optional

from df_metrics.core.batch import TabularData
from df_metrics.engines import get_runner
from df_metrics.metrics import MetricsManager
from df_metrics.models.loader import load_recipe
from df_metrics.models.recipe import MetricsRecipe
from df_metrics.storage.backend import StorageBackend


def from_yaml(path: str) -> MetricsRecipe:
    """Load a recipe from a YAML file.

    Raises:
        RecipeError: If file not found, invalid YAML or validation fails

    Example:
        >>> recipe = from_yaml("recipes/value_quality.yaml")
        >>> print(recipe.name)
        value_quality
    """
    return load_recipe(path)


def build_manager(recipe: MetricsRecipe, batches: Iterable[TabularData]) -> MetricsManager:
    """Create a manager staged with the recipe's transformation, engine and batches.

    Raises:
        EngineError: If the recipe names an unknown engine
    """
    return (
        MetricsManager(runner=get_runner(recipe.runtime.engine))
        .transform(recipe.transformation)
        .execute(batches)
    )


def run_recipe(
    recipe: MetricsRecipe,
    batches: Iterable[TabularData],
    storage_backend: Optional[StorageBackend | str] = None,
) -> None:
    """Execute a recipe over batches and publish the results.

    Args:
        recipe: Recipe to execute
        batches: Input record batches or tables
        storage_backend: Overrides the recipe's backend when given

    Raises:
        EngineError: If the recipe names an unknown engine
        ComputeError: If the query fails
        UnsupportedStorageBackend: If the backend has no sink
        PublishError: If writing fails

    Example:
        >>> recipe = from_yaml("recipes/value_quality.yaml")
        >>> run_recipe(recipe, [record_batch])
    """
    backend = storage_backend or recipe.storage_backend
    build_manager(recipe, batches).publish_sync(backend)


def run_recipe_from_yaml(
    recipe_path: str,
    batches: Iterable[TabularData],
    storage_backend: Optional[StorageBackend | str] = None,
) -> None:
    """Load a recipe from YAML and run it over batches.

    Convenience function that combines `from_yaml()` and `run_recipe()`.
    """
    recipe = from_yaml(recipe_path)
    run_recipe(recipe, batches, storage_backend=storage_backend)

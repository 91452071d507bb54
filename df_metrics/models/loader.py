"""Recipe loader with YAML parsing and validation."""

from pathlib import Path

import yaml

from df_metrics.core.exceptions import RecipeError
from df_metrics.models.recipe import MetricsRecipe


def load_recipe(path: str) -> MetricsRecipe:
    """Load a metrics recipe from a YAML file.

    Args:
        path: Path to recipe YAML file

    Returns:
        Validated MetricsRecipe instance

    Raises:
        RecipeError: If file not found, invalid YAML or validation fails
    """
    recipe_path = Path(path)
    if not recipe_path.exists():
        raise RecipeError(f"Recipe file not found: {path}")

    try:
        with open(recipe_path, "r", encoding="utf-8") as f:
            recipe_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RecipeError(
            f"Invalid YAML in recipe file: {e}", context={"path": str(path)}
        ) from e

    if not isinstance(recipe_dict, dict):
        raise RecipeError(
            "Recipe file must contain a YAML dictionary",
            context={"path": str(path)},
        )

    try:
        return MetricsRecipe.from_dict(recipe_dict)
    except Exception as e:
        raise RecipeError(
            f"Recipe validation failed: {e}", context={"path": str(path)}
        ) from e

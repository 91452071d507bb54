"""CLI command for validating recipes."""

import sys

import click

from df_metrics.core.exceptions import RecipeError
from df_metrics.core.plan import compile_plan
from df_metrics.engines import list_runner_types
from df_metrics.models.loader import load_recipe
from df_metrics.storage import list_supported_backends


@click.command()
@click.argument("recipe_path", type=click.Path(exists=True))
def validate(recipe_path: str):
    """Validate a recipe YAML file.

    Checks YAML syntax, the recipe schema, and that the engine and storage
    backend are available. Column references are checked at run time.

    Examples:

        df-metrics validate recipe.yaml
    """
    try:
        recipe = load_recipe(recipe_path)
    except RecipeError as e:
        click.echo(f"✗ Recipe validation failed: {e}", err=True)
        sys.exit(1)

    problems = []
    if recipe.runtime.engine not in list_runner_types():
        problems.append(f"unknown engine '{recipe.runtime.engine}'")
    if recipe.storage_backend.value not in list_supported_backends():
        problems.append(f"unsupported storage backend '{recipe.storage_backend.value}'")

    if problems:
        click.echo(f"✗ Recipe '{recipe.name}' is invalid: {'; '.join(problems)}", err=True)
        sys.exit(1)

    plan = compile_plan(recipe.transformation)
    click.echo(f"✓ Recipe '{recipe.name}' is valid")
    click.echo(f"  Stages: {len(recipe.transformation.stages)}")
    click.echo(f"  Plan nodes: {len(plan.nodes)}")
    click.echo(f"  Engine: {recipe.runtime.engine}")
    click.echo(f"  Storage backend: {recipe.storage_backend.value}")

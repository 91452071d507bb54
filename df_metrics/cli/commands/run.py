"""CLI command for running metrics recipes."""

import sys

import click

from df_metrics.api import run_recipe
from df_metrics.core.exceptions import (
    ComputeError,
    EngineError,
    PublishError,
    RecipeError,
)
from df_metrics.core.logging import configure_logging
from df_metrics.io import read_batches
from df_metrics.models.loader import load_recipe


@click.command()
@click.argument("recipe_path", type=click.Path(exists=True))
@click.option(
    "--input",
    "inputs",
    multiple=True,
    required=True,
    type=click.Path(exists=True),
    help="CSV or Parquet input file (can be used multiple times)",
)
@click.option("--backend", help="Storage backend overriding the recipe's (e.g., 'stdout')")
@click.option("--engine", help="Query engine overriding the recipe's (e.g., 'duckdb', 'arrow')")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Log level (default: recipe runtime.log_level)",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Use JSON format for logs",
)
def run(
    recipe_path: str,
    inputs: tuple,
    backend: str | None,
    engine: str | None,
    log_level: str | None,
    json_logs: bool,
):
    """Run a metrics recipe over input files and publish the results.

    Examples:

        df-metrics run recipe.yaml --input data.csv
        df-metrics run recipe.yaml --input a.parquet --input b.parquet
        df-metrics run recipe.yaml --input data.csv --engine arrow --log-level DEBUG
    """
    try:
        recipe = load_recipe(recipe_path)
        if engine:
            recipe = recipe.model_copy(
                update={"runtime": recipe.runtime.model_copy(update={"engine": engine})}
            )

        configure_logging(
            level=log_level or recipe.runtime.log_level,
            json_format=json_logs,
            recipe_name=recipe.name,
        )

        batches = []
        for path in inputs:
            batches.extend(read_batches(path))

        run_recipe(recipe, batches, storage_backend=backend)

    except RecipeError as e:
        click.echo(f"Recipe error: {e}", err=True)
        sys.exit(1)
    except (ComputeError, EngineError, PublishError) as e:
        click.echo(f"Execution error: {e}", err=True)
        sys.exit(1)

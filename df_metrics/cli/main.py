"""Main CLI entry point for df_metrics."""

import click

from df_metrics import __version__
from df_metrics.cli.commands.list import list_backends, list_engines
from df_metrics.cli.commands.run import run
from df_metrics.cli.commands.validate import validate


@click.group()
@click.version_option(version=__version__)
def main():
    """df-metrics - declarative data-quality metrics over Arrow batches."""
    pass


main.add_command(run)
main.add_command(validate)
main.add_command(list_backends)
main.add_command(list_engines)


if __name__ == "__main__":
    main()

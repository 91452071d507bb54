"""Command line interface for df_metrics."""

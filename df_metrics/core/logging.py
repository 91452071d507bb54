"""Structured logging configuration for df_metrics."""

import logging
import sys
from typing import Optional

try:
    from json_log_formatter import JSONFormatter
except ImportError:
    JSONFormatter = None  # type: ignore


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    recipe_name: Optional[str] = None,
) -> None:
    """Configure logging for df_metrics.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise use structured text
        recipe_name: Optional recipe name attached to every record
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("df_metrics")
    logger.setLevel(log_level)
    logger.handlers.clear()

    # stderr keeps stdout free for the stdout storage backend
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if json_format:
        if JSONFormatter is None:
            raise ImportError(
                "json-log-formatter is required for JSON logging. "
                "Install it with: pip install df-metrics[json]"
            )
        formatter = JSONFormatter()
    else:
        formatter = StructuredFormatter()

    handler.setFormatter(formatter)
    if recipe_name:
        handler.addFilter(_RecipeNameFilter(recipe_name))
    logger.addHandler(handler)


class _RecipeNameFilter(logging.Filter):
    def __init__(self, recipe_name: str):
        super().__init__()
        self._recipe_name = recipe_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "recipe_name"):
            record.recipe_name = self._recipe_name
        return True


class StructuredFormatter(logging.Formatter):
    """Structured formatter that adds context to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context."""
        context = getattr(record, "context", {})

        parts = [f"[{record.levelname}]"]

        if hasattr(record, "recipe_name"):
            parts.append(f"recipe={record.recipe_name}")

        if hasattr(record, "backend"):
            parts.append(f"backend={record.backend}")

        for key, value in context.items():
            parts.append(f"{key}={value}")

        parts.append(record.getMessage())

        return " ".join(parts)

"""Runtime configuration model for metrics recipes."""

from pydantic import BaseModel, Field, field_validator


class RuntimeConfig(BaseModel):
    """Configuration for runtime behavior."""

    engine: str = Field(default="duckdb", description="Query engine (e.g., 'duckdb', 'arrow')")
    log_level: str = Field(default="INFO", description="Log level for the run")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log_level is a standard level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

"""Exception hierarchy for the df_metrics package."""


class MetricsError(Exception):
    """Base exception for all df_metrics errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ComputeError(MetricsError):
    """Raised when the compute engine fails to build or run a query."""

    pass


class PublishError(MetricsError):
    """Raised when results cannot be written to a storage backend."""

    pass


class UnsupportedStorageBackend(PublishError):
    """Raised when the requested storage backend has no sink implementation."""

    def __init__(self, backend: str, context: dict | None = None):
        super().__init__(f"Not supported storage backend: {backend}", context)
        self.backend = backend


class RecipeError(MetricsError):
    """Raised when recipe parsing or validation fails."""

    pass


class EngineError(MetricsError):
    """Raised when a query runner cannot be registered or resolved."""

    pass

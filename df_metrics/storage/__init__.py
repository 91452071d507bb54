"""Storage backends and the sinks that implement them.

Adding a backend means adding a StorageBackend member and registering a
sink for it with @register_sink.
"""

from df_metrics.storage.backend import StorageBackend
from df_metrics.storage.base import Sink

# Registry must be imported before sink modules (they register on import)
from df_metrics.storage.registry import (
    SinkFactory,
    clear_registry,
    get_sink,
    list_supported_backends,
    register_sink,
)
from df_metrics.storage.stdout import StdoutSink, create_stdout_sink, render_batch
from df_metrics.storage.dispatch import publish


def reregister_builtins() -> None:
    """Re-register built-in sinks after the registry is cleared (tests)."""
    if StorageBackend.STDOUT.value not in list_supported_backends():
        register_sink(StorageBackend.STDOUT, create_stdout_sink)


__all__ = [
    "StorageBackend",
    "Sink",
    "SinkFactory",
    "register_sink",
    "get_sink",
    "list_supported_backends",
    "clear_registry",
    "reregister_builtins",
    "publish",
    "StdoutSink",
    "create_stdout_sink",
    "render_batch",
]

"""Registry mapping each StorageBackend member to a sink factory."""

from typing import Any, Callable, overload

from df_metrics.core.exceptions import PublishError, UnsupportedStorageBackend
from df_metrics.storage.backend import StorageBackend
from df_metrics.storage.base import Sink

SinkFactory = Callable[..., Sink]

_sink_registry: dict[StorageBackend, SinkFactory] = {}


@overload
def register_sink(backend: StorageBackend) -> Callable[[SinkFactory], SinkFactory]: ...


@overload
def register_sink(backend: StorageBackend, factory: SinkFactory) -> None: ...


def register_sink(
    backend: StorageBackend,
    factory: SinkFactory | None = None,
) -> Callable[[SinkFactory], SinkFactory] | None:
    """Register the sink factory implementing a storage backend.

    Can be used as a decorator or called directly:

        @register_sink(StorageBackend.STDOUT)
        def create_stdout_sink(**options):
            return StdoutSink(**options)

    Raises:
        PublishError: If the backend already has a sink.
    """
    backend = StorageBackend(backend)

    def _register(f: SinkFactory) -> SinkFactory:
        if backend in _sink_registry:
            raise PublishError(
                f"Sink for '{backend.value}' is already registered",
                context={"backend": backend.value},
            )
        _sink_registry[backend] = f
        return f

    if factory is not None:
        _register(factory)
        return None

    return _register


def get_sink(backend: StorageBackend | str, **options: Any) -> Sink:
    """Create the sink for a storage backend.

    Raises:
        UnsupportedStorageBackend: If the backend is unknown or has no sink.
    """
    try:
        member = StorageBackend(backend)
    except ValueError:
        raise UnsupportedStorageBackend(
            str(backend), context={"supported": list_supported_backends()}
        ) from None

    factory = _sink_registry.get(member)
    if factory is None:
        raise UnsupportedStorageBackend(
            member.value, context={"supported": list_supported_backends()}
        )
    return factory(**options)


def list_supported_backends() -> list[str]:
    """Return the sorted names of backends that have a sink."""
    return sorted(backend.value for backend in _sink_registry)


def clear_registry() -> None:
    """Remove all registered sinks. Intended for testing only."""
    _sink_registry.clear()

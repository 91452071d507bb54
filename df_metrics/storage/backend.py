"""Identifiers of the sinks results can be published to."""

from enum import Enum


class StorageBackend(str, Enum):
    """Publish sink identifiers.

    Only backends with a registered sink can be published to; the rest are
    reserved names that report UnsupportedStorageBackend.
    """

    STDOUT = "stdout"
    FILE = "file"
    S3 = "s3"

    def __str__(self) -> str:
        return self.value

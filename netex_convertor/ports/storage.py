"""Object store port - Bucket/key storage of tickets and artifacts."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol

from ..domain.models import StorageLocation, StoredObject


class ObjectStorePort(Protocol):
    """Port for reading and writing stored objects.

    Implementations:
    - adapters/storage/filesystem_store.py (FileSystemObjectStore) - Production
    - adapters/storage/memory_store.py (InMemoryObjectStore) - Testing
    """

    def get(self, location: StorageLocation) -> StoredObject:
        """Read an object and its metadata.

        Args:
            location: Bucket and key of the object.

        Returns:
            The stored bytes and metadata.

        Raises:
            InputUnavailable: If the object cannot be read.
        """
        ...

    def put(
        self,
        location: StorageLocation,
        body: bytes,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Write an object atomically, replacing any existing one.

        Args:
            location: Bucket and key to write to.
            body: Object content.
            metadata: Optional string metadata stored with the object.

        Raises:
            OutputUnavailable: If the object cannot be written.
        """
        ...

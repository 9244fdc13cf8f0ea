"""Thread-safe in-memory object store for tests and local runs."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from ...domain.errors import InputUnavailable
from ...domain.models import StorageLocation, StoredObject


@dataclass
class InMemoryObjectStore:
    """Object store held in a dict keyed by (bucket, key).

    Implements ObjectStorePort.
    """

    _objects: Dict[Tuple[str, str], StoredObject] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def get(self, location: StorageLocation) -> StoredObject:
        with self._lock:
            stored = self._objects.get((location.bucket, location.key))
        if stored is None:
            raise InputUnavailable("Error in retrieving data.", location=str(location))
        return stored

    def put(
        self,
        location: StorageLocation,
        body: bytes,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        stored = StoredObject(body=bytes(body), metadata=dict(metadata or {}))
        with self._lock:
            self._objects[(location.bucket, location.key)] = stored
        self._logger.debug("Object stored", extra={"location": str(location)})

    def exists(self, location: StorageLocation) -> bool:
        with self._lock:
            return (location.bucket, location.key) in self._objects

    def keys(self, bucket: str) -> list[str]:
        """Return the keys stored in a bucket."""
        with self._lock:
            return sorted(key for b, key in self._objects if b == bucket)

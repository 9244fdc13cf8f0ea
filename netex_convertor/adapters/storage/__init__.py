"""Object store adapters - Implementations of the ObjectStorePort.

Available implementations:
- FileSystemObjectStore: Buckets as directories with atomic writes
- InMemoryObjectStore: Thread-safe dict store for testing
"""

from .filesystem_store import FileSystemObjectStore
from .memory_store import InMemoryObjectStore

__all__ = ["FileSystemObjectStore", "InMemoryObjectStore"]

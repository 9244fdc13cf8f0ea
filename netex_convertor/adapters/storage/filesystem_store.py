"""Filesystem-backed object store.

Buckets are directories below a root directory and keys are relative
paths inside them. Metadata is kept in a ``<key>.metadata.json`` sidecar
next to each object. Writes go to a temporary file in the target
directory followed by ``os.replace`` so readers never see a partial
artifact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from ...config import StorageConfig, get_config
from ...domain.errors import InputUnavailable, OutputUnavailable
from ...domain.models import StorageLocation, StoredObject

METADATA_SUFFIX = ".metadata.json"


@dataclass
class FileSystemObjectStore:
    """Object store on the local filesystem.

    Implements ObjectStorePort.

    Attributes:
        config: Storage configuration (root directory)
    """

    config: StorageConfig = field(default_factory=lambda: get_config().storage)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def path_for(self, location: StorageLocation) -> Path:
        """Resolve a location to a path, refusing keys that escape the bucket."""
        bucket_dir = (Path(self.config.root_dir) / location.bucket).resolve()
        path = (bucket_dir / location.key).resolve()
        if bucket_dir not in path.parents:
            raise InputUnavailable(
                f"Key escapes bucket: {location.key}",
                location=str(location),
            )
        return path

    def get(self, location: StorageLocation) -> StoredObject:
        path = self.path_for(location)
        try:
            body = path.read_bytes()
        except OSError as e:
            raise InputUnavailable(
                "Error in retrieving data.",
                location=str(location),
                cause=e,
            )

        metadata: dict[str, str] = {}
        sidecar = path.with_name(path.name + METADATA_SUFFIX)
        if sidecar.exists():
            try:
                metadata = json.loads(sidecar.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                raise InputUnavailable(
                    "Error in retrieving object metadata.",
                    location=str(location),
                    cause=e,
                )

        self._logger.debug(
            "Object read",
            extra={"location": str(location), "size_bytes": len(body)},
        )
        return StoredObject(body=body, metadata=metadata)

    def put(
        self,
        location: StorageLocation,
        body: bytes,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        try:
            path = self.path_for(location)
        except InputUnavailable as e:
            raise OutputUnavailable(e.message, location=str(location))

        sidecar = path.with_name(path.name + METADATA_SUFFIX)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Metadata lands first: readers are triggered by the body
            if metadata is not None:
                _atomic_write(
                    sidecar,
                    json.dumps(dict(metadata), sort_keys=True).encode("utf-8"),
                )
            try:
                _atomic_write(path, body)
            except OSError:
                if metadata is not None and not path.is_file():
                    sidecar.unlink(missing_ok=True)
                raise
        except OSError as e:
            raise OutputUnavailable(
                f"Cannot write object {location}",
                location=str(location),
                cause=e,
            )

        self._logger.info(
            "Object written",
            extra={"location": str(location), "size_bytes": len(body)},
        )


def _atomic_write(path: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

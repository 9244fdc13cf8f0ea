"""Storage event parsing."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import unquote_plus

from ..domain.errors import InputUnavailable
from ..domain.models import StorageLocation


def parse_storage_event(event: Mapping[str, Any]) -> StorageLocation:
    """Extract the bucket and key of the first record of a storage event.

    Object keys arrive URL-encoded with ``+`` for spaces and are decoded.

    Args:
        event: ``{"Records": [{"s3": {"bucket": {"name": ...},
            "object": {"key": ...}}}]}``

    Returns:
        The location of the object that triggered the event.

    Raises:
        InputUnavailable: If the event does not carry a bucket and key.
    """
    try:
        record = event["Records"][0]["s3"]
        bucket = record["bucket"]["name"]
        key = record["object"]["key"]
    except (KeyError, IndexError, TypeError) as e:
        raise InputUnavailable(
            "Storage event does not name a bucket and key",
            location="<event>",
            cause=e,
        )

    if not bucket or not key:
        raise InputUnavailable(
            "Storage event has an empty bucket or key",
            location=f"{bucket}/{key}",
        )
    return StorageLocation(bucket=bucket, key=unquote_plus(key))

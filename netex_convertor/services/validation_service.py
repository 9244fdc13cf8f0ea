"""NeTEx validation service - Unvalidated artifact to published document.

Runs once per artifact written by the generation stage:
1. Read the artifact and its metadata
2. Validate it against the published schema
3. Copy it with its metadata to the validated bucket
4. Email it to the submitter named in the metadata
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from ..domain.errors import SchemaValidationFailure
from ..domain.models import StorageLocation, StoredObject
from ..ports.notification import AlertPort, NotifierPort
from ..ports.storage import ObjectStorePort
from ..ports.validation import SchemaValidatorPort


@dataclass
class NetexValidationService:
    """Validates, republishes and announces a generated artifact.

    Attributes:
        object_store: Source and destination buckets
        validator: Schema validator
        notifier: Submitter notification
        alerter: Failure reporting
        validated_bucket: Bucket valid documents are copied to
    """

    object_store: ObjectStorePort
    validator: SchemaValidatorPort
    notifier: NotifierPort
    alerter: AlertPort
    validated_bucket: str

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _publish(self, location: StorageLocation) -> tuple[StorageLocation, StoredObject]:
        stored = self.object_store.get(location)
        try:
            self.validator.validate(stored.body)
        except SchemaValidationFailure as e:
            if not e.location:
                e.location = str(location)
            raise

        validated = StorageLocation(self.validated_bucket, location.key)
        self.object_store.put(validated, stored.body, metadata=stored.metadata)
        self._logger.info(
            "Validated artifact published",
            extra={"location": str(validated)},
        )
        return validated, stored

    def _notify(self, location: StorageLocation, stored: StoredObject) -> None:
        recipient = stored.metadata.get("email")
        if not recipient:
            self._logger.warning(
                "No submitter email in metadata, skipping notification",
                extra={"location": str(location)},
            )
            return
        self.notifier.notify(recipient, PurePosixPath(location.key).name, stored.body)

    def validate(self, location: StorageLocation) -> StorageLocation:
        """Validate the artifact at ``location`` and publish it.

        Returns:
            Where the validated document was written.

        Raises:
            SchemaValidationFailure: If the document is not schema-valid.
            NetexConvertorError: Any other failure, after alerting.
        """
        self._logger.info("Starting NeTEx validation", extra={"location": str(location)})
        try:
            validated, stored = self._publish(location)
        except Exception as e:
            self.alerter.alert("validation", e, {"location": str(location)})
            raise

        try:
            self._notify(validated, stored)
        except Exception as e:
            self.alerter.alert("notification", e, {"location": str(validated)})
            raise
        return validated

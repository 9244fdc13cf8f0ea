"""NeTEx generation service - Ticket JSON to unvalidated XML artifact.

Runs once per stored ticket submission:
1. Read the ticket JSON from the object store
2. Decode and check it
3. Look up the operator's reference record
4. Load a fresh skeleton for the ticket variant
5. Assemble and serialize the document
6. Write the artifact and its metadata to the unvalidated bucket

Any failure is alerted and re-raised; nothing is written unless every
step before the write succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Callable

from ..domain.models import GeneratedDocument, StorageLocation, TicketDescription
from ..io.ticket_json import decode_ticket
from ..netex.assembler import NetexGenerator
from ..netex.serializer import serialize
from ..netex.template import TemplateLoader
from ..ports.notification import AlertPort
from ..ports.reference import OperatorRepositoryPort
from ..ports.storage import ObjectStorePort

STAGE = "generation"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def artifact_key(ticket: TicketDescription, source_key: str) -> str:
    """Key of the generated artifact: ``<noc>/<variant>/<noc>_<variant>_<stem>.xml``."""
    noc = ticket.noc_code
    variant = ticket.variant.value
    stem = PurePosixPath(source_key).stem
    return f"{noc}/{variant}/{noc}_{variant}_{stem}.xml"


def artifact_metadata(ticket: TicketDescription) -> dict[str, str]:
    return {
        "email": ticket.email or "",
        "noc": ticket.noc_code,
        "variant": ticket.variant.value,
    }


@dataclass
class NetexGenerationService:
    """Turns a stored ticket submission into an unvalidated NeTEx artifact.

    Attributes:
        object_store: Source of tickets and destination of artifacts
        operator_repository: Operator reference lookups
        template_loader: Skeleton loader
        alerter: Failure reporting
        output_bucket: Bucket the unvalidated artifact is written to
        clock: Source of the generation instant
    """

    object_store: ObjectStorePort
    operator_repository: OperatorRepositoryPort
    template_loader: TemplateLoader
    alerter: AlertPort
    output_bucket: str
    clock: Callable[[], datetime] = utc_now

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build_document(self, ticket: TicketDescription) -> GeneratedDocument:
        """Generate the document for a decoded ticket without touching storage.

        Raises:
            InputUnavailable: If the operator record cannot be found.
            TemplateUnavailable: If the skeleton cannot be read.
            TemplateMalformed: If the skeleton lacks a required slot.
            InvalidTicketData: If the ticket cannot be rendered.
            SerializationFailure: If the tree cannot be rendered as XML.
        """
        operator = self.operator_repository.get(ticket.noc_code)
        skeleton = self.template_loader.load(ticket.variant)
        generated_at = self.clock()

        tree = NetexGenerator(ticket, operator, generated_at).generate(skeleton)
        return GeneratedDocument(
            xml=serialize(tree),
            noc_code=ticket.noc_code,
            variant=ticket.variant,
            generated_at=generated_at,
        )

    def _run(self, location: StorageLocation) -> StorageLocation:
        stored = self.object_store.get(location)
        ticket = decode_ticket(stored.body)
        self._logger.info(
            "Ticket decoded",
            extra={
                "noc_code": ticket.noc_code,
                "variant": ticket.variant.value,
                "products": len(ticket.products),
            },
        )

        document = self.build_document(ticket)

        output = StorageLocation(self.output_bucket, artifact_key(ticket, location.key))
        self.object_store.put(
            output,
            document.xml.encode("utf-8"),
            metadata=artifact_metadata(ticket),
        )
        self._logger.info(
            "NeTEx artifact written",
            extra={"location": str(output), "size_bytes": document.size_bytes},
        )
        return output

    def generate(self, location: StorageLocation) -> StorageLocation:
        """Generate the artifact for the ticket stored at ``location``.

        Returns:
            Where the unvalidated artifact was written.

        Raises:
            NetexConvertorError: Any failure of the run, after alerting.
        """
        self._logger.info("Starting NeTEx generation", extra={"location": str(location)})
        try:
            return self._run(location)
        except Exception as e:
            self.alerter.alert(STAGE, e, {"location": str(location)})
            raise

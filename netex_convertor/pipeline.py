"""Entry points for the NeTEx convertor.

Two independently invoked stages share storage and nothing else:

1. Generation: a ticket JSON lands in the input bucket and an
   unvalidated NeTEx artifact is written.
2. Validation: an artifact lands in the unvalidated bucket, is checked
   against the schema, republished and emailed to the submitter.

Harnesses call ``handle_generation_event`` / ``handle_validation_event``
with a storage event; the ``netex-convertor`` command runs either stage
for an explicit bucket and key.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Mapping, Optional, Sequence

from .container import Container, get_container
from .domain.errors import NetexConvertorError
from .domain.models import StorageLocation
from .io.events import parse_storage_event
from .logging_setup import configure_logging
from .services import NetexGenerationService, NetexValidationService


def handle_generation_event(
    event: Mapping[str, Any],
    container: Optional[Container] = None,
) -> StorageLocation:
    """Generate the artifact for the ticket named by a storage event."""
    container = container or get_container()
    service: NetexGenerationService = container.resolve(NetexGenerationService)
    return service.generate(parse_storage_event(event))


def handle_validation_event(
    event: Mapping[str, Any],
    container: Optional[Container] = None,
) -> StorageLocation:
    """Validate and publish the artifact named by a storage event."""
    container = container or get_container()
    service: NetexValidationService = container.resolve(NetexValidationService)
    return service.validate(parse_storage_event(event))


def storage_event(bucket: str, key: str) -> dict[str, Any]:
    """Build the storage event a bucket notification would carry."""
    return {"Records": [{"s3": {"bucket": {"name": bucket}, "object": {"key": key}}}]}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netex-convertor",
        description="Convert period-ticket submissions to NeTEx and validate the result.",
    )
    subparsers = parser.add_subparsers(dest="stage", required=True)

    generate = subparsers.add_parser("generate", help="Generate NeTEx from a ticket JSON")
    generate.add_argument("--bucket", help="Input bucket (default: configured input bucket)")
    generate.add_argument("--key", required=True, help="Key of the ticket JSON")

    validate = subparsers.add_parser("validate", help="Validate and publish a NeTEx artifact")
    validate.add_argument("--bucket", help="Bucket of the artifact (default: unvalidated bucket)")
    validate.add_argument("--key", required=True, help="Key of the artifact")

    return parser


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)
    container = container or get_container()
    configure_logging(container.config.observability)
    storage = container.config.storage

    try:
        if args.stage == "generate":
            event = storage_event(args.bucket or storage.input_bucket, args.key)
            output = handle_generation_event(event, container)
        else:
            event = storage_event(args.bucket or storage.unvalidated_bucket, args.key)
            output = handle_validation_event(event, container)
    except NetexConvertorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Schema validation port."""

from __future__ import annotations

from typing import Protocol


class SchemaValidatorPort(Protocol):
    """Port for checking documents against the published schema.

    Implementations:
    - adapters/validation/xsd_validator.py (XsdSchemaValidator)
    """

    def validate(self, xml: bytes) -> None:
        """Validate a serialized document.

        Args:
            xml: The document bytes.

        Raises:
            SchemaValidationFailure: If the document is not schema-valid.
        """
        ...

"""XML Schema validator backed by lxml.

The schema is compiled on first use and reused for later documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from lxml import etree

from ...config import ValidationConfig, get_config
from ...domain.errors import ConfigurationError, SchemaValidationFailure


@dataclass
class XsdSchemaValidator:
    """Validates documents against the configured XSD.

    Implements SchemaValidatorPort.

    Attributes:
        config: Validation configuration (schema path, error limit)
    """

    config: ValidationConfig = field(default_factory=lambda: get_config().validation)
    _schema: Optional[etree.XMLSchema] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_schema(self) -> etree.XMLSchema:
        if self._schema is not None:
            return self._schema

        path = Path(self.config.schema_path)
        if not path.is_file():
            raise ConfigurationError(
                f"Schema file not found: {path}",
                setting_name="NETEX_VALIDATION_SCHEMA_PATH",
                expected_type="path to an .xsd file",
            )
        try:
            self._schema = etree.XMLSchema(etree.parse(str(path)))
        except (etree.XMLSyntaxError, etree.XMLSchemaParseError) as e:
            raise ConfigurationError(
                f"Schema file cannot be compiled: {path}",
                setting_name="NETEX_VALIDATION_SCHEMA_PATH",
                cause=e,
            )
        self._logger.info("Schema compiled", extra={"schema_path": str(path)})
        return self._schema

    def validate(self, xml: bytes) -> None:
        schema = self._get_schema()
        parser = etree.XMLParser(resolve_entities=False)
        try:
            document = etree.fromstring(xml, parser=parser)
        except etree.XMLSyntaxError as e:
            raise SchemaValidationFailure(
                "Document is not well-formed XML",
                errors=(str(e),),
                cause=e,
            )

        if schema.validate(document):
            return

        errors = tuple(
            f"line {entry.line}: {entry.message}"
            for entry in list(schema.error_log)[: self.config.max_reported_errors]
        )
        raise SchemaValidationFailure(
            f"Document fails schema validation with {len(schema.error_log)} error(s)",
            errors=errors,
        )

"""Schema validation adapters - Implementations of the SchemaValidatorPort."""

from .xsd_validator import XsdSchemaValidator

__all__ = ["XsdSchemaValidator"]

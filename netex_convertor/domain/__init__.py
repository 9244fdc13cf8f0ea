"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    InputUnavailable,
    InvalidTicketData,
    NetexConvertorError,
    NotificationError,
    OutputUnavailable,
    SchemaValidationFailure,
    SerializationFailure,
    TemplateMalformed,
    TemplateUnavailable,
)
from .models import (
    GeneratedDocument,
    OperatorReferenceData,
    Product,
    SelectedLine,
    Stop,
    StorageLocation,
    StoredObject,
    TicketDescription,
    TicketVariant,
)

__all__ = [
    # Models
    "TicketVariant",
    "Product",
    "Stop",
    "SelectedLine",
    "TicketDescription",
    "OperatorReferenceData",
    "StorageLocation",
    "StoredObject",
    "GeneratedDocument",
    # Errors
    "NetexConvertorError",
    "InputUnavailable",
    "OutputUnavailable",
    "InvalidTicketData",
    "TemplateUnavailable",
    "TemplateMalformed",
    "SerializationFailure",
    "SchemaValidationFailure",
    "NotificationError",
    "ConfigurationError",
]

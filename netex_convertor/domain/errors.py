"""Typed domain errors for the NeTEx convertor.

Every failure in the generation and validation stages is raised as one
of these types so the invoking harness (and the alerting path) can tell
apart input problems, template problems, rendering problems and
downstream schema failures.

All errors inherit from NetexConvertorError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class NetexConvertorError(Exception):
    """Base error for the NeTEx convertor domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InputUnavailable(NetexConvertorError):
    """A ticket file or operator record could not be read.

    Raised for object-store read failures, reference lookups that find
    nothing, and reference records that cannot be decoded.

    Attributes:
        location: Storage location or lookup key that failed
    """

    location: str = ""


@dataclass
class OutputUnavailable(NetexConvertorError):
    """An artifact could not be written to storage.

    Attributes:
        location: Storage location that could not be written
    """

    location: str = ""


@dataclass
class InvalidTicketData(NetexConvertorError):
    """The ticket description violates its schema or is inconsistent.

    Examples: unrecognised variant tag, empty product list, a zone ticket
    without stops.

    Attributes:
        field_name: The offending field, when one can be named
    """

    field_name: Optional[str] = None


@dataclass
class TemplateUnavailable(NetexConvertorError):
    """The document skeleton could not be read.

    Attributes:
        template_path: Path of the skeleton resource
    """

    template_path: Optional[str] = None


@dataclass
class TemplateMalformed(NetexConvertorError):
    """The document skeleton is not the expected shape.

    Raised when the skeleton is not well-formed XML, has the wrong root,
    or lacks a slot the frame assembler writes to.

    Attributes:
        template_path: Path of the skeleton resource, if known
        node_path: Path inside the tree that could not be resolved
    """

    template_path: Optional[str] = None
    node_path: Optional[str] = None


@dataclass
class SerializationFailure(NetexConvertorError):
    """The completed tree could not be rendered as XML."""


@dataclass
class SchemaValidationFailure(NetexConvertorError):
    """A generated document does not conform to the published schema.

    Attributes:
        errors: Validator messages, in the order reported
        location: Storage location of the rejected artifact
    """

    errors: tuple[str, ...] = ()
    location: str = ""


@dataclass
class NotificationError(NetexConvertorError):
    """The submitter could not be emailed.

    Attributes:
        recipient: Address the email was meant for
    """

    recipient: str = ""


@dataclass
class ConfigurationError(NetexConvertorError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None

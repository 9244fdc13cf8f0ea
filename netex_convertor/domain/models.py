"""Immutable domain models for the NeTEx convertor.

All models are frozen dataclasses with slots. A TicketDescription is
built once per generation run and never changes afterwards; its
constructor enforces the invariants every downstream resolver relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Mapping, Optional

from .errors import InvalidTicketData


class TicketVariant(Enum):
    """The ticket variants the period-ticket document supports."""

    GEO_ZONE = "GeoZone"
    MULTI_SERVICE = "MultiService"

    @classmethod
    def from_tag(cls, tag: object) -> TicketVariant:
        """Map a raw variant tag onto the enum.

        Raises:
            InvalidTicketData: If the tag is not a known variant.
        """
        for variant in cls:
            if variant.value == tag:
                return variant
        raise InvalidTicketData(
            f"Unrecognised ticket variant: {tag!r}",
            field_name="variant",
        )


@dataclass(frozen=True, slots=True)
class Product:
    """A fare product the operator sells.

    Attributes:
        name: Product name as entered by the user (e.g. 'Weekly')
        price: Price in pounds as a decimal string (e.g. '10.00')
        duration: Validity in days as a whole-number string, if given
    """

    name: str
    price: str
    duration: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidTicketData("Product name must not be empty", field_name="productName")
        try:
            amount = Decimal(self.price)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidTicketData(
                f"Product price is not a number: {self.price!r}",
                field_name="productPrice",
            )
        if not amount.is_finite() or amount < 0:
            raise InvalidTicketData(
                f"Product price must be a non-negative amount: {self.price!r}",
                field_name="productPrice",
            )
        if self.duration is not None and not (
            self.duration.isdigit() and int(self.duration) > 0
        ):
            raise InvalidTicketData(
                f"Product duration must be a positive number of days: {self.duration!r}",
                field_name="productDuration",
            )


@dataclass(frozen=True, slots=True)
class Stop:
    """A stop selected as a member of the fare zone.

    Attributes:
        naptan_code: NaPTAN stop code, the stop's public identifier
        stop_name: Human-readable stop name
        locality_code: NPTG locality code (the geographic reference)
        atco_code: ATCO code, if known
        street: Street the stop is on
        locality_name: Name of the locality
        parent_locality_name: Name of the parent locality
        indicator: Stop indicator (e.g. 'opp', 'Stand A')
    """

    naptan_code: str
    stop_name: str
    locality_code: str
    atco_code: Optional[str] = None
    street: Optional[str] = None
    locality_name: Optional[str] = None
    parent_locality_name: Optional[str] = None
    indicator: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SelectedLine:
    """A bus service selected for a multi-service ticket."""

    line_name: str
    service_description: Optional[str] = None
    start_date: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TicketDescription:
    """The user's period-ticket submission.

    Attributes:
        noc_code: National Operator Code of the operator
        operator_name: Operator name as shown to the user
        variant: Zone-based or multi-service
        passenger_type: Passenger type the products are sold to
        products: Ordered fare products (never empty)
        stops: Ordered fare-zone stops (zone-based only)
        lines: Ordered selected services (multi-service only)
        zone_name: Name of the fare zone (zone-based only)
        email: Submitter's contact address
        uuid: Submission identifier
    """

    noc_code: str
    operator_name: str
    variant: TicketVariant
    passenger_type: str
    products: tuple[Product, ...]
    stops: tuple[Stop, ...] = field(default_factory=tuple)
    lines: tuple[SelectedLine, ...] = field(default_factory=tuple)
    zone_name: Optional[str] = None
    email: Optional[str] = None
    uuid: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.variant, TicketVariant):
            raise InvalidTicketData(
                f"Unrecognised ticket variant: {self.variant!r}",
                field_name="variant",
            )
        if not self.noc_code:
            raise InvalidTicketData("Operator code must not be empty", field_name="nocCode")
        if not self.products:
            raise InvalidTicketData(
                "Ticket must contain at least one product",
                field_name="products",
            )
        names = [product.name for product in self.products]
        if len(set(names)) != len(names):
            raise InvalidTicketData(
                "Product names must be unique within a ticket",
                field_name="products",
            )

        if self.variant is TicketVariant.GEO_ZONE:
            if not self.stops:
                raise InvalidTicketData(
                    "Zone-based ticket must select at least one stop",
                    field_name="stops",
                )
            if not self.zone_name:
                raise InvalidTicketData(
                    "Zone-based ticket must name its fare zone",
                    field_name="zoneName",
                )
            if self.lines:
                raise InvalidTicketData(
                    "Zone-based ticket must not select services",
                    field_name="selectedServices",
                )
        elif self.variant is TicketVariant.MULTI_SERVICE:
            if not self.lines:
                raise InvalidTicketData(
                    "Multi-service ticket must select at least one service",
                    field_name="selectedServices",
                )
            if self.stops:
                raise InvalidTicketData(
                    "Multi-service ticket must not select stops",
                    field_name="stops",
                )


@dataclass(frozen=True, slots=True)
class OperatorReferenceData:
    """Operator record from the National Operator Code reference store.

    Attributes:
        noc_code: National Operator Code
        op_id: Internal operator id of the NOC record
        operator_public_name: Legal/public operator name
        vosa_psv_license_name: Licensed (trading) name
        fare_enquiry_phone: Fare enquiries phone number
        complaints_address: Complaints postal address
        timetable_enquiry_email: Timetable enquiries email address
        website: Raw website value (may be 'label#url#' encoded)
        mode: Primary transport mode (e.g. 'Bus')
    """

    noc_code: str
    op_id: str
    operator_public_name: str
    vosa_psv_license_name: str = ""
    fare_enquiry_phone: str = ""
    complaints_address: str = ""
    timetable_enquiry_email: str = ""
    website: str = ""
    mode: str = ""


@dataclass(frozen=True, slots=True)
class StorageLocation:
    """An object-store location (bucket and key)."""

    bucket: str
    key: str

    def __str__(self) -> str:
        return f"{self.bucket}/{self.key}"


@dataclass(frozen=True, slots=True)
class StoredObject:
    """Bytes read from the object store together with their metadata."""

    body: bytes
    metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GeneratedDocument:
    """A serialized NeTEx document ready for hand-off to validation."""

    xml: str
    noc_code: str
    variant: TicketVariant
    generated_at: datetime

    @property
    def size_bytes(self) -> int:
        """Return the encoded document size."""
        return len(self.xml.encode("utf-8"))

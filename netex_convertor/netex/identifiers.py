"""Identifier builder.

Every identifier written into a document, and every reference to one,
is produced here. Frames and objects that point at each other must call
the same function with the same arguments so the referencing string is
byte-identical to the declared one.

Frame identifiers follow the fixed grammar::

    epd:UK:<operatorCode>:<FrameKind>:<variantQualifier>:op
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..domain.models import Product, SelectedLine, TicketDescription

# Name of the group of products every period ticket belongs to
GROUP_OF_PRODUCTS_NAME = "PLACEHOLDER"

# Duration (days) used for zone products that do not state one
SINGLE_ZONE_DURATION = "1"


class FrameKind(Enum):
    COMPOSITE = "CompositeFrame_UK_PI_NETWORK_FARE_OFFER"
    RESOURCE = "ResourceFrame_UK_PI_COMMON"
    SITE = "SiteFrame_UK_PI_STOP"
    SERVICE_CALENDAR = "ServiceCalendarFrame_UK_PI_CALENDAR"
    SERVICE = "ServiceFrame_UK_PI_NETWORK"
    NETWORK_FARE = "FareFrame_UK_PI_FARE_NETWORK"
    PRICE_FARE = "FareFrame_UK_PI_FARE_PRODUCT"
    FARE_TABLE = "FareFrame_UK_PI_FARE_PRICE"


def variant_qualifier(kind: FrameKind, noc_code: str) -> str:
    """Return the qualifier segment of a frame identifier."""
    if kind is FrameKind.COMPOSITE:
        return f"Pass@{GROUP_OF_PRODUCTS_NAME}"
    if kind is FrameKind.RESOURCE:
        return noc_code
    if kind in (FrameKind.SITE, FrameKind.SERVICE_CALENDAR):
        return "sale_pois"
    if kind is FrameKind.SERVICE:
        return f"Line_{GROUP_OF_PRODUCTS_NAME}"
    return f"{GROUP_OF_PRODUCTS_NAME}@pass"


def frame_id(noc_code: str, kind: FrameKind) -> str:
    """Build the identifier of a frame."""
    return f"epd:UK:{noc_code}:{kind.value}:{variant_qualifier(kind, noc_code)}:op"


@dataclass(frozen=True, slots=True)
class FrameIds:
    """All frame identifiers of one document."""

    composite: str
    resource: str
    site: str
    service_calendar: str
    service: str
    network_fare: str
    price_fare: str
    fare_table: str

    @classmethod
    def for_operator(cls, noc_code: str) -> FrameIds:
        return cls(
            composite=frame_id(noc_code, FrameKind.COMPOSITE),
            resource=frame_id(noc_code, FrameKind.RESOURCE),
            site=frame_id(noc_code, FrameKind.SITE),
            service_calendar=frame_id(noc_code, FrameKind.SERVICE_CALENDAR),
            service=frame_id(noc_code, FrameKind.SERVICE),
            network_fare=frame_id(noc_code, FrameKind.NETWORK_FARE),
            price_fare=frame_id(noc_code, FrameKind.PRICE_FARE),
            fare_table=frame_id(noc_code, FrameKind.FARE_TABLE),
        )


# ---- object identifiers ------------------------------------------------


def operator_ref(noc_code: str) -> str:
    return f"noc:{noc_code}"


def branding_id(ticket: TicketDescription) -> str:
    return f"op:{ticket.operator_name}@brand"


def product_id(product: Product, passenger_type: str) -> str:
    return f"op:Pass@{product.name}_{passenger_type}"


def validable_element_id(product: Product, passenger_type: str) -> str:
    return f"{product_id(product, passenger_type)}@travel"


def sales_offer_package_id(product: Product, passenger_type: str) -> str:
    return f"op:Pass@{product.name}-SOP@{passenger_type}"


def fare_zone_id(zone_name: str) -> str:
    return f"op:{GROUP_OF_PRODUCTS_NAME}@{zone_name}"


def line_id(line: SelectedLine) -> str:
    return f"op:{line.line_name}"


def tariff_id() -> str:
    return f"op:Tariff@{GROUP_OF_PRODUCTS_NAME}"


def geographical_interval_id() -> str:
    return f"{tariff_id()}@1zone"


def time_interval_id(duration: str) -> str:
    return f"{tariff_id()}@{duration}day"


def access_element_id() -> str:
    return f"{tariff_id()}@access"


def eligibility_element_id() -> str:
    return f"{tariff_id()}@eligibility"


def durations_element_id() -> str:
    return f"{tariff_id()}@durations"


def user_profile_id(passenger_type: str) -> str:
    return f"op:{passenger_type}"


def pricing_parameter_set_id() -> str:
    return f"op:Pass@{GROUP_OF_PRODUCTS_NAME}"


def fare_table_id(variant_tag: str) -> str:
    return f"op:Pass@{GROUP_OF_PRODUCTS_NAME}@{variant_tag}"


def fare_table_column_id(variant_tag: str, column: str) -> str:
    return f"{fare_table_id(variant_tag)}@c@{column}"


def fare_table_row_id(variant_tag: str, product: Product) -> str:
    return f"{fare_table_id(variant_tag)}@r@{product.name}"


def fare_table_cell_id(variant_tag: str, product: Product, column: str) -> str:
    return f"{fare_table_id(variant_tag)}@cell@{product.name}@{column}"

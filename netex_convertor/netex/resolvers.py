"""Field resolvers.

Pure functions that compute the content of the named regions of the
period-ticket document from a ticket description and the operator's
reference data. They perform no I/O and keep no state; every identifier
comes from ``identifiers`` so references always match declarations.

Ordering is part of the contract: stops, projections, lines, products,
sales offer packages and fare-table rows come out in input order.
"""

from __future__ import annotations

from typing import Optional

from ..domain.errors import InvalidTicketData
from ..domain.models import (
    OperatorReferenceData,
    Product,
    SelectedLine,
    Stop,
    TicketDescription,
)
from . import identifiers as ids
from .tree import Node, element
from .variants import is_geo_zone_ticket, is_multi_service_ticket

FXC_VERSION = "fxc:v1.0"


def clean_website(website: Optional[str]) -> str:
    """Extract the URL from a NOC website value.

    NOC records store websites as ``label#url#``; plain URLs are
    returned unchanged.
    """
    if not website:
        return ""
    parts = website.split("#")
    return parts[1] if len(parts) > 1 else parts[0]


def _joined(*parts: Optional[str]) -> str:
    return ", ".join(part for part in parts if part)


# ---- network ------------------------------------------------------------


def scheduled_stop_point_refs(stops: tuple[Stop, ...]) -> tuple[Node, ...]:
    """One ScheduledStopPointRef per stop, in input order."""
    return tuple(
        element(
            "ScheduledStopPointRef",
            _joined(stop.stop_name, stop.street, stop.locality_name),
            versionRef="EXTERNAL",
            ref=f"naptStop:{stop.naptan_code}",
        )
        for stop in stops
    )


def topographic_projection_refs(stops: tuple[Stop, ...]) -> tuple[Node, ...]:
    """One TopographicProjectionRef per stop, in input order."""
    return tuple(
        element(
            "TopographicProjectionRef",
            _joined(stop.street, stop.locality_name, stop.parent_locality_name),
            versionRef="nptg:EXTERNAL",
            ref=f"nptgLocality:{stop.locality_code}",
        )
        for stop in stops
    )


def _line(line: SelectedLine, ticket: TicketDescription, website: str) -> Node:
    children = [element("Name", f"Line {line.line_name}")]
    if line.service_description:
        children.append(element("Description", line.service_description))
    children += [
        element("Url", website),
        element("PublicCode", line.line_name),
        element("PrivateCode", f"{ticket.noc_code}_{line.line_name}", type="noc"),
        element("OperatorRef", None, version="1.0", ref=ids.operator_ref(ticket.noc_code)),
        element("LineType", "local"),
    ]
    return element("Line", None, *children, version="1.0", id=ids.line_id(line))


def line_list(ticket: TicketDescription, operator: OperatorReferenceData) -> tuple[Node, ...]:
    """Line nodes for a multi-service ticket; empty for other variants."""
    if not is_multi_service_ticket(ticket):
        return ()
    website = clean_website(operator.website)
    return tuple(_line(line, ticket, website) for line in ticket.lines)


# ---- time intervals -----------------------------------------------------


def product_duration(ticket: TicketDescription, product: Product) -> Optional[str]:
    """Duration (days) that governs a product, if any.

    Zone products without a duration fall back to the single-zone
    duration; multi-service products only have one when it was given.
    """
    if is_geo_zone_ticket(ticket):
        return product.duration or ids.SINGLE_ZONE_DURATION
    if is_multi_service_ticket(ticket):
        return product.duration
    raise InvalidTicketData(f"Unsupported ticket variant {ticket.variant!r}", field_name="variant")


def ticket_durations(ticket: TicketDescription) -> tuple[str, ...]:
    """Distinct durations across the products, first-seen order."""
    seen: list[str] = []
    for product in ticket.products:
        duration = product_duration(ticket, product)
        if duration is not None and duration not in seen:
            seen.append(duration)
    return tuple(seen)


def has_time_intervals(ticket: TicketDescription) -> bool:
    """Whether the tariff carries time intervals at all."""
    return is_geo_zone_ticket(ticket) or (
        is_multi_service_ticket(ticket)
        and any(product.duration for product in ticket.products)
    )


def time_intervals(ticket: TicketDescription) -> tuple[Node, ...]:
    """One TimeInterval per distinct duration."""
    return tuple(
        element(
            "TimeInterval",
            None,
            element("Name", f"{duration} day" if duration == "1" else f"{duration} days"),
            element("Description", f"P{duration}D"),
            version="1.0",
            id=ids.time_interval_id(duration),
        )
        for duration in ticket_durations(ticket)
    )


# ---- fare structure -----------------------------------------------------


def _access_parameters(ticket: TicketDescription) -> tuple[Node, ...]:
    if is_geo_zone_ticket(ticket):
        return (
            element(
                "FareZoneRef",
                None,
                version="1.0",
                ref=ids.fare_zone_id(ticket.zone_name or ""),
            ),
        )
    if is_multi_service_ticket(ticket):
        return tuple(
            element("LineRef", None, version="1.0", ref=ids.line_id(line))
            for line in ticket.lines
        )
    raise InvalidTicketData(f"Unsupported ticket variant {ticket.variant!r}", field_name="variant")


def _access_element(ticket: TicketDescription) -> Node:
    element_id = ids.access_element_id()
    name = "Available zones" if is_geo_zone_ticket(ticket) else "Available lines"
    return element(
        "FareStructureElement",
        None,
        element("Name", name),
        element("TypeOfFareStructureElementRef", None, version=FXC_VERSION, ref="fxc:access"),
        element(
            "GenericParameterAssignment",
            None,
            element(
                "TypeOfAccessRightAssignmentRef", None, version=FXC_VERSION, ref="fxc:can_access"
            ),
            element("ValidityParameterGroupingType", "OR"),
            element("validityParameters", None, *_access_parameters(ticket)),
            version="1.0",
            order="1",
            id=f"{element_id}@assignment",
        ),
        version="1.0",
        id=element_id,
    )


def _eligibility_element(ticket: TicketDescription) -> Node:
    element_id = ids.eligibility_element_id()
    return element(
        "FareStructureElement",
        None,
        element("Name", "Eligible user types"),
        element(
            "TypeOfFareStructureElementRef", None, version=FXC_VERSION, ref="fxc:eligibility"
        ),
        element(
            "GenericParameterAssignment",
            None,
            element("TypeOfAccessRightAssignmentRef", None, version=FXC_VERSION, ref="fxc:eligible"),
            element("LimitationGroupingType", "XOR"),
            element(
                "limitations",
                None,
                element(
                    "UserProfile",
                    None,
                    element("Name", ticket.passenger_type),
                    element(
                        "TypeOfConcessionRef",
                        None,
                        version=FXC_VERSION,
                        ref=f"fxc:{ticket.passenger_type}",
                    ),
                    version="1.0",
                    id=ids.user_profile_id(ticket.passenger_type),
                ),
            ),
            version="1.0",
            order="1",
            id=f"{element_id}@assignment",
        ),
        version="1.0",
        id=element_id,
    )


def _durations_element(ticket: TicketDescription) -> Node:
    element_id = ids.durations_element_id()
    return element(
        "FareStructureElement",
        None,
        element("Name", "Available duration combination"),
        element(
            "TypeOfFareStructureElementRef", None, version=FXC_VERSION, ref="fxc:durations"
        ),
        element(
            "timeIntervals",
            None,
            *(
                element("TimeIntervalRef", None, version="1.0", ref=ids.time_interval_id(duration))
                for duration in ticket_durations(ticket)
            ),
        ),
        element(
            "GenericParameterAssignment",
            None,
            element(
                "TypeOfAccessRightAssignmentRef", None, version=FXC_VERSION, ref="fxc:can_access"
            ),
            element("LimitationGroupingType", "XOR"),
            version="1.0",
            order="1",
            id=f"{element_id}@assignment",
        ),
        version="1.0",
        id=element_id,
    )


def fare_structure_elements(ticket: TicketDescription) -> tuple[Node, ...]:
    """Access, eligibility and (when intervals exist) duration elements."""
    elements = [_access_element(ticket), _eligibility_element(ticket)]
    if has_time_intervals(ticket):
        elements.append(_durations_element(ticket))
    return tuple(elements)


# ---- products -----------------------------------------------------------


def _governing_element_refs(ticket: TicketDescription, product: Product) -> tuple[Node, ...]:
    refs = [ids.access_element_id(), ids.eligibility_element_id()]
    if has_time_intervals(ticket) and product_duration(ticket, product) is not None:
        refs.append(ids.durations_element_id())
    return tuple(element("FareStructureElementRef", None, version="1.0", ref=ref) for ref in refs)


def _preassigned_fare_product(
    ticket: TicketDescription,
    operator: OperatorReferenceData,
    product: Product,
) -> Node:
    pid = ids.product_id(product, ticket.passenger_type)
    validable_id = ids.validable_element_id(product, ticket.passenger_type)
    return element(
        "PreassignedFareProduct",
        None,
        element("Name", f"{product.name} Pass"),
        element("ChargingMomentType", "beforeTravel"),
        element(
            "TypeOfFareProductRef",
            None,
            version=FXC_VERSION,
            ref="fxc:standard_product@pass@period",
        ),
        element(
            "OperatorRef",
            ids.operator_ref(operator.op_id),
            version="1.0",
            ref=ids.operator_ref(ticket.noc_code),
        ),
        element(
            "prices",
            None,
            element(
                "FareProductPrice",
                None,
                element("Amount", product.price),
                version="1.0",
                id=f"{pid}@price",
            ),
        ),
        element(
            "validableElements",
            None,
            element(
                "ValidableElement",
                None,
                element("Name", f"Unlimited rides available for {product.name}"),
                element("fareStructureElements", None, *_governing_element_refs(ticket, product)),
                version="1.0",
                id=validable_id,
            ),
        ),
        element(
            "accessRightsInProduct",
            None,
            element(
                "AccessRightInProduct",
                None,
                element("ValidableElementRef", None, version="1.0", ref=validable_id),
                version="1.0",
                id=f"{validable_id}@right",
                order="1",
            ),
        ),
        element("ProductType", "periodPass"),
        version="1.0",
        id=pid,
    )


def preassigned_fare_products(
    ticket: TicketDescription,
    operator: OperatorReferenceData,
) -> tuple[Node, ...]:
    """One PreassignedFareProduct per product, in input order."""
    return tuple(
        _preassigned_fare_product(ticket, operator, product) for product in ticket.products
    )


def sales_offer_packages(ticket: TicketDescription) -> tuple[Node, ...]:
    """One SalesOfferPackage per product, pointing at its fare product."""
    packages = []
    for product in ticket.products:
        package_id = ids.sales_offer_package_id(product, ticket.passenger_type)
        packages.append(
            element(
                "SalesOfferPackage",
                None,
                element("BrandingRef", None, version="1.0", ref=ids.branding_id(ticket)),
                element("Name", f"{product.name} Pass - paper ticket"),
                element(
                    "Description",
                    f"{product.name} Pass for {ticket.passenger_type} passengers, bought on board",
                ),
                element(
                    "distributionAssignments",
                    None,
                    element(
                        "DistributionAssignment",
                        None,
                        element("DistributionChannelType", "onBoard"),
                        element("PaymentMethods", "cash contactlessPaymentCard"),
                        version="1.0",
                        id=f"{package_id}@on_board",
                        order="1",
                    ),
                ),
                element(
                    "salesOfferPackageElements",
                    None,
                    element(
                        "SalesOfferPackageElement",
                        None,
                        element(
                            "TypeOfTravelDocumentRef",
                            None,
                            version=FXC_VERSION,
                            ref="fxc:printed_ticket",
                        ),
                        element(
                            "PreassignedFareProductRef",
                            None,
                            version="1.0",
                            ref=ids.product_id(product, ticket.passenger_type),
                        ),
                        version="1.0",
                        id=f"{package_id}@paper",
                        order="1",
                    ),
                ),
                version="1.0",
                id=package_id,
            )
        )
    return tuple(packages)


# ---- fare tables --------------------------------------------------------


def _cell(
    ticket: TicketDescription,
    product: Product,
    column: str,
    order: int,
) -> Node:
    tag = ticket.variant.value
    cell_id = ids.fare_table_cell_id(tag, product, column)
    price_children = [element("Amount", product.price)]
    duration = product_duration(ticket, product)
    if duration is not None:
        price_children.append(
            element("TimeIntervalRef", None, version="1.0", ref=ids.time_interval_id(duration))
        )
    return element(
        "Cell",
        None,
        element("TimeIntervalPrice", None, *price_children, version="1.0", id=f"{cell_id}@price"),
        element("ColumnRef", None, version="1.0", ref=ids.fare_table_column_id(tag, column)),
        element("RowRef", None, version="1.0", ref=ids.fare_table_row_id(tag, product)),
        version="1.0",
        id=cell_id,
        order=str(order),
    )


def _rows(ticket: TicketDescription) -> Node:
    tag = ticket.variant.value
    return element(
        "rows",
        None,
        *(
            element(
                "FareTableRow",
                None,
                element("Name", product.name),
                element(
                    "representing",
                    None,
                    element(
                        "PreassignedFareProductRef",
                        None,
                        version="1.0",
                        ref=ids.product_id(product, ticket.passenger_type),
                    ),
                ),
                version="1.0",
                id=ids.fare_table_row_id(tag, product),
                order=str(order),
            )
            for order, product in enumerate(ticket.products, 1)
        ),
    )


def _fare_table(ticket: TicketDescription, name: str, columns: list[tuple[str, Node]]) -> Node:
    tag = ticket.variant.value
    column_nodes = [
        element(
            "FareTableColumn",
            None,
            element("Name", column),
            element("representing", None, representing),
            version="1.0",
            id=ids.fare_table_column_id(tag, column),
            order=str(order),
        )
        for order, (column, representing) in enumerate(columns, 1)
    ]
    cells = []
    order = 1
    for product in ticket.products:
        for column, _ in columns:
            cells.append(_cell(ticket, product, column, order))
            order += 1
    return element(
        "FareTable",
        None,
        element("Name", name),
        element(
            "specifics",
            None,
            element("TariffRef", None, version="1.0", ref=ids.tariff_id()),
        ),
        element("columns", None, *column_nodes),
        _rows(ticket),
        element("cells", None, *cells),
        version="1.0",
        id=ids.fare_table_id(tag),
    )


def geo_zone_fare_table(ticket: TicketDescription) -> Node:
    """Fare table with one row per product and the fare zone as its only column."""
    zone_name = ticket.zone_name or ""
    zone_ref = element("FareZoneRef", None, version="1.0", ref=ids.fare_zone_id(zone_name))
    return _fare_table(ticket, f"{zone_name} Fares", [(zone_name, zone_ref)])


def multi_service_fare_table(ticket: TicketDescription) -> Node:
    """Fare table with one row per product and one column per line."""
    columns = [
        (line.line_name, element("LineRef", None, version="1.0", ref=ids.line_id(line)))
        for line in ticket.lines
    ]
    return _fare_table(ticket, f"{ticket.operator_name} Multi-service Fares", columns)

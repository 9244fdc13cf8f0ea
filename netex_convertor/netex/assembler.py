"""Frame assembler for period-ticket documents.

Turns a parsed skeleton into a complete document for one ticket. The
steps run in a fixed order and each returns a new tree:

1. Publication timestamp and request metadata
2. Composite Frame
3. Resource Frame
4. Site Frame and Service Calendar Frame
5. Service Frame (multi-service only, pruned otherwise)
6. Network Fare Frame (zone-based only, dropped otherwise)
7. Price Fare Frame
8. Fare Table Frame
9. Fare frame list: [Network, Price, FareTable] or [Price, FareTable]

The instant the document describes is injected once and every timestamp
is derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..domain.errors import InvalidTicketData, TemplateMalformed
from ..domain.models import OperatorReferenceData, TicketDescription
from . import identifiers as ids
from . import resolvers
from .tree import Node
from .variants import is_geo_zone_ticket, is_multi_service_ticket

COMPOSITE_FRAME_PATH = "dataObjects/CompositeFrame[0]"
FRAMES_PATH = f"{COMPOSITE_FRAME_PATH}/frames"
TARIFF_VALIDITY_YEARS = 99


def format_timestamp(moment: datetime) -> str:
    """Render an instant as a UTC ISO-8601 timestamp with milliseconds."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{moment.microsecond // 1000:03d}Z"


def add_years(moment: datetime, years: int) -> datetime:
    """Return a new instant ``years`` later; 29 February maps to 28 February."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)


@dataclass(frozen=True)
class NetexGenerator:
    """Builds the period-ticket document for one ticket.

    Attributes:
        ticket: The validated ticket description
        operator: Reference data for the ticket's operator
        generated_at: The single instant stamped throughout the document
    """

    ticket: TicketDescription
    operator: OperatorReferenceData
    generated_at: datetime

    def __post_init__(self) -> None:
        if not (is_geo_zone_ticket(self.ticket) or is_multi_service_ticket(self.ticket)):
            raise InvalidTicketData(
                f"Unsupported ticket variant {self.ticket.variant!r}",
                field_name="variant",
            )

    @property
    def frame_ids(self) -> ids.FrameIds:
        return ids.FrameIds.for_operator(self.ticket.noc_code)

    @property
    def noc_ref(self) -> str:
        return ids.operator_ref(self.ticket.noc_code)

    @property
    def op_id_ref(self) -> str:
        return ids.operator_ref(self.operator.op_id)

    @property
    def website(self) -> str:
        return resolvers.clean_website(self.operator.website)

    # ---- step 1 ---------------------------------------------------------

    def update_publication_timestamp(self, delivery: Node) -> Node:
        return delivery.with_text("PublicationTimestamp", format_timestamp(self.generated_at))

    def update_publication_request(self, request: Node) -> Node:
        refs = "topics/NetworkFrameTopic/NetworkFilterByValue/objectReferences"
        first_product = self.ticket.products[0]
        return (
            request.with_text("RequestTimestamp", format_timestamp(self.generated_at))
            .with_text("Description", f"Request for {self.ticket.noc_code} bus pass fares")
            .with_attribute(f"{refs}/OperatorRef", "ref", self.noc_ref)
            .with_text(f"{refs}/OperatorRef", self.op_id_ref)
            # Points at the first product so the publication can be located
            .with_attribute(
                f"{refs}/PreassignedFareProductRef",
                "ref",
                ids.product_id(first_product, self.ticket.passenger_type),
            )
        )

    # ---- step 2 ---------------------------------------------------------

    def update_composite_frame(self, frame: Node) -> Node:
        return (
            frame.with_id("", self.frame_ids.composite)
            .with_text("Name", f"Fares for {self.ticket.operator_name}")
            .with_text("Description", f"Period ticket for {self.ticket.operator_name}")
        )

    # ---- step 3 ---------------------------------------------------------

    def update_resource_frame(self, frame: Node) -> Node:
        public_name = self.operator.operator_public_name
        frame = (
            frame.with_id("", self.frame_ids.resource)
            .with_text("codespaces/Codespace/XmlnsUrl", self.website)
            .with_text("dataSources/DataSource/Email", self.operator.timetable_enquiry_email)
        )
        for index in (0, 1):
            org_ref = (
                f"responsibilitySets/ResponsibilitySet[{index}]/roles"
                "/ResponsibilityRoleAssignment/ResponsibleOrganisationRef"
            )
            frame = frame.with_attribute(org_ref, "ref", self.noc_ref).with_text(org_ref, public_name)

        branding = "typesOfValue/ValueSet[0]/values/Branding"
        operator = "organisations/Operator"
        return (
            frame.with_id(branding, ids.branding_id(self.ticket))
            .with_text(f"{branding}/Name", public_name)
            .with_text(f"{branding}/Url", self.website)
            .with_id(operator, self.noc_ref)
            .with_text(f"{operator}/PublicCode", self.ticket.noc_code)
            .with_text(f"{operator}/Name", public_name)
            .with_text(f"{operator}/ShortName", self.ticket.operator_name)
            .with_text(f"{operator}/TradingName", self.operator.vosa_psv_license_name)
            .with_text(f"{operator}/ContactDetails/Phone", self.operator.fare_enquiry_phone)
            .with_text(f"{operator}/ContactDetails/Url", self.website)
            .with_text(f"{operator}/Address/Street", self.operator.complaints_address)
            .with_text(f"{operator}/PrimaryMode", self.operator.mode.lower())
        )

    # ---- step 4 ---------------------------------------------------------

    def update_site_frame(self, frame: Node) -> Node:
        return frame.with_id("", self.frame_ids.site).with_text(
            "Name", f"Common site elements for {self.ticket.noc_code}: Travel Shops"
        )

    def update_service_calendar_frame(self, frame: Node) -> Node:
        return frame.with_id("", self.frame_ids.service_calendar)

    # ---- step 5 ---------------------------------------------------------

    def update_service_frame(self, frame: Node) -> Node:
        if not is_multi_service_ticket(self.ticket):
            return frame.without("")
        return frame.with_id("", self.frame_ids.service).with_children(
            "lines", "Line", resolvers.line_list(self.ticket, self.operator)
        )

    # ---- step 6 ---------------------------------------------------------

    def update_network_fare_frame(self, frame: Node) -> Optional[Node]:
        if not is_geo_zone_ticket(self.ticket):
            return None
        zone_name = self.ticket.zone_name
        zone = "fareZones/FareZone"
        return (
            frame.with_id("", self.frame_ids.network_fare)
            .with_text("Name", f"{ids.GROUP_OF_PRODUCTS_NAME} Network")
            .with_attribute("prerequisites/ResourceFrameRef", "ref", self.frame_ids.resource)
            .with_id(zone, ids.fare_zone_id(zone_name or ""))
            .with_text(f"{zone}/Name", f"{zone_name}")
            .with_text(f"{zone}/Description", f"{zone_name} {ids.GROUP_OF_PRODUCTS_NAME} Zone")
            .with_children(
                f"{zone}/members",
                "ScheduledStopPointRef",
                resolvers.scheduled_stop_point_refs(self.ticket.stops),
            )
            .with_children(
                f"{zone}/projections",
                "TopographicProjectionRef",
                resolvers.topographic_projection_refs(self.ticket.stops),
            )
        )

    # ---- step 7 ---------------------------------------------------------

    def update_tariff(self, tariff: Node) -> Node:
        valid_from = self.generated_at
        valid_to = add_years(valid_from, TARIFF_VALIDITY_YEARS)
        scope = "single zone" if is_geo_zone_ticket(self.ticket) else "multi-service"
        tariff = (
            tariff.with_id("", ids.tariff_id())
            .with_text("validityConditions/ValidBetween/FromDate", format_timestamp(valid_from))
            .with_text("validityConditions/ValidBetween/ToDate", format_timestamp(valid_to))
            .with_text("Name", f"{ids.GROUP_OF_PRODUCTS_NAME} - Tariff")
            .with_text("Description", f"{ids.GROUP_OF_PRODUCTS_NAME} {scope} tariff")
            .with_attribute("OperatorRef", "ref", self.noc_ref)
            .with_text("OperatorRef", self.op_id_ref)
            .with_id("geographicalIntervals/GeographicalInterval", ids.geographical_interval_id())
        )

        if resolvers.has_time_intervals(self.ticket):
            tariff = tariff.with_children(
                "timeIntervals", "TimeInterval", resolvers.time_intervals(self.ticket)
            )
        else:
            tariff = tariff.without("timeIntervals")

        return tariff.with_children(
            "fareStructureElements",
            "FareStructureElement",
            resolvers.fare_structure_elements(self.ticket),
        )

    def update_price_fare_frame(self, frame: Node) -> Node:
        frame = frame.with_id("", self.frame_ids.price_fare)

        if is_geo_zone_ticket(self.ticket):
            frame = frame.with_attribute(
                "prerequisites/FareFrameRef", "ref", self.frame_ids.network_fare
            )
        else:
            # No Network Fare Frame to depend on
            frame = frame.without("prerequisites")

        return (
            frame.update("tariffs/Tariff", self.update_tariff)
            .with_children(
                "fareProducts",
                "PreassignedFareProduct",
                resolvers.preassigned_fare_products(self.ticket, self.operator),
            )
            .with_children(
                "salesOfferPackages",
                "SalesOfferPackage",
                resolvers.sales_offer_packages(self.ticket),
            )
        )

    # ---- step 8 ---------------------------------------------------------

    def update_fare_table_fare_frame(self, frame: Node) -> Node:
        if is_geo_zone_ticket(self.ticket):
            fare_table = resolvers.geo_zone_fare_table(self.ticket)
        else:
            fare_table = resolvers.multi_service_fare_table(self.ticket)

        return (
            frame.with_id("", self.frame_ids.fare_table)
            .with_text("Name", f"{ids.GROUP_OF_PRODUCTS_NAME} Prices")
            .with_attribute("prerequisites/FareFrameRef", "ref", self.frame_ids.price_fare)
            .with_id("PricingParameterSet", ids.pricing_parameter_set_id())
            .with_children("fareTables", "FareTable", (fare_table,))
        )

    # ---- step 9 ---------------------------------------------------------

    def generate(self, skeleton: Node) -> Node:
        """Produce the populated document tree from a skeleton.

        Raises:
            TemplateMalformed: If the skeleton lacks a slot that is written.
            InvalidTicketData: If a resolver rejects the ticket.
        """
        tree = self.update_publication_timestamp(skeleton)
        tree = tree.update("PublicationRequest", self.update_publication_request)
        tree = tree.update(COMPOSITE_FRAME_PATH, self.update_composite_frame)

        frames = tree.find(FRAMES_PATH)
        template_fare_frames = frames.children_named("FareFrame")
        if len(template_fare_frames) != 3:
            raise TemplateMalformed(
                f"Expected 3 FareFrame slots, found {len(template_fare_frames)}",
                node_path=f"{FRAMES_PATH}/FareFrame",
            )
        network_slot, price_slot, fare_table_slot = template_fare_frames

        frames = frames.update("ResourceFrame", self.update_resource_frame)
        frames = frames.update("SiteFrame", self.update_site_frame)
        frames = frames.update("ServiceCalendarFrame", self.update_service_calendar_frame)
        frames = frames.update("ServiceFrame", self.update_service_frame)

        network_frame = self.update_network_fare_frame(network_slot)
        price_frame = self.update_price_fare_frame(price_slot)
        fare_table_frame = self.update_fare_table_fare_frame(fare_table_slot)

        if network_frame is not None:
            fare_frames = (network_frame, price_frame, fare_table_frame)
        else:
            fare_frames = (price_frame, fare_table_frame)

        frames = frames.with_children("", "FareFrame", fare_frames)
        return tree.with_node(FRAMES_PATH, frames)


def generate_netex_tree(
    ticket: TicketDescription,
    operator: OperatorReferenceData,
    skeleton: Node,
    generated_at: datetime,
) -> Node:
    """Populate ``skeleton`` for ``ticket``; see NetexGenerator."""
    return NetexGenerator(ticket, operator, generated_at).generate(skeleton)

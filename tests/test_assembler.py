"""Tests for the frame assembler."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from netex_convertor.domain.errors import TemplateMalformed
from netex_convertor.domain.models import Product
from netex_convertor.netex import identifiers as ids
from netex_convertor.netex.assembler import (
    FRAMES_PATH,
    NetexGenerator,
    add_years,
    format_timestamp,
    generate_netex_tree,
)
from netex_convertor.netex.serializer import serialize

# Refs that point outside the document
EXTERNAL_PREFIXES = ("fxc:", "naptStop:", "nptgLocality:")


def fare_frames(tree):
    frames = tree.find(FRAMES_PATH)
    return [f for f in frames.children_named("FareFrame") if f.present]


def declared_ids(tree):
    return [node.id for node in tree.iter() if node.id]


def internal_refs(tree):
    return [
        (node.tag, node.ref)
        for node in tree.iter()
        if node.ref and not node.ref.startswith(EXTERNAL_PREFIXES)
    ]


class TestTimestamps:
    def test_format_timestamp_has_milliseconds_and_z(self, generated_at):
        assert format_timestamp(generated_at) == "2020-02-29T12:30:45.123Z"

    def test_naive_datetime_is_treated_as_utc(self):
        assert format_timestamp(datetime(2021, 1, 2, 3, 4, 5)) == "2021-01-02T03:04:05.000Z"

    def test_add_years_leap_day(self, generated_at):
        assert add_years(generated_at, 99) == datetime(2119, 2, 28, 12, 30, 45, 123456, tzinfo=timezone.utc)

    def test_add_years_does_not_touch_input(self, generated_at):
        before = generated_at
        add_years(generated_at, 99)
        assert generated_at == before


class TestGeoZone:
    @pytest.fixture
    def tree(self, geo_zone_ticket, operator, skeleton, generated_at):
        return generate_netex_tree(geo_zone_ticket, operator, skeleton, generated_at)

    def test_three_fare_frames_in_order(self, tree):
        frame_ids = ids.FrameIds.for_operator("BLAC")
        assert [f.id for f in fare_frames(tree)] == [
            frame_ids.network_fare,
            frame_ids.price_fare,
            frame_ids.fare_table,
        ]

    def test_no_service_frame(self, tree):
        assert not tree.find(f"{FRAMES_PATH}/ServiceFrame").present

    def test_fare_zone_members(self, tree):
        zone = fare_frames(tree)[0].find("fareZones/FareZone")

        assert zone.find("Name").text == "Town Centre"
        assert [r.ref for r in zone.find("members").children] == [
            "naptStop:490000001",
            "naptStop:490000002",
        ]
        assert [r.ref for r in zone.find("projections").children] == [
            "nptgLocality:E0034964",
            "nptgLocality:E0034965",
        ]

    def test_network_frame_requires_resource_frame(self, tree):
        ref = fare_frames(tree)[0].find("prerequisites/ResourceFrameRef")
        assert ref.ref == ids.FrameIds.for_operator("BLAC").resource

    def test_price_frame_prerequisite_present(self, tree):
        price = fare_frames(tree)[1]
        assert price.find("prerequisites").present
        assert price.find("prerequisites/FareFrameRef").ref == ids.FrameIds.for_operator("BLAC").network_fare

    def test_tariff_validity(self, tree):
        valid_between = fare_frames(tree)[1].find("tariffs/Tariff/validityConditions/ValidBetween")

        assert valid_between.find("FromDate").text == "2020-02-29T12:30:45.123Z"
        assert valid_between.find("ToDate").text == "2119-02-28T12:30:45.123Z"

    def test_single_weekly_product(self, tree):
        products = fare_frames(tree)[1].find("fareProducts").children
        assert [p.id for p in products] == ["op:Pass@Weekly_adult"]
        assert products[0].find("prices/FareProductPrice/Amount").text == "10.00"


class TestMultiService:
    @pytest.fixture
    def tree(self, multi_service_ticket, operator, skeleton, generated_at):
        return generate_netex_tree(multi_service_ticket, operator, skeleton, generated_at)

    def test_two_fare_frames(self, tree):
        frame_ids = ids.FrameIds.for_operator("BLAC")
        assert [f.id for f in fare_frames(tree)] == [frame_ids.price_fare, frame_ids.fare_table]

    def test_service_frame_lines_match_input(self, tree):
        service = tree.find(f"{FRAMES_PATH}/ServiceFrame")

        assert service.present
        assert [line.find("PublicCode").text for line in service.find("lines").children] == ["L1", "L2"]

    def test_price_frame_has_no_prerequisites(self, tree):
        assert not fare_frames(tree)[0].find("prerequisites").present

    def test_time_intervals_present(self, tree):
        intervals = fare_frames(tree)[0].find("tariffs/Tariff/timeIntervals")
        assert intervals.present
        assert [i.id for i in intervals.children] == [ids.time_interval_id("7")]

    def test_repeated_duration_declares_one_interval(
        self, mixed_duration_multi_service_ticket, operator, skeleton, generated_at
    ):
        tree = generate_netex_tree(mixed_duration_multi_service_ticket, operator, skeleton, generated_at)
        intervals = fare_frames(tree)[0].find("tariffs/Tariff/timeIntervals")

        assert [i.id for i in intervals.children] == [ids.time_interval_id("7")]

    def test_time_intervals_absent_without_duration(
        self, multi_service_ticket, operator, skeleton, generated_at
    ):
        ticket = replace(multi_service_ticket, products=(Product(name="Weekly", price="15.00"),))
        tree = generate_netex_tree(ticket, operator, skeleton, generated_at)

        assert not fare_frames(tree)[0].find("tariffs/Tariff/timeIntervals").present
        assert "TimeIntervalRef" not in [n.tag for n in tree.iter()]


@pytest.fixture
def multi_product_geo_zone_ticket(geo_zone_ticket):
    return replace(
        geo_zone_ticket,
        products=(
            Product(name="Weekly", price="10.00"),
            Product(name="Monthly", price="35.00", duration="30"),
            Product(name="Annual", price="300.00", duration="30"),
        ),
    )


@pytest.fixture
def mixed_duration_multi_service_ticket(multi_service_ticket):
    return replace(
        multi_service_ticket,
        products=(
            Product(name="Weekly", price="15.00", duration="7"),
            Product(name="Day", price="4.00"),
            Product(name="Month", price="50.00", duration="7"),
        ),
    )


@pytest.fixture
def table_keyword_products_ticket(multi_service_ticket):
    # Product names equal to the row and column segments of fare table ids
    return replace(
        multi_service_ticket,
        products=(
            Product(name="c", price="1.00", duration="1"),
            Product(name="r", price="2.00", duration="1"),
        ),
    )


class TestDocumentWide:
    @pytest.fixture(
        params=[
            "geo_zone_ticket",
            "multi_service_ticket",
            "multi_product_geo_zone_ticket",
            "mixed_duration_multi_service_ticket",
            "table_keyword_products_ticket",
        ]
    )
    def ticket(self, request):
        return request.getfixturevalue(request.param)

    def test_every_internal_ref_resolves(self, ticket, operator, skeleton, generated_at):
        tree = generate_netex_tree(ticket, operator, skeleton, generated_at)
        declared = set(declared_ids(tree))

        unresolved = [(tag, ref) for tag, ref in internal_refs(tree) if ref not in declared]
        assert unresolved == []

    def test_frame_refs_point_at_declared_frames(self, ticket, operator, skeleton, generated_at):
        tree = generate_netex_tree(ticket, operator, skeleton, generated_at)
        frame_ids = {f.id for f in tree.find(FRAMES_PATH).children if f.present}

        frame_refs = [
            node.ref
            for node in tree.iter()
            if node.tag in ("ResourceFrameRef", "FareFrameRef")
        ]
        assert frame_refs
        assert set(frame_refs) <= frame_ids

    def test_ids_are_unique(self, ticket, operator, skeleton, generated_at):
        tree = generate_netex_tree(ticket, operator, skeleton, generated_at)
        all_ids = declared_ids(tree)
        assert len(all_ids) == len(set(all_ids))

    def test_no_placeholder_ids_or_refs(self, ticket, operator, skeleton, generated_at):
        tree = generate_netex_tree(ticket, operator, skeleton, generated_at)
        assert "PLACEHOLDER" not in declared_ids(tree)
        assert "PLACEHOLDER" not in [ref for _, ref in internal_refs(tree)]

    def test_idempotent(self, ticket, operator, skeleton, generated_at):
        first = serialize(generate_netex_tree(ticket, operator, skeleton, generated_at))
        second = serialize(generate_netex_tree(ticket, operator, skeleton, generated_at))
        assert first == second

    def test_skeleton_is_not_modified(self, ticket, operator, skeleton, generated_at):
        before = skeleton
        generate_netex_tree(ticket, operator, skeleton, generated_at)
        assert skeleton == before
        assert skeleton.find("PublicationTimestamp").text == "PLACEHOLDER"

    def test_publication_request(self, ticket, operator, skeleton, generated_at):
        tree = generate_netex_tree(ticket, operator, skeleton, generated_at)
        refs = tree.find("PublicationRequest/topics/NetworkFrameTopic/NetworkFilterByValue/objectReferences")

        assert tree.find("PublicationRequest/Description").text == "Request for BLAC bus pass fares"
        assert refs.find("OperatorRef").ref == "noc:BLAC"
        assert refs.find("OperatorRef").text == "noc:135742"
        assert refs.find("PreassignedFareProductRef").ref == ids.product_id(ticket.products[0], "adult")


class TestResourceFrame:
    def test_operator_details(self, geo_zone_ticket, operator, skeleton, generated_at):
        tree = generate_netex_tree(geo_zone_ticket, operator, skeleton, generated_at)
        resource = tree.find(f"{FRAMES_PATH}/ResourceFrame")
        op = resource.find("organisations/Operator")

        assert op.id == "noc:BLAC"
        assert op.find("Name").text == "Blackpool Transport Services Ltd"
        assert op.find("TradingName").text == "Blackpool Transport"
        assert op.find("ContactDetails/Url").text == "https://www.blackpooltransport.com"
        assert op.find("PrimaryMode").text == "bus"
        assert resource.find("dataSources/DataSource/Email").text == "enquiries@blackpooltransport.com"

    def test_composite_frame_names_operator(self, geo_zone_ticket, operator, skeleton, generated_at):
        tree = generate_netex_tree(geo_zone_ticket, operator, skeleton, generated_at)
        composite = tree.find("dataObjects/CompositeFrame")

        assert composite.id == ids.FrameIds.for_operator("BLAC").composite
        assert composite.find("Name").text == "Fares for Blackpool Transport"


def test_skeleton_without_fare_frame_slots(geo_zone_ticket, operator, skeleton, generated_at):
    broken = skeleton.with_children(FRAMES_PATH, "FareFrame", [])

    with pytest.raises(TemplateMalformed):
        NetexGenerator(geo_zone_ticket, operator, generated_at).generate(broken)


def test_skeleton_missing_slot(geo_zone_ticket, operator, skeleton, generated_at):
    broken = skeleton.with_children(f"{FRAMES_PATH}/ResourceFrame", "organisations", [])

    with pytest.raises(TemplateMalformed):
        NetexGenerator(geo_zone_ticket, operator, generated_at).generate(broken)

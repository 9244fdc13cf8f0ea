"""Tests for identifier building."""

from dataclasses import astuple

from netex_convertor.domain.models import Product, SelectedLine
from netex_convertor.netex import identifiers as ids


def test_frame_id_grammar():
    assert (
        ids.frame_id("BLAC", ids.FrameKind.PRICE_FARE)
        == "epd:UK:BLAC:FareFrame_UK_PI_FARE_PRODUCT:PLACEHOLDER@pass:op"
    )
    assert (
        ids.frame_id("BLAC", ids.FrameKind.RESOURCE)
        == "epd:UK:BLAC:ResourceFrame_UK_PI_COMMON:BLAC:op"
    )
    assert (
        ids.frame_id("BLAC", ids.FrameKind.SITE)
        == "epd:UK:BLAC:SiteFrame_UK_PI_STOP:sale_pois:op"
    )


def test_frame_ids_are_distinct():
    frame_ids = astuple(ids.FrameIds.for_operator("BLAC"))
    assert len(set(frame_ids)) == len(frame_ids) == 8


def test_frame_ids_match_frame_id():
    frame_ids = ids.FrameIds.for_operator("BLAC")
    assert frame_ids.network_fare == ids.frame_id("BLAC", ids.FrameKind.NETWORK_FARE)
    assert frame_ids.composite == ids.frame_id("BLAC", ids.FrameKind.COMPOSITE)


def test_product_identifiers():
    product = Product(name="Weekly", price="10.00")

    assert ids.product_id(product, "adult") == "op:Pass@Weekly_adult"
    assert ids.validable_element_id(product, "adult") == "op:Pass@Weekly_adult@travel"
    assert ids.sales_offer_package_id(product, "adult") == "op:Pass@Weekly-SOP@adult"


def test_tariff_identifiers():
    assert ids.tariff_id() == "op:Tariff@PLACEHOLDER"
    assert ids.time_interval_id("7") == "op:Tariff@PLACEHOLDER@7day"
    assert ids.geographical_interval_id() == "op:Tariff@PLACEHOLDER@1zone"
    assert len({ids.access_element_id(), ids.eligibility_element_id(), ids.durations_element_id()}) == 3


def test_fare_table_identifiers():
    product = Product(name="Weekly", price="10.00")
    table = ids.fare_table_id("GeoZone")

    assert ids.fare_table_column_id("GeoZone", "Zone A") == f"{table}@c@Zone A"
    assert ids.fare_table_row_id("GeoZone", product) == f"{table}@r@Weekly"
    assert ids.fare_table_cell_id("GeoZone", product, "Zone A") == f"{table}@cell@Weekly@Zone A"


def test_network_identifiers():
    assert ids.operator_ref("BLAC") == "noc:BLAC"
    assert ids.fare_zone_id("Town Centre") == "op:PLACEHOLDER@Town Centre"
    assert ids.line_id(SelectedLine(line_name="L1")) == "op:L1"

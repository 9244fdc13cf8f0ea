"""Tests for the XML serializer."""

import pytest
from lxml import etree

from netex_convertor.domain.errors import SerializationFailure
from netex_convertor.netex.assembler import generate_netex_tree
from netex_convertor.netex.serializer import serialize
from netex_convertor.netex.tree import element

NS = {"n": "http://www.netex.org.uk/netex"}


def parse(xml):
    return etree.fromstring(xml.encode("utf-8"))


def test_declaration_and_namespaces():
    xml = serialize(element("PublicationDelivery", None, element("Description", "d"), version="1.1"))
    root = parse(xml)

    assert xml.startswith("<?xml version='1.0' encoding='UTF-8'?>")
    assert root.tag == "{http://www.netex.org.uk/netex}PublicationDelivery"
    assert root.nsmap["siri"] == "http://www.siri.org.uk/siri"
    assert root.nsmap["gml"] == "http://www.opengis.net/gml/3.2"
    assert root.find("n:Description", NS).text == "d"


def test_absent_subtrees_are_omitted():
    tree = element(
        "PublicationDelivery",
        None,
        element("Description", "kept"),
        element("dataObjects", None, element("Frame", "gone")),
    ).without("dataObjects")

    root = parse(serialize(tree))

    assert root.find("n:Description", NS) is not None
    assert root.find("n:dataObjects", NS) is None


def test_attributes_are_rendered():
    tree = element("PublicationDelivery", None, element("FareFrameRef", None, version="1.0", ref="epd:x"))
    ref = parse(serialize(tree)).find("n:FareFrameRef", NS)

    assert ref.get("ref") == "epd:x"
    assert ref.get("version") == "1.0"


def test_schema_location_attribute(skeleton):
    root = parse(serialize(skeleton))
    assert root.get("{http://www.w3.org/2001/XMLSchema-instance}schemaLocation")


def test_invalid_text_raises():
    tree = element("PublicationDelivery", None, element("Description", "bad\x00text"))
    with pytest.raises(SerializationFailure):
        serialize(tree)


def test_absent_root_raises():
    with pytest.raises(SerializationFailure):
        serialize(element("PublicationDelivery").without(""))


def test_generated_document_round_trips(geo_zone_ticket, operator, skeleton, generated_at):
    xml = serialize(generate_netex_tree(geo_zone_ticket, operator, skeleton, generated_at))
    root = parse(xml)

    fare_frames = root.findall("n:dataObjects/n:CompositeFrame/n:frames/n:FareFrame", NS)
    assert len(fare_frames) == 3
    assert root.find("n:dataObjects/n:CompositeFrame/n:frames/n:ServiceFrame", NS) is None
    members = root.findall(".//n:FareZone/n:members/n:ScheduledStopPointRef", NS)
    assert [m.get("ref") for m in members] == ["naptStop:490000001", "naptStop:490000002"]

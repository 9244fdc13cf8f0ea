"""Serialize a populated document tree to NeTEx XML text.

Elements are written in the NeTEx default namespace with the siri, gml
and xsi prefixes declared on the root. Nodes marked absent are left out
together with their subtrees.
"""

from __future__ import annotations

from lxml import etree

from ..domain.errors import SerializationFailure
from .template import NETEX_NS
from .tree import Node

NSMAP = {
    None: NETEX_NS,
    "siri": "http://www.siri.org.uk/siri",
    "gml": "http://www.opengis.net/gml/3.2",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
}


def _qualified(tag: str) -> str:
    return f"{{{NETEX_NS}}}{tag}"


def _fill(el: etree._Element, node: Node) -> None:
    for name, value in node.attributes:
        el.set(name, value)
    if node.text is not None:
        el.text = node.text
    for child in node.children:
        if child.present:
            _fill(etree.SubElement(el, _qualified(child.tag)), child)


def to_element(tree: Node) -> etree._Element:
    """Build an lxml element tree from a document tree."""
    if not tree.present:
        raise SerializationFailure(f"Root element {tree.tag} is marked absent")
    root = etree.Element(_qualified(tree.tag), nsmap=NSMAP)
    _fill(root, tree)
    return root


def serialize(tree: Node) -> str:
    """Render a document tree as pretty-printed UTF-8 XML text.

    Raises:
        SerializationFailure: If a tag, attribute or text value cannot be
            represented in XML.
    """
    try:
        root = to_element(tree)
        raw = etree.tostring(
            root,
            pretty_print=True,
            xml_declaration=True,
            encoding="UTF-8",
        )
    except (ValueError, TypeError, etree.LxmlError) as e:
        raise SerializationFailure("Cannot render document as XML", cause=e)
    return raw.decode("utf-8")

"""Document skeleton loading.

The skeleton is an XML file shipped with the package (or supplied via
configuration) whose placeholder leaves are filled in by the frame
assembler. It is parsed into an immutable ``Node`` tree on every call so
that no state is shared between generation runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from lxml import etree

from ..config import TemplateConfig, get_config
from ..domain.errors import TemplateMalformed, TemplateUnavailable
from ..domain.models import TicketVariant
from .tree import Node

NETEX_NS = "http://www.netex.org.uk/netex"
ROOT_TAG = "PublicationDelivery"


def load_template(path: Union[str, Path]) -> Node:
    """Read and parse a skeleton file.

    Args:
        path: Path of the skeleton XML file.

    Returns:
        The skeleton as an immutable tree rooted at PublicationDelivery.

    Raises:
        TemplateUnavailable: If the file cannot be read.
        TemplateMalformed: If the file is not a PublicationDelivery document.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise TemplateUnavailable(
            f"Cannot read template {path}",
            template_path=str(path),
            cause=e,
        )
    return parse_template(raw, source=str(path))


def parse_template(raw: bytes, source: str = "<memory>") -> Node:
    """Parse skeleton bytes into a tree.

    Raises:
        TemplateMalformed: If the bytes are not well-formed XML or the root
            element is not PublicationDelivery.
    """
    parser = etree.XMLParser(remove_comments=True, remove_blank_text=True, resolve_entities=False)
    try:
        root = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError as e:
        raise TemplateMalformed(
            f"Template {source} is not well-formed XML",
            template_path=source,
            cause=e,
        )

    if etree.QName(root).localname != ROOT_TAG:
        raise TemplateMalformed(
            f"Template {source} has root {etree.QName(root).localname!r}, expected {ROOT_TAG!r}",
            template_path=source,
        )

    return _to_node(root)


def _to_node(el: etree._Element) -> Node:
    children = tuple(
        _to_node(child) for child in el if isinstance(child.tag, str)
    )
    text = el.text.strip() if el.text and el.text.strip() else None
    return Node(
        tag=etree.QName(el).localname,
        attributes=tuple(_attribute_name(key, value) for key, value in el.attrib.items()),
        text=text,
        children=children,
    )


def _attribute_name(key: str, value: str) -> tuple[str, str]:
    qname = etree.QName(key)
    # Foreign-namespace attributes (xsi:schemaLocation) keep their Clark name
    if qname.namespace and qname.namespace != NETEX_NS:
        return key, value
    return qname.localname, value


@dataclass
class TemplateLoader:
    """Resolves and loads the skeleton for a ticket variant.

    Attributes:
        config: Template configuration (directory, file per variant)
    """

    config: TemplateConfig = field(default_factory=lambda: get_config().templates)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def path_for(self, variant: TicketVariant) -> Path:
        """Return the configured skeleton path for a variant.

        Raises:
            TemplateUnavailable: If no skeleton is configured for the variant.
        """
        try:
            return self.config.template_path(variant.value)
        except KeyError as e:
            raise TemplateUnavailable(
                f"No template configured for variant {variant.value}",
                cause=e,
            )

    def load(self, variant: TicketVariant) -> Node:
        """Load a fresh skeleton tree for a variant."""
        path = self.path_for(variant)
        self._logger.debug("Loading template", extra={"template_path": str(path)})
        return load_template(path)

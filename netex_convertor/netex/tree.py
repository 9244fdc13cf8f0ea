"""Immutable element tree for NeTEx documents.

The document skeleton is held as a tree of frozen ``Node`` values. Every
update returns a new tree that shares the untouched subtrees with the
old one, so a parsed skeleton can never be modified by a generation run
and concurrent runs cannot alias each other's state.

Nodes are addressed with slash-separated paths of child tags relative to
the node the update is applied to, with an optional ``[n]`` index to pick
the n-th child of that tag::

    frame.with_text("organisations/Operator/Name", "Blue Bus")
    frame.with_attribute("responsibilitySets/ResponsibilitySet[1]/roles"
                         "/ResponsibilityRoleAssignment/ResponsibleOrganisationRef",
                         "ref", "noc:BLUE")

A path that does not exist raises ``TemplateMalformed`` instead of being
ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, Optional, Sequence

from ..domain.errors import TemplateMalformed

_SEGMENT = re.compile(r"^(?P<tag>[A-Za-z_][\w.\-]*)(?:\[(?P<index>\d+)\])?$")


@dataclass(frozen=True, slots=True)
class Node:
    """One element of a NeTEx document.

    Attributes:
        tag: Local element name (e.g. 'FareFrame')
        attributes: Ordered (name, value) pairs
        text: Text content, if the element carries a value
        children: Child elements in document order
        present: False when the element is pruned from the output
    """

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    text: Optional[str] = None
    children: tuple[Node, ...] = field(default_factory=tuple)
    present: bool = True

    # ---- reading -------------------------------------------------------

    def attribute(self, name: str) -> Optional[str]:
        """Return an attribute value, or None if it is not set."""
        for key, value in self.attributes:
            if key == name:
                return value
        return None

    @property
    def id(self) -> Optional[str]:
        return self.attribute("id")

    @property
    def ref(self) -> Optional[str]:
        return self.attribute("ref")

    def children_named(self, tag: str) -> tuple[Node, ...]:
        """Return all direct children with the given tag."""
        return tuple(child for child in self.children if child.tag == tag)

    def find(self, path: str) -> Node:
        """Return the node at ``path``.

        Raises:
            TemplateMalformed: If any segment of the path does not exist.
        """
        node = self
        for tag, index in _parse_path(path):
            node = node.children[_child_position(node, tag, index, path)]
        return node

    def has(self, path: str) -> bool:
        """Check whether ``path`` resolves."""
        try:
            self.find(path)
        except TemplateMalformed:
            return False
        return True

    def iter(self) -> Iterator[Node]:
        """Walk this node and its present descendants, depth first."""
        if not self.present:
            return
        yield self
        for child in self.children:
            yield from child.iter()

    # ---- updating ------------------------------------------------------

    def update(self, path: str, fn: Callable[[Node], Node]) -> Node:
        """Return a copy of this tree with ``fn`` applied to the node at ``path``.

        An empty path applies ``fn`` to this node.
        """
        return _update(self, _parse_path(path), fn, path)

    def with_text(self, path: str, text: str) -> Node:
        return self.update(path, lambda node: replace(node, text=text))

    def with_attribute(self, path: str, name: str, value: str) -> Node:
        return self.update(path, lambda node: _set_attribute(node, name, value))

    def with_id(self, path: str, value: str) -> Node:
        return self.with_attribute(path, "id", value)

    def with_node(self, path: str, new_node: Node) -> Node:
        """Replace the node at ``path`` by ``new_node``."""
        return self.update(path, lambda _: new_node)

    def with_children(self, path: str, tag: str, nodes: Sequence[Node]) -> Node:
        """Replace every ``tag`` child of the node at ``path`` by ``nodes``.

        The new children take the position of the first existing ``tag``
        child, or are appended when there was none.
        """
        return self.update(path, lambda node: _replace_children(node, tag, nodes))

    def without(self, path: str) -> Node:
        """Mark the node at ``path`` absent so it is left out of the output."""
        return self.update(path, lambda node: replace(node, present=False))


def element(tag: str, text: Optional[str] = None, *children: Node, **attributes: str) -> Node:
    """Build a node from keyword attributes and positional children."""
    return Node(
        tag=tag,
        attributes=tuple(attributes.items()),
        text=text,
        children=tuple(children),
    )


def _parse_path(path: str) -> list[tuple[str, int]]:
    segments: list[tuple[str, int]] = []
    for raw in filter(None, path.split("/")):
        match = _SEGMENT.match(raw)
        if match is None:
            raise TemplateMalformed(f"Invalid node path segment {raw!r}", node_path=path)
        segments.append((match.group("tag"), int(match.group("index") or 0)))
    return segments


def _child_position(node: Node, tag: str, index: int, path: str) -> int:
    seen = 0
    for position, child in enumerate(node.children):
        if child.tag == tag:
            if seen == index:
                return position
            seen += 1
    raise TemplateMalformed(
        f"No {tag}[{index}] under {node.tag}",
        node_path=path,
    )


def _update(
    node: Node,
    segments: list[tuple[str, int]],
    fn: Callable[[Node], Node],
    path: str,
) -> Node:
    if not segments:
        return fn(node)
    (tag, index), rest = segments[0], segments[1:]
    position = _child_position(node, tag, index, path)
    children = list(node.children)
    children[position] = _update(children[position], rest, fn, path)
    return replace(node, children=tuple(children))


def _set_attribute(node: Node, name: str, value: str) -> Node:
    attributes = list(node.attributes)
    for position, (key, _) in enumerate(attributes):
        if key == name:
            attributes[position] = (name, value)
            break
    else:
        attributes.append((name, value))
    return replace(node, attributes=tuple(attributes))


def _replace_children(node: Node, tag: str, nodes: Sequence[Node]) -> Node:
    children: list[Node] = []
    inserted = False
    for child in node.children:
        if child.tag == tag:
            if not inserted:
                children.extend(nodes)
                inserted = True
            continue
        children.append(child)
    if not inserted:
        children.extend(nodes)
    return replace(node, children=tuple(children))

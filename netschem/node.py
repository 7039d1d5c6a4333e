"""Connection points of a net and the wires drawn between them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional, Tuple, Union
from xml.etree.ElementTree import Element

from .geometry import Point
from .xmlutil import XmlFormatError, get_int_attribute, get_str_attribute

if TYPE_CHECKING:
    from .term import Term


class Node(ABC):
    """A point of a net where wires meet.

    ``id`` is ``None`` until the owning net hands one out.
    """

    NOID = None

    def __init__(self, node_id: Optional[int] = None) -> None:
        self.id: Optional[int] = node_id
        self._position = Point()
        self._lines: List["Line"] = []

    @property
    def position(self) -> Point:
        """A copy of the node's position."""
        return Point(self._position.x, self._position.y)

    @property
    def lines(self) -> Tuple["Line", ...]:
        """The wires attached to this node."""
        return tuple(self._lines)

    @property
    def degree(self) -> int:
        """Number of wires attached to this node."""
        return len(self._lines)

    @property
    @abstractmethod
    def net(self) -> Any:
        """The net this node belongs to."""

    def set_position(self, x: Union[int, Point], y: Optional[int] = None) -> None:
        """Place the node at a point or at ``(x, y)``."""
        if isinstance(x, Point):
            if y is not None:
                raise TypeError("set_position() takes a Point or two integers")
            self._position = Point(x.x, x.y)
            return
        if y is None:
            raise TypeError("set_position() needs both x and y")
        self._position = Point(x, y)

    def attach(self, line: "Line") -> None:
        """Attach a wire, ignoring one already attached."""
        if any(known is line for known in self._lines):
            return
        self._lines.append(line)

    def detach(self, line: "Line") -> None:
        """Detach a wire if it is attached."""
        for index, known in enumerate(self._lines):
            if known is line:
                del self._lines[index]
                break

    @abstractmethod
    def to_xml(self, indent: Any) -> str:
        """Return the node as one line of XML."""


class NodePoint(Node):
    """A free-standing node of a net, such as a wire bend or junction."""

    def __init__(
        self, net: Any, node_id: Optional[int] = None, position: Optional[Point] = None
    ) -> None:
        super().__init__(node_id)
        self._net = net
        self.set_position(position if position is not None else Point())
        net.add_node(self)

    @property
    def net(self) -> Any:
        return self._net

    def to_xml(self, indent: Any) -> str:
        return f'{indent}<node x="{self._position.x}" y="{self._position.y}" id="{self.id}"/>\n'

    def __repr__(self) -> str:
        return f"NodePoint(id={self.id}, position={self._position})"


class NodeTerm(Node):
    """The node that stands for a terminal on a net."""

    def __init__(self, term: "Term", node_id: Optional[int] = None) -> None:
        super().__init__(node_id)
        self._term = term

    @property
    def term(self) -> "Term":
        return self._term

    @property
    def net(self) -> Any:
        return self._term.net

    def to_xml(self, indent: Any) -> str:
        term = self._term
        if term.is_internal:
            return (
                f'{indent}<node term="{term.name}" instance="{term.instance.name}"'
                f' id="{self.id}"/>\n'
            )
        return f'{indent}<node term="{term.name}" id="{self.id}"/>\n'

    def __repr__(self) -> str:
        return f"NodeTerm(term={self._term.name!r}, id={self.id})"


class Line:
    """A wire joining two nodes of the same net."""

    def __init__(self, source: Node, target: Node) -> None:
        self._source = source
        self._target = target
        source.attach(self)
        target.attach(self)

    @property
    def source(self) -> Node:
        return self._source

    @property
    def target(self) -> Node:
        return self._target

    @property
    def source_position(self) -> Point:
        return self._source.position

    @property
    def target_position(self) -> Point:
        return self._target.position

    def destroy(self) -> None:
        """Detach the wire from its nodes and from its net."""
        self._source.detach(self)
        self._target.detach(self)
        net = self._target.net
        if net is not None:
            net.remove_line(self)

    def to_xml(self, indent: Any) -> str:
        return f'{indent}<line source="{self._source.id}" target="{self._target.id}"/>\n'

    def __repr__(self) -> str:
        return f"Line(source={self._source.id}, target={self._target.id})"


def parse_node(net: Any, element: Element) -> Optional[Node]:
    """Build the node described by a ``<node>`` element into ``net``.

    Returns ``None`` when the element is not a node. A node without a
    ``term`` attribute becomes a ``NodePoint``; otherwise the named terminal,
    of the cell or of one of its instances, is connected to ``net`` and its
    node is returned. Raises XmlFormatError when the element is malformed or
    names something that does not exist.
    """
    if element.tag != "node":
        return None
    instance_name = get_str_attribute(element, "instance")
    term_name = get_str_attribute(element, "term")
    node_id = get_int_attribute(element, "id")
    if node_id < 0:
        raise XmlFormatError(f"Negative id {node_id} in <node> tag.")

    if not term_name:
        x = get_int_attribute(element, "x")
        y = get_int_attribute(element, "y")
        return NodePoint(net, node_id, Point(x, y))

    cell = net.cell
    if instance_name:
        instance = cell.get_instance(instance_name)
        if instance is None:
            raise XmlFormatError(f"No Instance <{instance_name}> in Cell <{cell.name}>.")
        term = instance.get_term(term_name)
        if term is None:
            raise XmlFormatError(f"No Term <{term_name}> in Instance <{instance_name}>.")
    else:
        term = cell.get_term(term_name)
        if term is None:
            raise XmlFormatError(f"No Term <{term_name}> in Cell <{cell.name}>.")

    term.node.id = node_id
    term.set_net(net)
    return term.node


def parse_line(net: Any, element: Element) -> Optional[Line]:
    """Build the wire described by a ``<line>`` element into ``net``.

    Returns ``None`` when the element is not a line. Raises XmlFormatError
    when an attribute is missing or names a node the net does not have.
    """
    if element.tag != "line":
        return None
    source_id = get_int_attribute(element, "source")
    target_id = get_int_attribute(element, "target")
    source = net.get_node(source_id)
    if source is None:
        raise XmlFormatError(f"Unknown source node id: {source_id}.")
    target = net.get_node(target_id)
    if target is None:
        raise XmlFormatError(f"Unknown target node id: {target_id}.")
    line = Line(source, target)
    net.add_line(line)
    return line
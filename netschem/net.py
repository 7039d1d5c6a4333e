"""Nets: the electrical signals that join terminals inside a cell."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple
from xml.etree.ElementTree import Element

from .node import Line, Node, parse_line, parse_node
from .term import TermType
from .xmlutil import XmlFormatError, get_str_attribute


class Net:
    """A signal of a cell, made of nodes and of the wires between them.

    Node ids are positions in the net's node table; free slots hold ``None``.
    """

    NOID = None

    def __init__(self, cell: Any, name: str, net_type: TermType) -> None:
        self._setup(cell, name, net_type, cell.new_net_id())
        cell.add_net(self)

    def _setup(self, owner: Any, name: str, net_type: TermType, net_id: int) -> None:
        self._owner = owner
        self._name = name
        self._type = net_type
        self._id = net_id
        self._nodes: List[Optional[Node]] = []
        self._lines: List[Line] = []

    @classmethod
    def for_instance(cls, instance: Any, name: str, net_type: TermType) -> "Net":
        """Create a net registered in the master cell of ``instance``."""
        master = instance.master_cell
        net = cls.__new__(cls)
        net._setup(instance.cell, name, net_type, master.new_net_id())
        master.add_net(net)
        return net

    @property
    def cell(self) -> Any:
        return self._owner

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> int:
        return self._id

    @property
    def type(self) -> TermType:
        return self._type

    @property
    def nodes(self) -> Tuple[Optional[Node], ...]:
        """The node table, free slots included as ``None``."""
        return tuple(self._nodes)

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    def get_node(self, node_id: int) -> Optional[Node]:
        """Return the node carrying ``node_id``, or None."""
        return next(
            (node for node in self._nodes if node is not None and node.id == node_id),
            None,
        )

    def free_node_id(self) -> int:
        """Index of the first free slot, or the table size when it is full."""
        return next(
            (index for index, node in enumerate(self._nodes) if node is None),
            len(self._nodes),
        )

    def add_node(self, node: Node) -> None:
        """Place a node in the table.

        A node without an id, or with id 0, takes the first free slot;
        otherwise the table grows as needed to hold it at its own id.
        """
        if node.id is Node.NOID or node.id == 0:
            node_id = self.free_node_id()
            node.id = node_id
            if node_id == len(self._nodes):
                self._nodes.append(node)
            else:
                self._nodes[node_id] = node
            return
        if node.id >= len(self._nodes):
            self._nodes.extend([None] * (node.id + 1 - len(self._nodes)))
        self._nodes[node.id] = node

    def remove_node(self, node: Node) -> bool:
        """Remove a node from the table; later entries move down one slot."""
        for index, known in enumerate(self._nodes):
            if known is node:
                del self._nodes[index]
                return True
        return False

    def add_line(self, line: Optional[Line]) -> None:
        if line is not None:
            self._lines.append(line)

    def remove_line(self, line: Optional[Line]) -> bool:
        if line is None:
            return False
        for index, known in enumerate(self._lines):
            if known is line:
                del self._lines[index]
                return True
        return False

    def to_xml(self, indent: Any) -> str:
        parts = [f'{indent}<net name="{self._name}" type="{self._type.name.capitalize()}">\n']
        with indent.block():
            parts.extend(node.to_xml(indent) for node in self._nodes if node is not None)
            parts.extend(line.to_xml(indent) for line in self._lines)
        parts.append(f"{indent}</net>\n")
        return "".join(parts)

    @classmethod
    def from_xml(cls, cell: Any, element: Element) -> Optional["Net"]:
        """Create the net described by a ``<net>`` element, with its nodes and wires.

        Returns ``None`` when the element is not a net. Raises XmlFormatError
        on a missing name, an unknown type or an unexpected child element.
        """
        if element.tag != "net":
            return None
        name = get_str_attribute(element, "name")
        if not name:
            raise XmlFormatError("Missing name in <net> tag.")
        type_text = get_str_attribute(element, "type")
        types = {"Internal": TermType.INTERNAL, "External": TermType.EXTERNAL}
        if type_text not in types:
            raise XmlFormatError(f'Unexpected net type "{type_text}".')
        net = cls(cell, name, types[type_text])
        for child in element:
            if not isinstance(child.tag, str):
                continue
            if parse_node(net, child) is not None:
                continue
            if parse_line(net, child) is not None:
                continue
            raise XmlFormatError(f"Unknown or misplaced tag <{child.tag}> in <net>.")
        return net

    def __repr__(self) -> str:
        return f"Net(name={self._name!r}, id={self._id}, type={self._type.name})"
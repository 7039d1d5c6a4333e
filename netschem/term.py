"""Terminals of cells and of instances."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional, Union
from xml.etree.ElementTree import Element

from .geometry import Point
from .node import NodeTerm
from .xmlutil import XmlFormatError, get_str_attribute, leading_int

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]")


class Direction(Enum):
    """Signal direction of a terminal."""

    IN = 1
    OUT = 2
    INOUT = 3
    TRISTATE = 4
    TRANSCV = 5
    UNKNOWN = 6

    @property
    def label(self) -> str:
        """The name used in XML files."""
        return self.name.capitalize()

    @classmethod
    def from_label(cls, text: str) -> "Direction":
        """Return the direction written as ``text``; unknown text gives UNKNOWN."""
        for direction in cls:
            if direction.label == text:
                return direction
        return cls.UNKNOWN


class TermType(Enum):
    """Whether a terminal belongs to an instance or to a cell."""

    INTERNAL = 1
    EXTERNAL = 2


def _parse_coordinate(text: str, name: str) -> int:
    if not _INT_PREFIX.match(text):
        raise XmlFormatError(f'Invalid integer "{text}" for "{name}" in <term> tag.')
    return leading_int(text)


class Term:
    """A terminal: a connection point of a cell or of an instance."""

    def __init__(self, cell: Any, name: str, direction: Direction = Direction.UNKNOWN) -> None:
        self._setup(cell, name, direction, TermType.EXTERNAL, None)

    def _setup(
        self, owner: Any, name: str, direction: Direction, term_type: TermType, net: Any
    ) -> None:
        self._owner = owner
        self._name = name
        self.direction = direction
        self._type = term_type
        self._net = net
        self._node = NodeTerm(self, NodeTerm.NOID)
        owner.add_term(self)

    @classmethod
    def from_model(cls, instance: Any, model: "Term") -> "Term":
        """Create the instance's copy of a terminal of its model cell."""
        term = cls.__new__(cls)
        term._setup(instance, model.name, model.direction, TermType.INTERNAL, model.net)
        return term

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> TermType:
        return self._type

    @property
    def is_internal(self) -> bool:
        return self._type is TermType.INTERNAL

    @property
    def is_external(self) -> bool:
        return self._type is TermType.EXTERNAL

    @property
    def node(self) -> NodeTerm:
        return self._node

    @property
    def net(self) -> Any:
        return self._net

    @property
    def cell(self) -> Any:
        """The owning cell of an external terminal, otherwise None."""
        return self._owner if self.is_external else None

    @property
    def instance(self) -> Any:
        """The owning instance of an internal terminal, otherwise None."""
        return self._owner if self.is_internal else None

    @property
    def owner_cell(self) -> Any:
        """The cell the terminal is declared in; None for instance terminals."""
        return self._owner if self.is_external else None

    @property
    def position(self) -> Point:
        return self._node.position

    def set_net(self, net: Any) -> None:
        """Connect the terminal to a net, given directly or by name in its cell."""
        if isinstance(net, str):
            cell = self.cell
            found = cell.get_net(net) if cell is not None else None
            if found is None:
                raise LookupError(f"No Net <{net}> for Term <{self._name}>.")
            net = found
        net.add_node(self._node)
        self._net = net

    def set_position(self, x: Union[int, Point], y: Optional[int] = None) -> None:
        self._node.set_position(x, y)

    def to_xml(self, indent: Any) -> str:
        pos = self._node.position
        return (
            f'{indent}<term name="{self._name}" direction="{self.direction.label}"'
            f' x="{pos.x}" y="{pos.y}"/>\n'
        )

    @classmethod
    def from_xml(cls, cell: Any, element: Element) -> Optional["Term"]:
        """Create the cell terminal described by a ``<term>`` element.

        Returns ``None`` when the element is not a terminal. Raises
        XmlFormatError when the name is missing or a coordinate is not a number.
        """
        if element.tag != "term":
            return None
        name = get_str_attribute(element, "name")
        if not name:
            raise XmlFormatError("Missing name in <term> tag.")
        direction = Direction.from_label(get_str_attribute(element, "direction"))
        x_text = get_str_attribute(element, "x")
        y_text = get_str_attribute(element, "y")
        position = None
        if x_text and y_text:
            position = (_parse_coordinate(x_text, "x"), _parse_coordinate(y_text, "y"))
        term = cls(cell, name, direction)
        if position is not None:
            term.set_position(*position)
        return term

    def __repr__(self) -> str:
        return f"Term(name={self._name!r}, direction={self.direction.label}, type={self._type.name})"
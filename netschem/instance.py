"""Instances: placed copies of a model cell inside another cell."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union
from xml.etree.ElementTree import Element

from .geometry import Point
from .term import Term
from .xmlutil import XmlFormatError, get_str_attribute, leading_int


class Instance:
    """A use of a model cell, with its own copies of the model's terminals."""

    def __init__(self, owner: Any, model: Any, name: str) -> None:
        self._owner = owner
        self._master = model
        self._name = name
        self._terms: List[Term] = []
        self._position = Point(0, 0)
        if owner is not None:
            owner.add_instance(self)
        if model is not None:
            for model_term in list(model.terms):
                Term.from_model(self, model_term)

    @property
    def name(self) -> str:
        return self._name

    @property
    def master_cell(self) -> Any:
        return self._master

    @property
    def cell(self) -> Any:
        """The cell the instance is placed in."""
        return self._owner

    @property
    def terms(self) -> Tuple[Term, ...]:
        return tuple(self._terms)

    @property
    def position(self) -> Point:
        return Point(self._position.x, self._position.y)

    def get_term(self, name: str) -> Optional[Term]:
        return next((term for term in self._terms if term.name == name), None)

    def connect(self, name: str, net: Any) -> bool:
        """Connect the terminal called ``name`` to ``net``; False if there is none."""
        term = self.get_term(name)
        if term is None:
            return False
        term.set_net(net)
        return True

    def add_term(self, term: Term) -> None:
        self._terms.append(term)

    def remove_term(self, term: Term) -> None:
        for index, known in enumerate(self._terms):
            if known is term:
                del self._terms[index]
                break

    def set_position(self, x: Union[int, Point], y: Optional[int] = None) -> None:
        """Move the instance and its terminals, placed after the model's symbol."""
        if isinstance(x, Point):
            if y is not None:
                raise TypeError("set_position() takes a Point or two integers")
            x, y = x.x, x.y
        elif y is None:
            raise TypeError("set_position() needs both x and y")
        self._position = Point(x, y)
        symbol = self._master.symbol if self._master is not None else None
        if symbol is None:
            return
        for term in self._terms:
            shape = symbol.term_shape(term)
            if shape is not None:
                term.set_position(shape.x + x, shape.y + y)

    def destroy(self) -> None:
        """Take the instance out of its cell and drop its terminals."""
        if self._owner is not None:
            self._owner.remove_instance(self)
        self._terms.clear()

    def to_xml(self, indent: Any) -> str:
        master = self._master.name if self._master is not None else "None"
        return (
            f'{indent}<instance name="{self._name}" mastercell="{master}"'
            f' x="{self._position.x}" y="{self._position.y}"/>\n'
        )

    @classmethod
    def from_xml(cls, cell: Any, element: Element) -> Optional["Instance"]:
        """Create the instance described by an ``<instance>`` element.

        Returns ``None`` when the element is not an instance. Raises
        XmlFormatError when the name is missing or the master cell is unknown.
        """
        if element.tag != "instance":
            return None
        from .cell import Cell

        name = get_str_attribute(element, "name")
        master_name = get_str_attribute(element, "mastercell")
        x = leading_int(get_str_attribute(element, "x"))
        y = leading_int(get_str_attribute(element, "y"))
        if not name:
            raise XmlFormatError("Missing name in <instance> tag.")
        master = Cell.find(master_name)
        if master is None:
            raise XmlFormatError(f"Unknown master cell <{master_name}> in <instance> tag.")
        instance = cls(cell, master, name)
        instance.set_position(x, y)
        return instance

    def __repr__(self) -> str:
        master = self._master.name if self._master is not None else None
        return f"Instance(name={self._name!r}, master={master!r})"
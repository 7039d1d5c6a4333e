"""Graphical primitives that make up the symbol of a cell."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Type
from xml.etree.ElementTree import Element

from .geometry import Box
from .xmlutil import XmlFormatError, get_str_attribute, leading_int


def _int_or_zero(element: Element, name: str) -> int:
    """Read an integer attribute, falling back to 0 when it is absent."""
    return leading_int(get_str_attribute(element, name))


class NameAlign(Enum):
    """Where a terminal's name is written relative to its position."""

    TOP_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_LEFT = 3
    BOTTOM_RIGHT = 4

    @property
    def label(self) -> str:
        """The name used in XML files."""
        return self.name.lower()

    @classmethod
    def from_label(cls, text: str) -> "NameAlign":
        """Return the alignment written as ``text``; unknown text gives TOP_LEFT."""
        for align in cls:
            if align.label == text:
                return align
        return cls.TOP_LEFT


class Shape(ABC):
    """A drawing element belonging to a symbol."""

    def __init__(self, owner: Any) -> None:
        self._owner = owner
        owner.add(self)

    @property
    def symbol(self) -> Any:
        """The symbol the shape was created for."""
        return self._owner

    @abstractmethod
    def bounding_box(self) -> Box:
        """The smallest box enclosing the shape."""

    @abstractmethod
    def to_xml(self, indent: Any) -> str:
        """Return the shape as one line of XML."""

    def destroy(self) -> None:
        """Take the shape out of its symbol."""
        self._owner.remove(self)


def _box_attributes(box: Box) -> str:
    return f'x1="{box.x1}" y1="{box.y1}" x2="{box.x2}" y2="{box.y2}"'


def _box_from_element(element: Element) -> Box:
    return Box(
        _int_or_zero(element, "x1"),
        _int_or_zero(element, "y1"),
        _int_or_zero(element, "x2"),
        _int_or_zero(element, "y2"),
    )


class BoxShape(Shape):
    """A rectangle."""

    def __init__(self, owner: Any, box: Box) -> None:
        self._box = box.copy()
        super().__init__(owner)

    @property
    def box(self) -> Box:
        return self._box.copy()

    def bounding_box(self) -> Box:
        return self._box.copy()

    def to_xml(self, indent: Any) -> str:
        return f"{indent}<box {_box_attributes(self._box)}/>\n"

    @classmethod
    def from_xml(cls, owner: Any, element: Element) -> "BoxShape":
        """Create the rectangle described by a ``<box>`` element."""
        return cls(owner, _box_from_element(element))

    def __repr__(self) -> str:
        return f"BoxShape({self._box!r})"


class EllipseShape(Shape):
    """An ellipse inscribed in a box."""

    def __init__(self, owner: Any, box: Box) -> None:
        self._box = box.copy()
        super().__init__(owner)

    @property
    def box(self) -> Box:
        return self._box.copy()

    def bounding_box(self) -> Box:
        return self._box.copy()

    def to_xml(self, indent: Any) -> str:
        return f"{indent}<ellipse {_box_attributes(self._box)}/>\n"

    @classmethod
    def from_xml(cls, owner: Any, element: Element) -> "EllipseShape":
        """Create the ellipse described by an ``<ellipse>`` element."""
        return cls(owner, _box_from_element(element))

    def __repr__(self) -> str:
        return f"EllipseShape({self._box!r})"


class ArcShape(Shape):
    """A portion of an ellipse, from a start angle over a span."""

    def __init__(self, owner: Any, box: Box, start: int = 0, span: int = 0) -> None:
        self._box = box.copy()
        self.start = start
        self.span = span
        super().__init__(owner)

    @property
    def box(self) -> Box:
        return self._box.copy()

    def bounding_box(self) -> Box:
        return self._box.copy()

    def to_xml(self, indent: Any) -> str:
        return (
            f"{indent}<arc {_box_attributes(self._box)}"
            f' start="{self.start}" span="{self.span}"/>\n'
        )

    @classmethod
    def from_xml(cls, owner: Any, element: Element) -> "ArcShape":
        """Create the arc described by an ``<arc>`` element."""
        return cls(
            owner,
            _box_from_element(element),
            _int_or_zero(element, "start"),
            _int_or_zero(element, "span"),
        )

    def __repr__(self) -> str:
        return f"ArcShape({self._box!r}, start={self.start}, span={self.span})"


class LineShape(Shape):
    """A straight segment."""

    def __init__(self, owner: Any, x1: int, y1: int, x2: int, y2: int) -> None:
        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2
        super().__init__(owner)

    def bounding_box(self) -> Box:
        return Box(self.x1, self.y1, self.x2, self.y2)

    def to_xml(self, indent: Any) -> str:
        return (
            f'{indent}<line x1="{self.x1}" y1="{self.y1}"'
            f' x2="{self.x2}" y2="{self.y2}"/>\n'
        )

    @classmethod
    def from_xml(cls, owner: Any, element: Element) -> "LineShape":
        """Create the segment described by a ``<line>`` element."""
        return cls(
            owner,
            _int_or_zero(element, "x1"),
            _int_or_zero(element, "y1"),
            _int_or_zero(element, "x2"),
            _int_or_zero(element, "y2"),
        )

    def __repr__(self) -> str:
        return f"LineShape({self.x1}, {self.y1}, {self.x2}, {self.y2})"


class TermShape(Shape):
    """The place of a terminal of the symbol's cell."""

    def __init__(
        self,
        owner: Any,
        name: str,
        x: int,
        y: int,
        align: NameAlign = NameAlign.TOP_LEFT,
    ) -> None:
        self._name = name
        self.x = x
        self.y = y
        self.align = align
        cell = owner.cell
        self._term = cell.get_term(name) if cell is not None else None
        super().__init__(owner)

    @property
    def term(self) -> Any:
        """The cell terminal of that name, or None if the cell has none."""
        return self._term

    @property
    def name(self) -> str:
        return self._term.name if self._term is not None else self._name

    def bounding_box(self) -> Box:
        return Box(self.x, self.y, self.x, self.y)

    def to_xml(self, indent: Any) -> str:
        return (
            f'{indent}<term name="{self.name}" x1="{self.x}" y1="{self.y}"'
            f' align="{self.align.label}"/>\n'
        )

    @classmethod
    def from_xml(cls, owner: Any, element: Element) -> "TermShape":
        """Create the terminal place described by a ``<term>`` element."""
        return cls(
            owner,
            get_str_attribute(element, "name"),
            _int_or_zero(element, "x1"),
            _int_or_zero(element, "y1"),
            NameAlign.from_label(get_str_attribute(element, "align")),
        )

    def __repr__(self) -> str:
        return f"TermShape({self.name!r}, {self.x}, {self.y}, {self.align.label})"


_SHAPES_BY_TAG: Dict[str, Type[Shape]] = {
    "box": BoxShape,
    "ellipse": EllipseShape,
    "arc": ArcShape,
    "line": LineShape,
    "term": TermShape,
}


def shape_from_xml(owner: Any, element: Element) -> Shape:
    """Create the shape described by ``element`` in ``owner``.

    Raises XmlFormatError when the tag names no known shape.
    """
    shape_class: Optional[Type[Shape]] = _SHAPES_BY_TAG.get(element.tag)
    if shape_class is None:
        raise XmlFormatError(f"Unknown or misplaced tag <{element.tag}>.")
    return shape_class.from_xml(owner, element)
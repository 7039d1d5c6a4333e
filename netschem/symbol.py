"""The drawing that represents a cell when it is placed as an instance."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple
from xml.etree.ElementTree import Element

from .geometry import Box, Point
from .shapes import Shape, TermShape, shape_from_xml


class Symbol:
    """The set of shapes drawn for a cell."""

    def __init__(self, cell: Any) -> None:
        self._cell = cell
        self._shapes: List[Shape] = []

    @property
    def cell(self) -> Any:
        return self._cell

    @property
    def shapes(self) -> Tuple[Shape, ...]:
        return tuple(self._shapes)

    def bounding_box(self) -> Box:
        """The box around every shape, always including the origin."""
        box = Box(0, 0, 0, 0)
        for shape in self._shapes:
            box.merge(shape.bounding_box())
        return box

    def term_position(self, term: Any) -> Point:
        return term.position

    def term_shape(self, term: Any) -> Optional[TermShape]:
        """The terminal place whose terminal has the same name as ``term``."""
        return next(
            (
                shape
                for shape in self._shapes
                if isinstance(shape, TermShape)
                and shape.term is not None
                and shape.term.name == term.name
            ),
            None,
        )

    def add(self, shape: Shape) -> None:
        """Add a shape; it goes to the cell's own symbol if this is another one."""
        home = self._cell.symbol if self._cell is not None else None
        if home is not None and home is not self:
            home.add(shape)
        else:
            self._shapes.append(shape)

    def remove(self, shape: Shape) -> None:
        self._shapes = [known for known in self._shapes if known is not shape]

    def to_xml(self, indent: Any) -> str:
        parts = [f"{indent}<symbol>\n"]
        with indent.block():
            parts.extend(shape.to_xml(indent) for shape in self._shapes)
        parts.append(f"{indent}</symbol>\n")
        return "".join(parts)

    @classmethod
    def from_xml(cls, cell: Any, element: Element) -> Optional["Symbol"]:
        """Read the shapes of a ``<symbol>`` element into the cell's symbol.

        Returns ``None`` when the element is not a symbol. Raises
        XmlFormatError on an unknown child element.
        """
        if element.tag != "symbol":
            return None
        symbol = cell.symbol if cell.symbol is not None else cls(cell)
        for child in element:
            if not isinstance(child.tag, str):
                continue
            shape_from_xml(symbol, child)
        return symbol

    def __repr__(self) -> str:
        return f"Symbol(shapes={len(self._shapes)})"
"""Cells: the models of a schematic, kept in a registry by name."""

from __future__ import annotations

import argparse
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, ClassVar, Dict, List, Optional, Sequence, Tuple, Union
from xml.etree.ElementTree import Element

from .indentation import Indentation
from .instance import Instance
from .net import Net
from .symbol import Symbol
from .term import Term
from .xmlutil import XmlFormatError, get_str_attribute

DEFAULT_CELLS_DIR = Path("../work/cells")

DEFAULT_MODELS = (
    "vdd",
    "gnd",
    "TransistorN",
    "TransistorP",
    "and2",
    "or2",
    "xor2",
    "halfadder",
)

PathLike = Union[str, Path]


class CellError(Exception):
    """Raised on conflicting names or when a cell file cannot be read or written."""


class Cell:
    """A named model made of terminals, instances, nets and a symbol.

    Every cell is registered by name on creation; names are unique.
    """

    _registry: ClassVar[List["Cell"]] = []
    _SECTIONS: ClassVar[Tuple[str, ...]] = ("terms", "instances", "nets", "symbol")

    def __init__(self, name: str) -> None:
        if Cell.find(name) is not None:
            raise CellError(f"Attempt to create duplicate of Cell <{name}>.")
        self._name = name
        self._terms: List[Term] = []
        self._instances: List[Instance] = []
        self._nets: List[Net] = []
        self._max_net_id = 0
        self._symbol = Symbol(self)
        Cell._registry.append(self)

    # Registry -------------------------------------------------------------

    @classmethod
    def all_cells(cls) -> List["Cell"]:
        """Every registered cell, in creation order."""
        return list(Cell._registry)

    @classmethod
    def find(cls, name: str) -> Optional["Cell"]:
        """The registered cell called ``name``, or None."""
        return next((cell for cell in Cell._registry if cell.name == name), None)

    @classmethod
    def clear_registry(cls) -> None:
        """Forget every registered cell."""
        Cell._registry.clear()

    @classmethod
    def load(cls, name: str, directory: PathLike = DEFAULT_CELLS_DIR) -> "Cell":
        """Read the cell stored in ``<directory>/<name>.xml``."""
        path = Path(directory) / f"{name}.xml"
        try:
            tree = ET.parse(path)
        except OSError as exc:
            raise CellError(f"Unable to open file <{path}>.") from exc
        except ET.ParseError as exc:
            raise XmlFormatError(f"Malformed XML in <{path}>: {exc}") from exc
        return cls.from_xml(tree.getroot())

    # Contents -------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> Symbol:
        return self._symbol

    @property
    def terms(self) -> Tuple[Term, ...]:
        return tuple(self._terms)

    @property
    def instances(self) -> Tuple[Instance, ...]:
        return tuple(self._instances)

    @property
    def nets(self) -> Tuple[Net, ...]:
        return tuple(self._nets)

    def get_instance(self, name: str) -> Optional[Instance]:
        return next((inst for inst in self._instances if inst.name == name), None)

    def get_term(self, name: str) -> Optional[Term]:
        return next((term for term in self._terms if term.name == name), None)

    def get_net(self, name: str) -> Optional[Net]:
        return next((net for net in self._nets if net.name == name), None)

    def rename(self, name: str) -> None:
        """Change the cell's name; the new name must not be taken."""
        if name == self._name:
            return
        if Cell.find(name) is not None:
            raise CellError(f"New Cell name <{name}> already exists.")
        self._name = name

    def add_instance(self, instance: Instance) -> None:
        if self.get_instance(instance.name) is not None:
            raise CellError(f"Attempt to add duplicated instance <{instance.name}>.")
        self._instances.append(instance)

    def add_term(self, term: Term) -> None:
        if self.get_term(term.name) is not None:
            raise CellError(f"Attempt to add duplicated terminal <{term.name}>.")
        self._terms.append(term)

    def add_net(self, net: Net) -> None:
        if self.get_net(net.name) is not None:
            raise CellError(f"Attempt to add duplicated Net <{net.name}>.")
        self._nets.append(net)

    def remove_instance(self, instance: Instance) -> None:
        self._instances = [known for known in self._instances if known is not instance]

    def remove_term(self, term: Term) -> None:
        self._terms = [known for known in self._terms if known is not term]

    def remove_net(self, net: Net) -> None:
        self._nets = [known for known in self._nets if known is not net]

    def connect(self, name: str, net: Net) -> bool:
        """Connect the terminal called ``name`` to ``net``; False if there is none."""
        term = self.get_term(name)
        if term is None:
            return False
        term.set_net(net)
        return True

    def new_net_id(self) -> int:
        """Hand out the next net id of this cell."""
        net_id = self._max_net_id
        self._max_net_id += 1
        return net_id

    def destroy(self) -> None:
        """Unregister the cell and drop everything it holds."""
        Cell._registry[:] = [cell for cell in Cell._registry if cell is not self]
        self._nets.clear()
        for instance in list(self._instances):
            instance.destroy()
        self._instances.clear()
        self._terms.clear()

    # XML ------------------------------------------------------------------

    def to_xml(self) -> str:
        """The whole cell as an XML document."""
        indent = Indentation()
        parts = ['<?xml version="1.0"?>\n', f'{indent}<cell name="{self._name}">\n']
        with indent.block():
            sections = (
                ("terms", self._terms),
                ("instances", self._instances),
                ("nets", self._nets),
            )
            for tag, items in sections:
                parts.append(f"{indent}<{tag}>\n")
                with indent.block():
                    parts.extend(item.to_xml(indent) for item in items)
                parts.append(f"{indent}</{tag}>\n")
            parts.append(self._symbol.to_xml(indent))
        parts.append(f"{indent}</cell>\n")
        return "".join(parts)

    def save(self, name: Optional[str] = None, directory: PathLike = ".") -> Path:
        """Write the cell to ``<directory>/<name>.xml`` and return the path.

        ``name`` defaults to the cell's own name.
        """
        path = Path(directory) / f"{name or self._name}.xml"
        try:
            path.write_text(self.to_xml(), encoding="utf-8")
        except OSError as exc:
            raise CellError(f"Unable to open file <{path}>.") from exc
        return path

    @classmethod
    def from_xml(cls, element: Element) -> "Cell":
        """Create the cell described by a ``<cell>`` element.

        Sections must come in the order terms, instances, nets, symbol;
        trailing ones may be left out. On any error the half-built cell is
        discarded and XmlFormatError is raised.
        """
        if element.tag != "cell":
            raise XmlFormatError(f"Unknown or misplaced tag <{element.tag}>.")
        name = get_str_attribute(element, "name")
        if not name:
            raise XmlFormatError("Missing name in <cell> tag.")
        cell = cls(name)
        try:
            cell._read_sections(element)
        except Exception:
            cell.destroy()
            raise
        return cell

    def _read_sections(self, element: Element) -> None:
        readers: Dict[str, Callable[["Cell", Element], object]] = {
            "terms": Term.from_xml,
            "instances": Instance.from_xml,
            "nets": Net.from_xml,
        }
        expected_tags = iter(self._SECTIONS)
        for section in element:
            if not isinstance(section.tag, str):
                continue
            expected = next(expected_tags, None)
            if section.tag != expected:
                raise XmlFormatError(f"Unknown or misplaced tag <{section.tag}> in <cell>.")
            if expected == "symbol":
                Symbol.from_xml(self, section)
                continue
            reader = readers[expected]
            for item in section:
                if not isinstance(item.tag, str):
                    continue
                if reader(self, item) is None:
                    raise XmlFormatError(
                        f"Unknown or misplaced tag <{item.tag}> in <{expected}>."
                    )

    @classmethod
    def from_string(cls, text: str) -> "Cell":
        """Create the cell described by an XML document held in ``text``."""
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise XmlFormatError(f"Malformed XML: {exc}") from exc
        return cls.from_xml(root)

    def __repr__(self) -> str:
        return (
            f"Cell(name={self._name!r}, terms={len(self._terms)},"
            f" instances={len(self._instances)}, nets={len(self._nets)})"
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load cells in order and print the XML of the last one."""
    parser = argparse.ArgumentParser(
        prog="netschem", description="Load schematic cells and print the last one."
    )
    parser.add_argument(
        "--cells-dir",
        default=str(DEFAULT_CELLS_DIR),
        help="directory holding the <name>.xml cell files",
    )
    parser.add_argument(
        "cells",
        nargs="*",
        default=list(DEFAULT_MODELS),
        help="cell names to load, models before the cells that use them",
    )
    args = parser.parse_args(argv)

    cell: Optional[Cell] = None
    try:
        for name in args.cells:
            cell = Cell.load(name, args.cells_dir)
    except (CellError, XmlFormatError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if cell is not None:
        print(f"Contents of <{cell.name}>:")
        print(cell.to_xml(), end="")
    return 0
# netschem

`netschem` models hierarchical electronic netlists together with their
schematic symbols, and reads and writes them in a small XML cell format.

A **cell** (`netschem.cell.Cell`) owns:

- **terms** (`netschem.term.Term`) – its external connectors, each with a
  `Direction` and a position;
- **instances** (`netschem.instance.Instance`) – placed copies of other cells
  (their *master cells*), each carrying its own copy of the master's terms;
- **nets** (`netschem.net.Net`) – signals made of nodes (`NodePoint` for free
  points, `NodeTerm` for term connections) and `Line` wires between them,
  all in `netschem.node`;
- a **symbol** (`netschem.symbol.Symbol`) – the drawing of the cell as a set
  of shapes from `netschem.shapes`: `BoxShape`, `LineShape`, `EllipseShape`,
  `ArcShape` and `TermShape`.

Every cell is registered by name when it is created, so that instances can
refer to their master cells while a library is being loaded.

## Installation

```
pip install .
```

Running the tests:

```
pip install ".[test]"
pytest
```

## Using the library

```python
from netschem.cell import Cell

# Load cells from XML files named <cell>.xml in a directory.
# Master cells must be loaded before the cells that instantiate them.
for name in ("vdd", "gnd", "TransistorN", "TransistorP", "and2", "or2", "xor2"):
    Cell.load(name, "work/cells")
halfadder = Cell.load("halfadder", "work/cells")

print(halfadder.to_xml())

xor2 = Cell.find("xor2")
print(halfadder.get_instance("xor2_1"))

# Write a cell to <directory>/<name>.xml; the path written is returned.
path = halfadder.save("halfadder_copy", "out")
```

`Cell.from_string(text)` reads a cell from an XML document held in a string,
and `Cell.from_xml(element)` from an already parsed `<cell>` element.

Errors are raised as exceptions:

- `netschem.cell.CellError` – creating a cell whose name is already
  registered, renaming a cell to a taken name, adding a duplicate term,
  instance or net to a cell, or a file that cannot be opened or written;
- `netschem.xmlutil.XmlFormatError` (a `ValueError`) – malformed XML,
  missing required attributes, unknown net types, unknown master cells,
  references to nodes or terms that do not exist, and misplaced tags.

When reading a cell fails, the partly built cell is taken out of the
registry again. `Cell.all_cells()` lists the registered cells and
`Cell.clear_registry()` empties the registry, which is handy between
independent loads.

### Building a netlist by hand

```python
from netschem.cell import Cell
from netschem.net import Net
from netschem.term import Direction, Term, TermType

inv = Cell("inv")
a = Term(inv, "a", Direction.IN)
net = Net(inv, "a", TermType.EXTERNAL)
inv.connect("a", net)          # True: the term's node joins the net

top = Cell("top")
from netschem.instance import Instance
u1 = Instance(top, inv, "u1")  # u1 gets its own copy of term "a"
u1.set_position(100, 50)
```

When an instance is moved with `Instance.set_position(x, y)`, each of its
terms is placed at the matching `TermShape` of the master cell's symbol,
offset by the instance position.

Node ids inside a net are slots of the net's node table: a node without an
id (or with id 0) takes the first free slot, any other id is placed at that
slot, growing the table as needed.

### Geometry

```python
from netschem.geometry import Box, Point

box = Box(10, 10, 0, 0)          # corners are normalised to (0, 0, 10, 10)
other = Box(5, 5, 20, 20)
print(box.intersects(other))
print(box.intersection(other))
box.merge(other)
box.inflate(2)                   # also inflate(dx, dy) or inflate(dx1, dy1, dx2, dy2)
box.translate(3, 4)              # or translate(Point(3, 4))
print(Box().is_empty())          # Box() is the empty box
```

### Symbols

A cell's symbol lists its shapes; `Symbol.bounding_box()` merges the boxes
of all of them into a box that always includes the origin, and
`Symbol.term_shape(term)` finds the marker drawn for a term of the same
name. `shapes.shape_from_xml(symbol, element)` builds a shape from its XML
element.

### Indentation

`netschem.indentation.Indentation` produces the leading spaces of nested
output; `increase()`, `decrease()` and the `block()` context manager change
the level by two spaces at a time.

## XML format

```xml
<?xml version="1.0"?>
<cell name="and2">
  <terms>
    <term name="i0" direction="In" x="0" y="10"/>
  </terms>
  <instances>
    <instance name="P1" mastercell="TransistorP" x="10" y="20"/>
  </instances>
  <nets>
    <net name="i0" type="External">
      <node term="i0" id="0"/>
      <node x="5" y="10" id="1"/>
      <line source="0" target="1"/>
    </net>
  </nets>
  <symbol>
    <box x1="0" y1="0" x2="40" y2="30"/>
    <arc x1="0" y1="0" x2="10" y2="10" start="0" span="90"/>
    <term name="i0" x1="0" y1="10" align="top_left"/>
  </symbol>
</cell>
```

The sections must come in the order terms, instances, nets, symbol; trailing
sections may be left out. Term directions are `In`, `Out`, `Inout`,
`Tristate`, `Transcv` and `Unknown`; net types are `Internal` and
`External`; term marker alignments are `top_left`, `top_right`,
`bottom_left` and `bottom_right`. A `<node>` naming a term of an instance
carries an `instance` attribute as well.

## Command line

```
netschem
```

loads the cells `vdd`, `gnd`, `TransistorN`, `TransistorP`, `and2`, `or2`,
`xor2` and `halfadder`, in that order, from `../work/cells`, and prints the
last one as XML. Other cells and another directory can be given:

```
netschem --cells-dir work/cells vdd gnd TransistorN
```

If a cell cannot be read, the error is printed to standard error and the
command exits with status 1.

## What it does not do

`netschem` has no graphical viewer or editor: cells and their symbols can be
built, read, written and printed as XML, but not drawn on screen.
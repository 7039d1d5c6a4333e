import xml.etree.ElementTree as ET

import pytest

from netschem.geometry import Point
from netschem.indentation import Indentation
from netschem.term import Direction, Term, TermType
from netschem.xmlutil import XmlFormatError


class _FakeNet:
    def __init__(self, name="n"):
        self.name = name
        self.nodes = []

    def add_node(self, node):
        self.nodes.append(node)


class _FakeCell:
    def __init__(self, name="top"):
        self.name = name
        self.terms = []
        self.nets = {}

    def add_term(self, term):
        self.terms.append(term)

    def get_net(self, name):
        return self.nets.get(name)


class _FakeInstance:
    def __init__(self, name="u1"):
        self.name = name
        self.terms = []

    def add_term(self, term):
        self.terms.append(term)


def test_constructor_registers_external_term():
    cell = _FakeCell()
    term = Term(cell, "a", Direction.IN)
    assert cell.terms == [term]
    assert term.is_external
    assert not term.is_internal
    assert term.type is TermType.EXTERNAL
    assert term.cell is cell
    assert term.instance is None
    assert term.owner_cell is cell
    assert term.net is None
    assert term.node.id is None


def test_from_model_copies_model():
    master = _FakeCell("and2")
    model = Term(master, "q", Direction.OUT)
    net = _FakeNet()
    model.set_net(net)
    inst = _FakeInstance()
    term = Term.from_model(inst, model)
    assert inst.terms == [term]
    assert term.name == "q"
    assert term.direction is Direction.OUT
    assert term.net is net
    assert term.is_internal
    assert term.instance is inst
    assert term.cell is None
    assert term.owner_cell is None
    assert term.node is not model.node


@pytest.mark.parametrize(
    "direction, label",
    [
        (Direction.IN, "In"),
        (Direction.OUT, "Out"),
        (Direction.INOUT, "Inout"),
        (Direction.TRISTATE, "Tristate"),
        (Direction.TRANSCV, "Transcv"),
        (Direction.UNKNOWN, "Unknown"),
    ],
)
def test_direction_labels(direction, label):
    assert direction.label == label
    assert Direction.from_label(label) is direction


def test_unrecognised_direction_is_unknown():
    assert Direction.from_label("sideways") is Direction.UNKNOWN
    assert Direction.from_label("") is Direction.UNKNOWN


def test_set_net_with_object():
    cell = _FakeCell()
    term = Term(cell, "a", Direction.IN)
    net = _FakeNet()
    term.set_net(net)
    assert term.net is net
    assert net.nodes == [term.node]


def test_set_net_by_name():
    cell = _FakeCell()
    net = _FakeNet("vdd")
    cell.nets["vdd"] = net
    term = Term(cell, "a", Direction.IN)
    term.set_net("vdd")
    assert term.net is net
    assert net.nodes == [term.node]


def test_set_net_unknown_name():
    term = Term(_FakeCell(), "a", Direction.IN)
    with pytest.raises(LookupError):
        term.set_net("missing")
    assert term.net is None


def test_set_net_by_name_on_instance_term():
    model = Term(_FakeCell("and2"), "a", Direction.IN)
    term = Term.from_model(_FakeInstance(), model)
    with pytest.raises(LookupError):
        term.set_net("any")


def test_set_position_moves_node():
    term = Term(_FakeCell(), "a", Direction.IN)
    term.set_position(4, -2)
    assert term.position == Point(4, -2)
    assert term.node.position == Point(4, -2)
    term.set_position(Point(1, 1))
    assert term.position == Point(1, 1)


def test_to_xml():
    term = Term(_FakeCell(), "a", Direction.IN)
    term.set_position(10, 20)
    indent = Indentation()
    indent.increase()
    assert term.to_xml(indent) == '  <term name="a" direction="In" x="10" y="20"/>\n'


def test_to_xml_writes_inout():
    term = Term(_FakeCell(), "io", Direction.INOUT)
    assert 'direction="Inout"' in term.to_xml(Indentation())


@pytest.mark.parametrize("direction", list(Direction))
def test_xml_round_trip(direction):
    source = Term(_FakeCell(), "sig", direction)
    source.set_position(-5, 30)
    cell = _FakeCell()
    copy = Term.from_xml(cell, ET.fromstring(source.to_xml(Indentation())))
    assert cell.terms == [copy]
    assert copy.name == "sig"
    assert copy.direction is direction
    assert copy.position == Point(-5, 30)


def test_from_xml_ignores_other_tags():
    cell = _FakeCell()
    assert Term.from_xml(cell, ET.fromstring('<net name="a" type="External"/>')) is None
    assert cell.terms == []


def test_from_xml_requires_name():
    cell = _FakeCell()
    with pytest.raises(XmlFormatError):
        Term.from_xml(cell, ET.fromstring('<term direction="In" x="1" y="2"/>'))
    assert cell.terms == []


def test_from_xml_rejects_bad_coordinate():
    cell = _FakeCell()
    with pytest.raises(XmlFormatError):
        Term.from_xml(cell, ET.fromstring('<term name="a" direction="In" x="abc" y="2"/>'))
    assert cell.terms == []


@pytest.mark.parametrize(
    "text",
    [
        '<term name="a" direction="In"/>',
        '<term name="a" direction="In" x="7"/>',
    ],
)
def test_from_xml_without_both_coordinates(text):
    term = Term.from_xml(_FakeCell(), ET.fromstring(text))
    assert term.position == Point(0, 0)
    assert term.direction is Direction.IN
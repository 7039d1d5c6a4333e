import pytest

from netschem.cell import Cell, CellError, main
from netschem.geometry import Box, Point
from netschem.instance import Instance
from netschem.net import Net
from netschem.node import Line, NodePoint
from netschem.shapes import BoxShape, NameAlign, TermShape
from netschem.term import Direction, Term, TermType
from netschem.xmlutil import XmlFormatError


@pytest.fixture(autouse=True)
def fresh_registry():
    Cell.clear_registry()
    yield
    Cell.clear_registry()


def _build_model():
    model = Cell("inv")
    Term(model, "i", Direction.IN)
    Term(model, "q", Direction.OUT)
    BoxShape(model.symbol, Box(0, 0, 10, 10))
    TermShape(model.symbol, "i", 0, 5)
    TermShape(model.symbol, "q", 10, 5, NameAlign.TOP_RIGHT)
    return model


def _build_top(model):
    top = Cell("top")
    a = Term(top, "a", Direction.IN)
    b = Term(top, "b", Direction.OUT)
    inst = Instance(top, model, "u1")
    inst.set_position(20, 30)
    n1 = Net(top, "n1", TermType.EXTERNAL)
    a.set_net(n1)
    inst.connect("i", n1)
    n2 = Net(top, "n2", TermType.EXTERNAL)
    inst.connect("q", n2)
    b.set_net(n2)
    bend = NodePoint(n2, None, Point(40, 35))
    n2.add_line(Line(inst.get_term("q").node, bend))
    n2.add_line(Line(bend, b.node))
    return top


def test_new_cell_is_registered_and_found():
    cell = Cell("alpha")
    assert Cell.find("alpha") is cell
    assert Cell.find("beta") is None
    assert Cell.all_cells() == [cell]


def test_duplicate_cell_name_raises():
    Cell("alpha")
    with pytest.raises(CellError):
        Cell("alpha")


def test_all_cells_keeps_creation_order():
    first = Cell("first")
    second = Cell("second")
    assert Cell.all_cells() == [first, second]


def test_rename():
    cell = Cell("alpha")
    Cell("beta")
    cell.rename("alpha")
    assert cell.name == "alpha"
    with pytest.raises(CellError):
        cell.rename("beta")
    cell.rename("gamma")
    assert Cell.find("gamma") is cell
    assert Cell.find("alpha") is None


def test_lookups_return_none_when_absent():
    cell = Cell("alpha")
    assert cell.get_term("x") is None
    assert cell.get_net("x") is None
    assert cell.get_instance("x") is None


def test_duplicate_term_raises():
    cell = Cell("alpha")
    Term(cell, "a", Direction.IN)
    with pytest.raises(CellError):
        Term(cell, "a", Direction.OUT)
    assert len(cell.terms) == 1


def test_duplicate_net_raises():
    cell = Cell("alpha")
    Net(cell, "n", TermType.INTERNAL)
    with pytest.raises(CellError):
        Net(cell, "n", TermType.INTERNAL)
    assert len(cell.nets) == 1


def test_duplicate_instance_raises():
    model = _build_model()
    top = Cell("top")
    Instance(top, model, "u1")
    with pytest.raises(CellError):
        Instance(top, model, "u1")
    assert len(top.instances) == 1


def test_new_net_id_counts_from_zero():
    cell = Cell("alpha")
    assert [cell.new_net_id() for _ in range(3)] == [0, 1, 2]


def test_nets_take_successive_ids():
    cell = Cell("alpha")
    first = Net(cell, "n1", TermType.INTERNAL)
    second = Net(cell, "n2", TermType.INTERNAL)
    assert second.id == first.id + 1
    assert cell.get_net("n2") is second


def test_connect():
    cell = Cell("alpha")
    term = Term(cell, "a", Direction.IN)
    net = Net(cell, "n", TermType.EXTERNAL)
    assert cell.connect("missing", net) is False
    assert cell.connect("a", net) is True
    assert term.net is net
    assert term.node in net.nodes


def test_remove_items():
    model = _build_model()
    top = Cell("top")
    term = Term(top, "a", Direction.IN)
    net = Net(top, "n", TermType.INTERNAL)
    inst = Instance(top, model, "u1")
    top.remove_term(term)
    top.remove_net(net)
    top.remove_instance(inst)
    assert top.terms == ()
    assert top.nets == ()
    assert top.instances == ()


def test_destroy_unregisters():
    model = _build_model()
    top = _build_top(model)
    top.destroy()
    assert Cell.find("top") is None
    assert top.instances == ()
    assert Cell.find("inv") is model


def test_empty_cell_xml():
    cell = Cell("empty")
    assert cell.to_xml() == (
        '<?xml version="1.0"?>\n'
        '<cell name="empty">\n'
        "  <terms>\n"
        "  </terms>\n"
        "  <instances>\n"
        "  </instances>\n"
        "  <nets>\n"
        "  </nets>\n"
        "  <symbol>\n"
        "  </symbol>\n"
        "</cell>\n"
    )


def test_model_round_trip():
    model = _build_model()
    text = model.to_xml()
    model.destroy()
    again = Cell.from_string(text)
    assert again.to_xml() == text
    assert [t.name for t in again.terms] == ["i", "q"]
    assert again.symbol.term_shape(again.get_term("q")).align is NameAlign.TOP_RIGHT


def test_top_round_trip():
    model = _build_model()
    top = _build_top(model)
    text = top.to_xml()
    positions = {t.name: t.position for t in top.get_instance("u1").terms}
    top.destroy()
    again = Cell.from_string(text)
    assert again.to_xml() == text
    inst = again.get_instance("u1")
    assert inst.master_cell is model
    assert {t.name: t.position for t in inst.terms} == positions
    assert len(again.get_net("n2").lines) == 2


def test_partial_document_is_accepted():
    cell = Cell.from_string(
        '<cell name="p"><terms><term name="a" direction="In" x="1" y="2"/></terms></cell>'
    )
    term = cell.get_term("a")
    assert term.position == Point(1, 2)
    assert term.direction is Direction.IN
    assert cell.instances == ()


def test_root_must_be_cell():
    with pytest.raises(XmlFormatError):
        Cell.from_string('<net name="x" type="Internal"/>')


def test_cell_needs_a_name():
    with pytest.raises(XmlFormatError):
        Cell.from_string("<cell><terms/></cell>")


def test_misplaced_section_discards_cell():
    with pytest.raises(XmlFormatError):
        Cell.from_string('<cell name="bad"><nets/><terms/></cell>')
    assert Cell.find("bad") is None


def test_unexpected_item_in_section():
    with pytest.raises(XmlFormatError):
        Cell.from_string(
            '<cell name="t"><terms><net name="x" type="Internal"/></terms></cell>'
        )
    assert Cell.find("t") is None


def test_unknown_master_cell():
    with pytest.raises(XmlFormatError):
        Cell.from_string(
            '<cell name="t"><terms/><instances>'
            '<instance name="u" mastercell="nope" x="0" y="0"/>'
            "</instances></cell>"
        )


def test_malformed_text():
    with pytest.raises(XmlFormatError):
        Cell.from_string('<cell name="t"><terms>')


def test_save_and_load(tmp_path):
    model = _build_model()
    text = model.to_xml()
    path = model.save(directory=tmp_path)
    assert path == tmp_path / "inv.xml"
    assert path.read_text(encoding="utf-8") == text
    Cell.clear_registry()
    loaded = Cell.load("inv", tmp_path)
    assert loaded.to_xml() == text
    assert Cell.find("inv") is loaded


def test_save_under_other_name_keeps_cell_name(tmp_path):
    cell = Cell("alpha")
    path = cell.save("other", tmp_path)
    assert path.name == "other.xml"
    assert cell.name == "alpha"
    assert path.read_text(encoding="utf-8") == cell.to_xml()


def test_load_missing_file(tmp_path):
    with pytest.raises(CellError):
        Cell.load("absent", tmp_path)


def test_load_existing_name_conflicts(tmp_path):
    cell = Cell("alpha")
    cell.save(directory=tmp_path)
    with pytest.raises(CellError):
        Cell.load("alpha", tmp_path)


def test_main_prints_last_cell(tmp_path, capsys):
    model = _build_model()
    top = _build_top(model)
    model.save(directory=tmp_path)
    top.save(directory=tmp_path)
    expected = top.to_xml()
    Cell.clear_registry()
    assert main(["--cells-dir", str(tmp_path), "inv", "top"]) == 0
    out = capsys.readouterr().out
    assert out.endswith(expected)
    assert "<top>" in out


def test_main_reports_missing_file(tmp_path, capsys):
    assert main(["--cells-dir", str(tmp_path), "absent"]) == 1
    assert "absent.xml" in capsys.readouterr().err
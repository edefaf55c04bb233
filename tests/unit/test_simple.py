"""Tests for :mod:`webmarkup.simple`."""

from __future__ import annotations

import pytest
from bs4.element import Tag

from webmarkup.errors import MarkupConfigError
from webmarkup.simple import SimpleMarkup


@pytest.fixture
def simple() -> SimpleMarkup:
    return SimpleMarkup()


@pytest.fixture
def translated(strings) -> SimpleMarkup:
    return SimpleMarkup(strings=strings)


def test_select_lists_options_in_order(simple: SimpleMarkup) -> None:
    """Given value/label pairs When a select is built Then options keep their order."""

    html = simple.select("test", {"first": "First", "second": "Second", "third": "Third"}, {"trim": True})

    assert html == (
        '<select name="test"><option value="first">First</option>'
        '<option value="second">Second</option><option value="third">Third</option></select>'
    )


def test_select_marks_selected_value(simple: SimpleMarkup) -> None:
    """Given a selected value When a select is built Then the matching option is selected."""

    html = simple.select("n", {1: "One", 2: "Two"}, {"selected": "2"})

    assert html == (
        '<select name="n"><option value="1">One</option>'
        '<option value="2" selected="selected">Two</option></select>'
    )


def test_select_mask_selects_every_shared_bit(simple: SimpleMarkup) -> None:
    """Given mask mode When selected is 3 Then options 1 and 2 are selected."""

    html = simple.select(
        "flags", {1: "one", 2: "two", 4: "four", 8: "eight"}, {"selected": 3, "mask": True}
    )

    assert html == (
        '<select name="flags">'
        '<option value="1" selected="selected">one</option>'
        '<option value="2" selected="selected">two</option>'
        '<option value="4">four</option>'
        '<option value="8">eight</option>'
        "</select>"
    )


def test_select_id_option_and_selection_map(simple: SimpleMarkup) -> None:
    """Given the id option and a selection map When built Then id mirrors name and the map is keyed by it."""

    html = simple.select(
        {"name": "pick"},
        ["a", "b"],
        {"id": True, "selected": {"pick": 1, "other": 0}},
    )

    assert html == (
        '<select name="pick" id="pick"><option value="0">a</option>'
        '<option value="1" selected="selected">b</option></select>'
    )


def test_select_selection_map_without_entry_selects_nothing(simple: SimpleMarkup) -> None:
    """Given a selection map lacking the element When built Then nothing is selected."""

    html = simple.select("pick", ["a"], {"selected": {"other": 0}})

    assert 'selected="selected"' not in html


def test_select_reads_mapping_labels(simple: SimpleMarkup) -> None:
    """Given mapping labels When built Then value and label keys are read from them."""

    options = {"x": {"id": 5, "text": "Five"}, "y": {"code": "s", "label": "Six"}}

    assert simple.select("n", {"x": options["x"]}) == (
        '<select name="n"><option value="5">Five</option></select>'
    )
    assert simple.select("n", {"y": options["y"]}, {"labelkey": "label", "valuekey": "code"}) == (
        '<select name="n"><option value="s">Six</option></select>'
    )


def test_select_translates_labels_and_tooltips(translated: SimpleMarkup) -> None:
    """Given a string table When ns and ttns are set Then labels and known tooltips are translated."""

    html = translated.select(
        "pick",
        {"first": "first", "second": "second", "third": "third"},
        {"ns": "opt.", "ttns": "tip."},
    )

    assert html == (
        '<select name="pick">'
        '<option value="first" title="The first one">Erste</option>'
        '<option value="second">Zweite</option>'
        '<option value="third">third</option>'
        "</select>"
    )


def test_select_translation_can_be_disabled(translated: SimpleMarkup) -> None:
    """Given translate False When built Then labels are used verbatim."""

    html = translated.select("pick", {"first": "first"}, {"ns": "opt.", "translate": False})

    assert html == '<select name="pick"><option value="first">first</option></select>'


def test_select_raw_returns_tree(simple: SimpleMarkup) -> None:
    """Given raw When built Then the element itself is returned."""

    node = simple.select("n", ["a"], {"raw": True})

    assert isinstance(node, Tag)
    assert node.name == "select"


def test_ul_and_ol(simple: SimpleMarkup) -> None:
    """Given a definition When ul or ol is used Then the list type follows the call."""

    assert simple.ul(["a"]) == "<ul><li>a</li></ul>"
    assert simple.ol(["a"]) == "<ol><li>a</li></ol>"
    assert simple.ul(["a"], {"type": "ol"}) == "<ol><li>a</li></ol>"


def test_hidden(simple: SimpleMarkup) -> None:
    """Given a name and value When hidden is built Then id and name both carry the name."""

    assert simple.hidden("foo", "bar") == '<input type="hidden" id="foo" name="foo" value="bar"/>'


def test_json_encodes_structures(simple: SimpleMarkup) -> None:
    """Given a structure When json is built Then the hidden value holds compact JSON."""

    assert simple.json("foo", {"bar": True}) == (
        '<input type="hidden" id="foo" name="foo" value="{&quot;bar&quot;:true}"/>'
    )


def test_json_prefers_object_serialisers(simple: SimpleMarkup) -> None:
    """Given objects with to_json or to_array When json is built Then those methods are used."""

    class Encoded:
        def to_json(self, opts):
            return "[1]"

    class Arrayed:
        def to_array(self, opts):
            return [opts.get("n", 0)]

    assert simple.json("a", Encoded()) == '<input type="hidden" id="a" name="a" value="[1]"/>'
    assert simple.json("b", Arrayed(), {"n": 2}) == '<input type="hidden" id="b" name="b" value="[2]"/>'


def test_input_with_id_name_map(simple: SimpleMarkup) -> None:
    """Given a primary value and the default map When built Then name mirrors id."""

    assert simple.input("foo", {}, True) == '<input id="foo" type="text" name="foo"/>'


def test_input_map_option_and_additions(simple: SimpleMarkup) -> None:
    """Given add and map options When built Then missing attributes are filled in order."""

    html = simple.input(
        {"id": "x", "class": "a"},
        {"add": {"class": "b", "size": 3}, "map": {"name": "id"}},
    )

    assert html == '<input id="x" class="a" type="text" size="3" name="x"/>'


def test_input_requires_primary_attribute(simple: SimpleMarkup) -> None:
    """Given attributes without the primary one When built Then a configuration error is raised."""

    with pytest.raises(MarkupConfigError):
        simple.input({"name": "x"})


def test_submit_and_button(simple: SimpleMarkup) -> None:
    """Given a value When submit or button is built Then their primary attribute and type apply."""

    assert simple.submit("foo") == '<input name="foo" type="submit"/>'
    assert simple.button("go") == '<input id="go" type="button"/>'


def test_input_translates_value_and_tooltip(translated: SimpleMarkup) -> None:
    """Given text and tooltip prefixes When built Then value and title come from the table."""

    html = translated.submit("save", {"text_ns": "btn.", "tooltip_ns": "tip."})

    assert html == '<input name="save" type="submit" value="Save" title="Store the record"/>'


def test_strip_is_available_on_builder() -> None:
    """Given markup When stripped through the builder Then plain text is returned."""

    assert SimpleMarkup.strip("<b>a &amp; b</b>") == "a & b"

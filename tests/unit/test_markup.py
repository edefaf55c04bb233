"""Tests for :mod:`webmarkup.markup`."""

from __future__ import annotations

import pytest

from webmarkup.errors import MarkupConfigError
from webmarkup.markup import (
    add_child,
    element_count,
    new_element,
    parse_element,
    return_value,
    serialize,
    set_attribute,
)


def test_attributes_keep_insertion_order() -> None:
    """Given attributes added in a specific order When serialised Then the order is preserved."""

    node = new_element("input", {"type": "hidden", "id": "foo", "name": "foo"})

    assert serialize(node) == '<input type="hidden" id="foo" name="foo"/>'


def test_empty_non_void_elements_get_closing_tag() -> None:
    """Given an empty li When serialised Then an explicit closing tag is written."""

    parent = new_element("ul")
    add_child(parent, "li")

    assert serialize(parent) == "<ul><li></li></ul>"


def test_attribute_values_are_escaped() -> None:
    """Given quotes and angle brackets in a value When serialised Then they are entity encoded."""

    node = new_element("input", {"value": '{"a":"<b>"}'})

    assert serialize(node) == '<input value="{&quot;a&quot;:&quot;&lt;b&gt;&quot;}"/>'


def test_text_is_escaped() -> None:
    """Given markup characters in text When serialised Then they are entity encoded."""

    assert serialize(new_element("span", text="a & <b>")) == "<span>a &amp; &lt;b&gt;</span>"


def test_set_attribute_skips_none_and_stringifies() -> None:
    """Given None and numeric values When set Then None is skipped and numbers become text."""

    node = new_element("option")
    set_attribute(node, "value", 3)
    set_attribute(node, "title", None)

    assert node.attrs == {"value": "3"}


def test_element_count_ignores_text() -> None:
    """Given mixed children When counted Then only elements are counted."""

    node = new_element("li", text="label")
    add_child(node, "ul")

    assert element_count(node) == 1


def test_parse_element_returns_detached_root() -> None:
    """Given an HTML fragment When parsed Then its outer element is returned detached."""

    node = parse_element('<nav class="main"><p>x</p></nav>')

    assert node.name == "nav"
    assert node.parent is None
    assert serialize(node) == '<nav class="main"><p>x</p></nav>'


def test_parse_element_without_element_fails() -> None:
    """Given an empty fragment When parsed Then a configuration error is raised."""

    with pytest.raises(MarkupConfigError):
        parse_element("")


def test_return_value_honours_raw_and_trim() -> None:
    """Given output options When returning a tree Then raw keeps the node and trim strips text."""

    node = new_element("span", text=" x ")

    assert return_value(node, {"raw": True}) is node
    assert return_value(node) == "<span> x </span>"
    assert return_value(node, {"trim": True}) == "<span> x </span>"
    assert return_value("plain", {"trim": True}) == "plain"

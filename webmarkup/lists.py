"""Compile loosely shaped list definitions into nested ``<ul>``/``<ol>`` trees.

A definition is a sequence or a mapping. Each entry is classified by the shape
of its key and value before anything is built:

* positional key, scalar value: a new item holding the text (:class:`ScalarItem`);
* positional key, collection value: attributes for the most recent item, or for
  the list itself when no item exists yet (:class:`AttributeMap`), except that a
  ``ul``/``ol`` entry holding a collection is a sub-list attached to the most
  recent item (:class:`InlineSubList`);
* named key, collection value: a new item named after the key, holding a nested
  list of the same type (:class:`NamedSubList`);
* named key, scalar value: a new item named after the key whose ``class`` is
  the value (:class:`NamedClassItem`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple, Union

from bs4.element import Tag

from .base import MarkupBuilder
from .errors import MarkupConfigError
from .markup import add_child, new_element, set_attribute
from .rules import is_collection, is_numeric, iter_entries

LIST_TYPES = ("ul", "ol")


@dataclass(frozen=True, slots=True)
class ScalarItem:
    text: Any


@dataclass(frozen=True, slots=True)
class AttributeMap:
    attributes: Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True, slots=True)
class InlineSubList:
    list_type: str
    definition: Any


@dataclass(frozen=True, slots=True)
class NamedSubList:
    name: str
    definition: Any


@dataclass(frozen=True, slots=True)
class NamedClassItem:
    name: str
    css_class: Any


ListEntry = Union[ScalarItem, AttributeMap, InlineSubList, NamedSubList, NamedClassItem]


@dataclass(slots=True)
class ListCursor:
    """Tracks the list being filled and its most recently created item."""

    container: Tag
    last: Optional[Tag] = None

    def target(self) -> Tag:
        return self.last if self.last is not None else self.container


def classify(key: Any, value: Any) -> List[ListEntry]:
    """Classify one raw definition entry into the variants it stands for."""

    if is_numeric(key):
        if is_collection(value):
            return list(_split_attributes(value))
        return [ScalarItem(value)]
    if is_collection(value):
        return [NamedSubList(str(key), value)]
    return [NamedClassItem(str(key), value)]


def _split_attributes(value: Any) -> Iterator[ListEntry]:
    # Runs of attributes are cut at every inline sub-list so that their
    # relative order is kept.
    pending: List[Tuple[str, Any]] = []
    for subkey, subvalue in iter_entries(value):
        if subkey in LIST_TYPES and is_collection(subvalue):
            if pending:
                yield AttributeMap(tuple(pending))
                pending = []
            yield InlineSubList(subkey, subvalue)
        else:
            pending.append((str(subkey), subvalue))
    if pending:
        yield AttributeMap(tuple(pending))


def check_list_type(element_type: str) -> str:
    list_type = str(element_type).strip().lower()
    if list_type not in LIST_TYPES:
        raise MarkupConfigError(
            f"Unsupported list type '{element_type}'. Expected one of: {', '.join(LIST_TYPES)}."
        )
    return list_type


class ListCompiler(MarkupBuilder):
    """Build nested lists from array-shaped definitions."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(name="webmarkup.lists", logger=logger)

    def compile(self, definition: Any, element_type: str = "ul", parent: Optional[Tag] = None) -> Tag:
        """Compile ``definition`` into a list element.

        When ``parent`` is given the new list is appended to it, otherwise a
        detached list element is returned.
        """

        list_type = check_list_type(element_type)
        if parent is not None:
            container = add_child(parent, list_type)
        else:
            container = new_element(list_type)

        cursor = ListCursor(container)
        for key, value in iter_entries(definition):
            for entry in classify(key, value):
                self._apply(entry, cursor, list_type)
        return container

    def _apply(self, entry: ListEntry, cursor: ListCursor, list_type: str) -> None:
        if isinstance(entry, ScalarItem):
            cursor.last = add_child(cursor.container, "li", entry.text)
        elif isinstance(entry, AttributeMap):
            target = cursor.target()
            for name, value in entry.attributes:
                set_attribute(target, name, value)
        elif isinstance(entry, InlineSubList):
            if cursor.last is None:
                cursor.last = add_child(cursor.container, "li")
            self.compile(entry.definition, entry.list_type, cursor.last)
        elif isinstance(entry, NamedSubList):
            cursor.last = add_child(cursor.container, "li", entry.name)
            self.compile(entry.definition, list_type, cursor.last)
        else:
            cursor.last = add_child(cursor.container, "li", entry.name)
            set_attribute(cursor.last, "class", entry.css_class)


__all__ = [
    "AttributeMap",
    "InlineSubList",
    "LIST_TYPES",
    "ListCompiler",
    "ListCursor",
    "ListEntry",
    "NamedClassItem",
    "NamedSubList",
    "ScalarItem",
    "check_list_type",
    "classify",
]

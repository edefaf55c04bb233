"""Thin layer over BeautifulSoup tags used as the markup tree primitive.

Every builder in the package creates and links nodes through the helpers in
this module, and turns finished trees into strings through :func:`serialize`.
Nodes are plain :class:`bs4.element.Tag` objects, so callers are free to keep
manipulating them with the regular BeautifulSoup API.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import Tag
from bs4.formatter import HTMLFormatter

from .errors import MarkupConfigError

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_XML_PREAMBLE = re.compile(r"<\?xml .*?\?>\s*")
_SELF_CLOSED = re.compile(r"<([A-Za-z][\w:.-]*)([^<>]*?)\s*/>")


class _MarkupFormatter(HTMLFormatter):
    """Keep attributes in insertion order and always double-quote their values."""

    def __init__(self) -> None:
        super().__init__(
            entity_substitution=EntitySubstitution.substitute_xml,
            void_element_close_prefix="/",
        )

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())

    def quoted_attribute_value(self, value: str) -> str:
        return '"' + value.replace('"', "&quot;") + '"'


_FORMATTER = _MarkupFormatter()


@lru_cache(maxsize=1)
def _factory() -> BeautifulSoup:
    # Only used to mint new tags; nothing is ever attached to it.
    return BeautifulSoup("", "lxml")


def new_element(
    name: str,
    attrs: Optional[Mapping[str, Any]] = None,
    text: Any = None,
) -> Tag:
    """Create a detached element named ``name``."""

    element = _factory().new_tag(name)
    if attrs:
        for attr_name, value in attrs.items():
            set_attribute(element, attr_name, value)
    if text is not None:
        element.string = str(text)
    return element


def add_child(parent: Tag, name: str, text: Any = None) -> Tag:
    """Append a new ``name`` element (optionally holding ``text``) to ``parent``."""

    child = new_element(name, text=text)
    parent.append(child)
    return child


def set_attribute(node: Tag, name: Any, value: Any) -> None:
    if value is None:
        return
    node[str(name)] = str(value)


def element_count(node: Tag) -> int:
    """Return the number of element children of ``node``; text is not counted."""

    return sum(1 for child in node.children if isinstance(child, Tag))


def parse_element(markup: str) -> Tag:
    """Parse an HTML fragment and return its outermost element, detached."""

    soup = BeautifulSoup(markup, "lxml")
    scope = soup.body if soup.body is not None else soup
    element = scope.find(True)
    if element is None:
        raise MarkupConfigError(f"No element found in markup {markup!r}")
    return element.extract()


def _close_non_void(match: re.Match[str]) -> str:
    name, attributes = match.group(1), match.group(2)
    if name.lower() in VOID_ELEMENTS:
        return match.group(0)
    return f"<{name}{attributes}></{name}>"


def serialize(node: Tag, *, trim: bool = False) -> str:
    """Serialise ``node`` to markup.

    Empty elements that are not HTML void elements are always written with an
    explicit closing tag, including nodes that were produced by an XML parser.
    """

    text = node.decode(formatter=_FORMATTER)
    text = _XML_PREAMBLE.sub("", text)
    text = _SELF_CLOSED.sub(_close_non_void, text)
    if trim:
        text = text.strip()
    return text


def return_value(value: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
    """Return ``value`` serialised, unless ``raw`` is requested or it is not a tree."""

    options = options or {}
    if isinstance(value, Tag) and not options.get("raw"):
        return serialize(value, trim=bool(options.get("trim")))
    return value


__all__ = [
    "VOID_ELEMENTS",
    "add_child",
    "element_count",
    "new_element",
    "parse_element",
    "return_value",
    "serialize",
    "set_attribute",
]

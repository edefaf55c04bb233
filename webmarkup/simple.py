"""Single-purpose builders: selects, lists, inputs and hidden fields."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Union

from .base import MarkupBuilder
from .errors import MarkupConfigError
from .lists import ListCompiler
from .markup import add_child, new_element, return_value, set_attribute
from .rules import is_present, iter_entries
from .selection import SelectionMatcher
from .strings import Translator
from .text import strip as strip_text
from .tracing import safe_json

_ID_NAME_MAP = {"id": "name", "name": "id"}


class SimpleMarkup(MarkupBuilder):
    """Builders returning serialised markup, or the tree itself with ``raw``.

    Every method accepts the output options ``raw`` and ``trim`` understood by
    :func:`webmarkup.markup.return_value`.
    """

    def __init__(
        self,
        *,
        strings: Optional[Translator] = None,
        parent: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(name="webmarkup.simple", strings=strings, parent=parent, logger=logger)
        self._lists = ListCompiler(logger=logger)

    def return_value(self, value: Any, opts: Optional[Mapping[str, Any]] = None) -> Any:
        return return_value(value, opts)

    # ------------------------------------------------------------------
    # Select
    # ------------------------------------------------------------------
    def select(
        self,
        attrs: Union[str, Mapping[str, Any], None],
        options: Any,
        opts: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Build a ``<select>`` with one ``<option>`` per ``value: label`` entry.

        Options:

        ``selected``  selected value, or a mapping of them keyed by element id/name
        ``mask``      treat ``selected`` as a bitmask
        ``id``        copy ``name`` to ``id`` when no id is given
        ``ns``        translation prefix for the labels
        ``ttns``      translation prefix for option tooltips
        ``translate`` set to ``False`` to skip translation
        ``labelkey``, ``valuekey``
                      keys read from mapping labels (default ``text`` and ``id``)
        """

        opts = opts or {}
        attrs = {"name": attrs} if isinstance(attrs, str) else dict(attrs or {})
        if opts.get("id") and not is_present(attrs, "id") and is_present(attrs, "name"):
            attrs["id"] = attrs["name"]

        matcher = SelectionMatcher.for_element(attrs, opts.get("selected"), mask=bool(opts.get("mask")))
        label_key = opts.get("labelkey") or "text"
        value_key = opts.get("valuekey") or "id"

        entries: Dict[Any, Any] = dict(iter_entries(options))
        tooltips: Dict[Any, str] = {}
        strings = self.strings
        if strings is not None and opts.get("translate", True):
            entries = strings.lookup_many(entries, opts.get("ns") or "")
            if opts.get("ttns") is not None:
                tooltips = self._tooltips(strings, entries, str(opts["ttns"]))

        select = new_element("select", attrs)
        for value, label in entries.items():
            tooltip = tooltips.get(value)
            if isinstance(label, Mapping):
                if is_present(label, value_key):
                    value = label[value_key]
                if is_present(label, label_key):
                    label = label[label_key]

            option = add_child(select, "option", label)
            set_attribute(option, "value", value)
            if tooltip is not None:
                set_attribute(option, "title", tooltip)
            if matcher.is_selected(value):
                set_attribute(option, "selected", "selected")

        return self.return_value(select, opts)

    @staticmethod
    def _tooltips(strings: Translator, entries: Mapping[Any, Any], prefix: str) -> Dict[Any, str]:
        tooltips: Dict[Any, str] = {}
        for value in entries:
            key = f"{prefix}{value}"
            text = strings.lookup(key)
            if text != key:
                tooltips[value] = text
        return tooltips

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------
    def ul(self, definition: Any, opts: Optional[Mapping[str, Any]] = None) -> Any:
        """Build a nested list; see :mod:`webmarkup.lists` for the definition format.

        The ``type`` option selects ``ul`` (default) or ``ol``.
        """

        opts = opts or {}
        tree = self._lists.compile(definition, opts.get("type") or "ul")
        return self.return_value(tree, opts)

    def ol(self, definition: Any, opts: Optional[Mapping[str, Any]] = None) -> Any:
        opts = dict(opts or {})
        if opts.get("type") is None:
            opts["type"] = "ol"
        return self.ul(definition, opts)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def hidden(self, name: str, value: Any, opts: Optional[Mapping[str, Any]] = None) -> Any:
        """Build a hidden input whose ``id`` and ``name`` are both ``name``."""

        field = new_element("input", {"type": "hidden", "id": name, "name": name, "value": value})
        return self.return_value(field, opts)

    def json(self, name: str, struct: Any, opts: Optional[Mapping[str, Any]] = None) -> Any:
        """Build a hidden input holding ``struct`` encoded as JSON.

        Objects may provide ``to_json(opts)`` (used verbatim) or
        ``to_array(opts)`` (encoded); ``opts`` is passed to either.
        """

        opts = opts or {}
        to_json = getattr(struct, "to_json", None)
        if callable(to_json):
            payload = to_json(opts)
        else:
            to_array = getattr(struct, "to_array", None)
            if callable(to_array):
                struct = to_array(opts)
            payload = json.dumps(safe_json(struct), separators=(",", ":"), ensure_ascii=False)
        return self.hidden(name, payload, opts)

    def input(
        self,
        attrs: Union[str, Mapping[str, Any], None] = None,
        opts: Optional[Mapping[str, Any]] = None,
        attr_map: Union[bool, Mapping[str, str], None] = None,
    ) -> Any:
        """Build an ``<input>`` element.

        ``attrs`` is either the value of the primary attribute or a mapping that
        must contain it. Options:

        ``def``        primary attribute (default ``id``)
        ``deftype``    default ``type`` (default ``text``)
        ``add``        attributes added when not already set
        ``map``        ``{target: source}`` copies for missing attributes, or
                       ``True`` for ``id`` <-> ``name``; overrides ``attr_map``
        ``text_ns``    translation prefix for a missing ``value``
        ``tooltip_ns`` translation prefix for a missing ``title``
        """

        opts = opts or {}
        primary = opts.get("def") or "id"
        default_type = opts.get("deftype") or "text"

        if isinstance(attrs, str):
            attrs = {primary: attrs, "type": default_type}
        else:
            attrs = dict(attrs or {})
            if not is_present(attrs, primary):
                raise MarkupConfigError(f"Cannot build an input without its '{primary}' attribute.")
            if not is_present(attrs, "type"):
                attrs["type"] = default_type

        for name, value in (opts.get("add") or {}).items():
            attrs.setdefault(name, value)

        if opts.get("map") is not None:
            attr_map = opts["map"]
        if attr_map is True:
            attr_map = _ID_NAME_MAP
        if isinstance(attr_map, Mapping):
            for target, source in attr_map.items():
                if not is_present(attrs, target) and is_present(attrs, source):
                    attrs[target] = attrs[source]

        strings = self.strings
        if strings is not None:
            field_name = str(attrs[primary])
            if not is_present(attrs, "value"):
                attrs["value"] = strings.lookup(f"{opts.get('text_ns') or ''}{field_name}")
            if not is_present(attrs, "title") and opts.get("tooltip_ns") is not None:
                key = f"{opts['tooltip_ns']}{field_name}"
                tooltip = strings.lookup(key)
                if tooltip != key:
                    attrs["title"] = tooltip

        return self.return_value(new_element("input", attrs), opts)

    def button(
        self,
        attrs: Union[str, Mapping[str, Any], None] = None,
        opts: Optional[Mapping[str, Any]] = None,
        attr_map: Union[bool, Mapping[str, str], None] = None,
    ) -> Any:
        opts = dict(opts or {})
        opts["deftype"] = "button"
        return self.input(attrs, opts, attr_map)

    def submit(
        self,
        attrs: Union[str, Mapping[str, Any], None] = None,
        opts: Optional[Mapping[str, Any]] = None,
        attr_map: Union[bool, Mapping[str, str], None] = None,
    ) -> Any:
        opts = dict(opts or {})
        opts["def"] = "name"
        opts["deftype"] = "submit"
        return self.input(attrs, opts, attr_map)

    @staticmethod
    def strip(text: str, filters: Iterable[str] = ("R", "E")) -> str:
        return strip_text(text, filters)


__all__ = ["SimpleMarkup"]

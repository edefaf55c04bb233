"""Menu compiler integrated with the routing context.

Menu definitions are sequences or mappings of item definitions. With a
mapping, a string key (not starting with ``#``) doubles as the route name and
as the label of items that lack them.

Recognised item keys
--------------------
``route``     Route name resolved through ``context.router``.
``url``       Literal target, used when there is no ``route``.
``matchPath`` ``[offset, segment]``; marks a ``url`` item as current when the
              request path has ``segment`` at ``offset``.
``name``      Label text (translated when a string table is attached).
``icon``      Icon class, rendered only together with ``inner_el``.
``class``     Extra class for the item.
``attrs``     Attributes for the anchor.
``submenu`` + ``items``
              Options overlay and definition of a nested menu.

Options
-------
``parent``/``element``/``attrs``, ``root``
    Container selection; defaults to ``<div class="menu">``.
``item_el``, ``inner_el``, ``icon_el``, ``icon_class``, ``icon_pos``
    Item layout. Without ``item_el`` items are bare anchors.
``show``, ``builders``, ``handlers``
    Rule tables keyed by item-definition keys (filter, construct, post-process).
``current_class``, ``item_class``, ``label_class``, ``inner_class``
    Classes and the element used for builder labels.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from bs4.element import Tag

from .base import MarkupBuilder
from .context import RenderContext
from .errors import MarkupConfigError
from .markup import add_child, element_count, new_element, parse_element, set_attribute
from .rules import (
    Predicate,
    Rule,
    is_numeric,
    is_present,
    iter_entries,
    loose_equals,
    merge_options,
    rule_matches,
    rules_from,
)
from .strings import Translator
from .tracing import log_event

PLACEHOLDER_TEXT = "\u00a0"

_ICON_BEFORE = 0
_ICON_AFTER = 1


@dataclass(frozen=True, slots=True)
class MenuSettings:
    """Options of one compile call, resolved and validated."""

    item_el: Optional[str] = None
    inner_el: Optional[str] = None
    label_el: str = "span"
    current_class: str = "current"
    item_class: Optional[str] = None
    inner_class: Optional[str] = None
    icon_el: str = "i"
    icon_class: str = "icon"
    icon_pos: int = _ICON_BEFORE
    show: Dict[Any, Rule] = field(default_factory=dict)
    builders: Dict[Any, Rule] = field(default_factory=dict)
    handlers: Dict[Any, Rule] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "MenuSettings":
        item_el = options.get("item_el")
        inner_el = options.get("inner_el")
        icon_pos = options.get("icon_pos", _ICON_BEFORE)
        try:
            icon_pos = int(icon_pos)
        except (TypeError, ValueError):
            icon_pos = -1
        if icon_pos not in (_ICON_BEFORE, _ICON_AFTER):
            raise MarkupConfigError(
                f"Unsupported icon_pos '{options.get('icon_pos')}'. Expected 0 (before) or 1 (after)."
            )

        return cls(
            item_el=str(item_el).lower() if item_el is not None else None,
            inner_el=str(inner_el).lower() if inner_el is not None else None,
            label_el=options.get("label_class") or "span",
            current_class=options.get("current_class") or "current",
            item_class=options.get("item_class"),
            inner_class=options.get("inner_class"),
            icon_el=options.get("icon_el") or "i",
            icon_class=options.get("icon_class") or "icon",
            icon_pos=icon_pos,
            show=rules_from(options, "show"),
            builders=rules_from(options, "builders"),
            handlers=rules_from(options, "handlers"),
        )


@dataclass(slots=True)
class BuiltItem:
    """Nodes produced for one menu entry, as handed to handler rules."""

    item: Any = None
    link: Optional[Tag] = None
    inner: Optional[Tag] = None


def _usable_key(key: Any) -> bool:
    return isinstance(key, str) and not is_numeric(key) and not key.startswith("#")


class MenuCompiler(MarkupBuilder):
    """Turn a menu definition and a :class:`RenderContext` into an anchor tree."""

    def __init__(
        self,
        *,
        strings: Optional[Translator] = None,
        parent: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(name="webmarkup.menu", strings=strings, parent=parent, logger=logger)

    def compile(
        self,
        menu: Any,
        context: RenderContext,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Tag:
        """Build the menu and return its container element.

        A container left without children receives a single placeholder
        ``<span>`` holding a non-breaking space.
        """

        options = dict(options or {})
        settings = MenuSettings.from_options(options)
        container = self._container(options)

        for key, definition in iter_entries(menu):
            self._compile_item(key, definition, context, options, settings, container)

        if element_count(container) == 0:
            add_child(container, "span", PLACEHOLDER_TEXT)

        return container

    # ------------------------------------------------------------------
    # Container and item pipeline
    # ------------------------------------------------------------------
    def _container(self, options: Mapping[str, Any]) -> Tag:
        parent = options.get("parent")
        if parent is not None:
            container = add_child(parent, options.get("element") or "div")
            for name, value in (options.get("attrs") or {}).items():
                set_attribute(container, name, value)
            return container

        root = options.get("root")
        if root is not None:
            return parse_element(root) if isinstance(root, str) else root

        return new_element("div", {"class": "menu"})

    def _compile_item(
        self,
        key: Any,
        definition: Any,
        context: RenderContext,
        options: Mapping[str, Any],
        settings: MenuSettings,
        container: Tag,
    ) -> None:
        if isinstance(definition, str):
            definition = {"name": definition}
        elif not isinstance(definition, Mapping):
            log_event(self.logger, logging.DEBUG, "menu.item.skipped", key=key, reason="not a mapping")
            return

        failed_rule = self._failed_show_rule(key, definition, context, settings)
        if failed_rule is not None:
            log_event(self.logger, logging.DEBUG, "menu.item.filtered", key=key, rule=failed_rule)
            return

        built: Optional[BuiltItem] = None

        if is_present(definition, "submenu") and is_present(definition, "items"):
            sub_options = merge_options(definition["submenu"], options)
            sub_options["parent"] = container
            built = BuiltItem(item=self.compile(definition["items"], context, sub_options))

        if built is None:
            built = self._run_builder(key, definition, context, settings, container)

        if built is None:
            built = self._build_default(key, definition, context, settings, container)
            if built is None:
                return

        for rule_key, rule in settings.handlers.items():
            if is_present(definition, rule_key) and isinstance(rule, Predicate):
                rule(definition, key, context, built.item, built.link, built.inner)

    def _failed_show_rule(
        self,
        key: Any,
        definition: Mapping[Any, Any],
        context: RenderContext,
        settings: MenuSettings,
    ) -> Any:
        # The first failing rule excludes the item; later rules are not evaluated.
        for rule_key, rule in settings.show.items():
            if not is_present(definition, rule_key):
                continue
            if not rule_matches(rule, definition[rule_key], definition, key, context):
                return rule_key
        return None

    def _run_builder(
        self,
        key: Any,
        definition: Mapping[Any, Any],
        context: RenderContext,
        settings: MenuSettings,
        container: Tag,
    ) -> Optional[BuiltItem]:
        for rule_key, rule in settings.builders.items():
            if not is_present(definition, rule_key):
                continue
            if isinstance(rule, Predicate):
                return BuiltItem(item=rule(definition, key, context, container))
            label = self.translate(str(rule.value))
            return BuiltItem(item=add_child(container, settings.label_el, label))
        return None

    # ------------------------------------------------------------------
    # Default item construction
    # ------------------------------------------------------------------
    def _resolve_target(
        self,
        key: Any,
        definition: Mapping[Any, Any],
        context: RenderContext,
    ) -> Optional[Tuple[str, bool]]:
        if is_present(definition, "route"):
            route = str(definition["route"])
        elif is_present(definition, "url"):
            return str(definition["url"]), self._matches_path(definition, context)
        elif _usable_key(key):
            route = key
        else:
            return None

        url = context.router.build(route, context.path_params, strict=False)
        if url is None:
            url = "#"
        return url, context.route.name == route

    def _matches_path(self, definition: Mapping[Any, Any], context: RenderContext) -> bool:
        match_path = definition.get("matchPath")
        if not isinstance(match_path, Sequence) or isinstance(match_path, str) or len(match_path) != 2:
            return False
        offset, expected = match_path
        try:
            segment = context.segment(int(offset))
        except (TypeError, ValueError):
            return False
        return segment is not None and loose_equals(segment, expected)

    def _build_default(
        self,
        key: Any,
        definition: Mapping[Any, Any],
        context: RenderContext,
        settings: MenuSettings,
        container: Tag,
    ) -> Optional[BuiltItem]:
        target = self._resolve_target(key, definition, context)
        if target is None:
            log_event(self.logger, logging.DEBUG, "menu.item.skipped", key=key, reason="no target")
            return None
        url, current = target

        if is_present(definition, "name"):
            label = str(definition["name"])
        elif _usable_key(key):
            label = key
        else:
            log_event(self.logger, logging.DEBUG, "menu.item.skipped", key=key, reason="no label")
            return None
        label = self.translate(label)

        icon_name = definition.get("icon")
        built = BuiltItem()
        if settings.item_el is not None and settings.item_el != "a":
            built.item = add_child(container, settings.item_el)
            built.link, built.inner, icon = self._add_anchor(built.item, label, icon_name, settings)
            anchor = built.link
        else:
            anchor, built.inner, icon = self._add_anchor(container, label, icon_name, settings)
            built.item = anchor

        for name, value in (definition.get("attrs") or {}).items():
            set_attribute(anchor, name, value)
        set_attribute(anchor, "href", url)

        if built.inner is not None and settings.inner_class is not None:
            set_attribute(built.inner, "class", settings.inner_class)
        if built.inner is not None and icon is not None:
            set_attribute(icon, "class", f"{icon_name} {settings.icon_class}")

        classes = []
        if current:
            classes.append(settings.current_class)
        if settings.item_class is not None:
            classes.append(settings.item_class)
        if is_present(definition, "class"):
            classes.append(str(definition["class"]))
        if classes:
            set_attribute(built.item, "class", " ".join(classes))

        return built

    def _add_anchor(
        self,
        parent: Tag,
        label: str,
        icon_name: Any,
        settings: MenuSettings,
    ) -> Tuple[Tag, Optional[Tag], Optional[Tag]]:
        if settings.inner_el is None:
            return add_child(parent, "a", label), None, None

        anchor = add_child(parent, "a")
        icon = None
        if icon_name is not None and settings.icon_pos == _ICON_BEFORE:
            icon = add_child(anchor, settings.icon_el, " ")
        inner = add_child(anchor, settings.inner_el, label)
        if icon_name is not None and settings.icon_pos == _ICON_AFTER:
            icon = add_child(anchor, settings.icon_el, " ")
        return anchor, inner, icon


__all__ = ["BuiltItem", "MenuCompiler", "MenuSettings", "PLACEHOLDER_TEXT"]

"""All-in-one facade over the markup builders.

:class:`Helper` lazily creates and caches one instance of each builder. Any
attribute it does not define is looked up on :class:`SimpleMarkup` first; when
that has no such method the name is treated as a component view, rendered with
the mapping arguments of the call merged together (earlier mappings win).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from .components import ComponentLoader
from .context import RenderContext
from .menu import MenuCompiler
from .models import RenderSettings
from .rules import merge_options
from .simple import SimpleMarkup
from .strings import Translator
from .tracing import trace

_LOGGER = logging.getLogger(__name__)


class Helper:
    """Entry point used by applications and by the command line."""

    def __init__(self, settings: Optional[RenderSettings] = None, **opts: Any) -> None:
        self._settings = settings or RenderSettings()
        self._instance_opts: Dict[str, Any] = dict(opts)
        self._cache: Dict[str, Any] = {}

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    @property
    def strings(self) -> Optional[Translator]:
        """Return the translation table of the simple builder, else the configured one."""

        simple = self._cache.get("simple")
        if simple is not None:
            return simple.strings
        return self._instance_opts.get("translate")

    # ------------------------------------------------------------------
    # Cached builders
    # ------------------------------------------------------------------
    def get_simple(self) -> SimpleMarkup:
        if "simple" not in self._cache:
            self._cache["simple"] = SimpleMarkup(strings=self._instance_opts.get("translate"))
        return self._cache["simple"]

    def get_menu(self) -> MenuCompiler:
        if "menu" not in self._cache:
            self._cache["menu"] = MenuCompiler(parent=self)
        return self._cache["menu"]

    def get_components(self) -> ComponentLoader:
        if "components" not in self._cache:
            include = self._instance_opts.get("include") or self._settings.components_dir
            self._cache["components"] = ComponentLoader(include=include)
        return self._cache["components"]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def routemenu(
        self,
        menu: Any,
        context: RenderContext,
        opts: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Build a menu for ``context``; see :class:`MenuCompiler`."""

        opts = merge_options(opts, self._settings.menu_defaults())
        with trace("routemenu", logger=_LOGGER, route=context.route.name) as span:
            span.note(options=opts)
            container = self.get_menu().compile(menu, context, opts)
            return self.get_simple().return_value(container, opts)

    def ul(self, definition: Any, opts: Optional[Mapping[str, Any]] = None) -> Any:
        opts = merge_options(opts, self._settings.list_defaults())
        with trace("ul", logger=_LOGGER, type=opts.get("type")) as span:
            span.note(options=opts)
            return self.get_simple().ul(definition, opts)

    def ol(self, definition: Any, opts: Optional[Mapping[str, Any]] = None) -> Any:
        opts = merge_options(opts, {"type": "ol", "trim": self._settings.trim})
        with trace("ol", logger=_LOGGER):
            return self.get_simple().ul(definition, opts)

    def get(self, view: str, data: Optional[Mapping[str, Any]] = None) -> str:
        """Render a component view; see :meth:`ComponentLoader.load`."""

        with trace("component", logger=_LOGGER, view=view):
            return self.get_components().load(view, data)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        method = getattr(self.get_simple(), name, None)
        if callable(method):
            return method

        def render_view(*params: Any) -> str:
            data: Dict[str, Any] = {}
            for param in params:
                if isinstance(param, Mapping):
                    for key, value in param.items():
                        data.setdefault(key, value)
            return self.get(name, data)

        return render_view


__all__ = ["Helper"]

"""Render named component templates with Jinja2."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .errors import ComponentError

_LOGGER = logging.getLogger(__name__)


class ComponentLoader:
    """Load component views either by name from a directory or by file path.

    Pass ``include`` (a template directory) to resolve views by name; a name
    without a suffix gets ``.html`` appended. Without ``include`` every view
    must be the path of an existing template file.
    """

    def __init__(self, include: Union[str, Path, None] = None) -> None:
        self.include = Path(include) if include is not None else None
        self._environment: Optional[Environment] = None

    @property
    def environment(self) -> Environment:
        if self._environment is None:
            if self.include is None:
                raise ComponentError("No component directory configured")
            if not self.include.is_dir():
                raise ComponentError(f"Component directory does not exist: {self.include}")
            self._environment = Environment(
                loader=FileSystemLoader(str(self.include)),
                autoescape=select_autoescape(["html", "htm", "xml"]),
            )
        return self._environment

    def load(self, view: str, data: Optional[Mapping[str, Any]] = None) -> str:
        """Render ``view`` with ``data`` and return the resulting text."""

        data = dict(data or {})
        if self.include is not None:
            name = view if Path(view).suffix else f"{view}.html"
            try:
                template = self.environment.get_template(name)
            except TemplateNotFound as exc:
                raise ComponentError(f"No component view named '{view}' in {self.include}") from exc
            _LOGGER.debug("Rendering component %s from %s", name, self.include)
            return template.render(**data)

        path = Path(view)
        if path.is_file():
            environment = Environment(
                loader=FileSystemLoader(str(path.parent)),
                autoescape=select_autoescape(["html", "htm", "xml"]),
            )
            _LOGGER.debug("Rendering component file %s", path)
            return environment.get_template(path.name).render(**data)

        raise ComponentError(f"Invalid component view '{view}'")


__all__ = ["ComponentLoader"]

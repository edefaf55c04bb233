"""Structured logging helpers for render calls."""

from __future__ import annotations

import json
import logging
import math
import time
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from bs4.element import Tag

__all__ = ["RenderSpan", "trace", "log_event", "safe_json"]

_TRACE_LOGGER = "webmarkup.trace"


def safe_json(value: Any) -> Any:
    """Convert ``value`` into something :func:`json.dumps` accepts.

    Markup nodes are summarised by their tag name and callables (rule
    predicates, builders, handlers) by their qualified name, so option
    mappings can be logged as they were passed in.
    """

    if isinstance(value, float):
        return repr(value) if math.isnan(value) or math.isinf(value) else value
    if value is None or isinstance(value, (str, int, bool)):
        return value
    if isinstance(value, Tag):
        return f"<{value.name}>"
    if isinstance(value, Mapping):
        return {str(key): safe_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [safe_json(item) for item in value]
    if callable(value) and hasattr(value, "__qualname__"):
        return value.__qualname__

    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return safe_json(to_dict())

    if hasattr(value, "__dict__"):
        attributes = vars(value)
    elif hasattr(value, "__slots__"):
        attributes = {name: getattr(value, name) for name in value.__slots__ if hasattr(value, name)}
    else:
        return repr(value)
    return {name: safe_json(item) for name, item in attributes.items() if not name.startswith("_")}


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool | BaseException | tuple[Any, Any, Any] | None = None,
    **fields: Any,
) -> None:
    """Log ``event`` with ``fields`` as one JSON object; ``None`` fields are dropped."""

    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {key: safe_json(value) for key, value in fields.items() if value is not None}
    payload["event"] = event
    logger.log(level, json.dumps(payload, ensure_ascii=False, sort_keys=True), exc_info=exc_info)


@dataclass
class RenderSpan:
    """A render call in progress."""

    name: str
    logger: logging.Logger
    fields: Dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 2)

    def note(self, **fields: Any) -> None:
        """Log a DEBUG ``render.note`` event carrying the span fields."""

        log_event(self.logger, logging.DEBUG, "render.note", render=self.name, **{**self.fields, **fields})


@contextmanager
def trace(
    name: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    **fields: Any,
) -> Iterator[RenderSpan]:
    """Wrap a render call in ``render.start`` and ``render.end`` events.

    A failing call logs ``render.error`` at ERROR level with the exception and
    re-raises it.
    """

    span = RenderSpan(name=name, logger=logger or logging.getLogger(_TRACE_LOGGER), fields=dict(fields))
    log_event(span.logger, level, "render.start", render=name, **span.fields)
    try:
        yield span
    except Exception as exc:
        log_event(
            span.logger,
            logging.ERROR,
            "render.error",
            exc_info=True,
            render=name,
            duration_ms=span.elapsed_ms,
            error=repr(exc),
            **span.fields,
        )
        raise
    log_event(span.logger, level, "render.end", render=name, duration_ms=span.elapsed_ms, **span.fields)

"""Logging setup for the webmarkup command line and embedding applications."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[logging.Handler] = None,
) -> None:
    """Route all log records through a single handler on the root logger.

    ``stream`` defaults to a handler on ``sys.stderr`` so that markup written
    to ``sys.stdout`` by the command line stays clean. Handlers installed by
    earlier calls are removed first.
    """

    handler = stream if stream is not None else logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger()
    for previous in list(root.handlers):
        root.removeHandler(previous)
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


__all__ = ["configure_logging", "resolve_level"]

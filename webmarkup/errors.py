"""Exceptions raised by the markup builders."""

from __future__ import annotations


class MarkupError(RuntimeError):
    """Base class for every error raised by :mod:`webmarkup`."""


class MarkupConfigError(MarkupError, ValueError):
    """A definition or option set is missing a required field or holds an unsupported value."""


class RouteBuildError(MarkupError, LookupError):
    """A strict route build could not produce a URL."""


class ComponentError(MarkupError):
    """A component view could not be located or rendered."""


__all__ = ["ComponentError", "MarkupConfigError", "MarkupError", "RouteBuildError"]

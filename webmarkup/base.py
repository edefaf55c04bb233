"""Base class shared by the markup builders."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .strings import Translator


class MarkupBuilder:
    """Common plumbing for builders: a name, a logger and optional translations.

    Translations come either from an explicit ``strings`` table or, when the
    builder was created by a :class:`~webmarkup.helper.Helper`, from the helper
    passed as ``parent``.
    """

    def __init__(
        self,
        name: str,
        *,
        strings: Optional[Translator] = None,
        parent: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._name = name
        self._strings = strings
        self._parent = parent
        self._logger = logger or logging.getLogger(name)

    @property
    def name(self) -> str:
        """Return the human readable name for the builder."""

        return self._name

    @property
    def logger(self) -> logging.Logger:
        """Return the logger associated with the builder."""

        return self._logger

    @property
    def strings(self) -> Optional[Translator]:
        """Return the active translation table, if any."""

        if self._strings is not None:
            return self._strings
        if self._parent is not None:
            return getattr(self._parent, "strings", None)
        return None

    @strings.setter
    def strings(self, value: Optional[Translator]) -> None:
        self._strings = value

    def translate(self, key: str) -> str:
        """Translate ``key``; text passes through unchanged without a table."""

        strings = self.strings
        if strings is None:
            return key
        return strings.lookup(key)


__all__ = ["MarkupBuilder"]

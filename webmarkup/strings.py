"""Translation tables for labels, option texts and tooltips."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class Translator(Protocol):
    """Anything able to look up translated strings."""

    def lookup(self, key: str) -> str: ...

    def lookup_many(self, mapping: Mapping[Any, Any], prefix: str = "") -> Dict[Any, Any]: ...


class StringTable:
    """In-memory translation table.

    Missing keys never fail: :meth:`lookup` hands the key back so the caller
    renders the untranslated text.
    """

    def __init__(self, strings: Optional[Mapping[str, str]] = None) -> None:
        self._strings: Dict[str, str] = dict(strings or {})

    @classmethod
    def from_json(cls, path: Path) -> "StringTable":
        """Load a flat ``{"key": "text"}`` JSON document."""

        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"String table at {path} must be a JSON object")
        _LOGGER.debug("Loaded %d strings from %s", len(data), path)
        return cls({str(key): str(value) for key, value in data.items()})

    def has(self, key: str) -> bool:
        return key in self._strings

    def lookup(self, key: str) -> str:
        return self._strings.get(key, key)

    def lookup_many(self, mapping: Mapping[Any, Any], prefix: str = "") -> Dict[Any, Any]:
        """Translate every string value of ``mapping`` using ``prefix + value`` as key."""

        translated: Dict[Any, Any] = {}
        for key, value in mapping.items():
            if isinstance(value, str):
                lookup_key = f"{prefix}{value}"
                translated[key] = self._strings.get(lookup_key, value)
            else:
                translated[key] = value
        return translated

    def __getitem__(self, key: str) -> str:
        return self.lookup(key)

    def __contains__(self, key: object) -> bool:
        return key in self._strings

    def __len__(self) -> int:
        return len(self._strings)


__all__ = ["StringTable", "Translator"]

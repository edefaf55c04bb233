"""Decide which options of a value/label collection are selected."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional

from .rules import is_numeric, is_present, iter_entries, loose_equals


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if is_numeric(value):
        return int(float(value))
    return None


def element_identifier(attrs: Mapping[str, Any]) -> Optional[str]:
    """Return the ``id`` attribute, else the ``name`` attribute, else ``None``."""

    if is_present(attrs, "id"):
        return str(attrs["id"])
    if is_present(attrs, "name"):
        return str(attrs["name"])
    return None


@dataclass(frozen=True, slots=True)
class SelectionMatcher:
    """Match option values against a selected value.

    In mask mode an option is selected when its value shares a bit with the
    selected value; loosely equal values are selected in both modes.
    """

    selected: Any = None
    mask: bool = False

    @classmethod
    def for_element(
        cls,
        attrs: Mapping[str, Any],
        selected: Any,
        *,
        mask: bool = False,
    ) -> "SelectionMatcher":
        """Resolve ``selected`` for the element described by ``attrs``.

        A mapping of selections is looked up by the element identifier; when
        there is no identifier or no entry for it nothing is selected.
        """

        if isinstance(selected, Mapping):
            identifier = element_identifier(attrs)
            selected = selected.get(identifier) if identifier is not None else None
        return cls(selected=selected, mask=mask)

    def is_selected(self, value: Any) -> bool:
        if self.selected is None:
            return False
        if self.mask:
            left, right = _as_int(value), _as_int(self.selected)
            if left is not None and right is not None and left & right:
                return True
        return loose_equals(value, self.selected)

    def selected_values(self, options: Any) -> List[Any]:
        """Return the keys of ``options`` that are selected, in order."""

        return [value for value, _label in iter_entries(options) if self.is_selected(value)]


__all__ = ["SelectionMatcher", "element_identifier"]

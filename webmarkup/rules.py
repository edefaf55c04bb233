"""Rule values, loose comparisons and option merging shared by the builders."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union

from .errors import MarkupConfigError

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


@dataclass(frozen=True, slots=True)
class Predicate:
    """A rule backed by a callable."""

    fn: Callable[..., Any]

    def __call__(self, *args: Any) -> Any:
        return self.fn(*args)


@dataclass(frozen=True, slots=True)
class Literal:
    """A rule backed by a plain value."""

    value: Any


Rule = Union[Predicate, Literal]


def as_rule(value: Any) -> Rule:
    """Classify a raw rule value from an options mapping."""

    if isinstance(value, (Predicate, Literal)):
        return value
    if callable(value):
        return Predicate(value)
    return Literal(value)


def rules_from(options: Mapping[str, Any], name: str) -> Dict[Any, Rule]:
    """Return the ``name`` rule table of ``options`` with every value classified."""

    raw = options.get(name) or {}
    return {key: as_rule(value) for key, value in raw.items()}


def is_numeric(value: Any) -> bool:
    """Return ``True`` for numbers and strings that spell a number."""

    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC.match(value))
    return False


def is_collection(value: Any) -> bool:
    """Return ``True`` for mappings and for sequences other than strings."""

    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def iter_entries(definition: Any) -> Iterator[Tuple[Any, Any]]:
    """Yield ``(key, value)`` pairs of a definition; sequences use positions as keys."""

    if isinstance(definition, Mapping):
        yield from definition.items()
    elif is_collection(definition):
        yield from enumerate(definition)
    else:
        raise MarkupConfigError(
            f"Definitions must be a sequence or a mapping, got {type(definition).__name__}"
        )


def is_present(definition: Mapping[Any, Any], key: Any) -> bool:
    """Return ``True`` when ``key`` exists in ``definition`` with a non-``None`` value."""

    return definition.get(key) is not None


def is_truthy(value: Any) -> bool:
    """Truthiness of a definition value; the string ``"0"`` counts as false."""

    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two loosely typed values.

    Numbers and numeric strings compare by numeric value, ``None`` matches only
    ``None`` and the empty string, booleans compare against the truthiness of
    the other side (see :func:`is_truthy`), and everything else compares by its
    string form.
    """

    if left is None or right is None:
        return (left if left is not None else right) in (None, "")
    if isinstance(left, bool) or isinstance(right, bool):
        return is_truthy(left) == is_truthy(right)
    if is_numeric(left) and is_numeric(right):
        return float(left) == float(right)
    return str(left) == str(right)


def rule_matches(rule: Rule, value: Any, *args: Any) -> bool:
    """Evaluate a show rule.

    A :class:`Predicate` is called with ``args`` and its result is used as a
    boolean, a :class:`Literal` must loosely equal ``value``.
    """

    if isinstance(rule, Predicate):
        return bool(rule(*args))
    return loose_equals(value, rule.value)


def merge_options(
    overlay: Optional[Mapping[str, Any]],
    base: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Shallow-merge two option mappings.

    Keys defined in ``overlay`` (with a non-``None`` value) win; ``base`` only
    fills the keys the overlay leaves unset.
    """

    merged: Dict[str, Any] = dict(overlay or {})
    for key, value in (base or {}).items():
        if merged.get(key) is None:
            merged[key] = value
    return merged


__all__ = [
    "Literal",
    "Predicate",
    "Rule",
    "as_rule",
    "is_collection",
    "is_numeric",
    "iter_entries",
    "is_present",
    "is_truthy",
    "loose_equals",
    "merge_options",
    "rule_matches",
    "rules_from",
]

"""Plain-text extraction from HTML snippets."""

from __future__ import annotations

import html
import re
from typing import Callable, Dict, Iterable, List, Tuple

from bs4 import BeautifulSoup

_SPECIAL_CHARS = {
    "&amp;": "&",
    "&quot;": '"',
    "&#039;": "'",
    "&#39;": "'",
    "&apos;": "'",
    "&lt;": "<",
    "&gt;": ">",
}
_SPECIAL_CHARS_RE = re.compile("|".join(re.escape(entity) for entity in _SPECIAL_CHARS))

_TAG_PATTERNS: List[Tuple[re.Pattern[str], str]] = [
    (re.compile(r"<script[^>]*?>.*?</script>", re.IGNORECASE | re.DOTALL), ""),
    (re.compile(r"<[/!]*?[^<>]*?>", re.IGNORECASE | re.DOTALL), ""),
    (re.compile(r"([\r\n])[\s]+"), r"\1"),
]
_ENTITY_PATTERNS: List[Tuple[re.Pattern[str], str]] = [
    (re.compile(r"&(quot|#34);", re.IGNORECASE), '"'),
    (re.compile(r"&(amp|#38);", re.IGNORECASE), "&"),
    (re.compile(r"&(lt|#60);", re.IGNORECASE), "<"),
    (re.compile(r"&(gt|#62);", re.IGNORECASE), ">"),
    (re.compile(r"&(nbsp|#160);", re.IGNORECASE), " "),
]


def _drop_tags(text: str, level: int) -> str:
    return BeautifulSoup(text, "html.parser").get_text()


def _decode_entities(text: str, level: int) -> str:
    if level > 1:
        return html.unescape(text)
    return _SPECIAL_CHARS_RE.sub(lambda match: _SPECIAL_CHARS[match.group(0)], text)


def _regex_strip(text: str, level: int) -> str:
    patterns = list(_TAG_PATTERNS)
    if level > 1:
        patterns.extend(_ENTITY_PATTERNS)
    for pattern, replacement in patterns:
        text = pattern.sub(replacement, text)
    return text


_FILTERS: Dict[str, Callable[[str, int], str]] = {
    "T": _drop_tags,
    "E": _decode_entities,
    "R": _regex_strip,
}


def strip(text: str, filters: Iterable[str] = ("R", "E")) -> str:
    """Extract plain text from ``text`` by applying ``filters`` in order.

    ``T``   drop tags with the HTML parser
    ``E``   decode the special characters (``&amp;``, ``&lt;``, ...)
    ``EE``  decode every HTML entity
    ``R``   strip scripts, tags and indentation with regular expressions
    ``RR``  as ``R``, also replacing the common entities

    Doubling a letter raises the level of that filter; unknown filters are ignored.
    """

    for name in filters:
        if not name:
            continue
        handler = _FILTERS.get(name[0].upper())
        if handler is not None:
            text = handler(text, len(name))
    return text


__all__ = ["strip"]

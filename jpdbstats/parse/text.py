"""
Shared helpers for the page parsers.

jpdb pages are parsed by fixed structural position, so every helper
here either returns exactly what the page holds or raises
``ParseError``.  Numbers are read the way a browser's ``parseInt``
reads them: the leading integer of the text, ignoring whatever follows
("3 blacklisted words" -> 3).
"""

from __future__ import annotations

import re
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

from ..errors import ParseError  # noqa: F401 (re-exported)

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d[\d,]*)")


def verify_equals(expected: object, actual: object, message: Optional[str] = None) -> None:
    if expected != actual:
        raise ParseError(
            f'Expected value "{expected}", got "{actual}": {message or "unknown"}'
        )


def parse_leading_int(text: Optional[str]) -> Optional[int]:
    """Return the integer at the start of ``text`` or None.

    Thousands separators are dropped ("1,234 cards" -> 1234).  None is
    returned when the text does not start with a number; it ends up as
    ``null`` in the saved file.
    """
    if text is None:
        return None
    m = LEADING_INT_RE.match(text)
    if not m:
        return None
    return int(m.group(1).replace(",", ""))


def normalize_space(text: str) -> str:
    """Replace non-breaking spaces and strip the ends."""
    return text.replace("\xa0", " ").strip()


def element_text(tag: Tag) -> str:
    return normalize_space(tag.get_text())


def child_elements(tag: Tag) -> List[Tag]:
    """Direct child elements, skipping text nodes and comments."""
    return [child for child in tag.children if isinstance(child, Tag)]


def nth_child(tag: Tag, index: int, what: str) -> Tag:
    children = child_elements(tag)
    if index >= len(children):
        raise ParseError(
            f"{what}: expected at least {index + 1} child elements, got {len(children)}"
        )
    return children[index]


def as_soup(html: Union[str, bytes, BeautifulSoup]) -> BeautifulSoup:
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html, "html.parser")

"""Extract talent export strings from Archon build pages."""

from __future__ import annotations

import json
import re
from typing import Final

from bs4 import BeautifulSoup

_ATTRIBUTE_CANDIDATES: Final[tuple[str, ...]] = (
    "data-talent-string",
    "data-export-string",
    "data-clipboard-text",
)
_TALENT_CALC_LINK: Final[re.Pattern[str]] = re.compile(r"/talent-calc/blizzard/([A-Za-z0-9+/=_-]+)")
_JSON_KEYS: Final[tuple[str, ...]] = (
    "talentString",
    "exportString",
    "talentImportString",
    "talentLoadoutString",
)
_BUILD_STRING: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9+/=_-]{16,}$")


def extract_talent_string(html: str) -> str | None:
    """Return the first talent export string found in the page, if any.

    Looked up in order: copy-button data attributes, Wowhead talent-calculator
    links, then the embedded ``__NEXT_DATA__`` page state.
    """

    soup = BeautifulSoup(html, "html.parser")

    for attribute in _ATTRIBUTE_CANDIDATES:
        for tag in soup.find_all(attrs={attribute: True}):
            value = tag.get(attribute)
            if isinstance(value, str) and _BUILD_STRING.match(value.strip()):
                return value.strip()

    for anchor in soup.find_all("a", href=True):
        href = anchor.get("href")
        if not isinstance(href, str):
            continue
        match = _TALENT_CALC_LINK.search(href)
        if match:
            return match.group(1)

    script = soup.find("script", id="__NEXT_DATA__")
    if script is not None and script.string:
        try:
            state = json.loads(script.string)
        except json.JSONDecodeError:
            return None
        return _find_in_state(state)

    return None


def _find_in_state(node: object) -> str | None:
    if isinstance(node, dict):
        for key in _JSON_KEYS:
            value = node.get(key)
            if isinstance(value, str) and _BUILD_STRING.match(value):
                return value
        children: list[object] = list(node.values())
    elif isinstance(node, list):
        children = node
    else:
        return None
    for child in children:
        found = _find_in_state(child)
        if found is not None:
            return found
    return None

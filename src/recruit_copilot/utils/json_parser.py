"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json
import re
from typing import Any

from recruit_copilot.errors import JsonParseError

_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_ANY_FENCE = re.compile(r"```\s*([\s\S]*?)\s*```")
_BRACES = re.compile(r"(\{[\s\S]*\})")

# "nothing parsed", distinct from a reply that is literally `null`
_NOT_FOUND = object()


def _search(text: str) -> Any:
    """Try each candidate in order and return the first that parses.

    1. A fenced ```json block
    2. Any fenced code block
    3. First '{' to last '}'
    4. The whole text
    """
    if not text:
        return _NOT_FOUND

    for pattern in (_JSON_FENCE, _ANY_FENCE, _BRACES):
        match = pattern.search(text)
        if match is None:
            continue
        try:
            return json.loads(match.group(1).strip())
        except json.JSONDecodeError:
            continue

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return _NOT_FOUND


def find_json(text: str, default: Any = None) -> Any:
    """Best-effort JSON extraction. Returns ``default`` when nothing parses."""
    result = _search(text)
    return default if result is _NOT_FOUND else result


def extract_json(text: str) -> Any:
    """Like find_json() but raises JsonParseError on failure."""
    result = _search(text)
    if result is _NOT_FOUND:
        raise JsonParseError(text or "")
    return result

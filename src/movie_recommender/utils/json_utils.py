"""Helpers for pulling JSON objects out of free-form model output."""

import json
from typing import Any, Dict, Optional, Tuple


def _find_balanced_span(text: str, start: int) -> Optional[Tuple[int, int]]:
    """Locate the first balanced brace span at or after ``start``.

    Returns:
        ``(begin, end)`` slice bounds, or None.
    """
    open_index = text.find("{", start)
    while open_index != -1:
        depth = 0
        in_string = False
        escaped = False

        for index in range(open_index, len(text)):
            char = text[index]

            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return open_index, index + 1

        # Never closed; a later brace may still open a complete object
        open_index = text.find("{", open_index + 1)

    return None


def find_balanced_object(text: str, start: int = 0) -> Optional[str]:
    """Find the first balanced ``{...}`` substring at or after ``start``.

    Braces inside JSON string literals are ignored, including escaped quotes.

    Args:
        text: Text to scan.
        start: Index to start scanning from.

    Returns:
        The balanced substring, or None if no opening brace is ever closed.
    """
    span = _find_balanced_span(text, start)
    if span is None:
        return None
    return text[span[0] : span[1]]


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the first JSON object embedded in ``text``.

    Balanced candidates that are not valid JSON are skipped in favour of the
    next opening brace.

    Args:
        text: Model output that may wrap the JSON in prose or code fences.

    Returns:
        Parsed dictionary, or None if no JSON object could be found.
    """
    if not text:
        return None

    position = 0
    while True:
        span = _find_balanced_span(text, position)
        if span is None:
            return None

        begin, end = span
        try:
            data = json.loads(text[begin:end])
        except json.JSONDecodeError:
            data = None

        if isinstance(data, dict):
            return data

        position = begin + 1

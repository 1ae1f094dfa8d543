"""Text processing utilities."""

import re
from typing import Iterable, List, Optional

YEAR_ANNOTATION_PATTERN = re.compile(r"\s*\(\d{4}\).*$")
SITE_SUFFIX_PATTERN = re.compile(r"\s*-\s*IMDb.*$", re.IGNORECASE)
YEAR_PATTERN = re.compile(r"\d{4}")


def strip_year_annotation(title: str) -> str:
    """Remove a trailing ``(YYYY)`` annotation and anything after it.

    Args:
        title: Raw title text.

    Returns:
        Title without the year annotation.
    """
    return YEAR_ANNOTATION_PATTERN.sub("", title).strip()


def strip_site_suffix(title: str) -> str:
    """Remove the `` - IMDb`` suffix from a page ``<title>``."""
    return SITE_SUFFIX_PATTERN.sub("", title).strip()


def first_year(text: Optional[str]) -> Optional[str]:
    """Return the first four-digit run in ``text``."""
    if not text:
        return None
    match = YEAR_PATTERN.search(text)
    return match.group(0) if match else None


def unique_preserving_order(items: Iterable[str]) -> List[str]:
    """Deduplicate strings, keeping the first occurrence of each."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def normalize_title_key(title: str) -> str:
    """Build the lookup key used to compare recommended titles.

    Model echoes drift in quoting, trailing punctuation and case; the key
    ignores those differences.

    Args:
        title: Title as echoed by the model.

    Returns:
        Normalized comparison key.
    """
    key = title.strip()
    key = key.strip("\"'`“”‘’")
    key = key.rstrip(".!;, ")
    key = re.sub(r"\s+", " ", key)
    return key.casefold()

"""IMDb reference URL validation and canonicalization."""

import re
from typing import Iterable, List, Optional

IMDB_TITLE_PATTERN = re.compile(r"^(https?://(?:www\.)?imdb\.com/title/tt\d+)", re.IGNORECASE)


def normalize_imdb_url(url: str) -> Optional[str]:
    """Return the canonical form of an IMDb title URL.

    Surrounding whitespace is ignored, as is anything after the title ID
    (query strings, trailing path segments).

    Args:
        url: Raw user-supplied string.

    Returns:
        Canonical URL with exactly one trailing slash, or None if the string
        is not an IMDb title page URL.
    """
    if not url:
        return None

    match = IMDB_TITLE_PATTERN.match(url.strip())
    if match:
        return match.group(1) + "/"

    return None


def is_valid_imdb_url(url: str) -> bool:
    """Check whether a string is an IMDb title page URL."""
    return normalize_imdb_url(url) is not None


def extract_imdb_id(url: str) -> Optional[str]:
    """Extract the ``tt`` identifier from an IMDb title URL."""
    canonical = normalize_imdb_url(url)
    if canonical is None:
        return None
    return canonical.rstrip("/").rsplit("/", 1)[-1]


def unique_imdb_urls(urls: Iterable[str]) -> List[str]:
    """Normalize URLs, dropping invalid ones and duplicates.

    Args:
        urls: Raw URL strings.

    Returns:
        Canonical URLs in order of first appearance.
    """
    seen = set()
    result = []
    for url in urls:
        canonical = normalize_imdb_url(url)
        if canonical and canonical not in seen:
            seen.add(canonical)
            result.append(canonical)
    return result

"""IMDb title page metadata extraction."""

import json
import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import aiohttp
from bs4 import BeautifulSoup, Tag

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import MetadataExtractionError
from ...utils.text_utils import (
    first_year,
    strip_site_suffix,
    strip_year_annotation,
    unique_preserving_order,
)
from ..interfaces import IMetadataExtractor
from ..models import MovieInfo

T = TypeVar("T")

H1_PATTERN = re.compile(r"<h1[^>]*>([^<]+)</h1>", re.IGNORECASE)
OG_TITLE_PATTERN = re.compile(r'<meta[^>]*property="og:title"[^>]*content="([^"]+)"', re.IGNORECASE)
TITLE_TAG_PATTERN = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)
PAREN_YEAR_PATTERN = re.compile(r"\((\d{4})\)")
JSON_LD_PATTERN = re.compile(
    r'<script type="application/ld\+json">([\s\S]*?)</script>', re.IGNORECASE
)
RUNTIME_ITEM_PATTERN = re.compile(
    r"<li[^>]*>\s*<span[^>]*>Runtime</span>\s*<span[^>]*>([^<]+)</span>", re.IGNORECASE
)

RUNTIME_LABEL = "Runtime"
RUNTIME_SELECTORS = (
    'li[data-testid="title-techspec_runtime"] span:last-child',
    'li[data-testid="title-techspec_runtime"] div:last-child',
    'li[data-testid="title-techspec_runtime"] .ipc-metadata-list-item__content-container',
    'li:-soup-contains("Runtime") span:last-child',
    'li:-soup-contains("Runtime") div:last-child',
)
GENRE_LINK_SELECTOR = "a[href^='/search/title?genres='], a[href^='/search/title/?genres=']"


@dataclass
class ParsedPage:
    """A fetched page with lazily derived views shared by all strategies."""

    html: str
    soup: BeautifulSoup = field(init=False)
    _json_ld: Optional[Dict[str, Any]] = field(init=False, default=None)
    _json_ld_loaded: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.soup = BeautifulSoup(self.html, "lxml")

    @property
    def json_ld(self) -> Optional[Dict[str, Any]]:
        """First linked-data block on the page, if it parses."""
        if not self._json_ld_loaded:
            self._json_ld = _parse_json_ld(self.html)
            self._json_ld_loaded = True
        return self._json_ld

    def first_text(self, selector: str) -> Optional[str]:
        """Stripped text of the first element matching ``selector``."""
        element = self.soup.select_one(selector)
        if element is None:
            return None
        return _element_text(element) or None

    def all_texts(self, selector: str) -> List[str]:
        """Stripped, non-empty texts of every element matching ``selector``."""
        texts = (_element_text(element) for element in self.soup.select(selector))
        return [text for text in texts if text]

    def meta_content(self, **attrs: str) -> Optional[str]:
        """Content attribute of the first matching ``<meta>`` tag."""
        element = self.soup.find("meta", attrs=attrs)
        if element is None:
            return None
        content = element.get("content")
        if isinstance(content, str) and content.strip():
            return content.strip()
        return None


def _element_text(element: Tag) -> str:
    """Rendered text of an element with runs of whitespace collapsed.

    Whitespace between inline children is kept, comments are skipped.
    """
    return " ".join(element.get_text().split())


Strategy = Callable[[ParsedPage], Optional[T]]


def first_match(strategies: Sequence[Strategy], page: ParsedPage) -> Optional[T]:
    """Evaluate strategies in order and return the first non-empty result."""
    for strategy in strategies:
        value = strategy(page)
        if value:
            return value
    return None


def _parse_json_ld(html: str) -> Optional[Dict[str, Any]]:
    """Parse the first ``application/ld+json`` script block."""
    match = JSON_LD_PATTERN.search(html)
    if not match:
        return None
    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError:
        return None
    if isinstance(data, list):
        data = next((item for item in data if isinstance(item, dict)), None)
    return data if isinstance(data, dict) else None


def _person_names(value: Any) -> List[str]:
    """Names from a linked-data person field (single object or array)."""
    people = value if isinstance(value, list) else [value]
    names = []
    for person in people:
        if isinstance(person, dict) and isinstance(person.get("name"), str):
            names.append(person["name"].strip())
    return [name for name in names if name]


# Title


def _title_from_heading(page: ParsedPage) -> Optional[str]:
    return page.first_text("h1")


def _title_from_og_meta(page: ParsedPage) -> Optional[str]:
    return page.meta_content(property="og:title")


def _title_from_title_tag(page: ParsedPage) -> Optional[str]:
    if page.soup.title is None:
        return None
    title = strip_site_suffix(page.soup.title.get_text(strip=True))
    return title or None


TITLE_STRATEGIES: Tuple[Strategy, ...] = (
    _title_from_heading,
    _title_from_og_meta,
    _title_from_title_tag,
)


# Year


def _year_from_release_link(page: ParsedPage) -> Optional[str]:
    return first_year(page.first_text("a[href^='/title/tt'][href*='releaseinfo']"))


def _year_from_parenthesized(page: ParsedPage) -> Optional[str]:
    match = PAREN_YEAR_PATTERN.search(page.html)
    return match.group(1) if match else None


def _year_from_json_ld(page: ParsedPage) -> Optional[str]:
    data = page.json_ld or {}
    for key in ("datePublished", "dateCreated"):
        value = data.get(key)
        if isinstance(value, str):
            year = first_year(value)
            if year:
                return year
    return None


YEAR_STRATEGIES: Tuple[Strategy, ...] = (
    _year_from_release_link,
    _year_from_parenthesized,
    _year_from_json_ld,
)


# Genre


def _genre_from_links(page: ParsedPage) -> List[str]:
    return unique_preserving_order(page.all_texts(GENRE_LINK_SELECTOR))


def _genre_from_json_ld(page: ParsedPage) -> List[str]:
    genre = (page.json_ld or {}).get("genre")
    if isinstance(genre, list):
        return unique_preserving_order(g.strip() for g in genre if isinstance(g, str) and g.strip())
    if isinstance(genre, str) and genre.strip():
        return [genre.strip()]
    return []


GENRE_STRATEGIES: Tuple[Strategy, ...] = (_genre_from_links, _genre_from_json_ld)


# Description


def _description_from_plot(page: ParsedPage) -> Optional[str]:
    return page.first_text('span[data-testid="plot-l"]')


def _description_from_og_meta(page: ParsedPage) -> Optional[str]:
    return page.meta_content(property="og:description")


def _description_from_meta(page: ParsedPage) -> Optional[str]:
    return page.meta_content(name="description")


DESCRIPTION_STRATEGIES: Tuple[Strategy, ...] = (
    _description_from_plot,
    _description_from_og_meta,
    _description_from_meta,
)


# Rating


def _rating_from_aggregate(page: ParsedPage) -> Optional[str]:
    return page.first_text('span[data-testid="hero-rating-bar__aggregate-rating__score"]')


def _rating_from_aria_label(page: ParsedPage) -> Optional[str]:
    return page.first_text('span[aria-label*="rating"]')


RATING_STRATEGIES: Tuple[Strategy, ...] = (_rating_from_aggregate, _rating_from_aria_label)


# Runtime


def _runtime_from_selectors(page: ParsedPage) -> Optional[str]:
    for selector in RUNTIME_SELECTORS:
        text = page.first_text(selector)
        if text and text != RUNTIME_LABEL:
            return text
    return None


def _runtime_from_json_ld(page: ParsedPage) -> Optional[str]:
    duration = (page.json_ld or {}).get("duration")
    return duration.strip() if isinstance(duration, str) and duration.strip() else None


def _runtime_from_html(page: ParsedPage) -> Optional[str]:
    match = RUNTIME_ITEM_PATTERN.search(page.html)
    return match.group(1).strip() if match else None


RUNTIME_STRATEGIES: Tuple[Strategy, ...] = (
    _runtime_from_selectors,
    _runtime_from_json_ld,
    _runtime_from_html,
)


# Director


def _director_from_credit(page: ParsedPage) -> Optional[str]:
    return page.first_text('a[data-testid="title-pc-principal-credit"]')


def _director_from_json_ld(page: ParsedPage) -> Optional[str]:
    names = _person_names((page.json_ld or {}).get("director"))
    return names[0] if names else None


DIRECTOR_STRATEGIES: Tuple[Strategy, ...] = (_director_from_credit, _director_from_json_ld)


# Cast


def _cast_from_credits(page: ParsedPage) -> List[str]:
    return page.all_texts("a[data-testid='title-cast-item__actor']")


def _cast_from_json_ld(page: ParsedPage) -> List[str]:
    return _person_names((page.json_ld or {}).get("actor") or [])


CAST_STRATEGIES: Tuple[Strategy, ...] = (_cast_from_credits, _cast_from_json_ld)


def parse_movie_info(html: str) -> MovieInfo:
    """Extract movie facts from a title page.

    Each field is resolved independently by its strategy cascade.

    Args:
        html: Page HTML.

    Returns:
        Extracted movie information.
    """
    page = ParsedPage(html)

    title = first_match(TITLE_STRATEGIES, page)
    if title:
        title = strip_year_annotation(title) or None

    return MovieInfo(
        title=title,
        year=first_match(YEAR_STRATEGIES, page),
        genre=first_match(GENRE_STRATEGIES, page) or [],
        description=first_match(DESCRIPTION_STRATEGIES, page),
        rating=first_match(RATING_STRATEGIES, page),
        runtime=first_match(RUNTIME_STRATEGIES, page),
        director=first_match(DIRECTOR_STRATEGIES, page),
        cast=first_match(CAST_STRATEGIES, page) or [],
    )


def parse_title(html: str) -> Optional[str]:
    """Extract only the title using regular expressions.

    Cheaper than ``parse_movie_info`` since no document tree is built.

    Args:
        html: Page HTML.

    Returns:
        Title without year annotation, or None.
    """
    title = None

    h1_match = H1_PATTERN.search(html)
    if h1_match and h1_match.group(1).strip():
        title = h1_match.group(1).strip()

    if not title:
        meta_match = OG_TITLE_PATTERN.search(html)
        if meta_match and meta_match.group(1).strip():
            title = meta_match.group(1).strip()

    if not title:
        title_match = TITLE_TAG_PATTERN.search(html)
        if title_match:
            title = strip_site_suffix(title_match.group(1).strip())

    if not title:
        return None

    return strip_year_annotation(title) or None


class ImdbMetadataExtractor(IMetadataExtractor, LoggerMixin):
    """Scrapes IMDb title pages over HTTP."""

    def __init__(self, config: Config) -> None:
        """Initialize metadata extractor.

        Args:
            config: Application configuration.
        """
        self._config = config
        self._scraper_config = config.scraper
        self._session: Optional[aiohttp.ClientSession] = None
        self._cache: Dict[str, Tuple[float, str]] = {}

    async def fetch_movie_info(self, url: str) -> MovieInfo:
        """Fetch a title page and extract structured movie facts.

        Args:
            url: Canonical title page URL.

        Returns:
            Extracted movie information; empty on any failure.
        """
        try:
            html = await self._fetch_html(url)
            info = parse_movie_info(html)
        except Exception as e:
            self.logger.error(f"Error scraping IMDb URL {url}: {e}")
            return MovieInfo.empty()

        if info.title:
            self.logger.info(f"Extracted movie info from {url}: {info.title!r}")
        else:
            self.logger.warning(f"Title not found in IMDb page: {url}")
        return info

    async def fetch_title(self, url: str) -> Optional[str]:
        """Fetch a title page and extract only the title.

        Args:
            url: Canonical title page URL.

        Returns:
            Movie title, or None on any failure.
        """
        try:
            html = await self._fetch_html(url)
        except Exception as e:
            self.logger.error(f"Error scraping IMDb URL {url}: {e}")
            return None

        title = parse_title(html)
        if title is None:
            self.logger.warning(f"Title not found in IMDb page: {url}")
        return title

    async def _fetch_html(self, url: str) -> str:
        """Fetch page HTML, reusing cached pages within the TTL.

        Args:
            url: Page URL.

        Returns:
            Page HTML.

        Raises:
            MetadataExtractionError: On a non-success status.
        """
        cached = self._get_cached(url)
        if cached is not None:
            self.logger.debug(f"Page cache hit: {url}")
            return cached

        async with self._get_session().get(url, headers=self._request_headers()) as response:
            if not response.ok:
                raise MetadataExtractionError(
                    f"Failed to fetch IMDb URL: {url}, status: {response.status}"
                )
            html = await response.text()

        self._store_cached(url, html)
        return html

    def _request_headers(self) -> Dict[str, str]:
        """Headers sent with every page request."""
        max_age = self._scraper_config.cache_ttl_hours * 3600
        return {
            "User-Agent": self._scraper_config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Cache-Control": f"max-age={max_age}",
        }

    def _get_cached(self, url: str) -> Optional[str]:
        if not self._scraper_config.cache_enabled:
            return None
        entry = self._cache.get(url)
        if entry is None:
            return None
        stored_at, html = entry
        if self._is_expired(stored_at, time.monotonic()):
            del self._cache[url]
            return None
        return html

    def _store_cached(self, url: str, html: str) -> None:
        if not self._scraper_config.cache_enabled:
            return
        now = time.monotonic()
        expired = [
            key for key, (stored_at, _) in self._cache.items() if self._is_expired(stored_at, now)
        ]
        for key in expired:
            del self._cache[key]
        if expired:
            self.logger.debug(f"Evicted {len(expired)} expired page(s) from cache")
        self._cache[url] = (now, html)

    def _is_expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at > self._scraper_config.cache_ttl_hours * 3600

    def clear_cache(self) -> None:
        """Drop every cached page."""
        self._cache.clear()

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session.

        Returns:
            HTTP session.
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._scraper_config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "ImdbMetadataExtractor":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

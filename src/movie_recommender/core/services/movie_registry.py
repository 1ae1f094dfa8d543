"""Process-lifetime session state."""

import asyncio
from typing import Dict, Iterable, List, Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils.text_utils import normalize_title_key, unique_preserving_order
from ..interfaces import IMovieRegistry, IRecommendationHistory


class SessionMovieRegistry(IMovieRegistry, LoggerMixin):
    """Titles contributed by users, unioned with the curated catalog.

    Nothing is evicted or persisted.
    """

    def __init__(self, config: Config) -> None:
        """Initialize registry.

        Args:
            config: Application configuration.
        """
        self._baseline = list(config.recommendation.catalog)
        self._titles: List[str] = []

    def add(self, titles: Iterable[str]) -> List[str]:
        """Union titles into the registry.

        Args:
            titles: Titles to add; blank entries are ignored.

        Returns:
            Session titles after the union.
        """
        cleaned = [title.strip() for title in titles if title and title.strip()]
        before = len(self._titles)
        self._titles = unique_preserving_order([*self._titles, *cleaned])
        added = len(self._titles) - before
        if added:
            self.logger.info(f"Added {added} title(s) to session registry")
        return list(self._titles)

    def list(self) -> List[str]:
        """Return the curated baseline unioned with session titles."""
        return unique_preserving_order([*self._baseline, *self._titles])

    def session_titles(self) -> List[str]:
        """Return only the user-contributed titles."""
        return list(self._titles)


class RecommendationHistory(IRecommendationHistory, LoggerMixin):
    """Titles already recommended during this process lifetime.

    Lookups use ``normalize_title_key`` so small drifts in how the model
    echoes a title do not defeat deduplication. The stored value is the
    model's own echo.
    """

    def __init__(self) -> None:
        """Initialize empty history."""
        self._titles: Dict[str, str] = {}
        self._lock: Optional[asyncio.Lock] = None

    @property
    def lock(self) -> asyncio.Lock:
        """Lock held by the single writer of this history."""
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    def snapshot(self) -> List[str]:
        """Return recommended titles in insertion order."""
        return list(self._titles.values())

    def contains(self, title: str) -> bool:
        """Check whether a title was already recommended."""
        return normalize_title_key(title) in self._titles

    def record(self, title: str) -> None:
        """Record a recommended title."""
        key = normalize_title_key(title)
        if key:
            self._titles.setdefault(key, title)

    def reset(self) -> None:
        """Forget every recommended title."""
        self.logger.info(f"Resetting recommendation history ({len(self._titles)} titles)")
        self._titles.clear()

    def __len__(self) -> int:
        return len(self._titles)

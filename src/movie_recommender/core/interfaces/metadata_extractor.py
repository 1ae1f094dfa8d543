"""Metadata extractor interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import MovieInfo


class IMetadataExtractor(ABC):
    """Interface for scraping movie facts from reference pages."""

    @abstractmethod
    async def fetch_movie_info(self, url: str) -> MovieInfo:
        """Fetch a title page and extract structured movie facts.

        Never raises; network or parse failures yield ``MovieInfo.empty()``.

        Args:
            url: Canonical title page URL.

        Returns:
            Extracted movie information.
        """
        pass

    @abstractmethod
    async def fetch_title(self, url: str) -> Optional[str]:
        """Fetch a title page and extract only the title.

        Args:
            url: Canonical title page URL.

        Returns:
            Movie title or None.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the HTTP session."""
        pass

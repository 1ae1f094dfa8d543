"""Session state interfaces."""

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, List


class IMovieRegistry(ABC):
    """Process-lifetime registry of user-contributed titles."""

    @abstractmethod
    def add(self, titles: Iterable[str]) -> List[str]:
        """Union titles into the registry.

        Returns:
            Session titles after the union.
        """
        pass

    @abstractmethod
    def list(self) -> List[str]:
        """Return the curated baseline unioned with session titles."""
        pass

    @abstractmethod
    def session_titles(self) -> List[str]:
        """Return only the user-contributed titles."""
        pass


class IRecommendationHistory(ABC):
    """Process-lifetime set of titles already recommended."""

    @property
    @abstractmethod
    def lock(self) -> asyncio.Lock:
        """Lock held by the single writer of this history."""
        pass

    @abstractmethod
    def snapshot(self) -> List[str]:
        """Return recommended titles in insertion order."""
        pass

    @abstractmethod
    def contains(self, title: str) -> bool:
        """Check whether a title was already recommended."""
        pass

    @abstractmethod
    def record(self, title: str) -> None:
        """Record a recommended title."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Forget every recommended title."""
        pass

"""Movie-related data models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MovieInfo(BaseModel):
    """Facts scraped from one IMDb title page.

    Every field is best-effort; a page that could not be fetched yields an
    instance with all fields empty.
    """

    title: Optional[str] = Field(None, description="Movie title")
    year: Optional[str] = Field(None, description="Release year")
    genre: List[str] = Field(default_factory=list, description="Genres, first appearance order")
    description: Optional[str] = Field(None, description="Plot summary")
    rating: Optional[str] = Field(None, description="Aggregate rating as displayed")
    runtime: Optional[str] = Field(None, description="Runtime as displayed")
    director: Optional[str] = Field(None, description="Principal director")
    cast: List[str] = Field(default_factory=list, description="Credited actors")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls) -> "MovieInfo":
        """Create the all-empty record returned on fetch or parse failure."""
        return cls()

    @property
    def has_title(self) -> bool:
        """Check whether a title was extracted."""
        return bool(self.title)

    def classification_text(self) -> str:
        """Text submitted to the guardrail for this movie."""
        parts = [self.title, *self.genre, self.description]
        return ". ".join(part for part in parts if part)

    def catalog_entry(self, fallback: str = "") -> str:
        """Format the movie as a catalog line: ``Title [g1, g2]: description``.

        Args:
            fallback: Label used when no title was extracted (usually the URL).

        Returns:
            Catalog line for the recommendation prompt.
        """
        entry = self.title or fallback
        if self.genre:
            entry += f" [{', '.join(self.genre)}]"
        if self.description:
            entry += f": {self.description}"
        return entry


class MovieInfoWithUrl(MovieInfo):
    """Scraped movie facts together with the page they came from."""

    url: str = Field(..., description="Canonical IMDb URL")

    @classmethod
    def from_info(cls, url: str, info: MovieInfo) -> "MovieInfoWithUrl":
        """Attach a URL to extracted movie facts."""
        return cls(url=url, **info.model_dump())

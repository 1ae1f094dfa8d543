"""Request bodies accepted by the HTTP API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class RecommendRequest(BaseModel):
    """Body of ``POST /api/recommend``."""

    description: StrictStr
    imdb_urls: Optional[List[StrictStr]] = Field(None, alias="imdbUrls")

    model_config = ConfigDict(populate_by_name=True)


class GuardrailCheckRequest(BaseModel):
    """Body of ``POST /api/guardrail``."""

    description: Optional[StrictStr] = None
    imdb_urls: Optional[List[StrictStr]] = Field(None, alias="imdbUrls")

    model_config = ConfigDict(populate_by_name=True)


class AddMoviesRequest(BaseModel):
    """Body of ``POST /api/movies``."""

    imdb_movies: Optional[List[StrictStr]] = Field(None, alias="imdbMovies")

    model_config = ConfigDict(populate_by_name=True)


class ScrapeRequest(BaseModel):
    """Body of ``POST /api/imdb-scraping``."""

    url: Optional[StrictStr] = None
    urls: Optional[List[Optional[StrictStr]]] = None

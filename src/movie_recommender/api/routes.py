"""HTTP routes."""

import asyncio
import logging
from typing import Any, Dict, Type

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from ..core.interfaces import IMetadataExtractor, IMovieRegistry, IRecommendationOrchestrator
from ..infrastructure import Container
from ..utils import RecommendationTimeoutError, normalize_imdb_url
from .responses import (
    error_response,
    movie_info_payload,
    recommendation_response,
    screening_error_response,
    screening_response,
)
from .schemas import AddMoviesRequest, GuardrailCheckRequest, RecommendRequest, ScrapeRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class InvalidBody(Exception):
    """Request body was not JSON or did not match the expected shape."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


async def parse_body(request: Request, schema: Type[BaseModel]) -> Any:
    """Decode and validate a JSON request body.

    Raises:
        InvalidBody: If the body is not JSON or fails validation.
    """
    try:
        raw = await request.json()
    except ValueError:
        raise InvalidBody("Invalid JSON in request body", "INVALID_JSON")

    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        logger.debug(f"Rejected {request.url.path} body: {e}")
        raise InvalidBody("Invalid request format", "INVALID_REQUEST")


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_orchestrator(
    container: Container = Depends(get_container),
) -> IRecommendationOrchestrator:
    return container.get(IRecommendationOrchestrator)  # type: ignore


def get_registry(container: Container = Depends(get_container)) -> IMovieRegistry:
    return container.get(IMovieRegistry)  # type: ignore


def get_extractor(container: Container = Depends(get_container)) -> IMetadataExtractor:
    return container.get(IMetadataExtractor)  # type: ignore


@router.post("/recommend")
async def recommend(
    request: Request,
    orchestrator: IRecommendationOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    """Recommend one movie for a description and optional reference URLs."""
    try:
        body = await parse_body(request, RecommendRequest)
    except InvalidBody as e:
        return error_response(400, e.message, e.code)

    try:
        outcome = await orchestrator.recommend(body.description, body.imdb_urls)
    except RecommendationTimeoutError as e:
        return error_response(500, str(e), "INTERNAL_ERROR")

    return recommendation_response(outcome)


@router.post("/guardrail")
async def guardrail(
    request: Request,
    orchestrator: IRecommendationOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    """Screen a description and reference URLs without recommending."""
    try:
        body = await parse_body(request, GuardrailCheckRequest)
    except InvalidBody as e:
        return screening_error_response(400, e.message)

    try:
        result = await orchestrator.screen(body.description or "", body.imdb_urls)
    except Exception as e:
        logger.exception(f"Guardrail API error: {e}")
        return screening_error_response()

    return screening_response(result)


@router.get("/movies")
async def list_movies(registry: IMovieRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """List the curated catalog together with user-contributed titles."""
    return {"movies": registry.list()}


@router.post("/movies")
async def add_movies(
    request: Request,
    registry: IMovieRegistry = Depends(get_registry),
) -> JSONResponse:
    """Add user-contributed titles for the rest of the process lifetime."""
    try:
        body = await parse_body(request, AddMoviesRequest)
    except InvalidBody:
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request"})

    if body.imdb_movies is not None:
        registry.add(body.imdb_movies)

    return JSONResponse({"success": True, "movies": registry.session_titles()})


@router.post("/imdb-scraping")
async def scrape(
    request: Request,
    extractor: IMetadataExtractor = Depends(get_extractor),
) -> JSONResponse:
    """Scrape one IMDb title page, or several concurrently."""
    try:
        body = await parse_body(request, ScrapeRequest)
    except InvalidBody as e:
        return JSONResponse(status_code=400, content={"error": e.message})

    if body.urls is not None:
        urls = [normalize_imdb_url(url) for url in body.urls if url]
        infos = await asyncio.gather(
            *(extractor.fetch_movie_info(url) for url in urls if url is not None)
        )
        return JSONResponse([movie_info_payload(info) for info in infos if info.has_title])

    if not body.url:
        return JSONResponse(status_code=400, content={"error": "URL is required"})

    url = normalize_imdb_url(body.url)
    if url is None:
        return JSONResponse(status_code=400, content={"error": "Invalid IMDb title URL"})

    info = await extractor.fetch_movie_info(url)
    if not info.has_title:
        return JSONResponse(
            status_code=404,
            content={"error": "Failed to extract movie info from IMDB URL"},
        )

    return JSONResponse(movie_info_payload(info))

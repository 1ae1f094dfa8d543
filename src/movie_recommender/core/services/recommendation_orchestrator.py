"""Recommendation orchestrator service implementation."""

import asyncio
from typing import List, Optional, Sequence, Set, Tuple

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import OrchestratorError, RecommendationTimeoutError
from ...utils.constants import (
    ALL_RECOMMENDED_PREFIX,
    BLOCKED_REFERENCES_REASONING,
    BLOCKED_REFERENCES_SUGGESTIONS,
    MISSING_DESCRIPTION_REASONING,
    MISSING_DESCRIPTION_SUGGESTIONS,
    SECURITY_BLOCKED_PREFIX,
)
from ...utils.imdb_url import unique_imdb_urls
from ..interfaces import (
    IContentGuardrail,
    IContentValidator,
    ILLMService,
    IMetadataExtractor,
    IRecommendationHistory,
    IRecommendationOrchestrator,
)
from ..models import (
    BlockReason,
    ClassificationVerdict,
    ContentBlocked,
    ContentType,
    CycleReset,
    GuardrailRequest,
    MovieInfoWithUrl,
    Recommendation,
    RecommendationFailed,
    RecommendationOutcome,
    ScreeningResult,
    SecurityBlocked,
)
from ..prompts import RECOMMENDATION_SYSTEM_PROMPT, build_recommendation_user_prompt

ScreenedReference = Tuple[MovieInfoWithUrl, ClassificationVerdict]


class RecommendationOrchestrator(IRecommendationOrchestrator, LoggerMixin):
    """Recommendation orchestrator service implementation.

    Implements the request flow:
    - Reject blank descriptions without any network call
    - Classify the description
    - For each valid IMDb URL: scrape the page, classify the scraped text
    - Refuse the whole request if any reference was blocked
    - Ask the model for one not-yet-recommended title from the enriched catalog
    - Interpret the reply as a recommendation, a cycle reset or a security block
    """

    def __init__(
        self,
        config: Config,
        llm_service: ILLMService,
        metadata_extractor: IMetadataExtractor,
        guardrail: IContentGuardrail,
        content_validator: IContentValidator,
        history: IRecommendationHistory,
    ):
        """Initialize recommendation orchestrator.

        Args:
            config: Application configuration.
            llm_service: Generative text backend.
            metadata_extractor: IMDb page scraper.
            guardrail: Content guardrail service.
            content_validator: Content validator.
            history: Already-recommended titles.
        """
        self._config = config
        self._recommendation_config = config.recommendation
        self._llm_service = llm_service
        self._metadata_extractor = metadata_extractor
        self._guardrail = guardrail
        self._content_validator = content_validator
        self._history = history
        self._abandoned: Set["asyncio.Task[RecommendationOutcome]"] = set()

    async def recommend(
        self, description: str, imdb_urls: Optional[Sequence[str]] = None
    ) -> RecommendationOutcome:
        """Produce exactly one recommendation outcome.

        The flow races against ``recommendation.request_timeout``. On timeout
        the caller stops waiting; work already in flight is left to finish.

        Args:
            description: Free-text user preferences.
            imdb_urls: Optional IMDb title URLs to enrich the catalog with.

        Returns:
            Recommendation outcome.

        Raises:
            RecommendationTimeoutError: If the timeout elapses first.
        """
        timeout = self._recommendation_config.request_timeout
        task = asyncio.ensure_future(self._recommend_safely(description, imdb_urls or []))

        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except asyncio.TimeoutError:
            self._abandoned.add(task)
            task.add_done_callback(self._abandoned.discard)
            self.logger.error(f"Recommendation timed out after {timeout}s")
            raise RecommendationTimeoutError("Request timeout")

    async def screen(
        self, description: str, imdb_urls: Optional[Sequence[str]] = None
    ) -> ScreeningResult:
        """Screen a description and its reference movies without recommending.

        Args:
            description: Free-text user preferences.
            imdb_urls: Optional IMDb title URLs.

        Returns:
            Screening result with the references that passed.

        Raises:
            GuardrailServiceError: If the classifier could not be run.
        """
        if not description or not description.strip():
            return ScreeningResult(blocked=self._missing_description())

        validation = await self._content_validator.validate_user_input(description)
        if not validation.is_valid:
            return ScreeningResult(
                blocked=ContentBlocked(
                    reasoning=f"Content blocked: {validation.reasoning}",
                    blocked_items=[description],
                    suggestions=validation.suggestions,
                )
            )

        urls = unique_imdb_urls(imdb_urls or [])
        skipped = len(imdb_urls or []) - len(urls)
        if skipped:
            self.logger.debug(f"Skipped {skipped} invalid or duplicate IMDb URL(s)")

        screened = await asyncio.gather(*(self._screen_reference(url) for url in urls))
        references = [reference for reference in screened if reference is not None]

        blocked_items = [
            info.title or info.url for info, verdict in references if not verdict.is_appropriate
        ]
        if blocked_items:
            self.logger.info(f"Blocked reference movies: {blocked_items}")
            return ScreeningResult(
                blocked=ContentBlocked(
                    reasoning=BLOCKED_REFERENCES_REASONING,
                    blocked_items=blocked_items,
                    suggestions=list(BLOCKED_REFERENCES_SUGGESTIONS),
                )
            )

        return ScreeningResult(movie_infos=[info for info, _ in references])

    def validate_prerequisites(self) -> List[str]:
        """Validate that all prerequisites are met.

        Returns:
            List of validation errors (empty if all valid).
        """
        errors = []

        if not self._llm_service.is_configured():
            errors.append("LLM API key not configured")

        if not self._recommendation_config.catalog:
            errors.append("Recommendation catalog is empty")

        return errors

    async def _recommend_safely(
        self, description: str, imdb_urls: Sequence[str]
    ) -> RecommendationOutcome:
        """Run the flow, converting unexpected failures into an internal-error outcome."""
        try:
            return await self._process_recommendation(description, imdb_urls)
        except Exception as e:
            self.logger.exception(f"Recommendation failed: {e}")
            return RecommendationFailed()

    async def _process_recommendation(
        self, description: str, imdb_urls: Sequence[str]
    ) -> RecommendationOutcome:
        """Screen the request, ask the model, and interpret its reply."""
        screening = await self.screen(description, imdb_urls)
        if screening.blocked is not None:
            return screening.blocked

        catalog = list(self._recommendation_config.catalog)
        catalog.extend(info.catalog_entry(info.url) for info in screening.movie_infos)

        # Single writer: history is read for the prompt and updated from the reply
        async with self._history.lock:
            user_prompt = build_recommendation_user_prompt(
                description, catalog, self._history.snapshot()
            )
            response_text = await self._llm_service.complete(
                RECOMMENDATION_SYSTEM_PROMPT,
                user_prompt,
                temperature=self._recommendation_config.temperature,
                max_tokens=self._recommendation_config.max_tokens,
            )
            return await self._interpret_response(response_text.strip(), description)

    async def _interpret_response(self, content: str, description: str) -> RecommendationOutcome:
        """Map the model reply onto an outcome and update history.

        Args:
            content: Trimmed model reply.
            description: Original user description.

        Returns:
            Recommendation outcome.

        Raises:
            OrchestratorError: If the reply is empty.
        """
        if content.startswith(SECURITY_BLOCKED_PREFIX):
            self.logger.warning("Model flagged the request as an exploit attempt")
            return SecurityBlocked(blocked_items=[description])

        if content.startswith(ALL_RECOMMENDED_PREFIX):
            remainder = content[len(ALL_RECOMMENDED_PREFIX) :]
            all_titles = [title.strip() for title in remainder.split(",") if title.strip()]
            self._history.reset()
            return CycleReset(all_titles=all_titles)

        if not content:
            raise OrchestratorError("Model returned an empty recommendation")

        if self._history.contains(content):
            self.logger.warning(f"Model repeated an earlier recommendation: {content!r}")

        if self._recommendation_config.validate_output:
            validation = await self._content_validator.validate_recommendation(content)
            if not validation.is_valid:
                return ContentBlocked(
                    reasoning=f"Content blocked: {validation.reasoning}",
                    blocked_items=[content],
                    suggestions=validation.suggestions,
                )

        self._history.record(content)
        self.logger.info(f"Recommended: {content!r}")
        return Recommendation(title=content)

    async def _screen_reference(self, url: str) -> Optional[ScreenedReference]:
        """Scrape and classify one reference movie.

        Failures are contained here so one bad reference cannot abort the others.

        Args:
            url: Canonical IMDb URL.

        Returns:
            Scraped info with its verdict, or None if the reference is dropped.
        """
        try:
            info = await self._metadata_extractor.fetch_movie_info(url)
            if not info.has_title:
                self.logger.info(f"Dropping reference without a title: {url}")
                return None

            verdict = await self._guardrail.classify(
                GuardrailRequest(
                    content=info.classification_text(),
                    content_type=ContentType.MOVIE_TITLE,
                )
            )
            return MovieInfoWithUrl.from_info(url, info), verdict

        except Exception as e:
            self.logger.error(f"Error processing reference {url}: {e}")
            return None

    def _missing_description(self) -> ContentBlocked:
        return ContentBlocked(
            reason=BlockReason.MISSING_DESCRIPTION,
            reasoning=MISSING_DESCRIPTION_REASONING,
            blocked_items=["description"],
            suggestions=list(MISSING_DESCRIPTION_SUGGESTIONS),
        )

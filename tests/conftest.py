"""Pytest configuration and fixtures."""

import json
from typing import Dict, List, Optional

import pytest

from movie_recommender.config import Config, ConfigManager
from movie_recommender.core.interfaces import ILLMService, IMetadataExtractor
from movie_recommender.core.models import MovieInfo
from movie_recommender.core.prompts import CONTENT_SAFETY_SYSTEM_PROMPT
from movie_recommender.core.services import (
    ContentGuardrailService,
    ContentValidator,
    RecommendationHistory,
    RecommendationOrchestrator,
)
from movie_recommender.infrastructure import Container
from movie_recommender.utils import LLMServiceError

APPROPRIATE_VERDICT = {
    "isAppropriate": True,
    "confidence": 0.95,
    "flaggedCategories": [],
    "reasoning": "Normal movie preferences",
    "suggestions": [],
    "riskLevel": "low",
}

BLOCKED_VERDICT = {
    "isAppropriate": False,
    "confidence": 0.9,
    "flaggedCategories": ["violence"],
    "reasoning": "Focuses on graphic violence",
    "suggestions": ["Try asking for an adventure movie instead."],
    "riskLevel": "high",
}


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line("markers", "integration: tests that wire the full application")


class ScriptedLLMService(ILLMService):
    """LLM backend that replays canned replies.

    Classifier calls are answered from ``verdicts`` (first substring of the
    user prompt that matches), recommendation calls pop from ``replies``.
    """

    def __init__(self) -> None:
        self.verdicts: Dict[str, dict] = {}
        self.default_verdict: dict = APPROPRIATE_VERDICT
        self.replies: List[str] = []
        self.calls: List[dict] = []
        self.configured = True
        self.fail_with: Optional[Exception] = None
        self.closed = False

    async def complete(self, system_prompt, user_prompt, temperature, max_tokens):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.fail_with is not None:
            raise self.fail_with

        if system_prompt == CONTENT_SAFETY_SYSTEM_PROMPT:
            for needle, verdict in self.verdicts.items():
                if needle in user_prompt:
                    return json.dumps(verdict)
            return json.dumps(self.default_verdict)

        if not self.replies:
            raise LLMServiceError("No scripted recommendation left")
        return self.replies.pop(0)

    def is_configured(self) -> bool:
        return self.configured

    async def close(self) -> None:
        self.closed = True

    @property
    def guardrail_calls(self) -> List[dict]:
        return [c for c in self.calls if c["system_prompt"] == CONTENT_SAFETY_SYSTEM_PROMPT]

    @property
    def recommendation_calls(self) -> List[dict]:
        return [c for c in self.calls if c["system_prompt"] != CONTENT_SAFETY_SYSTEM_PROMPT]


class FakeMetadataExtractor(IMetadataExtractor):
    """Extractor serving pre-built movie records by canonical URL."""

    def __init__(self) -> None:
        self.pages: Dict[str, MovieInfo] = {}
        self.fetched: List[str] = []
        self.failing: Dict[str, Exception] = {}
        self.closed = False

    async def fetch_movie_info(self, url: str) -> MovieInfo:
        self.fetched.append(url)
        if url in self.failing:
            raise self.failing[url]
        return self.pages.get(url, MovieInfo.empty())

    async def fetch_title(self, url: str) -> Optional[str]:
        return (await self.fetch_movie_info(url)).title

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    config_content = """
llm:
  provider: "openai"
  model: "gpt-4"
  api_key: "test-key"

guardrail:
  enabled: true

scraper:
  timeout: 5

recommendation:
  request_timeout: 5
  catalog:
    - "Inception (2010)"
    - "Toy Story (1995)"
    - "Up (2009)"

logging:
  level: "DEBUG"
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file)


@pytest.fixture
def config(config_manager) -> Config:
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container."""
    return Container(config_manager)


@pytest.fixture
def scripted_llm():
    """LLM backend with canned replies."""
    return ScriptedLLMService()


@pytest.fixture
def fake_extractor():
    """Metadata extractor without network access."""
    return FakeMetadataExtractor()


@pytest.fixture
def guardrail(config, scripted_llm):
    """Real guardrail backed by the scripted LLM."""
    return ContentGuardrailService(config, scripted_llm)


@pytest.fixture
def history():
    """Empty recommendation history."""
    return RecommendationHistory()


@pytest.fixture
def orchestrator(config, scripted_llm, fake_extractor, guardrail, history):
    """Orchestrator wired to scripted collaborators."""
    return RecommendationOrchestrator(
        config,
        llm_service=scripted_llm,
        metadata_extractor=fake_extractor,
        guardrail=guardrail,
        content_validator=ContentValidator(guardrail),
        history=history,
    )


@pytest.fixture
def blocked_verdict():
    return dict(BLOCKED_VERDICT)


@pytest.fixture
def imdb_title_html():
    """A trimmed-down IMDb title page."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>Paddington 2 (2017) - IMDb</title>
  <meta property="og:title" content="Paddington 2 (2017) - IMDb">
  <meta property="og:description" content="OG description">
  <meta name="description" content="Meta description">
  <script type="application/ld+json">
  {"@type": "Movie", "name": "Paddington 2", "genre": ["Adventure", "Comedy"],
   "datePublished": "2017-11-10", "duration": "PT1H43M",
   "director": [{"@type": "Person", "name": "Paul King"}],
   "actor": [{"@type": "Person", "name": "Ben Whishaw"}]}
  </script>
</head>
<body>
  <h1 data-testid="hero__pageTitle"><span>Paddington 2</span></h1>
  <ul>
    <li><a href="/title/tt4468740/releaseinfo?ref_=tt_ov_rdat">2017</a></li>
  </ul>
  <div data-testid="genres">
    <a href="/search/title?genres=adventure"><span>Adventure</span></a>
    <a href="/search/title?genres=comedy"><span>Comedy</span></a>
    <a href="/search/title?genres=family"><span>Family</span></a>
    <a href="/search/title?genres=comedy"><span>Comedy</span></a>
  </div>
  <p><span data-testid="plot-l">Paddington picks up a series of odd jobs.</span></p>
  <div><span data-testid="hero-rating-bar__aggregate-rating__score">7.8/10</span></div>
  <ul>
    <li data-testid="title-techspec_runtime"><span>Runtime</span><span>1h 43m</span></li>
  </ul>
  <a data-testid="title-pc-principal-credit" href="/name/nm1">Paul King</a>
  <a data-testid="title-cast-item__actor" href="/name/nm2">Ben Whishaw</a>
  <a data-testid="title-cast-item__actor" href="/name/nm3">Hugh Grant</a>
</body>
</html>
"""

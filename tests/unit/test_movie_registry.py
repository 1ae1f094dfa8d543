"""Test session registry and recommendation history."""

import asyncio

import pytest

from movie_recommender.core.services import RecommendationHistory, SessionMovieRegistry


@pytest.mark.unit
def test_registry_lists_baseline_then_session_titles(config):
    """Test that the registry unions the curated catalog with session titles."""
    registry = SessionMovieRegistry(config)

    session = registry.add(["Paddington 2", "Up (2009)", "  ", "Paddington 2"])

    assert session == ["Paddington 2", "Up (2009)"]
    assert registry.list() == [
        "Inception (2010)",
        "Toy Story (1995)",
        "Up (2009)",
        "Paddington 2",
    ]


@pytest.mark.unit
def test_registry_add_is_a_union(config):
    """Test that repeated adds never duplicate titles."""
    registry = SessionMovieRegistry(config)

    registry.add(["Coco"])
    registry.add([" Coco ", "Wall-E"])

    assert registry.session_titles() == ["Coco", "Wall-E"]


@pytest.mark.unit
def test_registry_starts_empty(config):
    """Test a fresh registry has no session titles."""
    registry = SessionMovieRegistry(config)

    assert registry.session_titles() == []
    assert registry.list() == config.recommendation.catalog


@pytest.mark.unit
def test_history_records_and_resets():
    """Test recording and clearing recommended titles."""
    history = RecommendationHistory()

    history.record("Inception (2010)")
    history.record("Up (2009)")

    assert history.snapshot() == ["Inception (2010)", "Up (2009)"]
    assert len(history) == 2

    history.reset()

    assert history.snapshot() == []
    assert len(history) == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "echo",
    [
        "Inception (2010)",
        "inception (2010)",
        '"Inception (2010)"',
        "Inception (2010).",
        "  Inception  (2010) ",
    ],
)
def test_history_membership_tolerates_echo_drift(echo):
    """Test that quoting, case, spacing and trailing punctuation are ignored."""
    history = RecommendationHistory()
    history.record("Inception (2010)")

    assert history.contains(echo)


@pytest.mark.unit
def test_history_keeps_first_echo():
    """Test that a drifted repeat does not add a second entry."""
    history = RecommendationHistory()

    history.record("Inception (2010)")
    history.record("inception (2010).")

    assert history.snapshot() == ["Inception (2010)"]


@pytest.mark.unit
def test_history_ignores_blank_titles():
    """Test that blank titles are not recorded."""
    history = RecommendationHistory()

    history.record("   ")

    assert history.snapshot() == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_history_lock_is_shared():
    """Test that the history exposes a single lock."""
    history = RecommendationHistory()

    assert history.lock is history.lock
    async with history.lock:
        assert history.lock.locked()
    assert isinstance(history.lock, asyncio.Lock)

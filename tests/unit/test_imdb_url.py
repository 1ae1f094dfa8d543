"""Test IMDb URL normalization."""

import pytest

from movie_recommender.utils import (
    extract_imdb_id,
    is_valid_imdb_url,
    normalize_imdb_url,
    unique_imdb_urls,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://www.imdb.com/title/tt0111161/", "https://www.imdb.com/title/tt0111161/"),
        ("https://www.imdb.com/title/tt0111161", "https://www.imdb.com/title/tt0111161/"),
        ("http://imdb.com/title/tt0111161/", "http://imdb.com/title/tt0111161/"),
        (
            "  https://www.imdb.com/title/tt0111161/?ref_=nv_sr_srsg_0  ",
            "https://www.imdb.com/title/tt0111161/",
        ),
        (
            "https://www.imdb.com/title/tt0111161/reviews?sort=helpful",
            "https://www.imdb.com/title/tt0111161/",
        ),
        ("HTTPS://WWW.IMDB.COM/title/tt0111161", "HTTPS://WWW.IMDB.COM/title/tt0111161/"),
    ],
)
def test_normalize_valid_urls(raw, expected):
    """Test that title URLs reduce to their canonical form."""
    assert normalize_imdb_url(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "",
        "not a url",
        "https://www.imdb.com/name/nm0000151/",
        "https://www.imdb.com/title/",
        "https://www.imdb.com/title/ttabc/",
        "https://m.imdb.com/title/tt0111161/",
        "https://www.example.com/title/tt0111161/",
        "ftp://www.imdb.com/title/tt0111161/",
        "see https://www.imdb.com/title/tt0111161/",
    ],
)
def test_normalize_rejects_non_title_urls(raw):
    """Test that anything other than a title page is rejected."""
    assert normalize_imdb_url(raw) is None
    assert is_valid_imdb_url(raw) is False


@pytest.mark.unit
def test_normalize_is_idempotent():
    """Test that a canonical URL normalizes to itself."""
    canonical = normalize_imdb_url("https://www.imdb.com/title/tt4468740?ref=x")

    assert normalize_imdb_url(canonical) == canonical


@pytest.mark.unit
def test_extract_imdb_id():
    """Test extracting the title identifier."""
    assert extract_imdb_id("https://www.imdb.com/title/tt4468740/?ref_=fn") == "tt4468740"
    assert extract_imdb_id("https://www.imdb.com/name/nm1/") is None


@pytest.mark.unit
def test_unique_imdb_urls_drops_invalid_and_duplicates():
    """Test that URLs are normalized, filtered and deduplicated in order."""
    urls = [
        "https://www.imdb.com/title/tt2/",
        "garbage",
        "https://www.imdb.com/title/tt1/?ref=a",
        "https://www.imdb.com/title/tt2",
        "https://www.imdb.com/title/tt1/",
    ]

    assert unique_imdb_urls(urls) == [
        "https://www.imdb.com/title/tt2/",
        "https://www.imdb.com/title/tt1/",
    ]

"""Test JSON object extraction from model output."""

import pytest

from movie_recommender.utils import extract_json_object, find_balanced_object


@pytest.mark.unit
def test_find_balanced_object_in_prose():
    """Test locating an object surrounded by prose."""
    text = 'Here you go: {"a": {"b": 1}} and that is all.'

    assert find_balanced_object(text) == '{"a": {"b": 1}}'


@pytest.mark.unit
def test_find_balanced_object_ignores_braces_in_strings():
    """Test that braces inside string literals do not affect nesting."""
    text = '{"reasoning": "uses } and { freely", "ok": true} trailing }'

    assert find_balanced_object(text) == '{"reasoning": "uses } and { freely", "ok": true}'


@pytest.mark.unit
def test_find_balanced_object_handles_escaped_quotes():
    """Test that escaped quotes do not end a string literal."""
    text = r'{"reasoning": "a \"quoted }\" word"}'

    assert find_balanced_object(text) == text


@pytest.mark.unit
def test_find_balanced_object_unclosed():
    """Test that an object that never closes is not returned."""
    assert find_balanced_object('{"a": 1') is None
    assert find_balanced_object("no braces here") is None


@pytest.mark.unit
def test_find_balanced_object_from_start_index():
    """Test scanning from an offset."""
    text = '{"first": 1} {"second": 2}'

    assert find_balanced_object(text, start=1) == '{"second": 2}'


@pytest.mark.unit
def test_extract_json_object_from_code_fence():
    """Test parsing JSON wrapped in a markdown code fence."""
    text = '```json\n{"isAppropriate": true, "confidence": 0.9}\n```'

    assert extract_json_object(text) == {"isAppropriate": True, "confidence": 0.9}


@pytest.mark.unit
def test_extract_json_object_skips_invalid_candidates():
    """Test that a balanced but invalid candidate falls through to the next one."""
    text = 'Template: {isAppropriate: boolean}\nAnswer: {"isAppropriate": false}'

    assert extract_json_object(text) == {"isAppropriate": False}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "plain text", "[1, 2, 3]", '{"broken": }'])
def test_extract_json_object_returns_none(text):
    """Test inputs that contain no JSON object."""
    assert extract_json_object(text) is None

"""Tests for configuration settings."""
import pytest

from wordbook.config import REVIEW_INTERVALS, Settings, parse_intervals, settings
from wordbook.exceptions import InvalidConfiguration


def test_settings_defaults():
    """Test default settings values."""
    assert settings.learning.review_intervals == (0, 1, 2, 4, 7, 15, 30, 60, 180)
    assert settings.learning.mistakes_collection == "mistakes"
    assert settings.learning.require_translation is False
    assert settings.monitoring.enabled is False


def test_parse_intervals():
    """Test parsing the interval table from the environment."""
    assert parse_intervals(None) == REVIEW_INTERVALS
    assert parse_intervals("1, 2,4,7") == (1, 2, 4, 7)
    assert parse_intervals("") == ()


def test_parse_intervals_rejects_garbage():
    """Test that non-numeric entries are a configuration error."""
    with pytest.raises(InvalidConfiguration):
        parse_intervals("1,two,3")


@pytest.mark.parametrize("raw", ["1,,2", "1,2,", ",1", " , "])
def test_parse_intervals_rejects_blank_entries(raw):
    """Test that blank entries are not silently dropped."""
    with pytest.raises(InvalidConfiguration):
        parse_intervals(raw)


def test_intervals_from_env(monkeypatch):
    """Test that the interval table can be overridden by environment variables."""
    monkeypatch.setenv("WORDBOOK_REVIEW_INTERVALS", "1,2,4,7,15,30,60,180")

    test_settings = Settings()
    test_settings.validate()

    assert test_settings.learning.review_intervals == (1, 2, 4, 7, 15, 30, 60, 180)


@pytest.mark.parametrize("raw", ["", "0,1,-1"])
def test_invalid_intervals_fail_validation(monkeypatch, raw):
    """Test that an unusable interval table is rejected at startup."""
    monkeypatch.setenv("WORDBOOK_REVIEW_INTERVALS", raw)

    with pytest.raises(InvalidConfiguration):
        Settings().validate()


def test_blank_mistakes_collection_fails_validation(monkeypatch):
    """Test that the mistakes collection needs a name."""
    test_settings = Settings()
    monkeypatch.setattr(test_settings.learning, "mistakes_collection", " ")

    with pytest.raises(InvalidConfiguration):
        test_settings.validate()

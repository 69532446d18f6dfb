"""Tests for the command line badge report."""
from datetime import datetime, timedelta, UTC

from sqlalchemy.orm import Session

from wordbook.__main__ import main
from wordbook.services.review_service import ReviewService


def test_main_prints_due_and_total(db: Session, capsys, mocker) -> None:
    """Test the badge output for an owner."""
    mocker.patch("wordbook.__main__.setup_logging")
    service = ReviewService(db)
    service.add_word(7, "hello", "你好")
    service.add_word(7, "world", "世界", now=datetime.now(UTC) + timedelta(days=2))

    assert main(["7"]) == 0

    assert "1 due / 2 total" in capsys.readouterr().out


def test_main_rejects_bad_owner(mocker) -> None:
    """Test that a non-numeric owner id is refused."""
    mocker.patch("wordbook.__main__.setup_logging")
    assert main(["abc"]) == 2


def test_main_starts_metrics_when_enabled(monkeypatch, mocker) -> None:
    """Test that the metrics server is started when configured."""
    from wordbook.config import settings

    mocker.patch("wordbook.__main__.setup_logging")
    start = mocker.patch("wordbook.__main__.start_monitoring")
    monkeypatch.setattr(settings.monitoring, "enabled", True)

    assert main([]) == 0
    start.assert_called_once_with(settings.monitoring.port)

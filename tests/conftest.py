"""Pytest configuration and shared fixtures.

This module provides fixtures for testing readpace, including a frozen
reference date, record factories and a configured projection engine.
"""

import json
import os
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

import pytest

from readpace.config import Config, reset_config
from readpace.reading.projection import ProjectionEngine
from readpace.records.schemas import Book, BookStatusEntry, ReadingSession, ReadingStatus


TODAY = date(2025, 3, 20)


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config():
    """Reset global config and readpace environment around each test."""
    reset_config()
    saved = {k: v for k, v in os.environ.items() if k.startswith("READPACE_")}
    for key in saved:
        del os.environ[key]

    yield

    reset_config()
    for key in [k for k in os.environ if k.startswith("READPACE_")]:
        del os.environ[key]
    os.environ.update(saved)


@pytest.fixture
def today() -> date:
    """Frozen reference date."""
    return TODAY


@pytest.fixture
def config() -> Config:
    """Default projection configuration."""
    return Config(
        window_days=30,
        min_reading_days=3,
        min_recent_sessions=3,
        log_level="WARNING",
    )


@pytest.fixture
def engine(config: Config, today: date) -> ProjectionEngine:
    """Projection engine with a frozen clock."""
    return ProjectionEngine(config=config, clock=lambda: today)


# ============================================================================
# Record Factories
# ============================================================================


@pytest.fixture
def make_book():
    """Factory for books."""

    def _make(
        total_pages: int = 300,
        target: Optional[date] = None,
        book_id: str = "book-1",
        title: str = "Dom Casmurro",
    ) -> Book:
        return Book(
            id=book_id,
            title=title,
            total_pages=total_pages,
            target_completion_date=target,
        )

    return _make


@pytest.fixture
def make_status():
    """Factory for status entries."""

    def _make(
        pages_read: int,
        status: ReadingStatus = ReadingStatus.READING,
        book_id: str = "book-1",
    ) -> BookStatusEntry:
        return BookStatusEntry(book_id=book_id, status=status, pages_read=pages_read)

    return _make


@pytest.fixture
def make_sessions(today: date):
    """Factory for one session on each of the given days-ago offsets."""

    def _make(
        days_ago: list[int],
        pages_each: int = 10,
        book_id: str = "book-1",
    ) -> list[ReadingSession]:
        sessions = []
        page = 1
        for offset in sorted(days_ago, reverse=True):
            sessions.append(
                ReadingSession(
                    book_id=book_id,
                    page_start=page,
                    page_end=page + pages_each,
                    period_start=today - timedelta(days=offset),
                )
            )
            page += pages_each
        return sessions

    return _make


# ============================================================================
# Snapshot Fixtures
# ============================================================================


@pytest.fixture
def snapshot_data(today: date) -> dict:
    """Raw snapshot with one book per projection situation."""
    return {
        "version": "1.0",
        "books": [
            {"id": "casmurro", "title": "Dom Casmurro", "total_pages": 300},
            {
                "id": "sertoes",
                "title": "Os Sertões",
                "total_pages": 600,
                "target_completion_date": (today + timedelta(days=10)).isoformat(),
            },
            {"id": "iracema", "title": "Iracema", "total_pages": 200},
        ],
        "statuses": [
            {"book_id": "casmurro", "status": "Lendo", "pages_read": 150},
            {"book_id": "sertoes", "status": "reading", "pages_read": 100},
            {"book_id": "iracema", "status": "Concluido", "pages_read": 200},
        ],
        "sessions": [
            {
                "book_id": "casmurro",
                "page_start": 1 + 30 * i,
                "page_end": 30 * (i + 1),
                "period_start": (today - timedelta(days=i)).isoformat(),
                "minutes_spent": 30,
            }
            for i in range(5)
        ]
        + [
            {"book_id": "sertoes", "page_start": 1, "page_end": 100, "day": 18, "month": "Março"},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict) -> Path:
    """Snapshot written to a temporary JSON file."""
    path = tmp_path / "library.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path

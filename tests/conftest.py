"""
Fixtures pytest partagées pour les tests WatchNext.

Ce module contient les fixtures communes utilisées dans les tests:
- InMemoryCatalog : implementation en mémoire du flux, avec compteur d'appels
- Horloge déterministe
- Videos types (film, épisodes d'une série)
- Engine SQLite en mémoire
"""

from collections import Counter
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from sqlmodel import Session

from watchnext.config import Settings
from watchnext.core.entities.feed import FeedEntry
from watchnext.core.entities.video import EpisodeInfo, Video, VideoKind
from watchnext.core.ports.catalog import IContinuationCatalog
from watchnext.infrastructure.persistence.database import build_engine, init_db
from watchnext.services.locks import KeyedLock

BASE_TIME = datetime(2024, 1, 1, 20, 0, tzinfo=timezone.utc)


class InMemoryCatalog(IContinuationCatalog):
    """Flux en mémoire. `calls` compte les appels par opération."""

    def __init__(self) -> None:
        self.entries: dict[int, FeedEntry] = {}
        self.calls: Counter = Counter()
        self._next_id = 1

    def list_all(self) -> list[FeedEntry]:
        self.calls["list_all"] += 1
        return [replace(entry) for entry in self.entries.values()]

    def find_by_identity(self, content_id: str) -> Optional[FeedEntry]:
        self.calls["find_by_identity"] += 1
        for entry in self.entries.values():
            if entry.content_id == content_id:
                return replace(entry)
        return None

    def upsert(self, entry: FeedEntry, existing_id: Optional[int] = None) -> int:
        self.calls["upsert"] += 1
        catalog_id = existing_id
        if catalog_id is None:
            catalog_id = self._next_id
            self._next_id += 1
        self.entries[catalog_id] = replace(entry, id=catalog_id)
        return catalog_id

    def remove(self, catalog_id: int) -> bool:
        self.calls["remove"] += 1
        return self.entries.pop(catalog_id, None) is not None

    def add(self, entry: FeedEntry) -> int:
        """Ajoute une entrée sans passer par le compteur d'appels."""
        catalog_id = self._next_id
        self._next_id += 1
        self.entries[catalog_id] = replace(entry, id=catalog_id)
        return catalog_id

    def series_entries(self, series_id: str) -> list[FeedEntry]:
        return [e for e in self.entries.values() if e.series_id == series_id]


class TickingClock:
    """Horloge qui avance d'une minute à chaque appel."""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(minutes=1)
        return self.current


def make_episode(
    video_id: str,
    season: int,
    episode: int,
    series_id: str = "dark",
    series_title: str = "Dark",
    duration_ms: int = 50 * 60 * 1000,
    watched: bool = False,
) -> Video:
    """Construit un épisode de série."""
    return Video(
        id=video_id,
        name=f"Épisode {season}x{episode}",
        kind=VideoKind.EPISODE,
        duration_ms=duration_ms,
        end_credits_offset_ms=duration_ms - 60_000,
        uri=f"app://play/{video_id}",
        episode=EpisodeInfo(
            series_id=series_id,
            series_title=series_title,
            season_number=season,
            episode_number=episode,
        ),
        watched=watched,
    )


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog()


@pytest.fixture
def locks() -> KeyedLock:
    return KeyedLock()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def movie() -> Video:
    """Film de 100 minutes, générique à 95 minutes."""
    return Video(
        id="movie-1",
        name="Inception",
        kind=VideoKind.MOVIE,
        duration_ms=100 * 60 * 1000,
        end_credits_offset_ms=95 * 60 * 1000,
        description="Un voleur d'idées...",
        uri="app://play/movie-1",
        video_uri="https://cdn.example/movie-1.mp4",
        thumbnail_uri="https://cdn.example/movie-1.jpg",
    )


@pytest.fixture
def episodes() -> list[Video]:
    """Trois épisodes de la série "dark" : S1E1, S1E2, S2E1."""
    return [
        make_episode("dark-s1e1", 1, 1),
        make_episode("dark-s1e2", 1, 2),
        make_episode("dark-s2e1", 2, 1),
    ]


@pytest.fixture
def engine():
    """Engine SQLite en mémoire avec les tables créées."""
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings de test avec base en mémoire et log temporaire."""
    return Settings(
        database_url="sqlite://",
        log_file=tmp_path / "test.log",
    )

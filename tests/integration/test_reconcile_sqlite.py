"""
Scenario complet sur SQLite: catalogue de titres, rapports successifs et
promotion des épisodes suivants, en passant par le container DI.
"""

import json

import pytest
from dependency_injector import providers

from watchnext.adapters.catalog_file import import_videos
from watchnext.container import Container
from watchnext.core.entities.feed import WatchNextType
from watchnext.services.reconciler import ActionType

MINUTE = 60 * 1000

CATALOG = [
    {"id": "film-1", "name": "Le Cercle Rouge", "kind": "movie", "duration": "PT2H20M"},
    {
        "id": "dark-s1e1", "name": "Secrets", "kind": "episode", "duration": "PT51M",
        "end_credits_offset_ms": 49 * MINUTE,
        "series_id": "dark", "series_title": "Dark", "season_number": 1, "episode_number": 1,
    },
    {
        "id": "dark-s1e2", "name": "Mensonges", "kind": "episode", "duration": "PT44M",
        "series_id": "dark", "series_title": "Dark", "season_number": 1, "episode_number": 2,
    },
    {
        "id": "dark-s1e3", "name": "Passe et present", "kind": "episode", "duration": "PT45M",
        "series_id": "dark", "series_title": "Dark", "season_number": 1, "episode_number": 3,
    },
]


@pytest.fixture
def container(tmp_path, test_settings):
    settings = test_settings.model_copy(
        update={"database_url": f"sqlite:///{tmp_path / 'watchnext.db'}"}
    )
    container = Container()
    container.config.override(providers.Object(settings))
    container.database.init()

    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"videos": CATALOG}))
    import_videos(path, container.video_repository())

    yield container
    container.engine().dispose()
    container.reset_singletons()


def test_binge_watching_keeps_one_entry_per_series(container):
    service = container.playback_report_service()

    service.handle("film-1", 30 * MINUTE, "paused")
    service.handle("dark-s1e1", 20 * MINUTE, "paused")
    result = service.handle("dark-s1e1", 49 * MINUTE, "paused")

    assert result.action is ActionType.REMOVED
    feed = container.reconciliation_service().list_feed()
    assert [e.content_id for e in feed] == ["dark-s1e2", "film-1"]
    assert feed[0].watch_next_type is WatchNextType.NEXT

    service.handle("dark-s1e2", 10 * MINUTE, "paused")
    service.handle("dark-s1e2", 44 * MINUTE, "ended")

    feed = container.reconciliation_service().list_feed()
    assert [e.content_id for e in feed] == ["dark-s1e3", "film-1"]

    videos = container.video_repository()
    assert videos.get_by_id("dark-s1e1").watched is True
    assert videos.get_by_id("dark-s1e2").watched is True
    assert videos.get_by_id("dark-s1e3").watched is False


def test_watched_episode_not_promoted_again(container):
    container.video_repository().mark_watched("dark-s1e2")
    service = container.playback_report_service()

    service.handle("dark-s1e1", 0, "ended")

    [entry] = container.reconciliation_service().list_feed()
    assert entry.content_id == "dark-s1e3"


def test_feed_survives_new_container(container, tmp_path):
    container.playback_report_service().handle("film-1", 30 * MINUTE, "paused")

    fresh = Container()
    fresh.config.override(providers.Object(container.config()))
    try:
        [entry] = fresh.reconciliation_service().list_feed()
    finally:
        fresh.engine().dispose()
    assert entry.content_id == "film-1"
    assert entry.last_playback_position_ms == 30 * MINUTE

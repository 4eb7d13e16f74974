"""
Tests du service de traitement des rapports de lecture.

Le catalogue de titres est simulé avec MagicMock ; le flux utilise le
catalogue en mémoire.
"""

from unittest.mock import MagicMock

import pytest

from watchnext.core.entities.video import Video
from watchnext.core.errors import InvalidInputError
from watchnext.core.ports.repositories import IVideoRepository
from watchnext.core.value_objects.playback import PlaybackBucket
from watchnext.services.playback_report import PlaybackReportService, UnknownVideoError
from watchnext.services.reconciler import ActionType, ReconciliationService

MINUTE = 60 * 1000


@pytest.fixture
def video_repo(movie, episodes):
    videos = {v.id: v for v in [movie, *episodes]}
    repo = MagicMock(spec=IVideoRepository)
    repo.get_by_id.side_effect = videos.get
    repo.list_by_series.return_value = episodes
    return repo


@pytest.fixture
def reconciler(catalog, locks, clock):
    return ReconciliationService(catalog, locks, clock=clock)


class TestHandle:
    def test_paused_report_upserts(self, reconciler, video_repo, catalog):
        service = PlaybackReportService(reconciler, video_repo)

        result = service.handle("movie-1", 30 * MINUTE, "paused")

        assert result.action is ActionType.UPSERTED
        assert len(catalog.entries) == 1
        video_repo.mark_watched.assert_not_called()

    def test_raw_android_state_parsed(self, reconciler, video_repo, catalog):
        service = PlaybackReportService(reconciler, video_repo)

        result = service.handle("movie-1", 0, "STATE_ENDED")

        assert result.bucket is PlaybackBucket.FINISHED

    def test_finished_marks_video_watched(self, reconciler, video_repo):
        service = PlaybackReportService(reconciler, video_repo)

        service.handle("movie-1", 99 * MINUTE, "paused")

        video_repo.mark_watched.assert_called_once_with("movie-1")

    def test_already_watched_not_marked_again(self, reconciler, video_repo, movie):
        movie.watched = True
        service = PlaybackReportService(reconciler, video_repo)

        service.handle("movie-1", 0, "ended")

        video_repo.mark_watched.assert_not_called()

    def test_video_without_duration_not_marked_watched(self, reconciler, catalog):
        """Une vidéo de durée nulle est rejetée au lieu d'être marquée vue."""
        repo = MagicMock(spec=IVideoRepository)
        repo.get_by_id.return_value = Video(id="legacy", name="Ancien import")
        service = PlaybackReportService(reconciler, repo)

        with pytest.raises(InvalidInputError):
            service.handle("legacy", 0, "paused")
        repo.mark_watched.assert_not_called()
        assert catalog.entries == {}

    def test_unknown_video(self, reconciler, video_repo):
        service = PlaybackReportService(reconciler, video_repo)

        with pytest.raises(UnknownVideoError) as exc_info:
            service.handle("absent", 0, "paused")
        assert exc_info.value.video_id == "absent"

    def test_repository_used_as_series_lookup(self, reconciler, video_repo, episodes):
        video_repo.next_unwatched_episode = MagicMock(return_value=episodes[1])
        service = PlaybackReportService(reconciler, video_repo)

        result = service.handle("dark-s1e1", 0, "ended")

        assert result.promoted_id is not None

    def test_promotion_disabled(self, reconciler, video_repo, catalog):
        video_repo.next_unwatched_episode = MagicMock()
        service = PlaybackReportService(reconciler, video_repo, promote_next_episode=False)

        result = service.handle("dark-s1e1", 0, "ended")

        assert result.promoted_id is None
        video_repo.next_unwatched_episode.assert_not_called()
        assert catalog.entries == {}


class TestRemoveAndFilter:
    def test_remove_by_ids(self, reconciler, video_repo, catalog):
        service = PlaybackReportService(reconciler, video_repo)
        service.handle("movie-1", 30 * MINUTE, "paused")

        [result] = service.remove(["movie-1"])

        assert result.action is ActionType.REMOVED
        assert catalog.entries == {}

    def test_remove_unknown_id(self, reconciler, video_repo):
        service = PlaybackReportService(reconciler, video_repo)

        with pytest.raises(UnknownVideoError):
            service.remove(["absent"])

    def test_series_episodes_in_feed(self, reconciler, video_repo, episodes):
        service = PlaybackReportService(reconciler, video_repo)
        service.handle("dark-s1e2", 10 * MINUTE, "paused")

        assert service.series_episodes_in_feed("dark") == [episodes[1]]

"""Tests du chargement du catalogue de titres JSON."""

import json
from unittest.mock import MagicMock

import pytest

from watchnext.adapters.catalog_file import (
    import_videos,
    load_videos,
    parse_iso_duration,
    video_from_dict,
)
from watchnext.core.entities.video import VideoKind
from watchnext.core.errors import InvalidInputError
from watchnext.core.ports.repositories import IVideoRepository

EPISODE_RECORD = {
    "id": "dark-s1e2",
    "name": "Mensonges",
    "kind": "episode",
    "duration": "PT51M",
    "end_credits_offset_ms": 2_940_000,
    "series_id": "dark",
    "series_title": "Dark",
    "season_number": 1,
    "episode_number": 2,
    "uri": "app://play/dark-s1e2",
}


class TestParseIsoDuration:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("PT42M", 2_520_000),
            ("PT1H30M", 5_400_000),
            ("PT10S", 10_000),
            ("pt1h0m1.5s", 3_601_500),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_iso_duration(value) == expected

    @pytest.mark.parametrize("value", ["PT", "42 minutes", "P1D"])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError):
            parse_iso_duration(value)


class TestVideoFromDict:
    def test_episode(self):
        video = video_from_dict(EPISODE_RECORD)

        assert video.kind is VideoKind.EPISODE
        assert video.duration_ms == 3_060_000
        assert video.end_credits_offset_ms == 2_940_000
        assert video.series_id == "dark"
        assert video.episode.order_key == (1, 2)

    def test_movie_defaults(self):
        video = video_from_dict({"id": "m1", "name": "Film", "duration_ms": 6_000_000})

        assert video.kind is VideoKind.MOVIE
        assert video.episode is None
        assert video.end_credits_offset_ms is None
        assert video.watched is False

    def test_missing_id(self):
        with pytest.raises(InvalidInputError):
            video_from_dict({"name": "Sans id"})

    def test_unknown_kind(self):
        with pytest.raises(InvalidInputError):
            video_from_dict({"id": "x", "kind": "podcast"})

    def test_episode_without_series(self):
        with pytest.raises(InvalidInputError):
            video_from_dict({"id": "x", "kind": "episode", "duration_ms": 1000})

    def test_negative_duration(self):
        with pytest.raises(InvalidInputError):
            video_from_dict({"id": "x", "duration_ms": -1})

    def test_non_numeric_duration(self):
        with pytest.raises(InvalidInputError):
            video_from_dict({"id": "x", "duration_ms": "long"})

    def test_missing_duration(self):
        """Sans durée, la vidéo serait classée terminée dès la position 0."""
        with pytest.raises(InvalidInputError, match="sans durée"):
            video_from_dict({"id": "x", "kind": "movie"})

    @pytest.mark.parametrize("duration", [{"duration_ms": 0}, {"duration": "PT0S"}])
    def test_zero_duration(self, duration):
        with pytest.raises(InvalidInputError, match="nulle ou négative"):
            video_from_dict({"id": "x", **duration})


class TestLoadVideos:
    def test_list_format(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([EPISODE_RECORD, {"id": "m1", "duration_ms": 1}]))

        assert [v.id for v in load_videos(path)] == ["dark-s1e2", "m1"]

    def test_wrapped_format(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"videos": [EPISODE_RECORD]}))

        assert [v.id for v in load_videos(path)] == ["dark-s1e2"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{pas du json")

        with pytest.raises(InvalidInputError):
            load_videos(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInputError):
            load_videos(tmp_path / "absent.json")

    def test_non_object_record(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(["dark-s1e2"]))

        with pytest.raises(InvalidInputError):
            load_videos(path)

    def test_import_saves_each_video(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([EPISODE_RECORD, {"id": "m1", "duration_ms": 1}]))
        repo = MagicMock(spec=IVideoRepository)

        assert import_videos(path, repo) == 2
        assert repo.save.call_count == 2

    def test_import_rejects_video_without_duration(self, tmp_path):
        """Un enregistrement sans durée annule tout l'import."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([EPISODE_RECORD, {"id": "m1", "name": "Sans durée"}]))
        repo = MagicMock(spec=IVideoRepository)

        with pytest.raises(InvalidInputError):
            import_videos(path, repo)
        repo.save.assert_not_called()

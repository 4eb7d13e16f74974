"""
Chargement du catalogue de titres depuis un fichier JSON.

Format attendu : une liste d'objets, ou un objet {"videos": [...]}.

    {
        "id": "s1e2",
        "name": "Le retour",
        "kind": "episode",
        "duration": "PT42M",            # ou "duration_ms": 2520000
        "end_credits_offset_ms": 2400000,
        "series_id": "serie-1",
        "series_title": "Ma série",
        "season_number": 1,
        "episode_number": 2,
        "uri": "app://play/s1e2",
        "video_uri": "https://cdn/preview.mp4",
        "thumbnail_uri": "https://cdn/poster.jpg",
        "description": "..."
    }
"""

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger

from watchnext.core.entities.video import EpisodeInfo, Video, VideoKind
from watchnext.core.errors import InvalidInputError
from watchnext.core.ports.repositories import IVideoRepository

# Durées ISO-8601 limitées aux heures/minutes/secondes (ex: PT1H30M, PT42M10S)
_ISO_DURATION = re.compile(
    r"^PT(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?$"
)


def parse_iso_duration(value: str) -> int:
    """Convertit une durée ISO-8601 (PT..H..M..S) en millisecondes."""
    match = _ISO_DURATION.match(value.strip().upper())
    if not match or value.strip().upper() == "PT":
        raise InvalidInputError(f"Durée ISO-8601 invalide : {value!r}")
    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes") or 0)
    seconds = float(match.group("seconds") or 0)
    return int(round((hours * 3600 + minutes * 60 + seconds) * 1000))


def _duration_ms(record: dict[str, Any]) -> int:
    if "duration_ms" in record:
        return int(record["duration_ms"])
    return parse_iso_duration(str(record["duration"]))


def video_from_dict(record: dict[str, Any]) -> Video:
    """
    Construit une vidéo depuis un enregistrement JSON.

    Raises:
        InvalidInputError: Enregistrement incomplet ou incohérent.
    """
    video_id = str(record.get("id") or "").strip()
    if not video_id:
        raise InvalidInputError(f"Vidéo sans identifiant : {record!r}")

    try:
        kind = VideoKind(str(record.get("kind", "movie")).lower())
    except ValueError as e:
        raise InvalidInputError(f"Type de vidéo inconnu pour {video_id}: {record.get('kind')!r}") from e

    episode = None
    if kind is VideoKind.EPISODE:
        series_id = str(record.get("series_id") or "").strip()
        if not series_id:
            raise InvalidInputError(f"Épisode {video_id} sans series_id")
        episode = EpisodeInfo(
            series_id=series_id,
            series_title=str(record.get("series_title", "")),
            season_number=int(record.get("season_number", 1)),
            episode_number=int(record.get("episode_number", 1)),
        )

    if "duration_ms" not in record and "duration" not in record:
        raise InvalidInputError(f"Vidéo {video_id} sans durée")

    try:
        duration_ms = _duration_ms(record)
        end_credits = record.get("end_credits_offset_ms")
        end_credits_ms = int(end_credits) if end_credits is not None else None
    except InvalidInputError:
        raise
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Durée invalide pour {video_id}: {e}") from e
    if duration_ms <= 0:
        raise InvalidInputError(f"Durée nulle ou négative pour {video_id}")

    return Video(
        id=video_id,
        name=str(record.get("name", "")),
        kind=kind,
        duration_ms=duration_ms,
        end_credits_offset_ms=end_credits_ms,
        description=str(record.get("description", "")),
        uri=str(record.get("uri", "")),
        video_uri=str(record.get("video_uri", "")),
        thumbnail_uri=str(record.get("thumbnail_uri", "")),
        episode=episode,
        watched=bool(record.get("watched", False)),
    )


def load_videos(path: Path) -> list[Video]:
    """
    Lit un fichier de catalogue JSON.

    Raises:
        InvalidInputError: Fichier illisible ou enregistrement invalide.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidInputError(f"Catalogue illisible {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("videos", [])
    if not isinstance(data, list):
        raise InvalidInputError(f"Catalogue {path}: une liste de vidéos est attendue")

    videos = []
    for record in data:
        if not isinstance(record, dict):
            raise InvalidInputError(f"Catalogue {path}: enregistrement invalide {record!r}")
        videos.append(video_from_dict(record))
    return videos


def import_videos(path: Path, video_repo: IVideoRepository) -> int:
    """Charge un catalogue JSON dans le repository. Retourne le nombre de vidéos."""
    videos = load_videos(path)
    for video in videos:
        video_repo.save(video)
    logger.info(f"{len(videos)} vidéo(s) importée(s) depuis {path}")
    return len(videos)

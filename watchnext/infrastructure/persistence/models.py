"""
Modèles SQLModel pour la base de données WatchNext.

Ces modèles representent les tables de la base de données SQLite.
Ils sont distincts des entités de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- feed_entries: Entrées du flux de continuation
- vidéos: Catalogue de titres (films, épisodes, extraits)
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field, Index, SQLModel


def utcnow() -> datetime:
    """Date courante en UTC, avec fuseau."""
    return datetime.now(timezone.utc)


class FeedEntryModel(SQLModel, table=True):
    """
    Modèle représentant une entrée du flux de continuation.

    L'id est attribué par la base à l'insertion et n'est jamais modifié.
    """

    __tablename__ = "feed_entries"
    __table_args__ = (Index("ix_feed_entries_series_engaged", "series_id", "last_engagement_at"),)

    id: int | None = Field(default=None, primary_key=True)
    content_id: str = Field(index=True)
    series_id: str | None = Field(default=None, index=True)
    entry_type: str = Field(default="movie")  # "movie" ou "tv_episode"
    watch_next_type: str = Field(default="continue")  # "continue" ou "next"
    last_playback_position_ms: int = 0
    last_engagement_at: datetime = Field(sa_type=DateTime(timezone=True))
    title: str = ""
    duration_ms: int = 0
    description: str = ""
    poster_uri: str = ""
    preview_uri: str = ""
    intent_uri: str = ""
    season_number: int | None = None
    episode_number: int | None = None
    season_title: str | None = None
    episode_title: str | None = None


class VideoModel(SQLModel, table=True):
    """
    Modèle représentant une vidéo du catalogue de titres.

    Les champs series_* ne sont renseignés que pour les épisodes.
    """

    __tablename__ = "videos"
    __table_args__ = (Index("ix_videos_series_order", "series_id", "season_number", "episode_number"),)

    id: str = Field(primary_key=True)
    name: str = ""
    kind: str = Field(default="movie", index=True)  # "movie", "episode", "clip"
    duration_ms: int = 0
    end_credits_offset_ms: int | None = None
    description: str = ""
    uri: str = ""
    video_uri: str = ""
    thumbnail_uri: str = ""
    series_id: str | None = Field(default=None, index=True)
    series_title: str | None = None
    season_number: int | None = None
    episode_number: int | None = None
    watched: bool = Field(default=False, index=True)  # Vidéo vue en entier
    updated_at: datetime | None = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

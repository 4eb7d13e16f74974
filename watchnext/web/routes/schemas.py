"""
Schemas pydantic de l'API.

Convertissent les entités du domaine (dataclass) en représentations JSON.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...core.entities.feed import FeedEntry
from ...services.reconciler import ReconcileAction


class PlaybackReportIn(BaseModel):
    """Rapport envoyé par le lecteur (pause, arrêt, fin)."""

    video_id: str = Field(min_length=1)
    position_ms: int = Field(ge=0)
    state: str = "unknown"


class ActionOut(BaseModel):
    action: str
    content_id: str
    bucket: Optional[str] = None
    catalog_id: Optional[int] = None
    pruned: int = 0
    promoted_id: Optional[int] = None

    @classmethod
    def from_action(cls, result: ReconcileAction) -> "ActionOut":
        return cls(
            action=result.action.value,
            content_id=result.content_id,
            bucket=result.bucket.value if result.bucket else None,
            catalog_id=result.catalog_id,
            pruned=result.pruned,
            promoted_id=result.promoted_id,
        )


class FeedEntryOut(BaseModel):
    id: int
    content_id: str
    series_id: Optional[str] = None
    entry_type: str
    watch_next_type: str
    last_playback_position_ms: int
    last_engagement_at: datetime
    title: str
    duration_ms: int
    description: str = ""
    poster_uri: str = ""
    preview_uri: str = ""
    intent_uri: str = ""
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    season_title: Optional[str] = None
    episode_title: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: FeedEntry) -> "FeedEntryOut":
        return cls(
            id=entry.id,
            content_id=entry.content_id,
            series_id=entry.series_id,
            entry_type=entry.entry_type.value,
            watch_next_type=entry.watch_next_type.value,
            last_playback_position_ms=entry.last_playback_position_ms,
            last_engagement_at=entry.last_engagement_at,
            title=entry.title,
            duration_ms=entry.duration_ms,
            description=entry.description,
            poster_uri=entry.poster_uri,
            preview_uri=entry.preview_uri,
            intent_uri=entry.intent_uri,
            season_number=entry.season_number,
            episode_number=entry.episode_number,
            season_title=entry.season_title,
            episode_title=entry.episode_title,
        )


class PruneOut(BaseModel):
    series_id: str
    removed: int

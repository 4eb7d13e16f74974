"""
Implementation SQLModel du catalogue de titres.

Implémente IVideoRepository et ISeriesLookup : le même stockage fournit les
métadonnées des vidéos et l'ordre des épisodes d'une série.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, or_
from sqlmodel import Session, col, select

from watchnext.core.entities.video import EpisodeInfo, Video, VideoKind
from watchnext.core.ports.repositories import ISeriesLookup, IVideoRepository
from watchnext.infrastructure.persistence.models import VideoModel


class SQLModelVideoRepository(IVideoRepository, ISeriesLookup):
    """
    Repository SQLModel pour les vidéos.

    Implémente IVideoRepository avec conversion bidirectionnelle
    entre l'entité Video (domaine) et VideoModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: VideoModel) -> Video:
        episode = None
        if model.series_id:
            episode = EpisodeInfo(
                series_id=model.series_id,
                series_title=model.series_title or "",
                season_number=model.season_number or 1,
                episode_number=model.episode_number or 1,
            )
        return Video(
            id=model.id,
            name=model.name,
            kind=VideoKind(model.kind),
            duration_ms=model.duration_ms,
            end_credits_offset_ms=model.end_credits_offset_ms,
            description=model.description,
            uri=model.uri,
            video_uri=model.video_uri,
            thumbnail_uri=model.thumbnail_uri,
            episode=episode,
            watched=model.watched,
        )

    @staticmethod
    def _apply(model: VideoModel, entity: Video) -> None:
        model.name = entity.name
        model.kind = entity.kind.value
        model.duration_ms = entity.duration_ms
        model.end_credits_offset_ms = entity.end_credits_offset_ms
        model.description = entity.description
        model.uri = entity.uri
        model.video_uri = entity.video_uri
        model.thumbnail_uri = entity.thumbnail_uri
        model.watched = entity.watched
        if entity.episode:
            model.series_id = entity.episode.series_id
            model.series_title = entity.episode.series_title
            model.season_number = entity.episode.season_number
            model.episode_number = entity.episode.episode_number
        else:
            model.series_id = None
            model.series_title = None
            model.season_number = None
            model.episode_number = None
        model.updated_at = datetime.now(timezone.utc)

    def get_by_id(self, video_id: str) -> Optional[Video]:
        """Récupère une vidéo par son identifiant de contenu."""
        model = self._session.get(VideoModel, video_id)
        if model:
            return self._to_entity(model)
        return None

    def list_by_series(self, series_id: str) -> list[Video]:
        """Liste les épisodes d'une série, triés par saison puis épisode."""
        statement = (
            select(VideoModel)
            .where(VideoModel.series_id == series_id)
            .order_by(col(VideoModel.season_number), col(VideoModel.episode_number))
        )
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def save(self, video: Video) -> Video:
        """Sauvegarde une vidéo (insertion ou mise à jour)."""
        model = self._session.get(VideoModel, video.id)
        if model is None:
            model = VideoModel(id=video.id)
        self._apply(model, video)
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def mark_watched(self, video_id: str, watched: bool = True) -> bool:
        """Met à jour le marqueur "vu en entier"."""
        model = self._session.get(VideoModel, video_id)
        if model is None:
            return False
        model.watched = watched
        model.updated_at = datetime.now(timezone.utc)
        self._session.add(model)
        self._session.commit()
        return True

    def next_unwatched_episode(self, series_id: str, after: Video) -> Optional[Video]:
        """
        Premier épisode non vu suivant `after` dans la série.

        Si `after` n'est pas un épisode, la recherche part du début de la série.
        """
        statement = select(VideoModel).where(
            VideoModel.series_id == series_id,
            VideoModel.watched == False,  # noqa: E712
            VideoModel.id != after.id,
        )
        if after.episode:
            season, episode = after.episode.order_key
            statement = statement.where(
                or_(
                    col(VideoModel.season_number) > season,
                    and_(
                        col(VideoModel.season_number) == season,
                        col(VideoModel.episode_number) > episode,
                    ),
                )
            )
        statement = statement.order_by(
            col(VideoModel.season_number), col(VideoModel.episode_number)
        )
        model = self._session.exec(statement).first()
        return self._to_entity(model) if model else None

"""
Implementation SQLModel du catalogue du flux de continuation.

Implémente l'interface IContinuationCatalog pour la persistance des entrées
du flux dans la base de données SQLite via SQLModel.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from watchnext.core.entities.feed import EntryType, FeedEntry, WatchNextType
from watchnext.core.errors import CatalogInconsistentError, CatalogUnavailableError
from watchnext.core.ports.catalog import IContinuationCatalog
from watchnext.infrastructure.persistence.models import FeedEntryModel


def _as_utc(value: datetime) -> datetime:
    """Ramène une date en UTC avec fuseau (une date naive est supposée UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _from_utc_naive(value: datetime) -> datetime:
    # SQLite relit les dates sans fuseau
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLModelContinuationCatalog(IContinuationCatalog):
    """
    Catalogue du flux adosse a SQLModel.

    Chaque opération est une transaction : elle est validée entièrement ou
    annulée, et toute erreur SQLAlchemy devient CatalogUnavailableError.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le catalogue avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les opérations DB
        """
        self._session = session

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Catalogue indisponible ({operation}): {e}")
            raise CatalogUnavailableError(f"Échec de l'opération {operation}: {e}") from e

    def _to_entity(self, model: FeedEntryModel) -> FeedEntry:
        """Convertit un modèle DB en entité domaine."""
        return FeedEntry(
            id=model.id,
            content_id=model.content_id,
            series_id=model.series_id,
            entry_type=EntryType(model.entry_type),
            watch_next_type=WatchNextType(model.watch_next_type),
            last_playback_position_ms=model.last_playback_position_ms,
            last_engagement_at=_from_utc_naive(model.last_engagement_at),
            title=model.title,
            duration_ms=model.duration_ms,
            description=model.description,
            poster_uri=model.poster_uri,
            preview_uri=model.preview_uri,
            intent_uri=model.intent_uri,
            season_number=model.season_number,
            episode_number=model.episode_number,
            season_title=model.season_title,
            episode_title=model.episode_title,
        )

    @staticmethod
    def _apply(model: FeedEntryModel, entity: FeedEntry) -> None:
        """Recopie les champs de l'entité dans le modèle (sauf l'id)."""
        model.content_id = entity.content_id
        model.series_id = entity.series_id
        model.entry_type = entity.entry_type.value
        model.watch_next_type = entity.watch_next_type.value
        model.last_playback_position_ms = entity.last_playback_position_ms
        model.last_engagement_at = _as_utc(entity.last_engagement_at)
        model.title = entity.title
        model.duration_ms = entity.duration_ms
        model.description = entity.description
        model.poster_uri = entity.poster_uri
        model.preview_uri = entity.preview_uri
        model.intent_uri = entity.intent_uri
        model.season_number = entity.season_number
        model.episode_number = entity.episode_number
        model.season_title = entity.season_title
        model.episode_title = entity.episode_title

    def list_all(self) -> list[FeedEntry]:
        """Instantané des entrées, relu depuis la base à chaque appel."""
        with self._transaction("list_all"):
            statement = select(FeedEntryModel).execution_options(populate_existing=True)
            models = self._session.exec(statement).all()
            return [self._to_entity(model) for model in models]

    def find_by_identity(self, content_id: str) -> Optional[FeedEntry]:
        """Récupère l'entrée d'un contenu, ou None."""
        with self._transaction("find_by_identity"):
            statement = (
                select(FeedEntryModel)
                .where(FeedEntryModel.content_id == content_id)
                .order_by(FeedEntryModel.id)
                .execution_options(populate_existing=True)
            )
            model = self._session.exec(statement).first()
            return self._to_entity(model) if model else None

    def upsert(self, entry: FeedEntry, existing_id: Optional[int] = None) -> int:
        """
        Insère ou met à jour une entrée.

        Raises :
            CatalogInconsistentError : existing_id absent de la base
        """
        with self._transaction("upsert"):
            if existing_id is not None:
                model = self._session.get(FeedEntryModel, existing_id, populate_existing=True)
                if model is None:
                    raise CatalogInconsistentError(existing_id)
                self._apply(model, entry)
                self._session.add(model)
                self._session.commit()
                return existing_id

            model = FeedEntryModel(
                content_id=entry.content_id,
                last_engagement_at=_as_utc(entry.last_engagement_at),
            )
            self._apply(model, entry)
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
            return model.id

    def remove(self, catalog_id: int) -> bool:
        """Supprime une entrée. Retourne False si elle n'existait pas."""
        with self._transaction("remove"):
            model = self._session.get(FeedEntryModel, catalog_id, populate_existing=True)
            if model is None:
                return False
            self._session.delete(model)
            self._session.commit()
            return True

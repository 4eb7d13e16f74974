"""
Moteur de réconciliation du flux de continuation.

Pour chaque rapport de lecture, décide et applique la mutation du flux :
- lecture non commencée : aucun appel au catalogue ;
- lecture en cours : insertion ou mise à jour en place de l'entrée du contenu,
  puis élagage de la série pour un épisode ;
- lecture terminée : suppression de l'entrée, puis promotion de l'épisode
  suivant pour une série.

Les étapes lecture-puis-écriture sont sérialisées par contenu, et par série
pour les épisodes. Aucune donnée du catalogue n'est mise en cache entre deux
appels : l'hôte peut modifier le flux hors de ce moteur.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from loguru import logger

from watchnext.core.entities.feed import EntryType, FeedEntry, WatchNextType
from watchnext.core.entities.video import Video, VideoKind
from watchnext.core.errors import InvalidInputError, UnsupportedContentKindError
from watchnext.core.ports.catalog import IContinuationCatalog
from watchnext.core.ports.repositories import ISeriesLookup
from watchnext.core.value_objects.playback import PlaybackBucket, PlaybackReport
from watchnext.services.classifier import DEFAULT_THRESHOLDS, PlaybackThresholds, classify_report
from watchnext.services.locks import KeyedLock, content_key, series_key
from watchnext.services.pruner import SeriesEntryPruner

SUPPORTED_KINDS = frozenset({VideoKind.MOVIE, VideoKind.EPISODE})


class ActionType(Enum):
    """Mutation appliquée au flux."""

    NO_OP = "no_op"
    UPSERTED = "upserted"
    REMOVED = "removed"
    REMOVAL_SKIPPED = "removal_skipped"


@dataclass(frozen=True)
class ReconcileAction:
    """
    Résultat d'une réconciliation.

    Attributs:
        action: Mutation appliquée
        content_id: Contenu concerne
        bucket: Phase de lecture déterminée (None pour une suppression explicite)
        catalog_id: Identifiant de l'entrée écrite ou supprimée
        pruned: Nombre d'entrées supprimées par l'élagage de la série
        promoted_id: Identifiant catalogue de l'épisode suivant promu
    """

    action: ActionType
    content_id: str
    bucket: Optional[PlaybackBucket] = None
    catalog_id: Optional[int] = None
    pruned: int = 0
    promoted_id: Optional[int] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_entry(
    video: Video,
    position_ms: int,
    engaged_at: datetime,
    watch_next_type: WatchNextType = WatchNextType.CONTINUE,
) -> FeedEntry:
    """
    Construit l'entrée du flux d'une vidéo.

    Pour un épisode, le titre affiché est celui de la série et le nom de la
    vidéo devient le titre de l'épisode.
    """
    entry = FeedEntry(
        content_id=video.id,
        last_engagement_at=engaged_at,
        series_id=video.series_id,
        entry_type=EntryType.MOVIE,
        watch_next_type=watch_next_type,
        last_playback_position_ms=position_ms,
        title=video.name,
        duration_ms=video.duration_ms,
        description=video.description,
        poster_uri=video.thumbnail_uri,
        preview_uri=video.video_uri,
        intent_uri=video.uri,
    )
    if video.is_episode and video.episode:
        episode = video.episode
        entry.entry_type = EntryType.TV_EPISODE
        entry.title = episode.series_title or video.name
        entry.season_number = episode.season_number
        entry.episode_number = episode.episode_number
        entry.season_title = f"{episode.series_title} - Saison {episode.season_number}"
        entry.episode_title = video.name
    return entry


class ReconciliationService:
    """
    Service de réconciliation entre l'état de lecture et le flux.

    Utilisation:
        service = ReconciliationService(catalog, KeyedLock())
        result = service.reconcile(video, PlaybackReport(video.id, 300_000, PlayerState.PAUSED))
        if result.action is ActionType.UPSERTED:
            print(f"Entrée {result.catalog_id} à jour")
    """

    def __init__(
        self,
        catalog: IContinuationCatalog,
        locks: KeyedLock,
        pruner: Optional[SeriesEntryPruner] = None,
        thresholds: PlaybackThresholds = DEFAULT_THRESHOLDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialise le moteur.

        Args:
            catalog: Adaptateur du flux de continuation
            locks: Verrous par clé partagés par tous les appelants du processus
            pruner: Élagueur de séries (créé sur le même catalogue si absent)
            thresholds: Seuils de démarrage d'une vidéo
            clock: Horloge UTC utilisée pour la date d'engagement
        """
        self._catalog = catalog
        self._locks = locks
        self._pruner = pruner or SeriesEntryPruner(catalog, locks)
        self._thresholds = thresholds
        self._clock = clock

    # ------------------------------------------------------------------
    # Réconciliation
    # ------------------------------------------------------------------

    def reconcile(
        self,
        video: Video,
        report: PlaybackReport,
        series_lookup: Optional[ISeriesLookup] = None,
    ) -> ReconcileAction:
        """
        Applique au flux la mutation correspondant a un rapport de lecture.

        Args:
            video: Vidéo lue
            report: Rapport du lecteur
            series_lookup: Recherche de l'épisode suivant. Sans elle, aucun
                épisode n'est promu à la fin d'un épisode.

        Returns:
            L'action appliquée.

        Raises:
            InvalidInputError: Rapport incohérent avec la vidéo.
            UnsupportedContentKindError: Vidéo ni film ni épisode.
            CatalogUnavailableError: Échec d'un appel au catalogue.
        """
        self._validate(video, report)
        bucket = classify_report(video, report, self._thresholds)
        logger.debug(
            f"Rapport {video.id}: position={report.position_ms} état={report.state.value} "
            f"-> {bucket.value}"
        )

        if bucket is PlaybackBucket.NOT_STARTED:
            logger.debug(
                f"Vidéo {video.id} pas encore commencée, ignorée "
                f"(position={report.position_ms}, durée={video.duration_ms})"
            )
            return ReconcileAction(ActionType.NO_OP, video.id, bucket)

        with self._locks.hold(*self._lock_keys(video)):
            if bucket is PlaybackBucket.FINISHED:
                return self._finish(video, series_lookup)
            return self._upsert(video, report.position_ms)

    def _validate(self, video: Video, report: PlaybackReport) -> None:
        if not video.id or not video.id.strip():
            raise InvalidInputError("Identifiant de vidéo vide")
        if report.video_id != video.id:
            raise InvalidInputError(
                f"Le rapport concerne {report.video_id!r}, pas {video.id!r}"
            )
        if video.kind not in SUPPORTED_KINDS:
            raise UnsupportedContentKindError(video.kind)
        if video.is_episode and (video.episode is None or not video.episode.series_id):
            raise InvalidInputError(f"Épisode {video.id} sans identifiant de série")
        if video.duration_ms <= 0:
            raise InvalidInputError(f"Durée nulle ou négative pour {video.id}: {video.duration_ms}")
        if report.position_ms < 0 or report.position_ms > video.duration_ms:
            raise InvalidInputError(
                f"Position {report.position_ms} hors de [0, {video.duration_ms}] pour {video.id}"
            )

    @staticmethod
    def _lock_keys(video: Video) -> list[str]:
        keys = [content_key(video.id)]
        if video.series_id:
            keys.append(series_key(video.series_id))
        return keys

    def _upsert(self, video: Video, position_ms: int) -> ReconcileAction:
        existing = self._catalog.find_by_identity(video.id)
        entry = build_entry(video, position_ms, self._clock())
        catalog_id = self._catalog.upsert(entry, existing.id if existing else None)
        if existing:
            logger.info(f"Entrée mise à jour dans le flux: {entry.title} (id={catalog_id})")
        else:
            logger.info(f"Nouvelle entrée dans le flux: {entry.title} (id={catalog_id})")

        pruned = 0
        if video.series_id:
            pruned = self._pruner.prune_locked(video.series_id)
        return ReconcileAction(
            ActionType.UPSERTED,
            video.id,
            PlaybackBucket.IN_PROGRESS,
            catalog_id=catalog_id,
            pruned=pruned,
        )

    def _finish(
        self, video: Video, series_lookup: Optional[ISeriesLookup]
    ) -> ReconcileAction:
        action, catalog_id = self._remove_locked(video)

        promoted_id = None
        pruned = 0
        if video.series_id and series_lookup is not None:
            promoted_id, pruned = self._promote_successor(video, series_lookup)
        return ReconcileAction(
            action,
            video.id,
            PlaybackBucket.FINISHED,
            catalog_id=catalog_id,
            pruned=pruned,
            promoted_id=promoted_id,
        )

    def _remove_locked(self, video: Video) -> tuple[ActionType, Optional[int]]:
        existing = self._catalog.find_by_identity(video.id)
        if existing is None:
            logger.debug(f"Aucune entrée à supprimer pour {video.id}")
            return ActionType.REMOVAL_SKIPPED, None

        if self._catalog.remove(existing.id):
            logger.info(f"Entrée supprimée du flux: {existing.title} (id={existing.id})")
        else:
            logger.warning(
                f"Entrée {existing.id} ({video.id}) déjà supprimée du flux par l'hôte"
            )
        return ActionType.REMOVED, existing.id

    def _promote_successor(
        self, video: Video, series_lookup: ISeriesLookup
    ) -> tuple[Optional[int], int]:
        """
        Ajoute l'épisode suivant non vu au flux, en position 0.

        Les échecs sont journalisés et n'interrompent pas la réconciliation.
        """
        series_id = video.series_id
        try:
            seen = {video.id}
            candidate = series_lookup.next_unwatched_episode(series_id, video)
            while candidate is not None:
                if candidate.id in seen:
                    candidate = None
                elif self._catalog.find_by_identity(candidate.id) is None:
                    break
                else:
                    seen.add(candidate.id)
                    candidate = series_lookup.next_unwatched_episode(series_id, candidate)
            if candidate is None:
                logger.debug(f"Aucun épisode suivant à promouvoir pour la série {series_id}")
                return None, 0

            entry = build_entry(candidate, 0, self._clock(), WatchNextType.NEXT)
            promoted_id = self._catalog.upsert(entry)
            logger.info(f"Épisode suivant ajouté au flux: {candidate.name} (id={promoted_id})")
            return promoted_id, self._pruner.prune_locked(series_id)
        except Exception as e:
            logger.warning(f"Promotion de l'épisode suivant impossible pour {video.id}: {e}")
            return None, 0

    # ------------------------------------------------------------------
    # Opérations sur plusieurs vidéos
    # ------------------------------------------------------------------

    def remove_videos(self, videos: Iterable[Video]) -> list[ReconcileAction]:
        """
        Supprime plusieurs vidéos du flux.

        Chaque suppression est sérialisée avec les réconciliations du même
        contenu. Aucun épisode suivant n'est promu.
        """
        results = []
        for video in videos:
            if not video.id or not video.id.strip():
                raise InvalidInputError("Identifiant de vidéo vide")
            with self._locks.hold(*self._lock_keys(video)):
                action, catalog_id = self._remove_locked(video)
            results.append(ReconcileAction(action, video.id, catalog_id=catalog_id))
        return results

    def filter_in_feed(self, videos: Iterable[Video]) -> list[Video]:
        """Retourne les vidéos présentes dans le flux, dans l'ordre d'origine."""
        visible = {entry.content_id for entry in self._catalog.list_all()}
        return [video for video in videos if video.id in visible]

    def list_feed(self) -> list[FeedEntry]:
        """Entrées du flux, la plus récemment engagée en premier."""
        return sorted(
            self._catalog.list_all(),
            key=lambda e: e.last_engagement_at,
            reverse=True,
        )

    def prune_series(self, series_id: str) -> int:
        """Élague une série (voir SeriesEntryPruner.prune_series)."""
        return self._pruner.prune_series(series_id)

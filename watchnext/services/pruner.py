"""
Élagage des entrées d'une série.

Une série ne garde qu'un seul épisode dans le flux : le dernier regardé.
1. Filtre les entrées du flux appartenant à la série ;
2. Retient l'entrée la plus récemment engagée ;
3. Supprime toutes les autres.
"""

from typing import Optional

from loguru import logger

from watchnext.core.entities.feed import FeedEntry
from watchnext.core.errors import InvalidInputError
from watchnext.core.ports.catalog import IContinuationCatalog
from watchnext.services.locks import KeyedLock, series_key


def _recency_key(entry: FeedEntry) -> tuple:
    # L'id le plus bas gagne à égalité : on l'inverse pour un max() unique
    catalog_id = entry.id if entry.id is not None else 0
    return (entry.last_engagement_at, entry.last_playback_position_ms, -catalog_id)


def select_survivor(entries: list[FeedEntry]) -> Optional[FeedEntry]:
    """
    Choisit l'entrée a conserver parmi celles d'une série.

    Priorité : date d'engagement la plus récente, puis position la plus
    avancée, puis identifiant catalogue le plus bas.
    """
    if not entries:
        return None
    return max(entries, key=_recency_key)


class SeriesEntryPruner:
    """
    Garantit au plus une entrée par série dans le flux.

    Utilisation:
        pruner = SeriesEntryPruner(catalog, locks)
        removed = pruner.prune_series("breaking-bad")
    """

    def __init__(self, catalog: IContinuationCatalog, locks: KeyedLock) -> None:
        self._catalog = catalog
        self._locks = locks

    def prune_series(self, series_id: str) -> int:
        """
        Supprime les entrées superflues d'une série.

        Sérialisé avec les réconciliations des épisodes de la même série.

        Returns:
            Nombre d'entrées supprimées.
        """
        if not series_id:
            raise InvalidInputError("Identifiant de série vide")
        with self._locks.hold(series_key(series_id)):
            return self.prune_locked(series_id)

    def prune_locked(self, series_id: str) -> int:
        """Élagage à appeler quand le verrou de la série est déjà détenu."""
        entries = [e for e in self._catalog.list_all() if e.series_id == series_id]
        if len(entries) <= 1:
            return 0

        survivor = select_survivor(entries)
        removed = 0
        for entry in entries:
            if entry is survivor:
                continue
            if self._catalog.remove(entry.id):
                removed += 1
            else:
                logger.warning(
                    f"Entrée {entry.id} ({entry.content_id}) déjà absente du flux lors de l'élagage"
                )
        logger.info(
            f"Série {series_id}: {removed} entrée(s) supprimée(s), "
            f"conservée: {survivor.content_id}"
        )
        return removed

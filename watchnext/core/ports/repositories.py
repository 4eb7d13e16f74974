"""
Interfaces ports pour le catalogue de titres.

Le catalogue de titres fournit les métadonnées des vidéos et l'ordre des
épisodes d'une série. Le moteur n'en consomme que ISeriesLookup, fourni par
l'appelant pour la promotion de l'épisode suivant.
"""

from abc import ABC, abstractmethod
from typing import Optional

from watchnext.core.entities.video import Video


class ISeriesLookup(ABC):
    """Recherche de l'épisode suivant d'une série."""

    @abstractmethod
    def next_unwatched_episode(self, series_id: str, after: Video) -> Optional[Video]:
        """
        Retourne le premier épisode non vu situé après `after`.

        L'ordre est (numéro de saison, numéro d'épisode) croissant.
        Retourne None si aucun épisode ne suit.
        """
        ...


class IVideoRepository(ABC):
    """
    Interface de stockage du catalogue de titres.

    Définit les opérations pour persister et récupérer les entités Video.
    """

    @abstractmethod
    def get_by_id(self, video_id: str) -> Optional[Video]:
        """Récupère une vidéo par son identifiant de contenu."""
        ...

    @abstractmethod
    def list_by_series(self, series_id: str) -> list[Video]:
        """Liste les épisodes d'une série, triés par saison puis épisode."""
        ...

    @abstractmethod
    def save(self, video: Video) -> Video:
        """Sauvegarde une vidéo (insertion ou mise à jour)."""
        ...

    @abstractmethod
    def mark_watched(self, video_id: str, watched: bool = True) -> bool:
        """Met à jour le marqueur "vu en entier". Retourne False si inconnue."""
        ...

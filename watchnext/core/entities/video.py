"""
Entités vidéo du catalogue de titres.

Une Video est en lecture seule pour le moteur de réconciliation : elle est fournie
par le catalogue de titres et recopiée dans les entrées du flux au moment de la
mutation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VideoKind(Enum):
    """Type de vidéo.

    Valeurs:
        MOVIE: Vidéo autonome (film)
        EPISODE: Épisode d'une série
        CLIP: Extrait ou bande-annonce, non éligible au flux de continuation
    """

    MOVIE = "movie"
    EPISODE = "episode"
    CLIP = "clip"


def is_past_end_credits(
    position_ms: int,
    duration_ms: int,
    end_credits_offset_ms: Optional[int] = None,
) -> bool:
    """
    Indique si la position a atteint le générique de fin.

    Sans générique connu, la fin de la vidéo fait office de générique.
    """
    offset = duration_ms if end_credits_offset_ms is None else end_credits_offset_ms
    return position_ms >= offset


@dataclass(frozen=True)
class EpisodeInfo:
    """
    Données propres à un épisode de série.

    Attributs:
        series_id: Identifiant stable de la série
        series_title: Titre de la série
        season_number: Numéro de saison (1-indexé)
        episode_number: Numéro d'épisode dans la saison (1-indexé)
    """

    series_id: str
    series_title: str = ""
    season_number: int = 1
    episode_number: int = 1

    @property
    def order_key(self) -> tuple[int, int]:
        """Clé de tri (saison, épisode)."""
        return (self.season_number, self.episode_number)


@dataclass
class Video:
    """
    Vidéo du catalogue de titres.

    Attributs:
        id: Identifiant stable du contenu (clé de dédoublonnage du flux)
        name: Nom de la vidéo (titre de l'épisode pour une série)
        kind: Type de vidéo
        duration_ms: Durée en millisecondes
        end_credits_offset_ms: Position à partir de laquelle la vidéo est
            considérée terminée. None signifie la fin de la vidéo.
        description: Résumé
        uri: Lien profond ouvert depuis le flux
        video_uri: URI de la vidéo de prévisualisation
        thumbnail_uri: URI de l'affiche
        episode: Données d'épisode, présentes si et seulement si kind == EPISODE
        watched: Marqueur "vu en entier" tenu par le catalogue de titres
    """

    id: str
    name: str = ""
    kind: VideoKind = VideoKind.MOVIE
    duration_ms: int = 0
    end_credits_offset_ms: Optional[int] = None
    description: str = ""
    uri: str = ""
    video_uri: str = ""
    thumbnail_uri: str = ""
    episode: Optional[EpisodeInfo] = None
    watched: bool = False

    @property
    def series_id(self) -> Optional[str]:
        """Identifiant de la série, ou None pour une vidéo autonome."""
        return self.episode.series_id if self.episode else None

    @property
    def is_episode(self) -> bool:
        return self.kind is VideoKind.EPISODE

    def is_after_end_credits(self, position_ms: int) -> bool:
        """Indique si la position dépasse le début du générique de fin."""
        return is_past_end_credits(position_ms, self.duration_ms, self.end_credits_offset_ms)

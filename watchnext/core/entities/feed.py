"""
Entité du flux de continuation.

Une FeedEntry est une ligne persistée dans le flux "Continuer à regarder" de la
plateforme hôte. Son identifiant est attribué par le catalogue à la création et
reste stable à travers les mises à jour du même contenu.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class EntryType(Enum):
    """Type de programme affiché par l'hôte."""

    MOVIE = "movie"
    TV_EPISODE = "tv_episode"


class WatchNextType(Enum):
    """Raison de la présence d'une entrée dans le flux.

    Valeurs:
        CONTINUE: Lecture commencée et non terminée
        NEXT: Épisode suivant proposé après la fin du précédent
    """

    CONTINUE = "continue"
    NEXT = "next"


@dataclass
class FeedEntry:
    """
    Entrée du flux de continuation.

    Les métadonnées d'affichage sont recopiées depuis la Video à chaque
    mutation ; l'entrée n'en est pas propriétaire.

    Attributs:
        id: Identifiant attribué par le catalogue (None avant insertion)
        content_id: Identifiant du contenu (miroir de Video.id)
        series_id: Identifiant de la série (None pour un film)
        entry_type: Type de programme (film ou épisode)
        watch_next_type: CONTINUE ou NEXT
        last_playback_position_ms: Dernière position de lecture
        last_engagement_at: Date du dernier engagement (UTC)
        title: Titre affiché (titre de la série pour un épisode)
        duration_ms: Durée de la vidéo
        description: Résumé
        poster_uri: URI de l'affiche
        preview_uri: URI de prévisualisation
        intent_uri: Lien profond vers la lecture
        season_number: Numéro de saison (épisodes uniquement)
        episode_number: Numéro d'épisode (épisodes uniquement)
        season_title: Libellé de saison (épisodes uniquement)
        episode_title: Titre de l'épisode (épisodes uniquement)
    """

    content_id: str
    last_engagement_at: datetime
    id: Optional[int] = None
    series_id: Optional[str] = None
    entry_type: EntryType = EntryType.MOVIE
    watch_next_type: WatchNextType = WatchNextType.CONTINUE
    last_playback_position_ms: int = 0
    title: str = ""
    duration_ms: int = 0
    description: str = ""
    poster_uri: str = ""
    preview_uri: str = ""
    intent_uri: str = ""
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    season_title: Optional[str] = None
    episode_title: Optional[str] = None

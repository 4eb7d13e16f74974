"""
Entités métier du domaine.

Exports:
- Video: Vidéo du catalogue de titres (lecture seule pour le moteur)
- VideoKind: Type de vidéo (film, épisode, extrait)
- EpisodeInfo: Données propres à un épisode de série
- is_past_end_credits: Règle du générique de fin
- FeedEntry: Entrée persistée du flux de continuation
- EntryType: Type de programme affiché par l'hôte
- WatchNextType: Raison de la présence dans le flux (CONTINUE, NEXT)
"""

from watchnext.core.entities.feed import EntryType, FeedEntry, WatchNextType
from watchnext.core.entities.video import EpisodeInfo, Video, VideoKind, is_past_end_credits

__all__ = [
    "Video",
    "VideoKind",
    "EpisodeInfo",
    "is_past_end_credits",
    "FeedEntry",
    "EntryType",
    "WatchNextType",
]

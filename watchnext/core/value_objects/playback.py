"""
Objets valeur pour les rapports de lecture.

Un PlaybackReport est transitoire : il arrive à chaque appel et n'est jamais
persiste par le moteur.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PlayerState(Enum):
    """État du lecteur au moment du rapport."""

    PAUSED = "paused"
    ENDED = "ended"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PlayerState":
        """
        Convertit un état brut du lecteur.

        Accepte "paused", "ENDED" ou la forme "STATE_PAUSED" des lecteurs
        Android. Toute autre valeur donne UNKNOWN.
        """
        if not value:
            return cls.UNKNOWN
        normalized = value.strip().lower()
        if normalized.startswith("state_"):
            normalized = normalized[len("state_"):]
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


class PlaybackBucket(Enum):
    """Phase du cycle de vie d'une lecture."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class PlaybackReport:
    """
    Rapport de lecture envoyé par le lecteur.

    Attributs:
        video_id: Identifiant du contenu lu
        position_ms: Position écoulée en millisecondes
        state: État du lecteur
    """

    video_id: str
    position_ms: int
    state: PlayerState = PlayerState.UNKNOWN

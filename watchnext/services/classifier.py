"""
Classification d'un rapport de lecture.

Un utilisateur a "commencé" une vidéo s'il en a regardé 3% ou 2 minutes,
le premier seuil atteint l'emportant : pour une vidéo courte le pourcentage
domine, pour une vidéo longue la durée absolue domine.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from watchnext.core.entities.video import Video, is_past_end_credits
from watchnext.core.errors import InvalidInputError
from watchnext.core.value_objects.playback import PlaybackBucket, PlaybackReport, PlayerState

# Valeurs de référence pour estimer si une vidéo a commencé
STARTED_MIN_FRACTION = 0.03
STARTED_MIN_MS = 2 * 60 * 1000


@dataclass(frozen=True)
class PlaybackThresholds:
    """
    Seuils de classification.

    Attributs:
        started_fraction: Fraction de la durée au-delà de laquelle la vidéo
            est commencée
        started_minimum_ms: Durée absolue au-delà de laquelle la vidéo est
            commencée
    """

    started_fraction: float = STARTED_MIN_FRACTION
    started_minimum_ms: int = STARTED_MIN_MS

    def started_threshold(self, duration_ms: int) -> Decimal:
        """Position minimale (ms) pour considérer la vidéo commencée."""
        # Decimal pour que 3% de 600000 vaille exactement 18000
        by_fraction = Decimal(str(self.started_fraction)) * duration_ms
        return min(by_fraction, Decimal(self.started_minimum_ms))


DEFAULT_THRESHOLDS = PlaybackThresholds()


def has_video_started(
    duration_ms: int,
    position_ms: int,
    thresholds: PlaybackThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Indique si la position dépasse le seuil de démarrage."""
    return position_ms >= thresholds.started_threshold(duration_ms)


def _check_positive(duration_ms: int, position_ms: int) -> None:
    if duration_ms < 0 or position_ms < 0:
        raise InvalidInputError(
            f"Durée et position doivent être positives (durée={duration_ms}, position={position_ms})"
        )


def _bucket(
    duration_ms: int,
    position_ms: int,
    finished: bool,
    thresholds: PlaybackThresholds,
) -> PlaybackBucket:
    if finished:
        return PlaybackBucket.FINISHED
    if has_video_started(duration_ms, position_ms, thresholds):
        return PlaybackBucket.IN_PROGRESS
    return PlaybackBucket.NOT_STARTED


def classify(
    duration_ms: int,
    position_ms: int,
    state: PlayerState,
    end_credits_offset_ms: Optional[int] = None,
    thresholds: PlaybackThresholds = DEFAULT_THRESHOLDS,
) -> PlaybackBucket:
    """
    Classe un rapport de lecture dans une phase du cycle de vie.

    Args:
        duration_ms: Durée de la vidéo
        position_ms: Position reportée
        state: État du lecteur
        end_credits_offset_ms: Début du générique de fin (défaut : la durée)
        thresholds: Seuils de démarrage

    Returns:
        FINISHED si le lecteur a terminé ou si la position dépasse le
        générique, IN_PROGRESS si la vidéo a commencé, NOT_STARTED sinon.

    Raises:
        InvalidInputError: Durée ou position négative.
    """
    _check_positive(duration_ms, position_ms)
    finished = state is PlayerState.ENDED or is_past_end_credits(
        position_ms, duration_ms, end_credits_offset_ms
    )
    return _bucket(duration_ms, position_ms, finished, thresholds)


def classify_report(
    video: Video,
    report: PlaybackReport,
    thresholds: PlaybackThresholds = DEFAULT_THRESHOLDS,
) -> PlaybackBucket:
    """Classe le rapport d'une vidéo du catalogue (générique de fin de la vidéo)."""
    _check_positive(video.duration_ms, report.position_ms)
    finished = report.state is PlayerState.ENDED or video.is_after_end_credits(
        report.position_ms
    )
    return _bucket(video.duration_ms, report.position_ms, finished, thresholds)

"""
Objets valeur immuables représentant des concepts du domaine sans identité.

Exports :
- PlayerState : État du lecteur (paused, ended, unknown)
- PlaybackBucket : Phase de lecture (non commencée, en cours, terminée)
- PlaybackReport : Rapport de lecture transitoire
"""

from watchnext.core.value_objects.playback import (
    PlaybackBucket,
    PlaybackReport,
    PlayerState,
)

__all__ = [
    "PlayerState",
    "PlaybackBucket",
    "PlaybackReport",
]

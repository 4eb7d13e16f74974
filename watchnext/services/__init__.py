"""
Couche application : classification, réconciliation et élagage du flux.

Exports :
- classify, classify_report, PlaybackThresholds : Classification d'un rapport de lecture
- KeyedLock : Verrous par clé (contenu, série)
- SeriesEntryPruner : Une seule entrée par série
- ReconciliationService, ReconcileAction, ActionType : Moteur de réconciliation
- PlaybackReportService : Orchestration d'un rapport pour les surfaces externes
"""

from watchnext.services.classifier import (
    DEFAULT_THRESHOLDS,
    PlaybackThresholds,
    classify,
    classify_report,
    has_video_started,
)
from watchnext.services.locks import KeyedLock
from watchnext.services.pruner import SeriesEntryPruner, select_survivor
from watchnext.services.reconciler import (
    ActionType,
    ReconcileAction,
    ReconciliationService,
    build_entry,
)
from watchnext.services.playback_report import PlaybackReportService, UnknownVideoError

__all__ = [
    "DEFAULT_THRESHOLDS",
    "PlaybackThresholds",
    "classify",
    "classify_report",
    "has_video_started",
    "KeyedLock",
    "SeriesEntryPruner",
    "select_survivor",
    "ActionType",
    "ReconcileAction",
    "ReconciliationService",
    "build_entry",
    "PlaybackReportService",
    "UnknownVideoError",
]

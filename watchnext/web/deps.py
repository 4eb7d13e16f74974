"""
Dépendances partagées de l'application web.

Les services sont créés à chaque requête depuis le container installé dans
app.state au démarrage : chaque requête obtient une session fraîche, mais les
verrous par clé restent partagés.
"""

from fastapi import Request

from ..container import Container
from ..services.playback_report import PlaybackReportService
from ..services.reconciler import ReconciliationService


def get_container(request: Request) -> Container:
    """Container DI installé par le lifespan de l'application."""
    return request.app.state.container


def get_playback_service(request: Request) -> PlaybackReportService:
    return get_container(request).playback_report_service()


def get_reconciliation_service(request: Request) -> ReconciliationService:
    return get_container(request).reconciliation_service()

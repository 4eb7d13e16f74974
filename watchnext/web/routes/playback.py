"""
Route de reception des rapports de lecture.

Le lecteur envoie un rapport à chaque pause, arrêt ou fin de lecture ; la
réponse décrit la mutation appliquée au flux.
"""

from fastapi import APIRouter, Depends

from ...services.playback_report import PlaybackReportService
from ..deps import get_playback_service
from .schemas import ActionOut, PlaybackReportIn

router = APIRouter(prefix="/playback", tags=["playback"])


@router.post("/reports", response_model=ActionOut)
def post_report(
    report: PlaybackReportIn,
    service: PlaybackReportService = Depends(get_playback_service),
) -> ActionOut:
    """Reconcilie le flux avec un rapport de lecture."""
    result = service.handle(report.video_id, report.position_ms, report.state)
    return ActionOut.from_action(result)

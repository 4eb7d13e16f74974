"""Routes de consultation et de maintenance du flux de continuation."""

from fastapi import APIRouter, Depends

from ...services.playback_report import PlaybackReportService
from ...services.reconciler import ReconciliationService
from ..deps import get_playback_service, get_reconciliation_service
from .schemas import ActionOut, FeedEntryOut, PruneOut

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=list[FeedEntryOut])
def list_feed(
    service: ReconciliationService = Depends(get_reconciliation_service),
) -> list[FeedEntryOut]:
    """Entrées du flux, la plus récente en premier."""
    return [FeedEntryOut.from_entry(entry) for entry in service.list_feed()]


@router.delete("/{content_id}", response_model=ActionOut)
def delete_entry(
    content_id: str,
    service: PlaybackReportService = Depends(get_playback_service),
) -> ActionOut:
    """Retire une vidéo du flux."""
    [result] = service.remove([content_id])
    return ActionOut.from_action(result)


@router.post("/series/{series_id}/prune", response_model=PruneOut)
def prune_series(
    series_id: str,
    service: ReconciliationService = Depends(get_reconciliation_service),
) -> PruneOut:
    """Ne garde que l'entrée la plus récente d'une série."""
    return PruneOut(series_id=series_id, removed=service.prune_series(series_id))

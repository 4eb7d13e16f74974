"""
Commandes CLI du flux de continuation (report, feed, remove, prune, import-videos).
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from watchnext.adapters.catalog_file import import_videos as import_videos_file
from watchnext.adapters.cli.helpers import (
    cli_errors,
    console,
    render_feed_table,
    with_container,
)
from watchnext.services.reconciler import ActionType, ReconcileAction

_ACTION_LABELS = {
    ActionType.NO_OP: "[dim]Ignoré (lecture pas encore commencée)[/dim]",
    ActionType.UPSERTED: "[green]Entrée ajoutée/mise à jour[/green]",
    ActionType.REMOVED: "[yellow]Entrée supprimée[/yellow]",
    ActionType.REMOVAL_SKIPPED: "[dim]Aucune entrée à supprimer[/dim]",
}


def _print_action(result: ReconcileAction) -> None:
    label = _ACTION_LABELS[result.action]
    suffix = f" (id={result.catalog_id})" if result.catalog_id is not None else ""
    console.print(f"{result.content_id}: {label}{suffix}")
    if result.pruned:
        console.print(f"  {result.pruned} épisode(s) précédent(s) retiré(s) du flux")
    if result.promoted_id is not None:
        console.print(f"  Épisode suivant ajouté au flux (id={result.promoted_id})")


def report(
    video_id: Annotated[str, typer.Argument(help="Identifiant de la vidéo")],
    position: Annotated[
        int,
        typer.Option("--position", "-p", min=0, help="Position de lecture en millisecondes"),
    ],
    state: Annotated[
        str,
        typer.Option("--state", "-s", help="État du lecteur (paused, ended, unknown)"),
    ] = "paused",
) -> None:
    """
    Transmet un rapport de lecture au flux de continuation.

    Exemples:
      watchnext report film-1 --position 600000
      watchnext report s1e1 -p 2520000 --state ended
    """
    _report(video_id, position, state)


@with_container()
def _report(container, video_id: str, position: int, state: str) -> None:
    service = container.playback_report_service()
    with cli_errors():
        result = service.handle(video_id, position, state)
    _print_action(result)


def feed(
    series: Annotated[
        Optional[str],
        typer.Option("--series", help="Limiter aux épisodes d'une série"),
    ] = None,
) -> None:
    """Affiche le flux "Continuer à regarder"."""
    _feed(series)


@with_container()
def _feed(container, series: Optional[str]) -> None:
    if series:
        with cli_errors():
            videos = container.playback_report_service().series_episodes_in_feed(series)
        if not videos:
            console.print(f"Aucun épisode de {series} dans le flux")
            return
        for video in videos:
            console.print(f"{video.id}: {video.name}")
        return

    with cli_errors():
        entries = container.reconciliation_service().list_feed()
    if not entries:
        console.print("Le flux est vide")
        return
    console.print(render_feed_table(entries))


def remove(
    video_ids: Annotated[list[str], typer.Argument(help="Identifiants des vidéos")],
) -> None:
    """Retire une ou plusieurs vidéos du flux."""
    _remove(video_ids)


@with_container()
def _remove(container, video_ids: list[str]) -> None:
    service = container.playback_report_service()
    with cli_errors():
        results = service.remove(video_ids)
    for result in results:
        _print_action(result)


def prune(
    series_id: Annotated[str, typer.Argument(help="Identifiant de la série")],
) -> None:
    """Ne garde que l'épisode le plus récent d'une série dans le flux."""
    _prune(series_id)


@with_container()
def _prune(container, series_id: str) -> None:
    with cli_errors():
        removed = container.reconciliation_service().prune_series(series_id)
    console.print(f"{removed} entrée(s) supprimée(s) pour la série {series_id}")


def import_videos(
    path: Annotated[Path, typer.Argument(help="Fichier JSON du catalogue de titres")],
) -> None:
    """Importe le catalogue de titres depuis un fichier JSON."""
    _import_videos(path)


@with_container()
def _import_videos(container, path: Path) -> None:
    with cli_errors():
        count = import_videos_file(path, container.video_repository())
    console.print(f"[green]{count} vidéo(s) importée(s)[/green]")


__all__ = [
    "report",
    "feed",
    "remove",
    "prune",
    "import_videos",
]

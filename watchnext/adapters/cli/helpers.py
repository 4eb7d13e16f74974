"""
Utilitaires partages pour les commandes CLI de WatchNext.

Ce module fournit :
- console : instance Rich Console partagée
- with_container : decorateur injectant un container initialise
- cli_errors : context manager convertissant les erreurs du domaine en sortie CLI
- render_feed_table : tableau Rich des entrées du flux
"""

from contextlib import contextmanager
from functools import wraps

import typer
from rich.console import Console
from rich.table import Table

from watchnext.container import Container
from watchnext.core.entities.feed import FeedEntry
from watchnext.core.errors import WatchNextError

console = Console()


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (défaut), initialise la base de données.

    Usage:
        @with_container()
        def my_command(container, ...):
            service = container.playback_report_service()
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return func(container, *args, **kwargs)
        return wrapper
    return decorator


@contextmanager
def cli_errors():
    """Affiche les erreurs du domaine en rouge et termine avec le code 1."""
    try:
        yield
    except WatchNextError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1) from e


def format_position(position_ms: int) -> str:
    """Formate une position en H:MM:SS."""
    seconds = position_ms // 1000
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def render_feed_table(entries: list[FeedEntry]) -> Table:
    """Construit le tableau Rich des entrées du flux."""
    table = Table(title="Continuer à regarder")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Contenu", style="cyan")
    table.add_column("Titre")
    table.add_column("Épisode")
    table.add_column("Position", justify="right")
    table.add_column("Type")
    table.add_column("Engagement")

    for entry in entries:
        episode = ""
        if entry.season_number is not None and entry.episode_number is not None:
            episode = f"S{entry.season_number:02d}E{entry.episode_number:02d}"
            if entry.episode_title:
                episode += f" {entry.episode_title}"
        table.add_row(
            str(entry.id),
            entry.content_id,
            entry.title,
            episode,
            f"{format_position(entry.last_playback_position_ms)} / {format_position(entry.duration_ms)}",
            entry.watch_next_type.value,
            entry.last_engagement_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    return table

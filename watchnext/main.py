"""
Point d'entrée CLI de WatchNext.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Annotated

import typer
from loguru import logger

from .adapters.cli import feed, import_videos, prune, remove, report
from .config import Settings
from .container import Container
from .logging_config import configure_from_settings

app = typer.Typer(
    name="watchnext",
    help="Synchronisation du flux 'Continuer à regarder'",
)
container = Container()


def _version() -> str:
    try:
        return package_version("watchnext")
    except PackageNotFoundError:
        return "0.1.0"


# Monter les commandes depuis adapters/cli/commands.py
app.command()(report)
app.command()(feed)
app.command()(remove)
app.command()(prune)
app.command(name="import-videos")(import_videos)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(
        f"Seuil de démarrage : {config.started_fraction:.0%} "
        f"ou {config.started_minimum_seconds} s"
    )
    typer.echo(
        f"Promotion de l'épisode suivant : "
        f"{'activée' if config.promote_next_episode else 'désactivée'}"
    )
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"WatchNext v{_version()}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance l'API HTTP recevant les rapports de lecture."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("watchnext.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    configure_from_settings(container.config())
    container.database.init()

    logger.info("Démarrage de WatchNext", version=_version())
    app()


if __name__ == "__main__":
    main()

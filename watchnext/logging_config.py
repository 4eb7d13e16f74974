"""
Journalisation loguru de WatchNext.

Deux destinations :
- la console (stderr), colorée, filtrée par le niveau configuré ;
- un fichier JSON avec rotation, qui garde toutes les décisions du moteur
  (classification, écritures et suppressions dans le flux) au niveau DEBUG.

Chaque enregistrement porte `app="watchnext"` dans ses extras, ce qui permet
de le retrouver dans un journal partagé avec la plateforme hôte.
"""

import sys
from pathlib import Path

from loguru import logger

from watchnext.config import Settings

APP_NAME = "watchnext"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level.name:<7}</level> "
    "<magenta>{extra[app]}</magenta> "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def _only_watchnext(record) -> bool:
    """Le fichier ne garde que les messages émis par le package."""
    return record["name"].split(".", 1)[0] == APP_NAME


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/watchnext.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """
    Remplace les handlers loguru par ceux de WatchNext.

    Args :
        log_level : Niveau minimum affiché sur la console
        log_file : Fichier JSON des décisions du moteur
        rotation_size : Taille déclenchant la rotation (ex: "10 MB")
        retention_count : Nombre d'archives conservées
    """
    logger.remove()
    logger.configure(extra={"app": APP_NAME})

    logger.add(sys.stderr, level=log_level.upper(), format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        filter=_only_watchnext,
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Réconciliations concurrentes
    )

    logger.debug(f"Journal du moteur : {log_file} (rotation {rotation_size})")


def configure_from_settings(settings: Settings) -> None:
    """Applique la section log_* des paramètres."""
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

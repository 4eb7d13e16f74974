"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe WATCHNEXT_,
et peut optionnellement être fournie via un fichier .env.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from watchnext.services.classifier import (
    STARTED_MIN_FRACTION,
    STARTED_MIN_MS,
    PlaybackThresholds,
)

# Trouver le fichier .env à la racine du projet (parent de watchnext/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe WATCHNEXT_.
    Exemple : WATCHNEXT_STARTED_MINIMUM_SECONDS=60

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="WATCHNEXT_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données (flux de continuation + catalogue de titres)
    database_url: str = Field(default="sqlite:///watchnext.db")

    # Seuils de démarrage : 3% de la durée ou 2 minutes, le premier atteint
    started_fraction: float = Field(default=STARTED_MIN_FRACTION, gt=0, le=1)
    started_minimum_seconds: int = Field(default=STARTED_MIN_MS // 1000, ge=0)

    # Ajout de l'épisode suivant à la fin d'un épisode
    promote_next_episode: bool = Field(default=True)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/watchnext.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def thresholds(self) -> PlaybackThresholds:
        """Seuils de classification derives de la configuration."""
        return PlaybackThresholds(
            started_fraction=self.started_fraction,
            started_minimum_ms=self.started_minimum_seconds * 1000,
        )

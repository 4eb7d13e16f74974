"""
Configuration de la base de données SQLite pour WatchNext.

Ce module fournit :
- Engine SQLite partagé entre threads (le moteur est appelé depuis plusieurs requêtes)
- Fonction d'initialisation des tables

L'URL est configurée via WATCHNEXT_DATABASE_URL (défaut: sqlite:///watchnext.db) ;
le container DI crée l'engine une seule fois et ouvre une session par repository.
"""

from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def build_engine(database_url: str) -> Engine:
    """
    Crée un engine pour l'URL donnée.

    Une base SQLite en mémoire partage une connexion unique, sans quoi
    chaque session verrait une base vide.
    """
    in_memory = database_url == "sqlite://" or database_url.startswith("sqlite:///:memory:")
    if in_memory:
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith("sqlite:///"):
        # Créer le répertoire parent du fichier SQLite
        db_path = Path(database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    return create_engine(database_url, echo=False)


def init_db(engine: Engine) -> None:
    """
    Initialise la base de données en créant toutes les tables.

    Les modèles sont importés ici pour enregistrer leurs métadonnées dans
    SQLModel.metadata sans import circulaire.
    """
    from watchnext.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)

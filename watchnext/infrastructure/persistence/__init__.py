"""
Module de persistance SQLite pour WatchNext.

- database.py : Création de l'engine, initialisation des tables
- models.py : Modèles SQLModel représentant les tables
- repositories/ : Implementations des ports (catalogue du flux, catalogue de titres)

Usage:
    from sqlmodel import Session
    from watchnext.infrastructure.persistence import build_engine, init_db

    engine = build_engine("sqlite:///watchnext.db")
    init_db(engine)  # Crée les tables si nécessaire
    with Session(engine) as session:
        ...
"""

from watchnext.infrastructure.persistence.database import build_engine, init_db
from watchnext.infrastructure.persistence.models import FeedEntryModel, VideoModel

__all__ = [
    "build_engine",
    "init_db",
    "FeedEntryModel",
    "VideoModel",
]

"""
Container d'injection de dépendances via dependency-injector.

Fournit une gestion centralisée des dépendances pour les interfaces CLI et Web.
Les verrous par clé sont un singleton : toutes les réconciliations du processus
doivent partager la même instance pour être sérialisées.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .config import Settings
from .infrastructure.persistence.database import build_engine, init_db
from .infrastructure.persistence.repositories import (
    SQLModelContinuationCatalog,
    SQLModelVideoRepository,
)
from .services.locks import KeyedLock
from .services.playback_report import PlaybackReportService
from .services.reconciler import ReconciliationService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        service = container.playback_report_service()
        result = service.handle("film-1", 300_000, "paused")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine unique construit depuis la configuration
    engine = providers.Singleton(build_engine, database_url=config.provided.database_url)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session à chaque appel
    session = providers.Factory(Session, engine)

    # Verrous partages par tout le processus
    locks = providers.Singleton(KeyedLock)

    # Repositories - Factory pour nouvelle instance avec session fraîche
    feed_catalog = providers.Factory(
        SQLModelContinuationCatalog,
        session=session,
    )
    video_repository = providers.Factory(
        SQLModelVideoRepository,
        session=session,
    )

    # Services - Factory car dependent des repositories (sessions fraiches).
    # L'élagueur est créé par le moteur sur le même catalogue.
    reconciliation_service = providers.Factory(
        ReconciliationService,
        catalog=feed_catalog,
        locks=locks,
        thresholds=config.provided.thresholds,
    )

    playback_report_service = providers.Factory(
        PlaybackReportService,
        reconciler=reconciliation_service,
        video_repo=video_repository,
        promote_next_episode=config.provided.promote_next_episode,
    )

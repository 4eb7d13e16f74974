"""
Implementations SQLModel des ports.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dépendances
- Convertit entre entités de domaine (dataclass) et modèles DB (SQLModel)
"""

from watchnext.infrastructure.persistence.repositories.feed_entry_repository import (
    SQLModelContinuationCatalog,
)
from watchnext.infrastructure.persistence.repositories.video_repository import (
    SQLModelVideoRepository,
)

__all__ = [
    "SQLModelContinuationCatalog",
    "SQLModelVideoRepository",
]

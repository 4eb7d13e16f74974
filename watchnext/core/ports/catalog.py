"""
Interface port du flux de continuation.

Le flux appartient à la plateforme hôte. Le moteur de réconciliation ne le
manipule qu'à travers ce contrat CRUD ; les implémentations (SQLModel, client
de la plateforme, etc.) vivent dans la couche infrastructure.
"""

from abc import ABC, abstractmethod
from typing import Optional

from watchnext.core.entities.feed import FeedEntry


class IContinuationCatalog(ABC):
    """
    Contrat du catalogue "Continuer à regarder".

    Chaque opération est atomique du point de vue du moteur : aucune écriture
    partielle n'est observable. Toute défaillance du stockage est signalée par
    CatalogUnavailableError.
    """

    @abstractmethod
    def list_all(self) -> list[FeedEntry]:
        """Instantané des entrées courantes, sans ordre garanti."""
        ...

    @abstractmethod
    def find_by_identity(self, content_id: str) -> Optional[FeedEntry]:
        """
        Récupère l'entrée d'un contenu.

        Équivalent à filtrer list_all() par identifiant de contenu ; le moteur
        ne suppose pas l'existence d'un index.
        """
        ...

    @abstractmethod
    def upsert(self, entry: FeedEntry, existing_id: Optional[int] = None) -> int:
        """
        Insère ou met à jour une entrée.

        Args :
            entry : L'entrée à écrire (son champ id est ignoré)
            existing_id : Identifiant de l'entrée à mettre à jour en place,
                ou None pour inserer

        Retourne :
            existing_id en cas de mise à jour, sinon le nouvel identifiant
        """
        ...

    @abstractmethod
    def remove(self, catalog_id: int) -> bool:
        """Supprime une entrée. Retourne False si elle n'existait pas."""
        ...

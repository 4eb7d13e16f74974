"""
Taxonomie des erreurs du domaine WatchNext.

- InvalidInputError : entrée invalide (durée/position négative, identifiant vide),
  rejetée avant tout appel au catalogue. Ne pas réessayer sans corriger l'entrée.
- UnsupportedContentKindError : type de vidéo hors {film, épisode}.
- CatalogUnavailableError : échec d'un appel au catalogue (stockage indisponible).
  La réconciliation complète peut être rejouée (idempotente).
- CatalogInconsistentError : le catalogue ne contient plus l'entrée visée
  (suppression externe concurrente).
"""


class WatchNextError(Exception):
    """Erreur de base de WatchNext."""


class InvalidInputError(WatchNextError, ValueError):
    """Entrée invalide fournie par l'appelant."""


class UnsupportedContentKindError(WatchNextError):
    """Le type de contenu n'est pas géré par le flux de continuation."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Flux de continuation non supporté pour le type de vidéo : {kind}")


class CatalogUnavailableError(WatchNextError):
    """Le catalogue du flux n'a pas pu traiter la requête."""


class CatalogInconsistentError(WatchNextError):
    """L'entrée visée n'existe plus dans le catalogue."""

    def __init__(self, catalog_id: int) -> None:
        self.catalog_id = catalog_id
        super().__init__(f"Entrée {catalog_id} introuvable dans le catalogue")

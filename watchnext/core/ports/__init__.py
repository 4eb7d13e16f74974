"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Port catalogue : Contrat du flux de continuation de l'hôte
- IContinuationCatalog : list_all, find_by_identity, upsert, remove

Ports catalogue de titres :
- ISeriesLookup : Épisode suivant non vu d'une série
- IVideoRepository : Stockage des vidéos
"""

from watchnext.core.ports.catalog import IContinuationCatalog
from watchnext.core.ports.repositories import ISeriesLookup, IVideoRepository

__all__ = [
    "IContinuationCatalog",
    "ISeriesLookup",
    "IVideoRepository",
]

"""
WatchNext - Synchronisation de la ligne "Continuer à regarder".

Ce package maintient le flux de continuation d'une plateforme hôte en phase
avec l'état de lecture reporté par le lecteur vidéo.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (classification, réconciliation, élagage)
- infrastructure/ : Persistance SQLModel du flux et du catalogue de titres
- adapters/ : CLI (typer) et chargement du catalogue JSON
- web/ : API HTTP (FastAPI) recevant les rapports de lecture
"""

"""
Couche infrastructure de WatchNext.

Ce module contient les implémentations concretes des interfaces definies
dans la couche domaine (ports) :

- persistence/ : Stockage SQLite avec SQLModel (flux de continuation et catalogue de titres)

Architecture hexagonale : les adapters ici implementent les ports du domaine,
permettant de brancher le flux réel de la plateforme hôte sans modifier
le moteur de réconciliation.
"""

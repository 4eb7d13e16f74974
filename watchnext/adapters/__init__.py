"""
Adaptateurs d'entrée de WatchNext.

- cli/ : Commandes en ligne de commande (typer + rich)
- catalog_file.py : Import du catalogue de titres depuis un fichier JSON
"""

"""Routes de l'API WatchNext."""

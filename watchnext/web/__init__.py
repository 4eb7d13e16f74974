"""API HTTP de WatchNext : reception des rapports de lecture et consultation du flux."""

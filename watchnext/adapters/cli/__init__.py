"""Commandes CLI de WatchNext (typer)."""

from watchnext.adapters.cli.commands import feed, import_videos, prune, remove, report

__all__ = [
    "report",
    "feed",
    "remove",
    "prune",
    "import_videos",
]

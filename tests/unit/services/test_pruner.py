"""
Tests de l'élagage des séries.

Couvre:
- Choix de l'entrée conservée (engagement, position, id)
- Suppression des autres entrées de la série uniquement
- Entrées déjà supprimées par l'hôte
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from conftest import BASE_TIME
from watchnext.core.entities.feed import FeedEntry
from watchnext.core.errors import InvalidInputError
from watchnext.core.ports.catalog import IContinuationCatalog
from watchnext.services.pruner import SeriesEntryPruner, select_survivor


def entry(catalog_id, content_id, minutes=0, position=0, series_id="dark"):
    return FeedEntry(
        id=catalog_id,
        content_id=content_id,
        series_id=series_id,
        last_engagement_at=BASE_TIME + timedelta(minutes=minutes),
        last_playback_position_ms=position,
    )


class TestSelectSurvivor:
    def test_empty(self):
        assert select_survivor([]) is None

    def test_most_recent_engagement_wins(self):
        entries = [entry(1, "a", minutes=5), entry(2, "b", minutes=10), entry(3, "c", minutes=1)]
        assert select_survivor(entries).content_id == "b"

    def test_position_breaks_engagement_tie(self):
        entries = [entry(1, "a", position=1_000), entry(2, "b", position=5_000)]
        assert select_survivor(entries).content_id == "b"

    def test_lowest_id_breaks_full_tie(self):
        entries = [entry(9, "a"), entry(4, "b"), entry(6, "c")]
        assert select_survivor(entries).id == 4


class TestSeriesEntryPruner:
    @pytest.fixture
    def pruner(self, catalog, locks):
        return SeriesEntryPruner(catalog, locks)

    def test_keeps_most_recent_only(self, pruner, catalog):
        for e in [entry(None, "s1e1", 1), entry(None, "s1e2", 3), entry(None, "s1e3", 2)]:
            catalog.add(e)

        removed = pruner.prune_series("dark")

        assert removed == 2
        assert [e.content_id for e in catalog.series_entries("dark")] == ["s1e2"]

    def test_other_entries_untouched(self, pruner, catalog):
        catalog.add(entry(None, "s1e1", 1))
        catalog.add(entry(None, "s1e2", 2))
        catalog.add(entry(None, "movie", 0, series_id=None))
        catalog.add(entry(None, "lost-1", 0, series_id="lost"))

        pruner.prune_series("dark")

        assert sorted(e.content_id for e in catalog.entries.values()) == [
            "lost-1",
            "movie",
            "s1e2",
        ]

    def test_single_entry_no_removal(self, pruner, catalog):
        catalog.add(entry(None, "s1e1"))

        assert pruner.prune_series("dark") == 0
        assert catalog.calls["remove"] == 0

    def test_unknown_series(self, pruner):
        assert pruner.prune_series("inconnue") == 0

    def test_empty_series_id_rejected(self, pruner):
        with pytest.raises(InvalidInputError):
            pruner.prune_series("")

    def test_entries_removed_by_host_not_counted(self, locks):
        catalog = MagicMock(spec=IContinuationCatalog)
        catalog.list_all.return_value = [entry(1, "a", 1), entry(2, "b", 2), entry(3, "c", 3)]
        catalog.remove.side_effect = [True, False]

        removed = SeriesEntryPruner(catalog, locks).prune_series("dark")

        assert removed == 1
        assert sorted(c.args[0] for c in catalog.remove.call_args_list) == [1, 2]

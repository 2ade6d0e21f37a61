"""
test_search_store.py
--------------------
Tests for SearchStore: query thresholds, filters and recent searches.
"""
import pytest

from daybook.search.search_engine import SearchFilters
from daybook.stores import EntryStore, SearchStore


@pytest.fixture
def store(test_db):
    """SearchStore over a database holding a few entries."""
    entries = EntryStore(test_db)
    entries.create({"title": "", "content": "Sunrise at the beach", "mood": "great"})
    entries.create({"title": "", "content": "Sunday market", "mood": "okay"})
    entries.create({"title": "", "content": "Late meeting"})
    return SearchStore(test_db)


class TestSearchStoreQueries:
    """Tests for run()."""

    def test_snippet_results(self, store):
        """Unfiltered searches return highlighted snippets."""
        store.set_query("sunrise")
        results = store.run()

        assert len(results) == 1
        assert "<<Sunrise>>" in results[0].snippet
        assert [e.content for e in store.entries] == ["Sunrise at the beach"]

    def test_short_query_clears(self, store):
        """Queries under two characters do nothing without filters."""
        store.set_query("su")
        assert len(store.run()) == 2

        store.set_query("s")
        assert store.run() == []
        assert store.entries == []
        assert store.recent_searches == ["su"]

    def test_filters_only(self, store):
        """Filters run without a query and preview the content."""
        store.set_filters(SearchFilters(mood="okay"))
        assert store.has_active_filters

        results = store.run()
        assert [r.snippet for r in results] == ["Sunday market"]
        assert store.recent_searches == []

    def test_filters_with_query(self, store):
        """A query narrows filtered results."""
        store.set_query("sun")
        store.set_filters(SearchFilters(mood="great"))
        assert [r.title for r in store.run()] == ["Sunrise at the beach"]

    def test_clear_filters(self, store):
        """clear_filters() drops back to text search."""
        store.set_filters(SearchFilters(mood="great"))
        store.clear_filters()
        assert not store.has_active_filters

    def test_error_recorded(self, store):
        """Failures are kept in error and clear the results."""
        store.set_query("sunrise")
        store.run()
        store.set_filters(SearchFilters(mood="ecstatic"))

        assert store.run() == []
        assert store.error
        assert store.is_loading is False

    def test_refresh_reruns(self, store):
        """refresh() reruns the current query."""
        store.set_query("meeting")
        store.refresh()
        assert [r.title for r in store.results] == ["Late meeting"]


class TestRecentSearches:
    """Tests for the recent search list."""

    def test_most_recent_first_without_duplicates(self, store):
        """Repeats move to the front, ignoring case."""
        for query in ("beach", "market", "Beach"):
            store.add_to_recent_searches(query)
        assert store.recent_searches == ["Beach", "market"]

    def test_capped(self, store):
        """Only the ten latest searches are kept."""
        for i in range(12):
            store.add_to_recent_searches(f"query {i}")
        assert len(store.recent_searches) == 10
        assert store.recent_searches[0] == "query 11"
        assert "query 1" not in store.recent_searches

    def test_blank_ignored(self, store):
        """Blank queries are not recorded."""
        store.add_to_recent_searches("   ")
        assert store.recent_searches == []

    def test_clear(self, store):
        """clear_recent_searches() empties the list."""
        store.add_to_recent_searches("x y")
        store.clear_recent_searches()
        assert store.recent_searches == []

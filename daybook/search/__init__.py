"""
Full-text search over journal entries.

- search_index: FTS5 table and trigger ownership (SearchIndexManager)
- search_engine: ranked search, filters and calendar queries (SearchEngine)
- cli: daybook-search command group
"""
from .search_engine import SearchEngine, SearchFilters, SearchResult
from .search_index import SearchIndexManager

__all__ = ["SearchEngine", "SearchFilters", "SearchResult", "SearchIndexManager"]

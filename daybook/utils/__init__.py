"""
Text and date helpers.
"""
from .dates import (
    group_entries_by_date,
    local_day_bounds,
    local_month_bounds,
    storage_bound,
    to_local,
    to_utc_naive,
    utc_now,
)
from .text import generate_snippet, generate_title_from_content, get_preview, truncate

__all__ = [
    "group_entries_by_date",
    "local_day_bounds",
    "local_month_bounds",
    "storage_bound",
    "to_local",
    "to_utc_naive",
    "utc_now",
    "generate_snippet",
    "generate_title_from_content",
    "get_preview",
    "truncate",
]

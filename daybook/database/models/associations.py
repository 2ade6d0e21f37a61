"""
Association Tables
-------------------

Many-to-many relationship tables for the Daybook database.

entry_tags links entries with tags. Rows have no identity of their own
and disappear with either side (ON DELETE CASCADE).
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, String, Table

# --- Local imports ---
from .base import Base

entry_tags = Table(
    "entry_tags",
    Base.metadata,
    Column(
        "entry_id",
        String(36),
        ForeignKey("entries.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

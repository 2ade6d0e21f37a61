"""
Enumeration Types
------------------

Enum classes for the Daybook database models.

Enums:
    - Mood: How the writer felt (great, good, okay, bad, terrible)
    - SyncStatus: Replication bookkeeping state of an entry

Functions:
    - dominant_mood: Mode of a list of moods, first occurrence wins ties
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import Iterable, List, Optional


class Mood(str, Enum):
    """
    Enumeration of entry moods, best to worst.
    - GREAT: Feeling fantastic
    - GOOD: Feeling positive
    - OKAY: Feeling neutral
    - BAD: Not feeling great
    - TERRIBLE: Feeling really down
    """

    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    BAD = "bad"
    TERRIBLE = "terrible"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available mood choices."""
        return [mood.value for mood in cls]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()

    @property
    def emoji(self) -> str:
        """Get the emoji shown next to the mood."""
        emoji_map = {
            Mood.GREAT: "😊",
            Mood.GOOD: "🙂",
            Mood.OKAY: "😐",
            Mood.BAD: "😔",
            Mood.TERRIBLE: "😢",
        }
        return emoji_map[self]


class SyncStatus(str, Enum):
    """
    Replication bookkeeping state.

    Every local mutation resets an entry to PENDING. Nothing in this
    package moves an entry to SYNCED or CONFLICT.
    """

    PENDING = "pending"
    SYNCED = "synced"
    CONFLICT = "conflict"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available sync status choices."""
        return [status.value for status in cls]


def dominant_mood(moods: Iterable[Mood]) -> Optional[Mood]:
    """
    Pick the most frequent mood of a day.

    Args:
        moods: Moods in creation order

    Returns:
        The mode; among tied moods the one seen first. None if empty.

    Examples:
        >>> dominant_mood([Mood.BAD, Mood.GOOD, Mood.GOOD])
        <Mood.GOOD: 'good'>
        >>> dominant_mood([Mood.OKAY, Mood.GREAT]) is Mood.OKAY
        True
    """
    counts: dict = {}
    for mood in moods:
        counts[mood] = counts.get(mood, 0) + 1
    if not counts:
        return None
    # dicts keep insertion order, so max() returns the first of the tied moods
    return max(counts, key=lambda mood: counts[mood])

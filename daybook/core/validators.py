#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for Daybook operations.

Provides type-safe conversion, validation, and normalization functions
used by the repositories, the search engine and the CLI.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .exceptions import ValidationError


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or data[field] is None:
                raise ValidationError(f"Required field '{field}' missing or empty")
            if isinstance(data[field], str) and not data[field].strip():
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Args:
            value: Value to normalize

        Returns:
            Stripped string, or None for empty/None input
        """
        if value is None:
            return None
        normalized = str(value).strip()
        return normalized or None

    @staticmethod
    def normalize_tag_name(value: Any) -> Optional[str]:
        """
        Normalize a tag name for storage and comparison.

        Tag names are unique case-insensitively, so they are stored
        trimmed and lowercased.

        Args:
            value: Raw tag name

        Returns:
            Normalized tag name, or None if nothing is left
        """
        normalized = DataValidator.normalize_string(value)
        return normalized.lower() if normalized else None

    @staticmethod
    def normalize_mood(value: Any):
        """
        Convert a raw mood value into a Mood member.

        Args:
            value: Mood member, mood string (any case), or None

        Returns:
            Mood member or None

        Raises:
            ValidationError: If the value is not a known mood
        """
        from daybook.database.models.enums import Mood

        if value is None or value == "":
            return None
        if isinstance(value, Mood):
            return value
        try:
            return Mood(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid mood: '{value}'. Expected one of {Mood.choices()}"
            )

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer safely.

        Args:
            value: Value to convert

        Returns:
            Integer value or None
        """
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

#!/usr/bin/env python3
"""
Database configuration modules.

This package contains declarative configurations for database operations:
- schema_configs: Seed categories, additive column migrations, indexes
"""
from .schema_configs import (
    ADDITIVE_COLUMNS,
    DEFAULT_CATEGORIES,
    SECONDARY_INDEXES,
    AdditiveColumn,
    DefaultCategory,
)

__all__ = [
    "ADDITIVE_COLUMNS",
    "DEFAULT_CATEGORIES",
    "SECONDARY_INDEXES",
    "AdditiveColumn",
    "DefaultCategory",
]

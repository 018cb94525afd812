"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import BaseRepository
from .record_repository import RecordRepository
from .query_builder import RecordQueryBuilder
from .specifications import Specification
from .record_specifications import ColumnContainsSpec

__all__ = [
    "BaseRepository",
    "RecordRepository",
    "RecordQueryBuilder",
    "Specification",
    "ColumnContainsSpec",
]

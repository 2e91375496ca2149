"""
Service layer for migration runs.

This package composes the source listers, the destination existence index and
the transfer pipeline into a complete migration.
"""

from .existence_index import build_existence_index, existence_key
from .migration_service import NOTHING_TO_MIGRATE, MigrationService, filter_candidates

__all__ = [
    "build_existence_index",
    "existence_key",
    "filter_candidates",
    "MigrationService",
    "NOTHING_TO_MIGRATE",
]

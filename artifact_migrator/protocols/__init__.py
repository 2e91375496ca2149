"""
Protocols for type safety.

This package provides protocols that define the interfaces the migration
service depends on, enabling alternative implementations and test doubles.
"""

from .progress_protocol import NullProgress, ProgressProtocol
from .source_protocol import SourceListerProtocol

__all__ = ["NullProgress", "ProgressProtocol", "SourceListerProtocol"]

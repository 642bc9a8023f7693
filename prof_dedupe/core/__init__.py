"""
Core domain layer for prof-dedupe.

This package contains pure business logic with no external dependencies
beyond the edit-distance library. All code here should be testable without
I/O operations.
"""

from __future__ import annotations

__all__ = []

"""Utility functions for fhtelemetry.

This module provides schema size and layout helpers.
"""

from __future__ import annotations

from .sizing import field_layout, required_size, unmapped_ranges

__all__ = [
    "required_size",
    "field_layout",
    "unmapped_ranges",
]

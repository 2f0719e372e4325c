"""Samplers for media server libraries.

This module provides utilities for drawing random item samples from
user-selected libraries.
"""

from .random_item_sampler import (
    FALLBACK_ITEM_TYPES,
    PER_LIBRARY_LIMIT,
    SAMPLE_DTO_OPTIONS,
    RandomItemSampler,
    get_include_item_types,
)

__all__ = [
    'FALLBACK_ITEM_TYPES',
    'PER_LIBRARY_LIMIT',
    'SAMPLE_DTO_OPTIONS',
    'RandomItemSampler',
    'get_include_item_types',
]

"""
Pattern matcher configuration.
"""

from dataclasses import dataclass


@dataclass
class PatternConfig:
    """Pattern matcher configuration."""

    cache_size: int = 1024  # compiled patterns kept in the LRU cache

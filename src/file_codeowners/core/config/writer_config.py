"""
Writer configuration.
"""

from dataclasses import dataclass


@dataclass
class WriterConfig:
    """Writer configuration for atomic file output."""

    fsync: bool = True  # fsync the temporary file before it replaces the target
    default_charset: str = "utf-8"

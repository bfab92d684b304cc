"""
Shared utilities for pattern matching and structured logging.
"""

from file_codeowners.core.utils.logging import configure_logging, log_operation
from file_codeowners.core.utils.patterns import PatternMatcher, compile_pattern, normalize_path

__all__ = [
    "PatternMatcher",
    "compile_pattern",
    "configure_logging",
    "log_operation",
    "normalize_path",
]

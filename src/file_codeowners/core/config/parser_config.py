"""
Parser configuration.
"""

from dataclasses import dataclass


@dataclass
class ParserConfig:
    """Parser configuration."""

    # Treat lines starting with "@" as alias definitions
    aliases: bool = False

"""
Main configuration class that composes all configs.
"""

import codecs
import json
import os

from dotenv import load_dotenv

from file_codeowners.core.config.locator_config import DEFAULT_CANDIDATES, LocatorConfig
from file_codeowners.core.config.logging_config import LoggingConfig
from file_codeowners.core.config.parser_config import ParserConfig
from file_codeowners.core.config.pattern_config import PatternConfig
from file_codeowners.core.config.writer_config import WriterConfig

# Load environment variables from a .env file
load_dotenv()

LOG_FORMATS = {"console", "json"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        self.parser = ParserConfig(
            aliases=_env_flag("CODEOWNERS_PARSE_ALIASES", "false"),
        )

        self.writer = WriterConfig(
            fsync=_env_flag("CODEOWNERS_WRITE_FSYNC", "true"),
            default_charset=os.getenv("CODEOWNERS_DEFAULT_CHARSET", "utf-8"),
        )

        self.patterns = PatternConfig(
            cache_size=int(os.getenv("CODEOWNERS_PATTERN_CACHE_SIZE", "1024")),
        )

        candidates = os.getenv("CODEOWNERS_LOCATIONS")
        try:
            self.locator = LocatorConfig(candidates=json.loads(candidates)) if candidates else LocatorConfig()
        except json.JSONDecodeError:
            # Fallback to default locations if JSON parsing fails
            self.locator = LocatorConfig(candidates=list(DEFAULT_CANDIDATES))

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format=os.getenv("LOG_FORMAT", "console").lower(),
            file_path=os.getenv("LOG_FILE_PATH"),
        )

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if self.logging.level not in LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got {self.logging.level!r}")

        if self.logging.format not in LOG_FORMATS:
            errors.append(f"LOG_FORMAT must be one of {sorted(LOG_FORMATS)}, got {self.logging.format!r}")

        if self.patterns.cache_size <= 0:
            errors.append("CODEOWNERS_PATTERN_CACHE_SIZE must be positive")

        try:
            codecs.lookup(self.writer.default_charset)
        except LookupError:
            errors.append(f"CODEOWNERS_DEFAULT_CHARSET is not a known encoding: {self.writer.default_charset!r}")

        if not isinstance(self.locator.candidates, list) or not all(
            isinstance(c, str) and c for c in self.locator.candidates
        ):
            errors.append("CODEOWNERS_LOCATIONS must be a JSON list of non-empty strings")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


# Global config instance
config = Config()

"""
CODEOWNERS locator configuration.
"""

from dataclasses import dataclass, field

DEFAULT_CANDIDATES = [
    "CODEOWNERS",
    ".github/CODEOWNERS",
    "docs/CODEOWNERS",
    ".gitlab/CODEOWNERS",
]


@dataclass
class LocatorConfig:
    """Where to look for a CODEOWNERS file inside a directory, in order."""

    candidates: list[str] = field(default_factory=lambda: list(DEFAULT_CANDIDATES))

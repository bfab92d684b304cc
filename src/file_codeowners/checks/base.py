"""Base check interface for CODEOWNERS validation.

This module defines the abstract base class that all checks must implement.
"""

from abc import ABC, abstractmethod
from typing import Any

from file_codeowners.core.models import Violation


class BaseCheck(ABC):
    """Abstract base class for all CODEOWNERS checks.

    Attributes:
        name: Unique identifier for the check.
        description: Human-readable description of what the check validates.
        parameter_patterns: Context keys this check reads.
        examples: Example contexts for documentation.
    """

    name: str = ""
    description: str = ""
    parameter_patterns: list[str] = []
    examples: list[dict[str, Any]] = []

    @abstractmethod
    def evaluate(self, context: dict[str, Any]) -> list[Violation]:
        """Run the check.

        Args:
            context: Check inputs, keyed by the names in ``parameter_patterns``.

        Returns:
            A list of Violation objects, empty when the check passes.
        """
        pass

    def validate(self, context: dict[str, Any]) -> bool:
        """Return True when the check reports no violations."""
        return len(self.evaluate(context)) == 0

    def get_description(self) -> dict[str, Any]:
        """Get check description for listing available checks."""
        return {
            "name": self.name,
            "description": self.description,
            "parameter_patterns": self.parameter_patterns,
            "examples": self.examples,
        }

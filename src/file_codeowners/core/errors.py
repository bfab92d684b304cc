"""
Core error classes for file_codeowners.
"""


class CodeownersError(Exception):
    """Base class for all CODEOWNERS errors."""

    pass


class ParseError(CodeownersError):
    """Raised when a CODEOWNERS line cannot be recognized."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"Parse error on line {line_number}: {line}")


class UsageError(CodeownersError):
    """Raised when a required argument is missing or empty."""

    def __init__(self, usage: str) -> None:
        self.usage = usage
        super().__init__(f"Usage: {usage}")


class GitError(CodeownersError):
    """Raised when git is unavailable or a git command fails."""

    pass

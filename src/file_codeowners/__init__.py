"""
Read, query, edit and write CODEOWNERS files.
"""

from file_codeowners.codeowners.document import Codeowners
from file_codeowners.core.errors import CodeownersError, GitError, ParseError, UsageError
from file_codeowners.core.models import AliasLine, BlankLine, CommentLine, Line, MatchResult, RuleLine
from file_codeowners.core.utils.patterns import PatternMatcher

__version__ = "0.1.0"

__all__ = [
    "AliasLine",
    "BlankLine",
    "Codeowners",
    "CodeownersError",
    "CommentLine",
    "GitError",
    "Line",
    "MatchResult",
    "ParseError",
    "PatternMatcher",
    "RuleLine",
    "UsageError",
]

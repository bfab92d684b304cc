"""
Checks for CODEOWNERS files, for use from test suites and CI.
"""

from file_codeowners.checks.codeowners import (
    CodeownersGitFilesCheck,
    CodeownersSyntaxCheck,
    codeowners_git_files_ok,
    codeowners_syntax_ok,
)

__all__ = [
    "CodeownersGitFilesCheck",
    "CodeownersSyntaxCheck",
    "codeowners_git_files_ok",
    "codeowners_syntax_ok",
]

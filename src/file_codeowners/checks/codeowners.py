"""Checks that a repository's CODEOWNERS file is valid and complete.

These back test suites and CI jobs: one check parses the file, the other
verifies every tracked file is either owned or explicitly listed as unowned.
"""

from pathlib import Path
from typing import Any

import structlog

from file_codeowners.checks.base import BaseCheck
from file_codeowners.codeowners.document import Codeowners
from file_codeowners.core.errors import GitError, ParseError
from file_codeowners.core.models import Severity, Violation
from file_codeowners.repo.git import git_ls_files, git_toplevel
from file_codeowners.repo.locate import find_codeowners_in_directory, find_nearest_codeowners

logger = structlog.get_logger(__name__)


def _error_details(path: str | Path, error: Exception) -> dict[str, Any]:
    details: dict[str, Any] = {"path": str(path), "error": str(error)}
    if isinstance(error, ParseError):
        details["line_number"] = error.line_number
        details["line"] = error.line
    return details


class CodeownersSyntaxCheck(BaseCheck):
    """Validates that a CODEOWNERS file exists and parses."""

    name = "codeowners_syntax"
    description = "Validates that the CODEOWNERS file can be parsed"
    parameter_patterns = ["path"]
    examples = [{}, {"path": ".github/CODEOWNERS"}]

    def evaluate(self, context: dict[str, Any]) -> list[Violation]:
        """Evaluate CODEOWNERS syntax.

        Args:
            context: Optional 'path'; when absent the nearest CODEOWNERS file
                above the working directory is used.

        Returns:
            A violation if no file was found or it could not be read or parsed.
        """
        path = context.get("path") or find_nearest_codeowners()
        if not path:
            return [
                Violation(
                    rule_description=self.description,
                    severity=Severity.HIGH,
                    message="No CODEOWNERS file could be found",
                    how_to_fix="Add a CODEOWNERS file to the repository root or .github/ directory.",
                )
            ]

        try:
            Codeowners.parse_from_filepath(path)
        except (ParseError, OSError, UnicodeDecodeError) as e:
            return [
                Violation(
                    rule_description=self.description,
                    severity=Severity.HIGH,
                    message=f"Check syntax: {path}: {e}",
                    details=_error_details(path, e),
                    how_to_fix="Each line must be a comment, a blank line, or a pattern followed by owners.",
                )
            ]

        logger.debug("codeowners_syntax_ok", path=str(path))
        return []


class CodeownersGitFilesCheck(BaseCheck):
    """Validates that every file tracked by git has an owner or is listed as unowned."""

    name = "codeowners_git_files"
    description = "Validates that every tracked file is owned or listed in the unowned section"
    parameter_patterns = ["repo_path"]
    examples = [{"repo_path": "."}]

    def evaluate(self, context: dict[str, Any]) -> list[Violation]:
        """Evaluate ownership coverage of tracked files.

        Args:
            context: Optional 'repo_path' (defaults to the working directory).

        Returns:
            One violation per file that is unowned but not listed as such, or
            owned but still listed as unowned. Outside a git repository, or
            when git cannot list files, the check is skipped and passes.
        """
        repo_path = context.get("repo_path") or "."

        toplevel = git_toplevel(repo_path)
        if toplevel is None:
            logger.info("codeowners_git_files_skipped", reason="No git repo could be found.", repo=str(repo_path))
            return []

        codeowners_path = find_codeowners_in_directory(toplevel)
        if codeowners_path is None:
            return [
                Violation(
                    rule_description=self.description,
                    severity=Severity.HIGH,
                    message=f"No CODEOWNERS file could be found in repo {repo_path}",
                    how_to_fix="Add a CODEOWNERS file to the repository root or .github/ directory.",
                )
            ]

        try:
            codeowners = Codeowners.parse_from_filepath(codeowners_path)
        except (ParseError, OSError, UnicodeDecodeError) as e:
            return [
                Violation(
                    rule_description=self.description,
                    severity=Severity.HIGH,
                    message=f"Parse {codeowners_path}: {e}",
                    details=_error_details(codeowners_path, e),
                )
            ]

        try:
            files = git_ls_files(toplevel)
        except GitError as e:
            logger.info("codeowners_git_files_skipped", reason=f"git ls-files failed: {e}", repo=str(toplevel))
            return []

        violations: list[Violation] = []
        for filepath in files:
            match = codeowners.match(filepath)
            listed_unowned = codeowners.is_unowned(filepath)

            if match is None and not listed_unowned:
                violations.append(
                    Violation(
                        rule_description=self.description,
                        severity=Severity.MEDIUM,
                        message=f"File is unowned: {filepath}",
                        details={"path": filepath},
                        how_to_fix="Add a pattern covering this file, or list it in the unowned section.",
                    )
                )
            elif match is not None and listed_unowned:
                violations.append(
                    Violation(
                        rule_description=self.description,
                        severity=Severity.MEDIUM,
                        message=f"File is owned but listed as unowned: {filepath}",
                        details={"path": filepath, "pattern": match.pattern, "owners": match.owners},
                        how_to_fix="Remove the file from the unowned section.",
                    )
                )

        logger.info(
            "codeowners_git_files_checked",
            repo=str(toplevel),
            files=len(files),
            violations=len(violations),
        )
        return violations


def codeowners_syntax_ok(path: str | Path | None = None) -> bool:
    """Check the syntax of a CODEOWNERS file, searching up the tree when no path is given."""
    return CodeownersSyntaxCheck().validate({"path": path})


def codeowners_git_files_ok(repo_path: str | Path = ".") -> bool:
    """Check that every file tracked in a git repository is accounted for in CODEOWNERS."""
    return CodeownersGitFilesCheck().validate({"repo_path": repo_path})

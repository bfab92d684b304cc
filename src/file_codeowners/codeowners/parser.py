"""
Line grammar for CODEOWNERS files.

Turns decoded text lines into typed Line models and collects the paths
listed in the trailing unowned section.
"""

import re
from collections.abc import Iterable, Iterator
from typing import IO, Any, NamedTuple

import structlog

from file_codeowners.core.constants import UNOWNED_MARKER
from file_codeowners.core.errors import ParseError
from file_codeowners.core.models import AliasLine, BlankLine, CommentLine, Line, RuleLine

logger = structlog.get_logger(__name__)

OWNER_RE = r'(?:@+"[^"]*")|(?:\S+)'

_COMMENT_RE = re.compile(r"^\s*#(.*)")
_PROJECT_RE = re.compile(r"^\s*Project:\s*(.*?)\s*$", re.IGNORECASE)
_ALIAS_RE = re.compile(rf"^\s*@({OWNER_RE})\s+(.+)")
# The pattern ends at the first whitespace not escaped by a backslash
_RULE_RE = re.compile(r"^\s*(.+?)(?<!\\)\s+(.+)")
_OWNERS_RE = re.compile(OWNER_RE)
_UNOWNED_RE = re.compile(r"# (.+)")


class ParsedDocument(NamedTuple):
    lines: list[Line]
    unowned: set[str]


def parse_owners(text: str) -> list[str]:
    """Split an owner list into tokens, keeping quoted ``@"..."`` owners whole."""
    return _OWNERS_RE.findall(text)


def project_from_comment(text: str) -> str | None:
    """Return the project named by a ``Project:`` comment body.

    Returns None when the comment is not a project comment or names no project.
    """
    match = _PROJECT_RE.match(text)
    if match is None:
        return None
    return match.group(1) or None


def is_project_comment(text: str) -> bool:
    return _PROJECT_RE.match(text) is not None


def _chomp(line: Any) -> str:
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def iter_stream_lines(fh: IO[Any]) -> Iterator[str]:
    """Yield chomped text lines from a text or binary stream."""
    for raw in fh:
        yield _chomp(raw)


def parse_lines(source: Iterable[str], aliases: bool = False) -> ParsedDocument:
    """
    Parse CODEOWNERS text lines.

    Args:
        source: Lines without trailing newlines.
        aliases: Recognize ``@name owner...`` lines as alias definitions.

    Returns:
        The typed lines in file order and the set of unowned paths.

    Raises:
        ParseError: On the first line that fits no known shape.
    """
    lines: list[Line] = []
    unowned: set[str] = set()
    current_project: str | None = None

    iterator = iter(source)
    for lineno, line in enumerate(iterator, 1):
        if line == UNOWNED_MARKER:
            break

        comment = _COMMENT_RE.match(line)
        if comment:
            text = comment.group(1)
            project = None
            if is_project_comment(text):
                project = current_project = project_from_comment(text)
            lines.append(CommentLine(text=text, project=project))
            continue

        if not line.strip():
            lines.append(BlankLine())
            continue

        if aliases:
            alias = _ALIAS_RE.match(line)
            if alias:
                lines.append(AliasLine(name=alias.group(1), owners=parse_owners(alias.group(2))))
                continue

        rule = _RULE_RE.match(line)
        if rule:
            lines.append(
                RuleLine(
                    pattern=rule.group(1),
                    owners=parse_owners(rule.group(2)),
                    project=current_project,
                )
            )
            continue

        logger.warning("codeowners_parse_error", line_number=lineno, line=line)
        raise ParseError(lineno, line)

    # Whatever follows the marker is the unowned section
    for line in iterator:
        entry = _UNOWNED_RE.search(line)
        if entry:
            unowned.add(entry.group(1))

    logger.debug("codeowners_parsed", lines=len(lines), unowned=len(unowned), aliases=aliases)
    return ParsedDocument(lines=lines, unowned=unowned)

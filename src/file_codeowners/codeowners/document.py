"""
In-memory CODEOWNERS document.

A document is the ordered list of lines of a CODEOWNERS file plus the set of
paths listed in its unowned section. Derived views (owners, patterns,
projects, aliases and the most-recent-first rule list used for matching) are
memoized and dropped by every mutation.
"""

from __future__ import annotations

import io
import os
from collections.abc import Iterable, Sequence
from typing import IO, Any

import structlog

from file_codeowners.codeowners.parser import iter_stream_lines, parse_lines, project_from_comment
from file_codeowners.codeowners.serializer import render_lines, write_atomic
from file_codeowners.core.config import config
from file_codeowners.core.errors import UsageError
from file_codeowners.core.models import AliasLine, BlankLine, CommentLine, Line, MatchResult, RuleLine
from file_codeowners.core.utils.logging import log_operation

logger = structlog.get_logger(__name__)


def _owner_list(owners: str | Sequence[str] | None) -> list[str]:
    if owners is None:
        return []
    if isinstance(owners, str):
        return [owners] if owners else []
    return list(owners)


class Codeowners:
    """
    A parsed CODEOWNERS file.

    Example:
        codeowners = Codeowners.parse("CODEOWNERS")
        match = codeowners.match("src/app.py")
        codeowners.rename_owner("@alice", "@bob")
        codeowners.write_to_filepath("CODEOWNERS")
    """

    def __init__(self, lines: Iterable[Line] | None = None, unowned: Iterable[str] | None = None):
        self._lines: list[Line] = list(lines or [])
        self._unowned: set[str] = set(unowned or [])

        self._owners: list[str] | None = None
        self._patterns: list[str] | None = None
        self._projects: list[str] | None = None
        self._aliases: dict[str, list[str]] | None = None
        self._match_lines: list[RuleLine] | None = None

    def __repr__(self) -> str:
        return f"Codeowners(lines={len(self._lines)}, unowned={len(self._unowned)})"

    # --- Parsing ---

    @classmethod
    def parse(cls, source: Any, aliases: bool | None = None) -> Codeowners:
        """
        Parse a CODEOWNERS file from any supported source.

        Args:
            source: A file path (str or PathLike), an open stream, a list or
                tuple of lines, or bytes holding UTF-8 content.
            aliases: Parse lines beginning with "@" as aliases. Defaults to
                the configured parser setting.

        Returns:
            The parsed document.
        """
        if isinstance(source, (list, tuple)):
            return cls.parse_from_array(source, aliases=aliases)
        if isinstance(source, bytes):
            return cls.parse_from_string(source, aliases=aliases)
        if hasattr(source, "read"):
            return cls.parse_from_fh(source, aliases=aliases)
        if isinstance(source, (str, os.PathLike)):
            return cls.parse_from_filepath(source, aliases=aliases)
        raise UsageError("Codeowners.parse(source)")

    @classmethod
    def parse_from_filepath(cls, path: str | os.PathLike[str], aliases: bool | None = None) -> Codeowners:
        """Parse a CODEOWNERS file from the filesystem."""
        if not path:
            raise UsageError("Codeowners.parse_from_filepath(path)")

        with open(path, encoding="utf-8", newline="\n") as fh:
            return cls.parse_from_fh(fh, aliases=aliases, source=os.fspath(path))

    @classmethod
    def parse_from_fh(cls, fh: IO[Any], aliases: bool | None = None, source: str | None = None) -> Codeowners:
        """Parse a CODEOWNERS file from an open text or binary stream.

        ``source`` names where the stream came from in log output.
        """
        if fh is None:
            raise UsageError("Codeowners.parse_from_fh(fh)")

        if aliases is None:
            aliases = config.parser.aliases

        with log_operation("parse_codeowners", source=source or getattr(fh, "name", "<stream>")):
            parsed = parse_lines(iter_stream_lines(fh), aliases=aliases)
        return cls(parsed.lines, parsed.unowned)

    @classmethod
    def parse_from_array(cls, lines: Sequence[str], aliases: bool | None = None) -> Codeowners:
        """Parse a CODEOWNERS file stored as a sequence of lines."""
        if lines is None:
            raise UsageError("Codeowners.parse_from_array(lines)")
        return cls.parse_from_string("\n".join(lines), aliases=aliases)

    @classmethod
    def parse_from_string(cls, text: str | bytes, aliases: bool | None = None) -> Codeowners:
        """Parse a CODEOWNERS file stored as a string. Bytes must be UTF-8."""
        if text is None:
            raise UsageError("Codeowners.parse_from_string(text)")
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        return cls.parse_from_fh(io.StringIO(text), aliases=aliases)

    # --- Writing ---

    def write_to_array(self, charset: str | None = None) -> list[str] | list[bytes]:
        """Format the file contents as a list of lines, encoded when charset is given."""
        return render_lines(self._lines, self._unowned, charset)

    def write_to_string(self, charset: str | None = None) -> str | bytes:
        """Format the file contents as a string, or as bytes when charset is given."""
        text = "".join(f"{line}\n" for line in render_lines(self._lines, self._unowned))
        if charset is not None:
            return text.encode(charset)
        return text

    def write_to_fh(self, fh: IO[Any], charset: str | None = None) -> None:
        """Format the file contents and write them to a stream.

        A text stream is written to as-is; with a charset, encoded lines are
        written, so the stream must be binary.
        """
        if fh is None:
            raise UsageError("Codeowners.write_to_fh(fh)")

        if charset is None:
            for line in render_lines(self._lines, self._unowned):
                fh.write(f"{line}\n")
        else:
            for encoded in render_lines(self._lines, self._unowned, charset):
                fh.write(encoded + b"\n")

    def write_to_filepath(self, path: str | os.PathLike[str], charset: str | None = None) -> None:
        """Write the contents of the file to the filesystem atomically."""
        if not path:
            raise UsageError("Codeowners.write_to_filepath(path)")

        charset = charset or config.writer.default_charset
        with log_operation("write_codeowners", path=os.fspath(path), charset=charset):
            data = b"".join(line + b"\n" for line in render_lines(self._lines, self._unowned, charset))
            write_atomic(path, data)

    # --- Queries ---

    @property
    def lines(self) -> tuple[Line, ...]:
        """Copies of the document lines, in order."""
        return tuple(line.model_copy(deep=True) for line in self._lines)

    def match(self, path: str, expand: bool = False) -> MatchResult | None:
        """
        Find the rule that owns a path.

        Rules are checked in reverse declaration order, so the last matching
        rule in the file wins.

        Args:
            path: Repository-relative path to look up.
            expand: Replace owners that name an alias with the alias's owners.
                Expansion is a single level; aliases inside aliases stay as-is.

        Returns:
            A snapshot of the matching rule, or None when nothing matches.
        """
        if not path:
            raise UsageError("Codeowners.match(path)")

        alias_map = self.aliases() if expand else {}

        for line in self._rules_most_recent_first():
            if line.matcher().matches(path):
                owners: list[str] = []
                for owner in line.owners:
                    owners.extend(alias_map.get(owner, [owner]))
                return MatchResult(pattern=line.pattern, owners=owners, project=line.project)

        return None

    def owners(self, pattern: str | None = None) -> list[str]:
        """
        Get the sorted owners defined in the file.

        Args:
            pattern: Only return owners of rules with exactly this pattern.

        Returns:
            Sorted, unique owners. Without a pattern, alias owners are included.
        """
        if not pattern and self._owners is not None:
            return list(self._owners)

        found: set[str] = set()
        for line in self._lines:
            if pattern:
                if isinstance(line, RuleLine) and line.pattern == pattern:
                    found.update(line.owners)
            elif isinstance(line, (RuleLine, AliasLine)):
                found.update(line.owners)

        owners = sorted(found)
        if not pattern:
            self._owners = owners
        return list(owners)

    def patterns(self, owner: str | None = None) -> list[str]:
        """
        Get the sorted patterns defined in the file.

        Args:
            owner: Only return patterns that list this owner.

        Returns:
            Sorted, unique patterns.
        """
        if not owner and self._patterns is not None:
            return list(self._patterns)

        found = {
            line.pattern
            for line in self._lines
            if isinstance(line, RuleLine) and (not owner or owner in line.owners)
        }

        patterns = sorted(found)
        if not owner:
            self._patterns = patterns
        return list(patterns)

    def projects(self) -> list[str]:
        """Get the sorted names of all projects defined in the file."""
        if self._projects is None:
            self._projects = sorted(
                {line.project for line in self._lines if isinstance(line, (CommentLine, RuleLine)) and line.project}
            )
        return list(self._projects)

    def aliases(self) -> dict[str, list[str]]:
        """Get all aliases, keyed by the ``@name`` token rules use to reference them."""
        if self._aliases is None:
            self._aliases = {line.token: list(line.owners) for line in self._lines if isinstance(line, AliasLine)}
        return {token: list(owners) for token, owners in self._aliases.items()}

    # --- Mutations ---

    def update_owners(self, pattern: str, owners: str | Sequence[str]) -> int:
        """
        Set new owners for a pattern. Every rule with that pattern is updated.

        Returns:
            Number of rules updated; 0 if the pattern is not in the file.
        """
        new_owners = _owner_list(owners)
        if not pattern or not new_owners:
            raise UsageError("Codeowners.update_owners(pattern, owners)")

        self._clear()

        count = 0
        for line in self._lines:
            if isinstance(line, RuleLine) and line.pattern == pattern:
                line.owners = list(new_owners)
                count += 1

        logger.debug("owners_updated", pattern=pattern, count=count)
        return count

    def update_owners_by_project(self, project: str, owners: str | Sequence[str]) -> int:
        """
        Set new owners for every rule under a project.

        Returns:
            Number of rules updated; 0 if the project is not in the file.
        """
        new_owners = _owner_list(owners)
        if not project or not new_owners:
            raise UsageError("Codeowners.update_owners_by_project(project, owners)")

        self._clear()

        count = 0
        for line in self._lines:
            if isinstance(line, RuleLine) and line.project == project:
                line.owners = list(new_owners)
                count += 1

        logger.debug("owners_updated_by_project", project=project, count=count)
        return count

    def rename_owner(self, old_owner: str, new_owner: str) -> int:
        """
        Rename an owner everywhere it appears, in rules and aliases.

        Returns:
            Total number of replaced owner entries.
        """
        if not old_owner or not new_owner:
            raise UsageError("Codeowners.rename_owner(old_owner, new_owner)")

        self._clear()

        count = 0
        for line in self._lines:
            if not isinstance(line, (RuleLine, AliasLine)):
                continue
            for i, owner in enumerate(line.owners):
                if owner == old_owner:
                    line.owners[i] = new_owner
                    count += 1

        logger.debug("owner_renamed", old=old_owner, new=new_owner, count=count)
        return count

    def rename_project(self, old_project: str, new_project: str) -> int:
        """
        Rename a project, rewriting the ``Project:`` comments that declare it.

        Returns:
            Number of lines (comments and rules) that changed.
        """
        if not old_project or not new_project:
            raise UsageError("Codeowners.rename_project(old_project, new_project)")

        self._clear()

        count = 0
        for line in self._lines:
            if not isinstance(line, (CommentLine, RuleLine)) or line.project != old_project:
                continue
            line.project = new_project
            if isinstance(line, CommentLine):
                line.text = f" Project: {new_project}"
            count += 1

        logger.debug("project_renamed", old=old_project, new=new_project, count=count)
        return count

    def append(self, **fields: Any) -> None:
        """
        Append a line.

        Examples:
            codeowners.append()                                  # blank line
            codeowners.append(comment=" Project: Web")
            codeowners.append(pattern="/web/**", owners=["@web"], project="Web")
            codeowners.append(alias="web", owners=["@alice"])
        """
        line = self._line_from_fields(fields)
        self._clear()
        self._lines.append(line)

    def prepend(self, **fields: Any) -> None:
        """Prepend a line. Takes the same fields as append()."""
        line = self._line_from_fields(fields)
        self._clear()
        self._lines.insert(0, line)

    @staticmethod
    def _line_from_fields(fields: dict[str, Any]) -> Line:
        if not fields:
            return BlankLine()

        keys = set(fields)
        if keys == {"comment"}:
            text = fields["comment"]
            if text is None:
                raise UsageError("Codeowners.append(comment=text)")
            return CommentLine(text=text, project=project_from_comment(text))

        owners = _owner_list(fields.get("owners"))
        if "pattern" in keys and keys <= {"pattern", "owners", "project"}:
            if not fields["pattern"] or not owners:
                raise UsageError("Codeowners.append(pattern=pattern, owners=owners)")
            return RuleLine(pattern=fields["pattern"], owners=owners, project=fields.get("project") or None)

        if keys == {"alias", "owners"}:
            if not fields["alias"] or not owners:
                raise UsageError("Codeowners.append(alias=name, owners=owners)")
            return AliasLine(name=fields["alias"].removeprefix("@"), owners=owners)

        raise UsageError(
            "Codeowners.append() | append(comment=text) | append(pattern=pattern, owners=owners[, project=name])"
            " | append(alias=name, owners=owners)"
        )

    # --- Unowned section ---

    def unowned(self) -> list[str]:
        """Get the sorted paths listed in the unowned section."""
        return sorted(self._unowned)

    def add_unowned(self, *paths: str) -> None:
        """
        Add paths to the unowned section.

        Does not check that the paths really match no rule; call match() first.
        """
        self._unowned.update(paths)

    def remove_unowned(self, *paths: str) -> None:
        """Remove paths from the unowned section. Paths not listed are ignored."""
        self._unowned.difference_update(paths)

    def is_unowned(self, path: str) -> bool:
        """Test whether a path is listed in the unowned section."""
        return path in self._unowned

    def clear_unowned(self) -> None:
        """Remove all paths from the unowned section."""
        self._unowned.clear()

    # --- Internals ---

    def _rules_most_recent_first(self) -> list[RuleLine]:
        if self._match_lines is None:
            self._match_lines = [line for line in reversed(self._lines) if isinstance(line, RuleLine)]
        return self._match_lines

    def _clear(self) -> None:
        self._owners = None
        self._patterns = None
        self._projects = None
        self._aliases = None
        self._match_lines = None

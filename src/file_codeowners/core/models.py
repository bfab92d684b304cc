from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from file_codeowners.core.utils.patterns import PatternMatcher


class CommentLine(BaseModel):
    """A comment line. ``text`` is everything after the leading ``#``."""

    kind: Literal["comment"] = "comment"
    text: str
    project: str | None = None


class RuleLine(BaseModel):
    """A pattern followed by its owners."""

    kind: Literal["rule"] = "rule"
    pattern: str
    owners: list[str]
    project: str | None = None

    _matcher: PatternMatcher | None = PrivateAttr(default=None)

    def matcher(self) -> PatternMatcher:
        """Return the matcher for this rule's pattern, building it on first use."""
        if self._matcher is None:
            self._matcher = PatternMatcher(self.pattern)
        return self._matcher


class AliasLine(BaseModel):
    """An owner alias: ``@name owner...``. ``name`` excludes the leading ``@``."""

    kind: Literal["alias"] = "alias"
    name: str
    owners: list[str]

    @property
    def token(self) -> str:
        """The form rules use to reference this alias."""
        return f"@{self.name}"


class BlankLine(BaseModel):
    kind: Literal["blank"] = "blank"


Line = Annotated[Union[CommentLine, RuleLine, AliasLine, BlankLine], Field(discriminator="kind")]


class MatchResult(BaseModel):
    """The rule that owns a path. A snapshot, detached from the document."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    owners: list[str]
    project: str | None = None


class Severity(str, Enum):
    """Severity of a check violation."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value


class Violation(BaseModel):
    """A single failed check, with enough context to fix it."""

    rule_description: str
    severity: Severity = Severity.MEDIUM
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    how_to_fix: str | None = None

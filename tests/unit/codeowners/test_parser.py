"""
Unit tests for file_codeowners/codeowners/parser.py and the Codeowners.parse* entry points.

Tests cover:
- line shapes: comments, project comments, blanks, rules, aliases
- owner tokenization, including quoted owners
- the unowned section
- parse errors
- every supported input source
"""

import io
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from file_codeowners.codeowners.document import Codeowners
from file_codeowners.codeowners.parser import parse_lines, parse_owners, project_from_comment
from file_codeowners.core.config import config
from file_codeowners.core.errors import ParseError, UsageError
from file_codeowners.core.models import AliasLine, BlankLine, CommentLine, RuleLine


class TestParseOwners:
    def test_splits_on_whitespace(self) -> None:
        assert parse_owners("@alice  @org/team\tbob@example.com") == ["@alice", "@org/team", "bob@example.com"]

    def test_keeps_quoted_owner_whole(self) -> None:
        assert parse_owners('@alice @"Core Team" @bob') == ["@alice", '@"Core Team"', "@bob"]


class TestProjectFromComment:
    def test_named_project(self) -> None:
        assert project_from_comment(" Project: Core ") == "Core"

    def test_label_is_case_insensitive(self) -> None:
        assert project_from_comment("project:Web") == "Web"

    def test_empty_name_is_no_project(self) -> None:
        assert project_from_comment(" Project:") is None

    def test_other_comment(self) -> None:
        assert project_from_comment(" just a comment") is None


class TestParseLines:
    def test_sample_document(self, sample_text: str) -> None:
        parsed = parse_lines(sample_text.split("\n"))

        kinds = [line.kind for line in parsed.lines]
        assert kinds == [
            "comment",
            "rule",
            "blank",
            "comment",
            "rule",
            "rule",
            "blank",
            "comment",
            "rule",
            "rule",
            "blank",
        ]
        assert parsed.lines[1] == RuleLine(pattern="*", owners=["@default-owner"])
        assert parsed.lines[3] == CommentLine(text=" Project: Core", project="Core")
        assert parsed.lines[4] == RuleLine(pattern="/src/**", owners=["@alice", '@"Core Team"'], project="Core")
        assert parsed.lines[7] == CommentLine(text="Project: Docs", project="Docs")
        assert parsed.lines[9] == RuleLine(pattern="docs/", owners=["@docs"], project="Docs")
        assert parsed.unowned == {"LICENSE", "src/unowned.txt"}

    def test_project_is_inherited_until_cleared(self) -> None:
        parsed = parse_lines(["# Project: A", "a  @x", "# unrelated", "b  @y", "# Project:", "c  @z"])

        rules = [line for line in parsed.lines if isinstance(line, RuleLine)]
        assert [rule.project for rule in rules] == ["A", "A", None]
        assert parsed.lines[4] == CommentLine(text=" Project:", project=None)

    def test_leading_whitespace_and_tabs(self) -> None:
        parsed = parse_lines(["   src/\t@a   @b", "  # indented comment", " \t "])

        assert parsed.lines == [
            RuleLine(pattern="src/", owners=["@a", "@b"]),
            CommentLine(text=" indented comment"),
            BlankLine(),
        ]

    def test_escaped_space_stays_in_pattern(self) -> None:
        parsed = parse_lines([r"docs/my\ file.txt  @docs"])

        assert parsed.lines == [RuleLine(pattern=r"docs/my\ file.txt", owners=["@docs"])]

    def test_alias_lines_when_enabled(self) -> None:
        parsed = parse_lines(["@infra  @alice @bob", "/infra/**  @infra"], aliases=True)

        assert parsed.lines[0] == AliasLine(name="infra", owners=["@alice", "@bob"])
        assert parsed.lines[1] == RuleLine(pattern="/infra/**", owners=["@infra"])

    def test_alias_lines_are_rules_when_disabled(self) -> None:
        parsed = parse_lines(["@infra  @alice @bob"])

        assert parsed.lines == [RuleLine(pattern="@infra", owners=["@alice", "@bob"])]

    def test_unowned_section_ignores_other_lines(self) -> None:
        parsed = parse_lines(
            [
                "*  @a",
                "### UNOWNED (File::Codeowners)",
                "# one.txt",
                "not an entry",
                "#no-space.txt",
                "",
                "# dir/two.txt",
                "# one.txt",
            ]
        )

        assert parsed.lines == [RuleLine(pattern="*", owners=["@a"])]
        assert parsed.unowned == {"one.txt", "dir/two.txt"}

    def test_unrecognized_line_raises_with_line_number(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_lines(["*.md  @docs", "", "bogus"])

        assert exc_info.value.line_number == 3
        assert exc_info.value.line == "bogus"
        assert str(exc_info.value) == "Parse error on line 3: bogus"


class TestParseSources:
    def test_from_string(self, sample_text: str) -> None:
        codeowners = Codeowners.parse_from_string(sample_text)
        assert codeowners.patterns() == ["*", "*.md", "/src/**", "/src/gen/**", "docs/"]

    def test_from_bytes(self) -> None:
        codeowners = Codeowners.parse("*.md  @dökümentasyon\n".encode())
        assert codeowners.owners() == ["@dökümentasyon"]

    def test_from_array(self) -> None:
        codeowners = Codeowners.parse(["# Project: Core", "/src/**  @alice"])
        assert codeowners.projects() == ["Core"]

    def test_from_filepath(self, sample_file: Path) -> None:
        assert Codeowners.parse(sample_file).unowned() == ["LICENSE", "src/unowned.txt"]
        assert Codeowners.parse(str(sample_file)).unowned() == ["LICENSE", "src/unowned.txt"]

    def test_from_text_stream(self) -> None:
        codeowners = Codeowners.parse(io.StringIO("*.py  @py\n"))
        assert codeowners.patterns() == ["*.py"]

    def test_from_binary_stream(self) -> None:
        codeowners = Codeowners.parse(io.BytesIO(b"*.py  @py\r\n*.go  @go\r\n"))
        assert codeowners.owners() == ["@go", "@py"]

    def test_empty_string_is_an_empty_document(self) -> None:
        codeowners = Codeowners.parse_from_string("")
        assert codeowners.lines == ()
        assert codeowners.unowned() == []

    def test_aliases_option_defaults_to_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config.parser, "aliases", True)
        assert Codeowners.parse(["@infra  @alice"]).aliases() == {"@infra": ["@alice"]}
        assert Codeowners.parse(["@infra  @alice"], aliases=False).aliases() == {}

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Codeowners.parse(tmp_path / "nope")

    @pytest.mark.parametrize("source", [None, "", 42])
    def test_invalid_source(self, source: object) -> None:
        with pytest.raises(UsageError):
            Codeowners.parse(source)

    def test_parse_error_aborts_whole_parse(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            Codeowners.parse_from_string("*  @a\ninvalid\n*.md  @b\n")
        assert exc_info.value.line_number == 2


class TestParseLogging:
    @pytest.mark.parametrize(
        "parse,expected_source",
        [
            (lambda: Codeowners.parse_from_string("*  @a\n"), "<stream>"),
            (lambda: Codeowners.parse_from_array(["*  @a"]), "<stream>"),
            (lambda: Codeowners.parse_from_fh(io.StringIO("*  @a\n"), source="inline"), "inline"),
        ],
    )
    def test_every_source_logs_the_operation(self, parse, expected_source: str) -> None:
        with capture_logs() as logs:
            parse()

        completed = [entry for entry in logs if entry["event"] == "operation_completed"]
        assert completed[0]["operation"] == "parse_codeowners"
        assert completed[0]["source"] == expected_source

    def test_filepath_logs_its_path(self, sample_file: Path) -> None:
        with capture_logs() as logs:
            Codeowners.parse_from_filepath(sample_file)

        completed = [entry for entry in logs if entry["event"] == "operation_completed"]
        assert completed[0]["source"] == str(sample_file)

    def test_failed_parse_is_logged(self) -> None:
        with capture_logs() as logs, pytest.raises(ParseError):
            Codeowners.parse_from_string("invalid\n")

        assert [entry["operation"] for entry in logs if entry["event"] == "operation_failed"] == ["parse_codeowners"]

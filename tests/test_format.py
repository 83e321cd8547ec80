"""Tests for phpdocfmt.format module."""

import pytest

from phpdocfmt import DocComment, FormatOptions, format_doc_comment, is_doc_comment

REPORT_COMMENT = """/**
 * Process user data and build a report.
 *
 * The report is cached for the given duration and reused by later calls with the same arguments.
 *
 * @param array{id: int, name: string, email: string, roles: list<string>} $user The user record
 * @param callable(array<string, mixed>): bool $filter Filter applied to every row
 * @param ?DateTimeInterface $cacheExpiry When the cached report expires
 * @return array{summary: array{total: int, average: float}, rows: list<array<string, mixed>>}
 * @throws InvalidArgumentException When the user record is incomplete
 * @deprecated 3.0.0 Use processUserDataV2() instead
 */"""


class TestIsDocComment:
    """Test doc comment detection."""

    @pytest.mark.parametrize("text", ["/** @var int */", "/**\n * x\n */", "  /** */"])
    def test_doc_comments(self, text: str) -> None:
        assert is_doc_comment(text)

    @pytest.mark.parametrize("text", ["/* plain */", "// line", "/**/", "# hash"])
    def test_other_comments(self, text: str) -> None:
        assert not is_doc_comment(text)


class TestFormatDocComment:
    """Test formatting of complete comments."""

    def test_single_line(self) -> None:
        assert (
            format_doc_comment("/** @param  int|string   $x */")
            == "/** @param int | string $x */"
        )

    @pytest.mark.parametrize("text", ["/* plain */", "// line", "/**/"])
    def test_other_comments_unchanged(self, text: str) -> None:
        assert format_doc_comment(text) == text

    def test_empty_comment(self) -> None:
        assert format_doc_comment("/**   */") == "/** */"

    def test_multiline_stays_multiline(self) -> None:
        """Test that a multi-line comment is never folded onto one line."""
        assert format_doc_comment("/**\n * @var int\n */") == "/**\n * @var int\n */"

    def test_wide_single_line_becomes_multiline(self) -> None:
        comment = (
            "/** @param array{title: string, description: string, "
            "body: string|bool} $param */"
        )
        assert format_doc_comment(comment, FormatOptions(print_width=40)) == (
            "/**\n"
            " * @param array{\n"
            " *     title: string,\n"
            " *     description: string,\n"
            " *     body: string | bool\n"
            " * } $param\n"
            " */"
        )

    def test_indent(self) -> None:
        result = format_doc_comment("/**\n * @var int\n */", indent="    ")
        assert result == "/**\n     * @var int\n     */"

    def test_blank_lines_have_no_trailing_space(self) -> None:
        result = format_doc_comment("/**\n * Summary.\n * @param int $x\n */")
        assert result == "/**\n * Summary.\n *\n * @param int $x\n */"

    def test_expand_null(self) -> None:
        comment = "/** @param ?DateTimeInterface $cacheExpiry */"
        assert (
            format_doc_comment(comment, FormatOptions(expand_null=True))
            == "/** @param null | DateTimeInterface $cacheExpiry */"
        )

    def test_doc_comment_object(self) -> None:
        comment = DocComment("/** @var array{ */", line=3, column=4)
        assert comment.describe() == "line 3:4"
        assert format_doc_comment(comment) == "/** @var array{ */"

    def test_describe_without_location(self) -> None:
        assert DocComment("/** */").describe() is None
        assert DocComment("/** */", line=7).describe() == "line 7"


class TestIdempotence:
    """Test that formatting a formatted comment changes nothing."""

    @pytest.mark.parametrize(
        ("options", "indent"),
        [
            (FormatOptions(), ""),
            (FormatOptions(), "\t"),
            (FormatOptions(print_width=60, wrap_text=True), ""),
            (FormatOptions(print_width=60, wrap_text=True, use_tabs=True), "\t\t"),
            (FormatOptions(expand_null=True), "    "),
        ],
    )
    def test_report_comment(self, options: FormatOptions, indent: str) -> None:
        once = format_doc_comment(REPORT_COMMENT, options, indent=indent)
        assert format_doc_comment(once, options, indent=indent) == once

    @pytest.mark.parametrize(
        "comment",
        [
            "/** @param  int|string   $x */",
            "/** @param array{title: string, description: string, body: string|bool}"
            " $param The parameters */",
            "/**\n * Summary.\n * @param int $x\n */",
            "/**\n * @param array{int $broken Broken\n * @param int $ok Fine\n */",
        ],
    )
    def test_narrow_width(self, comment: str) -> None:
        options = FormatOptions(print_width=40, wrap_text=True)
        once = format_doc_comment(comment, options)
        assert format_doc_comment(once, options) == once

    def test_wrapped_lines_fit(self) -> None:
        """Test that every line fits once prose may be wrapped."""
        result = format_doc_comment(
            REPORT_COMMENT, FormatOptions(print_width=60, wrap_text=True)
        )
        assert all(len(line) <= 60 for line in result.split("\n"))

"""Tests for phpdocfmt.composer module."""

from phpdocfmt import FormatOptions, parse_comment, print_comment, wrap_words

SHAPE_COMMENT = (
    "/** @param array{title: string, description: string, body: string|bool} "
    "$param */"
)


def compose(comment: str, **options: object) -> list[str]:
    return print_comment(parse_comment(comment), FormatOptions(**options))


class TestWrapWords:
    """Test greedy word wrapping."""

    def test_greedy_fill(self) -> None:
        assert wrap_words("aaa bbb ccc", 7, tab_width=4) == ["aaa bbb", "ccc"]

    def test_long_word_gets_own_line(self) -> None:
        """Test that words are never split."""
        assert wrap_words("a verylongword b", 5, tab_width=4) == [
            "a",
            "verylongword",
            "b",
        ]

    def test_initial_text(self) -> None:
        assert wrap_words(
            "$x The value", 20, tab_width=4, initial="@param int"
        ) == ["@param int $x The", "value"]

    def test_indentation_repeated(self) -> None:
        """Test that a wrapped line keeps the indentation of its source line."""
        assert wrap_words("\tab cd", 6, tab_width=4) == ["\tab", "\tcd"]

    def test_disabled_only_normalizes(self) -> None:
        assert wrap_words("aaa   bbb ccc ", 3, tab_width=4, enabled=False) == [
            "aaa bbb ccc"
        ]

    def test_lines_wrapped_separately(self) -> None:
        assert wrap_words("one two\nthree", 80, tab_width=4) == ["one two", "three"]

    def test_empty_text_with_initial(self) -> None:
        assert wrap_words("", 80, tab_width=4, initial="@var int") == ["@var int"]


class TestTypedTags:
    """Test rendering of tags with a parsed type."""

    def test_normalizes_type(self) -> None:
        assert compose("/** @param  int|null   $x  The value */") == [
            "@param null | int $x The value"
        ]

    def test_wraps_type_to_fit(self) -> None:
        """Test that a type too wide for the line is broken at the loosest level."""
        assert compose(SHAPE_COMMENT, print_width=40) == [
            "@param array{",
            "    title: string,",
            "    description: string,",
            "    body: string | bool",
            "} $param",
        ]

    def test_description_follows_last_type_line(self) -> None:
        comment = SHAPE_COMMENT.replace("$param", "$param The parameters")
        lines = compose(comment, print_width=40)
        assert lines[-1] == "} $param The parameters"

    def test_prefix_width_narrows_the_line(self) -> None:
        nodes = parse_comment("/** @param array{a: int, b: int} $x */")
        assert print_comment(nodes, FormatOptions(), prefix_width=0) == [
            "@param array{a: int, b: int} $x"
        ]
        assert print_comment(nodes, FormatOptions(), prefix_width=50) == [
            "@param array{",
            "    a: int,",
            "    b: int",
            "} $x",
        ]

    def test_doc_print_width_overrides_print_width(self) -> None:
        lines = compose(SHAPE_COMMENT, print_width=200, doc_print_width=40)
        assert lines[0] == "@param array{"

    def test_expand_null(self) -> None:
        assert compose("/** @param ?DateTimeInterface $at */", expand_null=True) == [
            "@param null | DateTimeInterface $at"
        ]

    def test_continuation_lines(self) -> None:
        comment = "/**\n * @param int $x First\n *   second\n */"
        assert compose(comment) == ["@param int $x First", "  second"]

    def test_wrap_text(self) -> None:
        comment = "/** @param int $x The value that is used for computing */"
        assert compose(comment, wrap_text=True, print_width=30) == [
            "@param int $x The value that",
            "is used for computing",
        ]

    def test_no_wrap_without_wrap_text(self) -> None:
        comment = "/** @param int $x The value that is used for computing */"
        assert compose(comment, print_width=30) == [
            "@param int $x The value that is used for computing"
        ]


class TestOtherNodes:
    """Test text, untyped tags and fallbacks."""

    def test_untyped_tag_wrapped_as_text(self) -> None:
        comment = "/** @deprecated 3.0.0 Use processUserDataV2() instead */"
        assert compose(comment, wrap_text=True, print_width=30) == [
            "@deprecated 3.0.0 Use",
            "processUserDataV2() instead",
        ]

    def test_invalid_type_printed_verbatim(self) -> None:
        """Test that a tag whose type fails to parse is left as written."""
        comment = "/**\n * @param array{int $broken Broken\n * @param  int $ok Fine\n */"
        assert compose(comment) == [
            "@param array{int $broken Broken",
            "@param int $ok Fine",
        ]

    def test_blank_line_before_tags(self) -> None:
        """Test that a blank line separates prose from the tag block."""
        comment = "/**\n * Summary.\n * @param int $x\n */"
        assert compose(comment) == ["Summary.", "", "@param int $x"]

    def test_existing_blank_line_not_doubled(self) -> None:
        comment = "/**\n * Summary.\n *\n * @param int $x\n */"
        assert compose(comment) == ["Summary.", "", "@param int $x"]

    def test_no_blank_line_before_untyped_tag(self) -> None:
        comment = "/**\n * Summary.\n * @see Foo\n */"
        assert compose(comment) == ["Summary.", "@see Foo"]

    def test_repeated_blank_lines_collapse(self) -> None:
        comment = "/**\n * One.\n *\n *\n * Two.\n */"
        assert compose(comment) == ["One.", "", "Two."]

"""Reformat complete doc comments."""

from __future__ import annotations

import re
from dataclasses import dataclass

from phpdocfmt.composer import print_comment
from phpdocfmt.options import FormatOptions
from phpdocfmt.printer import display_width
from phpdocfmt.tokenizer import parse_comment

COMMENT_START = "/**"
COMMENT_END = " */"
LINE_PREFIX = " * "

_DOC_COMMENT = re.compile(r"\s*/\*\*(?!/)")


@dataclass(frozen=True)
class DocComment:
    """A comment as handed over by a source parser.

    Attributes:
        value: Raw comment text, delimiters included
        line: 1-based line of the comment start, if known
        column: 0-based column of the comment start, if known

    """

    value: str
    line: int | None = None
    column: int | None = None

    def describe(self) -> str | None:
        """Location label for diagnostics."""
        if self.line is None:
            return None
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}:{self.column}"


def is_doc_comment(text: str) -> bool:
    """Whether `text` is a `/** ... */` doc comment."""
    return _DOC_COMMENT.match(text) is not None


def format_doc_comment(
    comment: str | DocComment,
    options: FormatOptions | None = None,
    *,
    indent: str = "",
) -> str:
    """Reformat a doc comment and return the new comment text.

    Other comments are returned unchanged. The result is a single-line
    `/** text */` when the input was single-line and the body fits on one
    line; otherwise one ` * ` prefixed line per body line.

    Args:
        comment: Raw comment text or a DocComment
        options: Formatting options (defaults to FormatOptions())
        indent: Indentation the comment starts at; it narrows the available
            width and prefixes every line after the first

    Example:
        >>> format_doc_comment("/** @param  int|string   $x */")
        '/** @param int | string $x */'

    """
    if isinstance(comment, str):
        comment = DocComment(comment)
    if not is_doc_comment(comment.value):
        return comment.value
    if options is None:
        options = FormatOptions()

    # Body width is measured against the widest frame in both comment forms
    padding = f"{indent}{COMMENT_START} {COMMENT_END}"
    padding_width = display_width(padding, options.tab_width)
    nodes = parse_comment(comment.value, comment.describe())
    lines = print_comment(
        nodes, options, prefix_width=padding_width + len(LINE_PREFIX)
    )

    if lines == [""]:
        return f"{COMMENT_START}{COMMENT_END}"

    is_multiline = "\n" in comment.value.strip()
    if (
        is_multiline
        or len(lines) > 1
        or display_width(lines[0], options.tab_width) + padding_width
        > options.effective_width
    ):
        body = [f"{indent}{LINE_PREFIX}{line}".rstrip() for line in lines]
        return "\n".join([COMMENT_START, *body, f"{indent}{COMMENT_END}"])
    return f"{COMMENT_START} {lines[0]}{COMMENT_END}"

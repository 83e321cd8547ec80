"""Compose the final lines of a doc comment from its nodes."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from phpdocfmt.nodes import CommentNode, TagNode, TextNode
from phpdocfmt.printer import WrapLevel, display_width, find_wrap_level, print_type

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from phpdocfmt.options import FormatOptions
    from phpdocfmt.types import TypeNode


def wrap_words(
    text: str,
    width: int,
    *,
    tab_width: int,
    enabled: bool = True,
    initial: str = "",
) -> list[str]:
    """Greedily word-wrap each line of `text` to `width` columns.

    Words are never split; a word longer than the width gets a line of its
    own. The first output line starts with `initial`. Leading indentation
    of a text line is repeated on the lines it wraps onto.

    Args:
        text: Newline-separated text
        width: Maximum line width, tabs counted as `tab_width`
        tab_width: Columns per tab when measuring
        enabled: When False, lines are only normalized, never broken
        initial: Text the first line starts with (e.g. "@param int")

    """
    lines: list[str] = []
    for i, raw in enumerate(text.split("\n")):
        body = raw.lstrip(" \t")
        indent = raw[: len(raw) - len(body)]
        anchored = i == 0 and bool(initial)
        current = initial if anchored else indent
        empty = not anchored

        for word in body.split():
            if empty:
                current += word
                empty = False
                continue
            candidate = f"{current} {word}"
            if enabled and display_width(candidate, tab_width) > width:
                lines.append(current.rstrip())
                current = indent + word
            else:
                current = candidate
        lines.append(current.rstrip())
    return lines


def print_comment(
    nodes: Sequence[CommentNode],
    options: FormatOptions,
    *,
    prefix_width: int = 0,
) -> list[str]:
    """Render comment nodes to the lines of a comment body.

    Args:
        nodes: Output of parse_comment
        options: Formatting options
        prefix_width: Columns taken by whatever precedes each line
            (indentation and the " * " margin)

    Returns:
        Lines without comment markers or margin

    """
    width = options.effective_width - prefix_width
    wrap = partial(
        wrap_words, width=width, tab_width=options.tab_width, enabled=options.wrap_text
    )

    lines: list[str] = []
    previous: CommentNode | None = None
    for node in nodes:
        match node:
            case TextNode(content=content):
                lines.extend(wrap(content))
            case TagNode(error=error) if error is not None:
                lines.extend(_print_verbatim(node))
            case TagNode(parsed_type=None):
                lines.extend(wrap(f"{node.tag} {node.description}"))
            case TagNode(parsed_type=parsed_type):
                # separate the prose from the tag block
                if isinstance(previous, TextNode):
                    lines.append("")
                lines.extend(
                    _print_typed_tag(node, parsed_type, options, width, wrap)
                )
        previous = node
    return _collapse_blank_lines(lines)


def _print_typed_tag(
    node: TagNode,
    parsed_type: TypeNode,
    options: FormatOptions,
    width: int,
    wrap: Callable[..., list[str]],
) -> list[str]:
    first_line, *more_lines = node.description.split("\n")
    # the first description word (usually the `$name`) stays on the type's line
    words = first_line.split(maxsplit=1)
    glue = words[0] if words else ""
    remainder = words[1] if len(words) > 1 else ""

    flat = print_type(parsed_type, options, WrapLevel.NEVER)[0]
    head = f"{node.tag} {flat}"
    if display_width(f"{head} {glue}".rstrip(), options.tab_width) <= width:
        lines = wrap(first_line, initial=head)
    else:
        _, lines = find_wrap_level(
            parsed_type,
            options,
            width,
            prefix=f"{node.tag} ",
            suffix=f" {glue}" if glue else "",
        )
        if remainder:
            lines.extend(wrap(remainder, initial=lines.pop()))

    if more_lines:
        lines.extend(wrap("\n".join(more_lines)))
    return lines


def _print_verbatim(node: TagNode) -> list[str]:
    first, *rest = node.description.split("\n")
    return [f"{node.tag} {first}".rstrip(), *(line.rstrip() for line in rest)]


def _collapse_blank_lines(lines: list[str]) -> list[str]:
    result: list[str] = []
    for line in lines:
        if not line and result and not result[-1]:
            continue
        result.append(line)
    return result

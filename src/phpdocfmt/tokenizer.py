"""Split raw doc comments into text and tag nodes."""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from phpdocfmt.errors import TypeSyntaxError
from phpdocfmt.nodes import CommentNode, TagNode, TextNode
from phpdocfmt.parser import parse_type

logger = logging.getLogger(__name__)

_COMMENT_START = re.compile(r"^\s*/\*\*?")
_COMMENT_END = re.compile(r"\s*\*/\s*$")
_MARGIN = re.compile(r"^[ \t]*\*+", re.MULTILINE)
_TAG_SPLIT = re.compile(r"\s+")


def parse_comment_nodes(comment: str) -> list[CommentNode]:
    """Tokenize a comment body into text and tag nodes, in line order.

    Lines following a tag line are continuation lines of that tag's
    description until the next tag. Lines before the first tag become
    text nodes. Any input yields some node sequence.
    """
    body = _COMMENT_START.sub("", comment, count=1)
    body = _COMMENT_END.sub("", body, count=1)
    body = _MARGIN.sub("", body).strip()

    nodes: list[CommentNode] = []
    for raw_line in body.split("\n"):
        line = raw_line.rstrip()
        # the conventional space after the "*" margin
        line = line.removeprefix(" ")
        stripped = line.lstrip()

        if stripped.startswith("@"):
            tag, *description = _TAG_SPLIT.split(stripped, maxsplit=1)
            nodes.append(TagNode(tag, description[0] if description else ""))
        elif nodes and isinstance(last := nodes[-1], TagNode):
            nodes[-1] = replace(last, description=f"{last.description}\n{line}")
        else:
            nodes.append(TextNode(line))
    return nodes


def parse_comment(comment: str, location: str | None = None) -> list[CommentNode]:
    """Tokenize a comment and parse the type of every typed tag.

    A typed tag whose description is not a valid type expression keeps
    its raw description and records the error; the rest of the comment
    is unaffected.

    Args:
        comment: Raw comment text, delimiters included
        location: Label for diagnostics, e.g. "index.php:12"

    """
    nodes = parse_comment_nodes(comment)
    return [
        _parse_tag_type(node, location)
        if isinstance(node, TagNode) and node.is_typed
        else node
        for node in nodes
    ]


def _parse_tag_type(node: TagNode, location: str | None) -> TagNode:
    if not node.description.strip():
        return node

    label = f"{location} {node.tag}" if location else node.tag
    try:
        result = parse_type(node.description, label)
    except TypeSyntaxError as err:
        logger.debug("Leaving %s description unparsed: %s", node.tag, err)
        return replace(node, error=err)

    return replace(
        node,
        parsed_type=result.type,
        description=result.rest.lstrip(" \t"),
    )

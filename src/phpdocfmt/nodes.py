"""Comment nodes produced by the doc comment tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from phpdocfmt.errors import TypeSyntaxError
    from phpdocfmt.types import TypeNode

_TYPED_BASE_TAGS = frozenset(
    {
        "method",
        "param",
        "property",
        "property-read",
        "property-write",
        "return",
        "type",
        "throws",
        "var",
    }
)
_DIALECT_TAGS = ("param", "property", "return", "type", "var")

# Tags (without "@") whose description starts with a type expression
TYPED_TAGS: frozenset[str] = _TYPED_BASE_TAGS | {
    f"{dialect}-{tag}" for dialect in ("phpstan", "psalm") for tag in _DIALECT_TAGS
}


@dataclass(frozen=True)
class TextNode:
    """A line of free prose."""

    content: str


@dataclass(frozen=True)
class TagNode:
    """A `@tag description` line plus its continuation lines.

    Attributes:
        tag: Tag name including the leading "@"
        description: Text after the tag; after a successful type parse,
            the text after the type
        parsed_type: The parsed type for typed tags, else None
        error: The parse error when a typed tag's description is not a
            valid type expression; the description is then left verbatim

    """

    tag: str
    description: str
    parsed_type: TypeNode | None = None
    error: TypeSyntaxError | None = None

    @property
    def name(self) -> str:
        """Tag name without the leading "@"."""
        return self.tag.removeprefix("@")

    @property
    def is_typed(self) -> bool:
        return self.name in TYPED_TAGS


CommentNode: TypeAlias = TextNode | TagNode

"""phpdocfmt - Reformat type expressions in PHPDoc comments."""

import logging

from phpdocfmt.composer import (
    print_comment,
    wrap_words,
)
from phpdocfmt.errors import (
    ExpectedTokenError,
    ParseLocation,
    TypeSyntaxError,
    UnexpectedTokenError,
    UnterminatedStringError,
)
from phpdocfmt.format import (
    DocComment,
    format_doc_comment,
    is_doc_comment,
)
from phpdocfmt.nodes import (
    TYPED_TAGS,
    CommentNode,
    TagNode,
    TextNode,
)
from phpdocfmt.options import FormatOptions
from phpdocfmt.parser import (
    ParseResult,
    TypeParser,
    parse_type,
)
from phpdocfmt.printer import (
    TypePrinter,
    WrapLevel,
    display_width,
    find_wrap_level,
    print_type,
)
from phpdocfmt.serialization import (
    from_builtins,
    from_json,
    to_builtins,
    to_json,
)
from phpdocfmt.tokenizer import (
    parse_comment,
    parse_comment_nodes,
)
from phpdocfmt.types import TypeNode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Comments
    "TYPED_TAGS",
    "CommentNode",
    "DocComment",
    # Errors
    "ExpectedTokenError",
    # Options
    "FormatOptions",
    "ParseLocation",
    # Parsing
    "ParseResult",
    "TagNode",
    "TextNode",
    "TypeNode",
    "TypeParser",
    # Printing
    "TypePrinter",
    "TypeSyntaxError",
    "UnexpectedTokenError",
    "UnterminatedStringError",
    "WrapLevel",
    "display_width",
    "find_wrap_level",
    "format_doc_comment",
    # Serialization
    "from_builtins",
    "from_json",
    "is_doc_comment",
    "parse_comment",
    "parse_comment_nodes",
    "parse_type",
    "print_comment",
    "print_type",
    "to_builtins",
    "to_json",
    "wrap_words",
]

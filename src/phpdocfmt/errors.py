"""Error types raised by the PHPDoc type grammar parser.

Every error carries a ParseLocation: the offset into the type expression,
the breadcrumb of grammar rules being parsed, and a short excerpt of the
upcoming text. Callers catch TypeSyntaxError to fall back to the raw
description instead of failing the whole comment.
"""

from __future__ import annotations

from dataclasses import dataclass

# Number of upcoming characters quoted in error messages
EXCERPT_LENGTH = 25


@dataclass(frozen=True)
class ParseLocation:
    """Position in a type expression where parsing failed.

    Attributes:
        offset: Character offset into the type expression
        path: Grammar rules entered to reach this point, outermost first
        excerpt: Upcoming text at the offset, or "<eol>"
        source: Optional label for the expression's origin (e.g. "@param")

    """

    offset: int
    path: tuple[str, ...]
    excerpt: str
    source: str | None = None

    @classmethod
    def at(
        cls,
        text: str,
        offset: int,
        path: tuple[str, ...],
        source: str | None = None,
    ) -> ParseLocation:
        """Build a location, quoting the text that follows the offset."""
        excerpt = text[offset : offset + EXCERPT_LENGTH] or "<eol>"
        return cls(offset=offset, path=path, excerpt=excerpt, source=source)

    def describe(self) -> str:
        """Human-readable description of the location."""
        where = ".".join(self.path) if self.path else "type"
        desc = f"offset {self.offset} at {where}"
        if self.source:
            desc = f"{self.source}: {desc}"
        return desc


class TypeSyntaxError(Exception):
    """Base class for type expression parse errors."""

    def __init__(self, location: ParseLocation, message: str) -> None:
        super().__init__(message)
        self.location = location
        self.message = message

    def format(self) -> str:
        """Format the error for display."""
        return f"{self.location.describe()}: {self.message}: {self.location.excerpt}"

    def __str__(self) -> str:
        return self.format()


class UnexpectedTokenError(TypeSyntaxError):
    """No primary form matches the text at the current position."""

    def __init__(self, location: ParseLocation) -> None:
        super().__init__(location, "unexpected token")


class ExpectedTokenError(TypeSyntaxError):
    """A required delimiter such as `}`, `>`, `)` or `:` is missing."""

    def __init__(self, location: ParseLocation, expected: tuple[str, ...]) -> None:
        self.expected = expected
        what = " or ".join(repr(token) for token in expected)
        super().__init__(location, f"expected {what}")


class UnterminatedStringError(TypeSyntaxError):
    """A quoted string literal has no closing quote."""

    def __init__(self, location: ParseLocation, quote: str) -> None:
        self.quote = quote
        super().__init__(location, f"unterminated string literal starting with {quote}")

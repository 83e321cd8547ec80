"""Recursive descent parser for PHPDoc type expressions.

The parser consumes a type expression from the start of a tag description
and reports the text left after it, which becomes the tag's free-text
description. Grammar, outermost first:

    type      := "?" type | primary suffixes [union] [conditional]
    primary   := "array{" shape "}" | "array<" type ["," type] ">" | "array"
               | "list<" type ">" | "list" | string | identifier [generics] ["::" type]
               | "(" type ")" | "..."
    suffixes  := ["(" params "):" type] {"[]"}
    union     := {"|" type}
    conditional := "is" ["not"] type "?" type ":" type

Conditional types are only recognised inside delimiters so that a leading
`is` in a top-level description is never mistaken for one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

from phpdocfmt.errors import (
    ExpectedTokenError,
    ParseLocation,
    UnexpectedTokenError,
    UnterminatedStringError,
)
from phpdocfmt.types import (
    ArrayList,
    ArraySquareBracket,
    Callable,
    CallableParameter,
    ConditionalType,
    Maybe,
    ModifierKeyword,
    Parentheses,
    Record,
    SimpleValue,
    Spread,
    StaticAccess,
    StringLiteral,
    TupleDict,
    TupleDictEntry,
    TypeNode,
    Union,
    WithGenerics,
)

Token: TypeAlias = str | re.Pattern[str]

_WHITESPACE = " \t\r\n"
_WORD_END = r"(?![A-Za-z0-9_\\-])"

_IDENTIFIER = re.compile(r"(?:&?\$)?[A-Za-z0-9_\\-]+")
_PARAMETER_NAME = re.compile(r"&?\.\.\.(?:\$[A-Za-z0-9_]+)?|&?\$[A-Za-z0-9_]+")
_BARE_ARRAY = re.compile(r"array" + _WORD_END)
_BARE_LIST = re.compile(r"list" + _WORD_END)
_IS = re.compile(r"is" + _WORD_END)
_NOT = re.compile(r"not" + _WORD_END)
_STRINGS = {
    "'": re.compile(r"'(?:[^'\\]|\\.)*'", re.DOTALL),
    '"': re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL),
}


@dataclass(frozen=True)
class ParseResult:
    """A parsed type and the text following it."""

    type: TypeNode
    rest: str


class TypeParser:
    """Cursor over a single type expression.

    `pos` is the scanning position (whitespace before the next token may
    already be skipped); `end` is the offset just after the last consumed
    token, where the unparsed remainder starts.
    """

    def __init__(self, text: str, location: str | None = None) -> None:
        self.text = text
        self.location = location
        self.pos = 0
        self.end = 0

    def parse_type(
        self,
        path: tuple[str, ...] = (),
        *,
        consume_union: bool = True,
        nested: bool = False,
    ) -> TypeNode:
        """Parse one type expression at the cursor.

        Args:
            path: Grammar rules entered so far, for diagnostics
            consume_union: Whether a trailing `|` chain belongs to this type
            nested: Whether the cursor is inside a delimited construct

        Raises:
            TypeSyntaxError: If the text is not a valid type expression

        """
        node: TypeNode
        if self._maybe("?"):
            node = Maybe(
                self.parse_type((*path, "maybe"), consume_union=False, nested=nested)
            )
        else:
            node = self._parse_primary(path, nested=nested)
            node = self._parse_suffixes(
                node, path, consume_union=consume_union, nested=nested
            )

        if not consume_union:
            return node

        branches = [node]
        while self._maybe("|"):
            branches.append(
                self.parse_type((*path, "union"), consume_union=False, nested=nested)
            )
        if len(branches) > 1:
            node = Union(tuple(branches))

        if nested and self._maybe(_IS):
            node = self._parse_conditional(node, (*path, "conditional"))
        return node

    def _parse_primary(self, path: tuple[str, ...], *, nested: bool) -> TypeNode:
        if self._maybe("array{"):
            return self._parse_shape((*path, "array"))
        if self._maybe("array<"):
            return self._parse_array_generic((*path, "array"))
        if self._maybe(_BARE_ARRAY):
            return SimpleValue("array")
        if self._maybe("list<"):
            inner = self.parse_type((*path, "list"), nested=True)
            self._expect((*path, "list"), ">")
            return ArrayList(inner, "list")
        if self._maybe(_BARE_LIST):
            return SimpleValue("list")
        if self.text.startswith(("'", '"'), self.pos):
            return self._parse_string(path)

        if (value := self._maybe(_IDENTIFIER)) is not None:
            node: TypeNode = SimpleValue(value)
            if self._maybe("<"):
                node = WithGenerics(node, self._parse_generics((*path, "generic")))
            if self._maybe("::"):
                member = self.parse_type(
                    (*path, "static-access"), consume_union=False, nested=nested
                )
                node = StaticAccess(node, member)
            return node

        if self._maybe("("):
            inner = self.parse_type((*path, "parentheses"), nested=True)
            self._expect((*path, "parentheses"), ")")
            return Parentheses(inner)
        if self._maybe("..."):
            return Spread()

        raise UnexpectedTokenError(self._location(path))

    def _parse_suffixes(
        self,
        node: TypeNode,
        path: tuple[str, ...],
        *,
        consume_union: bool,
        nested: bool,
    ) -> TypeNode:
        if self._maybe("("):
            params_path = (*path, "parameters")
            parameters: list[CallableParameter] = []
            while not self._maybe(")"):
                param_type = self.parse_type(params_path, nested=True)
                parameters.append(
                    CallableParameter(param_type, self._maybe(_PARAMETER_NAME))
                )
                if not self._maybe(","):
                    self._expect(params_path, ")")
                    break
            self._expect(params_path, ":")
            return_type = self.parse_type(
                (*path, "return-type"), consume_union=consume_union, nested=nested
            )
            node = Callable(node, tuple(parameters), return_type)

        while self._maybe("["):
            self._expect((*path, "array"), "]")
            node = ArraySquareBracket(node)
        return node

    def _parse_shape(self, path: tuple[str, ...]) -> TupleDict:
        entries: list[TupleDictEntry] = []
        while not self._maybe("}"):
            sub_type = self.parse_type(path, nested=True)
            optional = self._maybe("?") is not None
            if self._maybe(":"):
                value = self.parse_type((*path, "array-value"), nested=True)
                entries.append(TupleDictEntry(value, key=sub_type, optional=optional))
            elif optional:
                raise ExpectedTokenError(self._location(path), (":",))
            else:
                entries.append(TupleDictEntry(sub_type))

            if not self._maybe(","):
                self._expect(path, "}")
                break
        return TupleDict(tuple(entries))

    def _parse_array_generic(self, path: tuple[str, ...]) -> Record | ArrayList:
        first = self.parse_type((*path, "array-record"), nested=True)
        if self._expect(path, ",", ">") == ">":
            return ArrayList(first, "array")
        value = self.parse_type((*path, "array-record-value"), nested=True)
        self._expect((*path, "array-record-value"), ">")
        return Record(first, value)

    def _parse_generics(self, path: tuple[str, ...]) -> tuple[TypeNode, ...]:
        generics: list[TypeNode] = []
        while True:
            node = self.parse_type(path, nested=True)
            # `covariant T`: a bare word not followed by a delimiter qualifies
            # the type after it
            if isinstance(node, SimpleValue) and self._peek(",", ">") is None:
                target = self.parse_type((*path, "modifier"), nested=True)
                node = ModifierKeyword(node.value, target)
            generics.append(node)
            if self._expect(path, ",", ">") == ">" or self._maybe(">"):
                return tuple(generics)

    def _parse_string(self, path: tuple[str, ...]) -> StringLiteral:
        quote = self.text[self.pos]
        match = _STRINGS[quote].match(self.text, self.pos)
        if match is None:
            raise UnterminatedStringError(self._location((*path, "string")), quote)
        self.pos = self.end = match.end()
        return StringLiteral(
            match.group()[1:-1], "single" if quote == "'" else "double"
        )

    def _parse_conditional(
        self, check: TypeNode, path: tuple[str, ...]
    ) -> ConditionalType:
        negated = self._maybe(_NOT) is not None
        extends = self.parse_type(path, nested=True)
        self._expect(path, "?")
        true_type = self.parse_type(path, nested=True)
        self._expect(path, ":")
        false_type = self.parse_type(path, nested=True)
        return ConditionalType(check, extends, true_type, false_type, negated)

    def _maybe(self, *accepts: Token) -> str | None:
        """Consume the first accepted token after any whitespace."""
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

        for accept in accepts:
            if isinstance(accept, str):
                if self.text.startswith(accept, self.pos):
                    self.pos = self.end = self.pos + len(accept)
                    return accept
            elif match := accept.match(self.text, self.pos):
                self.pos = self.end = match.end()
                return match.group()
        return None

    def _peek(self, *accepts: Token) -> str | None:
        pos, end = self.pos, self.end
        found = self._maybe(*accepts)
        self.pos, self.end = pos, end
        return found

    def _expect(self, path: tuple[str, ...], *accepts: str) -> str:
        found = self._maybe(*accepts)
        if found is None:
            raise ExpectedTokenError(self._location(path), accepts)
        return found

    def _location(self, path: tuple[str, ...]) -> ParseLocation:
        return ParseLocation.at(self.text, self.pos, path, self.location)


def parse_type(text: str, location: str | None = None) -> ParseResult:
    """Parse the type expression at the start of `text`.

    Args:
        text: A tag description starting with a type expression
        location: Label used in error messages (e.g. "@param")

    Returns:
        The parsed type and the text after it

    Raises:
        TypeSyntaxError: If no valid type expression starts the text

    Example:
        >>> parse_type("int|null $value The value").rest
        ' $value The value'

    """
    parser = TypeParser(text, location)
    node = parser.parse_type()
    return ParseResult(node, text[parser.end :])

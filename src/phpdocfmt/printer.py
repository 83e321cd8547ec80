"""Render type trees to lines at a chosen wrap level.

Break points belong to a wrap level. A break point fires (newline plus
re-indentation) only when the printer's level is at least its own;
otherwise it degrades to its flat separator. Indentation is tracked
whether or not a break fires, so every level sees the same structure.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING

from phpdocfmt.types import (
    NULL,
    ArrayList,
    ArraySquareBracket,
    Callable,
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
    TypeNode,
    Union,
    WithGenerics,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phpdocfmt.options import FormatOptions

logger = logging.getLogger(__name__)


class WrapLevel(IntEnum):
    """Which classes of break points may become real line breaks."""

    NEVER = 0
    L1 = 1  # dictionary entries
    L2 = 2  # generic argument lists
    L3 = 3  # positional tuples and conditional clauses

    def next(self) -> WrapLevel | None:
        """The next looser-breaking level, or None at the maximum."""
        if self is WrapLevel.L3:
            return None
        return WrapLevel(self + 1)


class TypePrinter:
    """Accumulates the lines of one rendering."""

    def __init__(self, options: FormatOptions, level: WrapLevel) -> None:
        self._options = options
        self._level = level
        self._lines: list[str] = []
        self._line = ""
        self._indent = 0

    def print_type(self, node: TypeNode) -> None:
        match node:
            case Maybe(type=inner):
                if self._options.expand_null:
                    self._print_union((inner, NULL))
                else:
                    self._write("?")
                    self.print_type(inner)
            case SimpleValue(value=value):
                self._write(value)
            case WithGenerics(node=base, generics=generics):
                self.print_type(base)
                self._write("<")
                self._print_list(generics, WrapLevel.L2)
                self._write(">")
            case StaticAccess(class_=class_, member=member):
                self.print_type(class_)
                self._write("::")
                self.print_type(member)
            case TupleDict(entries=entries) if node.is_dict:
                self._write("array{")
                self._enter(WrapLevel.L1)
                for i, entry in enumerate(entries):
                    if i:
                        self._separator(WrapLevel.L1)
                    self.print_type(entry.key)
                    self._write("?: " if entry.optional else ": ")
                    self.print_type(entry.value)
                self._leave(WrapLevel.L1)
                self._write("}")
            case TupleDict(entries=entries):
                self._write("array{")
                self._print_list([e.value for e in entries], WrapLevel.L3)
                self._write("}")
            case Record(key=key, value=value):
                self._write("array<")
                self.print_type(key)
                self._write(", ")
                self.print_type(value)
                self._write(">")
            case ArrayList(type=inner, name=name):
                self._write(f"{name}<")
                self.print_type(inner)
                self._write(">")
            case ArraySquareBracket(type=inner):
                self.print_type(inner)
                self._write("[]")
            case Union(types=types):
                self._print_union(types)
            case Callable(node=base, parameters=parameters, return_type=return_type):
                self.print_type(base)
                self._write("(")
                for i, param in enumerate(parameters):
                    if i:
                        self._write(", ")
                    self.print_type(param.type)
                    if param.name:
                        self._write(f" {param.name}")
                self._write("): ")
                self.print_type(return_type)
            case StringLiteral(value=value, quote=quote):
                mark = "'" if quote == "single" else '"'
                self._write(f"{mark}{value}{mark}")
            case Parentheses(type=inner):
                self._write("(")
                self.print_type(inner)
                self._write(")")
            case ConditionalType():
                self._print_conditional(node)
            case Spread():
                self._write("...")
            case ModifierKeyword(modifier=modifier, target=target):
                self._write(f"{modifier} ")
                self.print_type(target)
            case _:
                msg = f"Cannot print type node: {node!r}"
                raise TypeError(msg)

    def get_lines(self) -> list[str]:
        """Finish the rendering and return its lines."""
        return [*self._lines, self._line]

    def _print_list(self, items: Sequence[TypeNode], level: WrapLevel) -> None:
        if not items:
            return
        self._enter(level)
        for i, item in enumerate(items):
            if i:
                self._separator(level)
            self.print_type(item)
        self._leave(level)

    def _print_union(self, types: Sequence[TypeNode]) -> None:
        branches: list[TypeNode] = []
        for branch in types:
            if isinstance(branch, Maybe) and self._options.expand_null:
                branches.extend((NULL, branch.type))
            else:
                branches.append(branch)

        nulls = [b for b in branches if isinstance(b, SimpleValue) and b.is_null]
        rest = [b for b in branches if not (isinstance(b, SimpleValue) and b.is_null)]
        for i, branch in enumerate([*nulls[:1], *rest]):
            if i:
                self._write(" | ")
            self.print_type(branch)

    def _print_conditional(self, node: ConditionalType) -> None:
        self.print_type(node.check)
        self._indent += 1
        self._break(WrapLevel.L3, " ")
        self._write("is not " if node.negated else "is ")
        self.print_type(node.extends)
        self._break(WrapLevel.L3, " ")
        self._write("? ")
        self.print_type(node.true_type)
        self._break(WrapLevel.L3, " ")
        self._write(": ")
        self.print_type(node.false_type)
        self._indent -= 1

    def _enter(self, level: WrapLevel) -> None:
        self._indent += 1
        self._break(level, "")

    def _leave(self, level: WrapLevel) -> None:
        self._indent -= 1
        self._break(level, "")

    def _separator(self, level: WrapLevel) -> None:
        self._write(",")
        self._break(level, " ")

    def _break(self, level: WrapLevel, flat: str) -> None:
        if self._level < level:
            self._write(flat)
            return
        self._lines.append(self._line)
        self._line = self._options.indent_unit * self._indent

    def _write(self, text: str) -> None:
        self._line += text


def print_type(
    node: TypeNode,
    options: FormatOptions,
    level: WrapLevel = WrapLevel.NEVER,
) -> list[str]:
    """Render a type tree to lines at the given wrap level.

    Example:
        >>> print_type(parse_type("array<string,int>").type, FormatOptions())
        ['array<string, int>']

    """
    printer = TypePrinter(options, level)
    printer.print_type(node)
    return printer.get_lines()


def display_width(text: str, tab_width: int) -> int:
    """Length of `text` with tabs counted as `tab_width` columns."""
    return len(text.replace("\t", " " * tab_width))


def find_wrap_level(
    node: TypeNode,
    options: FormatOptions,
    width: int,
    prefix: str = "",
    suffix: str = "",
    start: WrapLevel = WrapLevel.L1,
) -> tuple[WrapLevel, list[str]]:
    """Find the loosest wrap level at which the rendering fits `width`.

    Levels are tried from `start` upwards; `prefix` is prepended to the
    first line and `suffix` appended to the last. Falls back to the
    maximum level when none fits.

    Returns:
        The chosen level and the rendered lines, prefix and suffix included

    """
    level: WrapLevel | None = start
    while level is not None:
        lines = print_type(node, options, level)
        lines[0] = prefix + lines[0]
        lines[-1] += suffix
        if all(display_width(line, options.tab_width) <= width for line in lines):
            logger.debug("Type fits width %d at wrap level %s", width, level.name)
            return level, lines
        chosen = level
        level = level.next()

    logger.debug("Type exceeds width %d at every wrap level", width)
    return chosen, lines

"""Formatting options for doc comment rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# Prettier-style option names accepted by FormatOptions.from_mapping
_CAMEL_CASE_NAMES: dict[str, str] = {
    "printWidth": "print_width",
    "tabWidth": "tab_width",
    "useTabs": "use_tabs",
    "wrapText": "wrap_text",
    "expandNull": "expand_null",
    "phpDocPrintWidth": "doc_print_width",
}


@dataclass(frozen=True)
class FormatOptions:
    """Immutable configuration for a formatting pass.

    Attributes:
        print_width: Maximum rendered line length
        tab_width: Columns a tab counts for, and the width of a space indent
        use_tabs: Indent wrapped type lines with tabs instead of spaces
        indent: Explicit indentation unit, overriding use_tabs/tab_width
        wrap_text: Whether prose and descriptions are word-wrapped at all
        expand_null: Print nullable shorthand as an explicit `null` branch
        doc_print_width: Width override for doc comments (defaults to print_width)

    """

    print_width: int = 80
    tab_width: int = 4
    use_tabs: bool = False
    indent: str | None = None
    wrap_text: bool = False
    expand_null: bool = False
    doc_print_width: int | None = None

    def __post_init__(self) -> None:
        for name in ("print_width", "tab_width"):
            _check_positive_int(name, getattr(self, name))
        if self.doc_print_width is not None:
            _check_positive_int("doc_print_width", self.doc_print_width)
        for name in ("use_tabs", "wrap_text", "expand_null"):
            if not isinstance(getattr(self, name), bool):
                msg = f"{name} must be a bool, got {type(getattr(self, name)).__name__}"
                raise TypeError(msg)
        if self.indent is not None:
            if not isinstance(self.indent, str):
                msg = f"indent must be a string, got {type(self.indent).__name__}"
                raise TypeError(msg)
            if self.indent.strip(" \t"):
                msg = f"indent must only contain spaces or tabs, got {self.indent!r}"
                raise ValueError(msg)

    @property
    def effective_width(self) -> int:
        """Width used for doc comments."""
        return self.doc_print_width or self.print_width

    @property
    def indent_unit(self) -> str:
        """One level of indentation for wrapped type lines."""
        if self.indent is not None:
            return self.indent
        if self.use_tabs:
            return "\t"
        return " " * self.tab_width

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> FormatOptions:
        """Build options from a mapping of snake_case or camelCase names.

        Unknown keys are ignored with a warning. Values are validated by
        the constructor.

        Raises:
            TypeError: If a value has the wrong type
            ValueError: If a value is out of range

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _CAMEL_CASE_NAMES.get(key, key)
            if name not in known:
                logger.warning("Ignoring unknown format option %r", key)
                continue
            kwargs[name] = value
        return cls(**kwargs)


def _check_positive_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an int, got {type(value).__name__}"
        raise TypeError(msg)
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        raise ValueError(msg)

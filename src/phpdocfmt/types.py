"""Type tree produced by the PHPDoc type grammar parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, dataclass_transform


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeNode:
    """Base for parsed type expressions."""

    kind: ClassVar[str]
    registry: ClassVar[dict[str, type[TypeNode]]] = {}

    def __init_subclass__(cls, kind: str | None = None) -> None:
        """Register type node subclass under its kind tag."""
        dataclass(frozen=True)(cls)
        cls.kind = kind if kind is not None else cls.__name__.lower()

        if (existing := TypeNode.registry.get(cls.kind)) and existing is not cls:
            msg = (
                f"Kind '{cls.kind}' already registered to {existing}. "
                "Choose a different kind."
            )
            raise ValueError(msg)

        TypeNode.registry[cls.kind] = cls


@dataclass(frozen=True)
class TupleDictEntry:
    """Entry of an array shape: `key?: value` or a positional `value`."""

    value: TypeNode
    key: TypeNode | None = None
    optional: bool = False


@dataclass(frozen=True)
class CallableParameter:
    """Callable parameter: a type with an optional `$name`."""

    type: TypeNode
    name: str | None = None


class Maybe(TypeNode, kind="maybe"):
    """Nullable shorthand: ?int → Maybe(type=SimpleValue("int"))."""

    type: TypeNode


class SimpleValue(TypeNode, kind="simple-value"):
    """Identifier, scalar or keyword: int, Foo\\Bar, -1, $this."""

    value: str

    @property
    def is_null(self) -> bool:
        return self.value.lower() == "null"


class WithGenerics(TypeNode, kind="with-generics"):
    """Generic type: Collection<int, Foo> → WithGenerics(node=..., generics=(...))."""

    node: TypeNode
    generics: tuple[TypeNode, ...]


class StaticAccess(TypeNode, kind="static-access"):
    """Class constant or member: Foo::BAR."""

    class_: TypeNode
    member: TypeNode


class TupleDict(TypeNode, kind="tuple-dict"):
    """Array shape: array{int, string} or array{id: int, name?: string}.

    Printed as a dictionary when every entry carries a key, otherwise as a
    positional tuple.
    """

    entries: tuple[TupleDictEntry, ...]

    @property
    def is_dict(self) -> bool:
        return bool(self.entries) and all(e.key is not None for e in self.entries)


class Record(TypeNode, kind="record"):
    """Keyed array: array<string, int> → Record(key=..., value=...)."""

    key: TypeNode
    value: TypeNode


class ArrayList(TypeNode, kind="array-list"):
    """Single-argument array or list: array<int>, list<Foo>."""

    type: TypeNode
    name: Literal["array", "list"] = "array"


class ArraySquareBracket(TypeNode, kind="array-square-bracket"):
    """Trailing brackets: int[] → ArraySquareBracket(type=SimpleValue("int"))."""

    type: TypeNode


class Union(TypeNode, kind="union"):
    """Union of two or more branches: int|string."""

    types: tuple[TypeNode, ...]


class Callable(TypeNode, kind="callable"):
    """Callable signature: callable(int $a, string): bool."""

    node: TypeNode
    parameters: tuple[CallableParameter, ...]
    return_type: TypeNode


class StringLiteral(TypeNode, kind="string-literal"):
    """Quoted literal type. The value keeps its escape sequences."""

    value: str
    quote: Literal["single", "double"] = "single"


class Parentheses(TypeNode, kind="parentheses"):
    """Grouping: (int|string)[]."""

    type: TypeNode


class ConditionalType(TypeNode, kind="conditional"):
    """Conditional return type: ($x is int ? string : bool).

    Attributes:
        check: The type being tested (usually a `$param`)
        extends: The type it is tested against
        true_type: Result when the test holds
        false_type: Result otherwise
        negated: True for `is not`

    """

    check: TypeNode
    extends: TypeNode
    true_type: TypeNode
    false_type: TypeNode
    negated: bool = False


class Spread(TypeNode, kind="spread"):
    """Bare `...` marker in shapes and parameter lists."""


class ModifierKeyword(TypeNode, kind="modifier"):
    """Qualifier preceding a generic argument: covariant T."""

    modifier: str
    target: TypeNode


NULL = SimpleValue("null")

"""Syntax data model consumed by the engine. Built by a parser adapter, never mutated here."""

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(Enum):
    """Syntactic kinds a parser adapter may report for an expression node."""

    CALL = "call"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    NUMERIC_LITERAL = "numeric_literal"
    FIELD_ACCESS = "field_access"
    ARRAY_ACCESS = "array_access"
    PARENTHESIZED = "parenthesized"
    NEW_INSTANCE = "new_instance"
    METHOD_REFERENCE = "method_reference"
    POSTFIX_UNARY = "postfix_unary"
    PREFIX_UNARY = "prefix_unary"
    CAST = "cast"
    INSTANCEOF = "instanceof"
    BINARY = "binary"
    CONDITIONAL = "conditional"
    ASSIGNMENT = "assignment"
    COMPOUND_ASSIGNMENT = "compound_assignment"
    LAMBDA = "lambda"
    OTHER = "other"


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) character offsets into the compilation unit's source."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, offset: int) -> bool:
        """True if offset lies strictly inside the span (boundaries excluded)."""
        return self.start < offset < self.end


@dataclass(frozen=True)
class TypeRef:
    """
    A resolved type identity attached by the typechecker.

    Equality is structural: primitive ``int`` and boxed ``java.lang.Integer``
    are different TypeRefs that a rule may list side by side.
    """

    name: str
    primitive: bool = False

    @classmethod
    def of_primitive(cls, name: str) -> "TypeRef":
        return cls(name=name, primitive=True)

    @classmethod
    def of_class(cls, qualified_name: str) -> "TypeRef":
        return cls(name=qualified_name, primitive=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MethodRef:
    """Statically resolved target of a call: declaring owner and method name."""

    owner: str
    name: str
    is_static: bool = False

    @property
    def owner_simple_name(self) -> str:
        return self.owner.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class SyntaxNode:
    """
    Immutable handle for one expression of the parsed tree.

    Call nodes carry their resolved ``target`` and ordered ``arguments``;
    ``type_ref`` is whatever the typechecker attached (None when unresolved).
    ``line`` and ``column`` are optional 1-based/0-based positions for reporting.
    """

    kind: NodeKind
    span: Span
    type_ref: TypeRef | None = None
    target: MethodRef | None = None
    arguments: tuple["SyntaxNode", ...] = field(default_factory=tuple)
    line: int = 0
    column: int = 0

    @property
    def is_call(self) -> bool:
        return self.kind is NodeKind.CALL

    def argument(self, position: int) -> "SyntaxNode | None":
        """Argument at 0-indexed position, or None when out of range."""
        if position < 0 or position >= len(self.arguments):
            return None
        return self.arguments[position]

"""Unit tests for StaticEnvironment."""

from callsite_rewriter.domain.nodes import NodeKind, Span, SyntaxNode
from callsite_rewriter.infrastructure.static_environment import (
    StaticEnvironment,
    StaticSymbolResolver,
)
from tests.unit.syntax_builders import LONG


def test_type_of_returns_attached_type() -> None:
    env = StaticEnvironment("someLong")
    node = SyntaxNode(kind=NodeKind.IDENTIFIER, span=Span(0, 8), type_ref=LONG)
    assert env.type_of(node) == LONG
    assert env.type_of(SyntaxNode(kind=NodeKind.IDENTIFIER, span=Span(0, 8))) is None


def test_source_for() -> None:
    env = StaticEnvironment("int y = Math.round(x);")
    assert env.source_for(Span(8, 18)) == "Math.round"
    assert env.source == "int y = Math.round(x);"


def test_resolves_only_known_symbols() -> None:
    env = StaticEnvironment("", StaticSymbolResolver(["com.google.common.primitives.Ints"]))
    assert env.resolves("com.google.common.primitives.Ints") is True
    assert env.resolves("com.google.common.primitives.Longs") is False
    assert StaticEnvironment("").resolves("com.google.common.primitives.Ints") is False

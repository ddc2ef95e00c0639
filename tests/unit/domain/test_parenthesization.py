"""Unit tests for operand parenthesization."""

import pytest

from callsite_rewriter.domain.nodes import NodeKind, Span, SyntaxNode
from callsite_rewriter.domain.parenthesization import (
    DEFAULT_PARENTHESIZE_KINDS,
    parse_kinds,
    requires_parentheses,
)


def _node(kind: NodeKind) -> SyntaxNode:
    return SyntaxNode(kind=kind, span=Span(0, 1))


@pytest.mark.parametrize(
    "kind",
    [
        NodeKind.BINARY,
        NodeKind.CONDITIONAL,
        NodeKind.ASSIGNMENT,
        NodeKind.COMPOUND_ASSIGNMENT,
        NodeKind.LAMBDA,
        NodeKind.CAST,
        NodeKind.INSTANCEOF,
        NodeKind.PREFIX_UNARY,
        NodeKind.NUMERIC_LITERAL,
        NodeKind.OTHER,
    ],
)
def test_low_precedence_kinds_need_parentheses(kind: NodeKind) -> None:
    assert requires_parentheses(_node(kind)) is True


@pytest.mark.parametrize(
    "kind",
    [
        NodeKind.IDENTIFIER,
        NodeKind.LITERAL,
        NodeKind.CALL,
        NodeKind.FIELD_ACCESS,
        NodeKind.ARRAY_ACCESS,
        NodeKind.PARENTHESIZED,
        NodeKind.NEW_INSTANCE,
        NodeKind.METHOD_REFERENCE,
        NodeKind.POSTFIX_UNARY,
    ],
)
def test_primary_kinds_splice_bare(kind: NodeKind) -> None:
    assert requires_parentheses(_node(kind)) is False


def test_kind_set_is_overridable() -> None:
    assert requires_parentheses(_node(NodeKind.BINARY), frozenset()) is False
    assert requires_parentheses(_node(NodeKind.CALL), {NodeKind.CALL}) is True


def test_parse_kinds_reports_unknown_values() -> None:
    kinds, unknown = parse_kinds(["binary", "LAMBDA", "ternary"])
    assert kinds == frozenset({NodeKind.BINARY, NodeKind.LAMBDA})
    assert unknown == ["ternary"]


def test_default_kinds_exclude_primaries() -> None:
    assert NodeKind.IDENTIFIER not in DEFAULT_PARENTHESIZE_KINDS
    assert NodeKind.CALL not in DEFAULT_PARENTHESIZE_KINDS


def test_numeric_literal_is_wrapped_but_other_literals_are_not() -> None:
    """Test that `5.bit_length()` is never produced by splicing a bare number."""
    assert NodeKind.NUMERIC_LITERAL in DEFAULT_PARENTHESIZE_KINDS
    assert NodeKind.LITERAL not in DEFAULT_PARENTHESIZE_KINDS

"""Decide whether an operand needs parentheses when spliced where a call used to be."""

from collections.abc import Iterable

from callsite_rewriter.domain.nodes import NodeKind, SyntaxNode

# Kinds whose standalone precedence is lower than a primary expression.
# Unknown kinds (OTHER) are wrapped too. A bare numeric literal cannot take
# an attribute access (`5.bit_length()`), so it is wrapped as well.
DEFAULT_PARENTHESIZE_KINDS: frozenset[NodeKind] = frozenset({
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
})


def requires_parentheses(
    node: SyntaxNode, kinds: Iterable[NodeKind] = DEFAULT_PARENTHESIZE_KINDS
) -> bool:
    """Pure function of ``node.kind``: no type resolution, no re-parse."""
    return node.kind in frozenset(kinds)


def parse_kinds(values: Iterable[str]) -> tuple[frozenset[NodeKind], list[str]]:
    """Map config strings to NodeKinds. Returns (kinds, unknown_values)."""
    kinds: set[NodeKind] = set()
    unknown: list[str] = []
    for value in values:
        try:
            kinds.add(NodeKind(str(value).lower()))
        except ValueError:
            unknown.append(str(value))
    return frozenset(kinds), unknown

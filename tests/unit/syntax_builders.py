"""Hand-built syntax nodes for Java-shaped call sites, as a parser adapter would report them."""

from callsite_rewriter.domain.nodes import MethodRef, NodeKind, Span, SyntaxNode, TypeRef

INT = TypeRef.of_primitive("int")
LONG = TypeRef.of_primitive("long")
INTEGER = TypeRef.of_class("java.lang.Integer")
BOXED_LONG = TypeRef.of_class("java.lang.Long")
FLOAT = TypeRef.of_primitive("float")
DOUBLE = TypeRef.of_primitive("double")

MATH_ROUND = MethodRef(owner="java.lang.Math", name="round", is_static=True)


def expression(
    source: str,
    text: str,
    kind: NodeKind = NodeKind.IDENTIFIER,
    type_ref: TypeRef | None = None,
    after: int = 0,
) -> SyntaxNode:
    """Node for the first occurrence of ``text`` in ``source`` at or after ``after``."""
    start = source.index(text, after)
    return SyntaxNode(kind=kind, span=Span(start, start + len(text)), type_ref=type_ref)


def call(
    source: str,
    text: str,
    arguments: list[tuple[str, NodeKind, TypeRef | None]],
    target: MethodRef | None = MATH_ROUND,
    type_ref: TypeRef | None = INT,
) -> SyntaxNode:
    """Call node covering ``text``; each argument is (text, kind, type) located inside it."""
    start = source.index(text)
    argument_nodes = tuple(
        expression(source, arg_text, arg_kind, arg_type, after=start)
        for arg_text, arg_kind, arg_type in arguments
    )
    line = source.count("\n", 0, start) + 1
    column = start - (source.rfind("\n", 0, start) + 1)
    return SyntaxNode(
        kind=NodeKind.CALL,
        span=Span(start, start + len(text)),
        type_ref=type_ref,
        target=target,
        arguments=argument_nodes,
        line=line,
        column=column,
    )


def round_call(
    source: str,
    argument_text: str,
    argument_type: TypeRef | None,
    argument_kind: NodeKind = NodeKind.IDENTIFIER,
) -> SyntaxNode:
    """``Math.round(<argument_text>)`` located in source."""
    return call(
        source,
        f"Math.round({argument_text})",
        [(argument_text, argument_kind, argument_type)],
    )

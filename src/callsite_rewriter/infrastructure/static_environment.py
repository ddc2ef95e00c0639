"""In-memory Environment for drivers that already hold resolved nodes and source text."""

from collections.abc import Iterable

from callsite_rewriter.domain.nodes import Span, SyntaxNode, TypeRef
from callsite_rewriter.domain.probe import resolves
from callsite_rewriter.domain.protocols import Environment, SymbolResolver


class StaticSymbolResolver(SymbolResolver):
    """Resolves exactly the names it was given."""

    def __init__(self, known: Iterable[str] = ()) -> None:
        self._known = frozenset(known)

    def is_resolvable(self, qualified_name: str) -> bool:
        return qualified_name in self._known


class StaticEnvironment(Environment):
    """
    Environment over one compilation unit's source text.

    Types come from the ``type_ref`` the typechecker attached to each node.
    """

    def __init__(self, source: str, resolver: SymbolResolver | None = None) -> None:
        self._source = source
        self._resolver = resolver or StaticSymbolResolver()

    @property
    def source(self) -> str:
        return self._source

    def type_of(self, node: SyntaxNode) -> TypeRef | None:
        return node.type_ref

    def resolves(self, qualified_name: str) -> bool:
        return resolves(self._resolver, qualified_name)

    def source_for(self, span: Span) -> str:
        return self._source[span.start:span.end]

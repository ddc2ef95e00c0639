"""Rule protocol. Rules are stateless: everything they need arrives per call site."""

from typing import Protocol

__all__ = [
    "CallSiteRule",
]

from callsite_rewriter.domain.diagnostics import Diagnostic
from callsite_rewriter.domain.nodes import SyntaxNode
from callsite_rewriter.domain.protocols import Environment


class CallSiteRule(Protocol):
    """One rule of the catalog: screen, classify, synthesize."""

    code: str
    symbol: str
    description: str

    def check(self, node: SyntaxNode, env: Environment) -> Diagnostic | None:
        """
        Return exactly one Diagnostic or None (no match) for this call site.

        Internal contradictions raise EngineInvariantError instead of
        returning None.
        """
        ...

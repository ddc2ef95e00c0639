"""Rule engine: runs every rule of the catalog against one call site."""

import logging
from collections.abc import Iterable, Sequence

from callsite_rewriter.domain.diagnostics import Diagnostic
from callsite_rewriter.domain.errors import EngineInvariantError
from callsite_rewriter.domain.nodes import SyntaxNode
from callsite_rewriter.domain.protocols import Environment
from callsite_rewriter.domain.rules import CallSiteRule


class RuleEngine:
    """
    Stateless dispatcher from call sites to rules.

    Each rule yields at most one Diagnostic per call site. Engine defects
    (EngineInvariantError) are logged and re-raised; they never turn into a
    silent no-match.
    """

    def __init__(self, rules: Sequence[CallSiteRule]) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[CallSiteRule, ...]:
        return self._rules

    def evaluate(self, node: SyntaxNode, env: Environment) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for rule in self._rules:
            try:
                diagnostic = rule.check(node, env)
            except EngineInvariantError:
                logging.error(
                    "Rule %s failed an internal invariant at %s", rule.code, node.span, exc_info=True
                )
                raise
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    def evaluate_unit(self, nodes: Iterable[SyntaxNode], env: Environment) -> list[Diagnostic]:
        """Evaluate every call site of one compilation unit. Order across sites is irrelevant."""
        diagnostics: list[Diagnostic] = []
        for node in nodes:
            diagnostics.extend(self.evaluate(node, env))
        return diagnostics

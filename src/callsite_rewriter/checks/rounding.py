"""Rounding-coercion check (E9801) as a pylint checker."""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from callsite_rewriter.domain.protocols import GuidanceServiceProtocol
from callsite_rewriter.infrastructure.gateways.astroid_gateway import (
    AstroidEnvironment,
    AstroidGateway,
)
from callsite_rewriter.use_cases.evaluate_call_site import RuleEngine


class RoundingCoercionChecker(BaseChecker):
    """E9801: rounding an integral value. Thin: delegates to the rule engine."""

    name: str = "callsite-rewriter-rounding"
    CODES = ["E9801"]

    def __init__(
        self,
        linter: "PyLinter",
        astroid_gateway: AstroidGateway,
        engine: RuleEngine,
        registry: GuidanceServiceProtocol,
    ) -> None:
        self.msgs = registry.build_msgs_for_codes(self.CODES)  # type: ignore[assignment]
        super().__init__(linter)
        self._astroid_gateway = astroid_gateway
        self._engine = engine
        self._env: Optional[AstroidEnvironment] = None

    def visit_module(self, node: astroid.nodes.Module) -> None:
        """Build one environment per compilation unit."""
        self._env = None
        source = self._module_source(node)
        if source is not None:
            self._env = self._astroid_gateway.environment_for(node, source)

    def leave_module(self, node: astroid.nodes.Module) -> None:
        self._env = None

    def visit_call(self, node: astroid.nodes.Call) -> None:
        if self._env is None:
            return
        call_site = self._astroid_gateway.to_syntax_node(node, self._env.index)
        if call_site is None:
            return
        for diagnostic in self._engine.evaluate(call_site, self._env):
            self.add_message(diagnostic.code, node=node, args=(diagnostic.message,))

    @staticmethod
    def _module_source(node: astroid.nodes.Module) -> Optional[str]:
        try:
            stream = node.stream()
        except (OSError, AttributeError):
            return None
        if stream is None:
            return None
        with stream:
            data = stream.read()
        return data.decode(node.file_encoding or "utf-8", errors="replace")

"""
Pylint plugin entry point - composition root for the checker plugin.

Enable with ``pylint --load-plugins=callsite_rewriter.checker``.
"""

from pylint.lint import PyLinter

from callsite_rewriter.checks.rounding import RoundingCoercionChecker
from callsite_rewriter.infrastructure.di.container import RewriterContainer


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = RewriterContainer.get_instance()
    linter.register_checker(
        RoundingCoercionChecker(
            linter,
            astroid_gateway=container.get_astroid_gateway(),
            engine=container.get_rule_engine(),
            registry=container.get_guidance_service(),
        )
    )

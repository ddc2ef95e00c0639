"""Unit tests for RewriterContainer."""

import pytest

from callsite_rewriter.domain.rules.math_round import MathRoundIntLongRule
from callsite_rewriter.infrastructure.di.container import RewriterContainer
from callsite_rewriter.infrastructure.gateways.astroid_gateway import AstroidGateway
from callsite_rewriter.infrastructure.gateways.libcst_fixer_gateway import LibCSTFixerGateway
from callsite_rewriter.use_cases.evaluate_call_site import RuleEngine


class TestRewriterContainer:

    def test_wires_defaults(self) -> None:
        container = RewriterContainer(config_dict={})
        assert isinstance(container.get_astroid_gateway(), AstroidGateway)
        assert isinstance(container.get_fixer_gateway(), LibCSTFixerGateway)
        assert isinstance(container.get_rule_engine(), RuleEngine)
        assert container.get_guidance_service().get_entry("E9801") is not None
        assert container.get_filesystem_gateway().exists(".")

    def test_rule_follows_configuration(self) -> None:
        container = RewriterContainer(config_dict={"profile": "java"})
        (rule,) = container.get_rule_engine().rules
        assert isinstance(rule, MathRoundIntLongRule)
        assert rule.profile.name == "java"
        assert container.get_config_loader().profile is rule.profile

    def test_missing_key_raises(self) -> None:
        with pytest.raises(ValueError, match="not registered"):
            RewriterContainer(config_dict={}).get("Telemetry")

    def test_register_singleton_overrides(self) -> None:
        container = RewriterContainer(config_dict={})
        replacement = RuleEngine([])
        container.register_singleton("RuleEngine", replacement)
        assert container.get_rule_engine() is replacement

    def test_get_instance_is_cached(self) -> None:
        assert RewriterContainer.get_instance() is RewriterContainer.get_instance()

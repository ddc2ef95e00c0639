"""Unit tests for ConfigurationLoader."""

import logging
import unittest

import pytest

from callsite_rewriter.domain.config import DEFAULT_MAX_FIX_PASSES, ConfigurationLoader
from callsite_rewriter.domain.nodes import NodeKind
from callsite_rewriter.domain.parenthesization import DEFAULT_PARENTHESIZE_KINDS
from callsite_rewriter.domain.rules.math_round import JAVA_MATH_ROUND, PYTHON_BUILTIN_ROUND


class TestConfigurationLoader(unittest.TestCase):

    def test_defaults(self) -> None:
        loader = ConfigurationLoader({})
        self.assertIs(loader.profile, PYTHON_BUILTIN_ROUND)
        self.assertEqual(loader.parenthesize_kinds, DEFAULT_PARENTHESIZE_KINDS)
        self.assertEqual(loader.max_fix_passes, DEFAULT_MAX_FIX_PASSES)
        self.assertEqual(loader.exclude_paths, [])

    def test_none_is_empty_config(self) -> None:
        self.assertEqual(ConfigurationLoader(None).config, {})

    def test_config_is_a_copy(self) -> None:
        raw = {"profile": "java"}
        loader = ConfigurationLoader(raw)
        loader.config["profile"] = "python"
        raw["profile"] = "python"
        self.assertEqual(loader.config, {"profile": "java"})
        self.assertIs(loader.profile, JAVA_MATH_ROUND)

    def test_helper_symbol_override(self) -> None:
        loader = ConfigurationLoader({"profile": "java", "helper_symbol": "org.example.Narrow"})
        self.assertEqual(loader.profile.helper_symbol, "org.example.Narrow")
        self.assertEqual(loader.profile.int_family, JAVA_MATH_ROUND.int_family)

    def test_empty_helper_symbol_disables_helper(self) -> None:
        loader = ConfigurationLoader({"profile": "java", "helper_symbol": ""})
        self.assertIsNone(loader.profile.helper_symbol)

    def test_parenthesize_kinds(self) -> None:
        loader = ConfigurationLoader({"parenthesize_kinds": ["binary", "conditional"]})
        self.assertEqual(
            loader.parenthesize_kinds, frozenset({NodeKind.BINARY, NodeKind.CONDITIONAL})
        )

    def test_exclusion(self) -> None:
        loader = ConfigurationLoader({"exclude_paths": ["generated/", 7]})
        self.assertEqual(loader.exclude_paths, ["generated/"])
        self.assertTrue(loader.is_excluded("src/generated/api.py"))
        self.assertFalse(loader.is_excluded("src/app.py"))


@pytest.mark.parametrize("raw", [0, -1, "3", True, 2.5])
def test_invalid_max_fix_passes_falls_back(raw: object, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert ConfigurationLoader({"max_fix_passes": raw}).max_fix_passes == DEFAULT_MAX_FIX_PASSES
    assert "max_fix_passes" in caplog.text


def test_unknown_profile_warns_and_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        loader = ConfigurationLoader({"profile": "cobol"})
    assert loader.profile is PYTHON_BUILTIN_ROUND
    assert "cobol" in caplog.text


def test_unknown_parenthesize_kind_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        loader = ConfigurationLoader({"parenthesize_kinds": ["binary", "ternary"]})
    assert loader.parenthesize_kinds == frozenset({NodeKind.BINARY})
    assert "ternary" in caplog.text


def test_non_list_parenthesize_kinds_uses_default(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        loader = ConfigurationLoader({"parenthesize_kinds": "binary"})
    assert loader.parenthesize_kinds == DEFAULT_PARENTHESIZE_KINDS
    assert "must be a list" in caplog.text

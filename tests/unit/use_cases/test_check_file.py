"""Unit tests for CheckFileUseCase."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

from callsite_rewriter.domain.rules.math_round import PYTHON_BUILTIN_ROUND, MathRoundIntLongRule
from callsite_rewriter.infrastructure.gateways.astroid_gateway import AstroidGateway
from callsite_rewriter.use_cases.check_file import CheckFileUseCase
from callsite_rewriter.use_cases.evaluate_call_site import RuleEngine


def _use_case() -> CheckFileUseCase:
    engine = RuleEngine([MathRoundIntLongRule(profile=PYTHON_BUILTIN_ROUND)])
    return CheckFileUseCase(AstroidGateway(), engine)


class TestCheckFileUseCase:

    def test_reports_round_of_int(self, write_module: Callable[..., Path]) -> None:
        path = write_module("count = 3\nratio = 0.5\na = round(count)\nb = round(ratio)\nc = round(count, 2)\n")
        report = _use_case().execute(str(path))
        assert not report.skipped
        assert len(report.diagnostics) == 1
        assert report.diagnostics[0].location == "3:4"
        assert len(report.fixable) == 1
        assert report.manual == []

    def test_clean_file(self, write_module: Callable[..., Path]) -> None:
        path = write_module("import math\nx = math.floor(2.5)\n")
        report = _use_case().execute(str(path))
        assert report.diagnostics == []

    def test_unparsable_file_is_skipped(self, write_module: Callable[..., Path]) -> None:
        path = write_module("def broken(:\n")
        report = _use_case().execute(str(path))
        assert report.skipped
        assert report.diagnostics == []

    def test_delegates_to_gateway(self) -> None:
        gateway = MagicMock()
        gateway.parse_file.return_value = None
        report = CheckFileUseCase(gateway, RuleEngine([])).execute("missing.py")
        assert report.skipped
        gateway.parse_file.assert_called_once_with("missing.py")

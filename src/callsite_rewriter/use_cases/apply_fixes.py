"""Use Case: Apply Fixes to Source Code."""

import logging
from dataclasses import dataclass, field

from callsite_rewriter.domain.diagnostics import Diagnostic
from callsite_rewriter.domain.edits import FixPlan
from callsite_rewriter.domain.protocols import FixerGatewayProtocol
from callsite_rewriter.use_cases.check_file import CheckFileUseCase


@dataclass(frozen=True)
class FileFixResult:
    """Outcome of fixing one file: fixes applied and diagnostics still present afterwards."""

    path: str
    fixes_applied: int = 0
    remaining: list[Diagnostic] = field(default_factory=list)

    @property
    def modified(self) -> bool:
        return self.fixes_applied > 0


class ApplyFixesUseCase:
    """
    Apply fix plans until a file reaches a fixed point.

    Each pass re-parses the file, so a fix that exposes another call site
    (``round(round(x))``) is picked up on the next pass. Within a pass only
    plans that do not conflict with earlier ones in source order are applied.
    """

    def __init__(
        self,
        check_file: CheckFileUseCase,
        fixer_gateway: FixerGatewayProtocol,
        max_passes: int = 3,
    ) -> None:
        self.check_file = check_file
        self.fixer_gateway = fixer_gateway
        self.max_passes = max_passes

    def execute(self, file_paths: list[str]) -> list[FileFixResult]:
        return [self._fix_file(path) for path in file_paths]

    def _fix_file(self, file_path: str) -> FileFixResult:
        applied = 0
        for _ in range(self.max_passes):
            report = self.check_file.execute(file_path)
            if report.skipped:
                return FileFixResult(path=file_path, fixes_applied=applied)
            plans = self.select_plans(report.diagnostics)
            if not plans or not self.fixer_gateway.apply_fixes(file_path, plans):
                return FileFixResult(
                    path=file_path, fixes_applied=applied, remaining=report.diagnostics
                )
            applied += len(plans)
            logging.info("Applied %d fixes to %s", len(plans), file_path)
        report = self.check_file.execute(file_path)
        return FileFixResult(path=file_path, fixes_applied=applied, remaining=report.diagnostics)

    @staticmethod
    def select_plans(diagnostics: list[Diagnostic]) -> list[FixPlan]:
        """Fix plans in source order, skipping any that conflict with one already chosen."""
        selected: list[FixPlan] = []
        for diagnostic in sorted(diagnostics, key=lambda d: d.node.span.start):
            plan = diagnostic.fix
            if plan is None or plan.is_empty:
                continue
            if any(plan.conflicts_with(chosen) for chosen in selected):
                continue
            selected.append(plan)
        return selected

"""Use Case: report diagnostics for one Python file."""

from dataclasses import dataclass, field

from callsite_rewriter.domain.diagnostics import Diagnostic
from callsite_rewriter.infrastructure.gateways.astroid_gateway import AstroidGateway
from callsite_rewriter.use_cases.evaluate_call_site import RuleEngine


@dataclass(frozen=True)
class FileReport:
    """Diagnostics of one file. ``skipped`` files could not be read or parsed."""

    path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    skipped: bool = False

    @property
    def fixable(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.has_fix]

    @property
    def manual(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.has_fix]


class CheckFileUseCase:
    """Parse a file, convert its calls to syntax nodes and run the engine over them."""

    def __init__(self, astroid_gateway: AstroidGateway, engine: RuleEngine) -> None:
        self.astroid_gateway = astroid_gateway
        self.engine = engine

    def execute(self, file_path: str) -> FileReport:
        parsed = self.astroid_gateway.parse_file(file_path)
        if parsed is None:
            return FileReport(path=file_path, skipped=True)
        source, module = parsed
        env = self.astroid_gateway.environment_for(module, source)
        call_sites = self.astroid_gateway.call_sites(env)
        return FileReport(path=file_path, diagnostics=self.engine.evaluate_unit(call_sites, env))

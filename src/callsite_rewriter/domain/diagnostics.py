"""Diagnostic results returned to the driver."""

from dataclasses import dataclass
from enum import Enum

from callsite_rewriter.domain.edits import FixPlan
from callsite_rewriter.domain.errors import EngineInvariantError
from callsite_rewriter.domain.nodes import SyntaxNode


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """
    A detected defect at one call site.

    ``fix`` is present only when a repair is provably safe without deeper
    analysis. A diagnostic always carries a message; an ERROR without a fix
    is the user's only signal, so it is never built empty.
    """

    node: SyntaxNode
    code: str
    severity: Severity
    message: str
    fix: FixPlan | None = None
    requires_human_review: bool = False

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise EngineInvariantError(
                f"Diagnostic {self.code} at {self.location} has no message"
            )

    @property
    def has_fix(self) -> bool:
        return self.fix is not None

    @property
    def location(self) -> str:
        return f"{self.node.line}:{self.node.column}"

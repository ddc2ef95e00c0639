from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from callsite_rewriter.domain.edits import FixPlan
    from callsite_rewriter.domain.nodes import Span, SyntaxNode, TypeRef
    from callsite_rewriter.domain.registry_types import RuleRegistryEntry


class SymbolResolver(Protocol):
    """Answers whether a fully-qualified symbol is importable in one compilation unit."""

    def is_resolvable(self, qualified_name: str) -> bool:
        ...


class Environment(Protocol):
    """Read-only facade over one compilation unit. Shared by all call sites of that unit."""

    def type_of(self, node: "SyntaxNode") -> Optional["TypeRef"]:
        """Resolved type of an expression node, or None when unknown."""
        ...

    def resolves(self, qualified_name: str) -> bool:
        """True if the symbol resolves here. Never raises."""
        ...

    def source_for(self, span: "Span") -> str:
        """Original source text covered by span."""
        ...


class FixerGatewayProtocol(Protocol):
    """Applies fix plans to source. Implementers accept only FixPlan at the boundary."""

    def render(self, source: str, plans: list["FixPlan"]) -> str:
        """Return the source with every plan applied. Pure."""
        ...

    def apply_fixes(self, file_path: str, plans: list["FixPlan"]) -> bool:
        """Apply plans to a file. Returns True if the file was modified."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def glob_python_files(self, path: str) -> list[str]:
        """Get all Python files in path (recursive if directory)."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...


class GuidanceServiceProtocol(Protocol):
    """Rule registry lookups. Implemented by GuidanceService in infrastructure."""

    def get_entry(self, rule_code: str) -> Optional["RuleRegistryEntry"]:
        ...

    def get_manual_instructions(self, rule_code: str) -> str:
        ...

    def get_message_tuple(self, rule_code: str) -> Optional[tuple[str, str, str]]:
        """Return (message_template, symbol, description) for pylint msgs, or None."""
        ...

    def build_msgs_for_codes(self, codes: list[str]) -> dict[str, tuple[str, str, str]]:
        ...

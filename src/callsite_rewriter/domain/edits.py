"""
Textual edits anchored to source spans.

A FixPlan is a pure value: building one has no side effects and a rule may
throw it away. ``apply_fix_plan`` turns (source, plan) into new source
without re-parsing anything.
"""

from dataclasses import dataclass, field
from enum import Enum

from callsite_rewriter.domain.errors import (
    EngineInvariantError,
    OverlappingEditsError,
    SpanOutOfRangeError,
)
from callsite_rewriter.domain.nodes import Span


class EditKind(Enum):
    INSERT_BEFORE = "insert_before"
    REPLACE = "replace"
    INSERT_AFTER = "insert_after"


# Order of edits sharing one offset: text closing a span that ends there,
# then text opening a span that starts there, then the replacement itself.
_RANK = {
    EditKind.INSERT_AFTER: 0,
    EditKind.INSERT_BEFORE: 1,
    EditKind.REPLACE: 2,
}


@dataclass(frozen=True)
class Edit:
    """One textual edit. Insertions are zero-width at the span's start or end."""

    kind: EditKind
    span: Span
    text: str

    @property
    def start(self) -> int:
        if self.kind is EditKind.INSERT_AFTER:
            return self.span.end
        return self.span.start

    @property
    def end(self) -> int:
        if self.kind is EditKind.INSERT_BEFORE:
            return self.span.start
        return self.span.end

    @property
    def is_insertion(self) -> bool:
        return self.kind is not EditKind.REPLACE

    def overlaps(self, other: "Edit") -> bool:
        """True if applying both edits would be ambiguous."""
        if self.is_insertion and other.is_insertion:
            return False
        if self.is_insertion:
            return other.span.contains(self.start)
        if other.is_insertion:
            return self.span.contains(other.start)
        if self.span.is_empty and other.span.is_empty:
            return self.start == other.start
        return self.start < other.end and other.start < self.end

    def describe(self) -> str:
        return f"{self.kind.value}[{self.span.start}:{self.span.end}]={self.text!r}"


def _find_overlap(edits: tuple[Edit, ...]) -> tuple[Edit, Edit] | None:
    for i, first in enumerate(edits):
        for second in edits[i + 1:]:
            if first.overlaps(second):
                return (first, second)
    return None


@dataclass(frozen=True)
class FixPlan:
    """
    Ordered, non-overlapping edits plus imports to add.

    Construction fails with OverlappingEditsError if two edits overlap, so
    every FixPlan that exists can be applied unambiguously. Imports are kept
    as fully-qualified names; rendering them is up to the host language.
    """

    edits: tuple[Edit, ...] = field(default_factory=tuple)
    imports: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        clash = _find_overlap(self.edits)
        if clash is not None:
            raise OverlappingEditsError(
                f"Overlapping edits: {clash[0].describe()} and {clash[1].describe()}"
            )
        if len(set(self.imports)) != len(self.imports):
            raise EngineInvariantError(f"Duplicate imports in plan: {self.imports}")

    @property
    def is_empty(self) -> bool:
        return not self.edits and not self.imports

    def conflicts_with(self, other: "FixPlan") -> bool:
        return any(mine.overlaps(theirs) for mine in self.edits for theirs in other.edits)

    def merge(self, other: "FixPlan") -> "FixPlan":
        """Concatenate two plans. Raises OverlappingEditsError on conflicting edits."""
        imports = self.imports + tuple(i for i in other.imports if i not in self.imports)
        return FixPlan(edits=self.edits + other.edits, imports=imports)

    def sorted_edits(self) -> list[Edit]:
        """Edits in application order; ties keep plan order."""
        return sorted(self.edits, key=lambda e: (e.start, _RANK[e.kind]))


class FixPlanBuilder:
    """Accumulates edits for one rule invocation."""

    def __init__(self) -> None:
        self._edits: list[Edit] = []
        self._imports: list[str] = []

    def prefix_with(self, span: Span, text: str) -> "FixPlanBuilder":
        self._edits.append(Edit(EditKind.INSERT_BEFORE, span, text))
        return self

    def replace(self, span: Span, text: str) -> "FixPlanBuilder":
        self._edits.append(Edit(EditKind.REPLACE, span, text))
        return self

    def postfix_with(self, span: Span, text: str) -> "FixPlanBuilder":
        self._edits.append(Edit(EditKind.INSERT_AFTER, span, text))
        return self

    def add_import(self, qualified_name: str) -> "FixPlanBuilder":
        if qualified_name not in self._imports:
            self._imports.append(qualified_name)
        return self

    def build(self) -> FixPlan:
        return FixPlan(edits=tuple(self._edits), imports=tuple(self._imports))


def apply_fix_plan(source: str, plan: FixPlan) -> str:
    """Apply a plan's edits in ascending span order. Imports are left to the host."""
    pieces: list[str] = []
    cursor = 0
    for edit in plan.sorted_edits():
        if edit.end > len(source):
            raise SpanOutOfRangeError(
                f"{edit.describe()} exceeds source length {len(source)}"
            )
        pieces.append(source[cursor:edit.start])
        pieces.append(edit.text)
        cursor = max(cursor, edit.end)
    pieces.append(source[cursor:])
    return "".join(pieces)

"""Rounding-coercion rule (E9801): rounding a value that is already integral."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

from callsite_rewriter.domain.diagnostics import Diagnostic, Severity
from callsite_rewriter.domain.edits import FixPlan, FixPlanBuilder
from callsite_rewriter.domain.errors import ClassificationError
from callsite_rewriter.domain.nodes import NodeKind, SyntaxNode, TypeRef
from callsite_rewriter.domain.parenthesization import (
    DEFAULT_PARENTHESIZE_KINDS,
    requires_parentheses,
)
from callsite_rewriter.domain.predicates import (
    all_of,
    any_of,
    argument_type_in,
    has_argument_count,
    is_call_to,
)
from callsite_rewriter.domain.protocols import Environment


class ArgumentFamily(Enum):
    """Screen result for one call site."""

    NO_MATCH = "no_match"
    INT_FAMILY = "int_family"
    LONG_FAMILY = "long_family"


@dataclass(frozen=True)
class RoundingProfile:
    """Which rounding call to flag and how to repair it in one target language."""

    name: str
    owner: str
    method: str
    display_name: str
    int_family: frozenset[TypeRef]
    long_family: frozenset[TypeRef]
    helper_symbol: str | None
    helper_method: str
    summary: str
    manual_guidance: str

    def __post_init__(self) -> None:
        shared = self.int_family & self.long_family
        if shared:
            raise ValueError(
                f"Profile {self.name!r} lists {sorted(map(str, shared))} in both argument families"
            )

    def with_helper(self, helper_symbol: str | None) -> "RoundingProfile":
        return replace(self, helper_symbol=helper_symbol)

    @property
    def helper_call(self) -> str | None:
        """Call prefix for the helper, e.g. ``Ints.saturatedCast``."""
        if not self.helper_symbol:
            return None
        return f"{self.helper_symbol.rsplit('.', 1)[-1]}.{self.helper_method}"


JAVA_MATH_ROUND = RoundingProfile(
    name="java",
    owner="java.lang.Math",
    method="round",
    display_name="Math.round",
    int_family=frozenset({TypeRef.of_primitive("int"), TypeRef.of_class("java.lang.Integer")}),
    long_family=frozenset({TypeRef.of_primitive("long"), TypeRef.of_class("java.lang.Long")}),
    helper_symbol="com.google.common.primitives.Ints",
    helper_method="saturatedCast",
    summary="Math.round(Integer) results in truncation",
    manual_guidance=(
        "Calling {display_name}() with a long argument risks truncation: the argument is "
        "coerced to a float before rounding back to an int, and large longs cannot be "
        "represented as a float. Replace the call with {helper_call}() from {helper} once it "
        "is available, or narrow the value with a manual cast. A plain (int) cast silently "
        "wraps values outside the int range, so check the bounds before casting."
    ),
)

PYTHON_BUILTIN_ROUND = RoundingProfile(
    name="python",
    owner="builtins",
    method="round",
    display_name="round",
    int_family=frozenset({TypeRef.of_class("builtins.int")}),
    long_family=frozenset(),
    helper_symbol=None,
    helper_method="saturated_cast",
    summary="round() called with an int argument returns it unchanged",
    manual_guidance=(
        "Calling {display_name}() on this argument risks truncation. Use {helper_call}() "
        "from {helper} or clamp the value explicitly; a plain int() conversion does not "
        "check bounds."
    ),
)

PROFILES: dict[str, RoundingProfile] = {
    JAVA_MATH_ROUND.name: JAVA_MATH_ROUND,
    PYTHON_BUILTIN_ROUND.name: PYTHON_BUILTIN_ROUND,
}


class MathRoundIntLongRule:
    """
    Rule for E9801: rounding an int or long.

    Rounding an int is a no-op, so the call is replaced by its argument.
    Rounding a long truncates through float; it is rewritten to a
    saturating helper when the compilation unit can import one, and
    otherwise reported for manual review without a fix.
    """

    code: str = "E9801"
    symbol: str = "round-int-long"
    description: str = "Rounding an integral argument: redundant for int, truncating for long."

    def __init__(
        self,
        profile: RoundingProfile = JAVA_MATH_ROUND,
        parenthesize_kinds: Iterable[NodeKind] = DEFAULT_PARENTHESIZE_KINDS,
    ) -> None:
        self._profile = profile
        self._parenthesize_kinds = frozenset(parenthesize_kinds)
        self._int_argument = argument_type_in(0, profile.int_family)
        self._long_argument = argument_type_in(0, profile.long_family)
        self._screen = all_of(
            is_call_to(profile.owner, profile.method),
            has_argument_count(1),
            any_of(self._int_argument, self._long_argument),
        )

    @property
    def profile(self) -> RoundingProfile:
        return self._profile

    def check(self, node: SyntaxNode, env: Environment) -> Diagnostic | None:
        family = self.screen(node, env)
        if family is ArgumentFamily.NO_MATCH:
            return None
        if family is ArgumentFamily.INT_FAMILY:
            return self._remove_round_call(node, env)
        if family is ArgumentFamily.LONG_FAMILY:
            return self._narrow_long_argument(node, env)
        raise ClassificationError(f"Unknown argument family {family} for {node}")

    def screen(self, node: SyntaxNode, env: Environment) -> ArgumentFamily:
        if not self._screen(node, env):
            return ArgumentFamily.NO_MATCH
        return self.classify(node, env)

    def classify(self, node: SyntaxNode, env: Environment) -> ArgumentFamily:
        """Exactly one family must hold once the screen has passed."""
        is_int = self._int_argument(node, env)
        is_long = self._long_argument(node, env)
        if is_int and is_long:
            raise ClassificationError(
                f"Argument of {self._profile.display_name} call at {node.span} is in both families"
            )
        if is_int:
            return ArgumentFamily.INT_FAMILY
        if is_long:
            return ArgumentFamily.LONG_FAMILY
        raise ClassificationError(
            f"Unknown argument type to {self._profile.display_name} call at {node.span}"
        )

    def manual_message(self) -> str:
        profile = self._profile
        return profile.manual_guidance.format(
            display_name=profile.display_name,
            helper_call=profile.helper_call or "a saturating narrowing helper",
            helper=profile.helper_symbol or "your utility library",
        )

    def _remove_round_call(self, node: SyntaxNode, env: Environment) -> Diagnostic:
        argument = node.arguments[0]
        argument_source = env.source_for(argument.span)
        builder = FixPlanBuilder()
        if requires_parentheses(argument, self._parenthesize_kinds):
            builder.prefix_with(node.span, "(")
            builder.replace(node.span, argument_source)
            builder.postfix_with(node.span, ")")
        else:
            builder.replace(node.span, argument_source)
        return self._diagnostic(node, self._profile.summary, builder.build())

    def _narrow_long_argument(self, node: SyntaxNode, env: Environment) -> Diagnostic:
        helper = self._profile.helper_symbol
        if helper is None or not env.resolves(helper):
            return Diagnostic(
                node=node,
                code=self.code,
                severity=Severity.ERROR,
                message=self.manual_message(),
                fix=None,
                requires_human_review=True,
            )
        argument_source = env.source_for(node.arguments[0].span)
        plan = (
            FixPlanBuilder()
            .add_import(helper)
            .replace(node.span, f"{self._profile.helper_call}({argument_source})")
            .build()
        )
        return self._diagnostic(node, self._profile.summary, plan)

    def _diagnostic(self, node: SyntaxNode, message: str, plan: FixPlan) -> Diagnostic:
        return Diagnostic(
            node=node,
            code=self.code,
            severity=Severity.ERROR,
            message=message,
            fix=plan,
        )

"""
Boolean matcher predicates over syntax nodes.

A predicate is a pure callable ``(node, env) -> bool``. Combinators compose
predicates without side effects; ``all_of`` and ``any_of`` short-circuit left
to right, which only affects how much work is done, never the result.
"""

from collections.abc import Callable, Iterable

from callsite_rewriter.domain.nodes import SyntaxNode, TypeRef
from callsite_rewriter.domain.protocols import Environment

Predicate = Callable[[SyntaxNode, Environment], bool]


def all_of(*predicates: Predicate) -> Predicate:
    """Match iff every predicate matches. Vacuously true for no predicates."""
    frozen = tuple(predicates)

    def matches(node: SyntaxNode, env: Environment) -> bool:
        return all(p(node, env) for p in frozen)

    return matches


def any_of(*predicates: Predicate) -> Predicate:
    """Match iff at least one predicate matches. False for no predicates."""
    frozen = tuple(predicates)

    def matches(node: SyntaxNode, env: Environment) -> bool:
        return any(p(node, env) for p in frozen)

    return matches


def not_(predicate: Predicate) -> Predicate:
    def matches(node: SyntaxNode, env: Environment) -> bool:
        return not predicate(node, env)

    return matches


def is_call_to(type_name: str, method_name: str) -> Predicate:
    """
    Match calls whose resolved target is ``method_name`` declared on ``type_name``.

    A dotted ``type_name`` must equal the declaring owner exactly; a simple
    name matches the owner's last segment, so ``"Math"`` matches ``java.lang.Math``.
    """
    qualified = "." in type_name

    def matches(node: SyntaxNode, env: Environment) -> bool:
        target = node.target
        if not node.is_call or target is None or target.name != method_name:
            return False
        if qualified:
            return target.owner == type_name
        return target.owner_simple_name == type_name

    return matches


def argument_type_in(position: int, type_set: Iterable[TypeRef]) -> Predicate:
    """Match calls whose argument at ``position`` has a type structurally equal to one in ``type_set``."""
    types = frozenset(type_set)

    def matches(node: SyntaxNode, env: Environment) -> bool:
        if not node.is_call:
            return False
        argument = node.argument(position)
        if argument is None:
            return False
        return env.type_of(argument) in types

    return matches


def has_argument_count(count: int) -> Predicate:
    def matches(node: SyntaxNode, env: Environment) -> bool:
        return node.is_call and len(node.arguments) == count

    return matches

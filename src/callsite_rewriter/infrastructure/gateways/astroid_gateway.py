"""
Astroid adapter: turns Python ``Call`` nodes into engine SyntaxNodes.

Types and call targets are resolved here, once, with astroid inference; the
engine only ever sees the resulting TypeRef/MethodRef values.
"""

import logging
import re
from pathlib import Path
from typing import Optional

import astroid  # type: ignore[import-untyped]
from astroid import bases, nodes

from callsite_rewriter.domain.nodes import MethodRef, NodeKind, Span, SyntaxNode, TypeRef
from callsite_rewriter.domain.probe import resolves
from callsite_rewriter.domain.protocols import Environment, SymbolResolver

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_KIND_BY_NODE: tuple[tuple[type, NodeKind], ...] = (
    (nodes.Call, NodeKind.CALL),
    (nodes.Name, NodeKind.IDENTIFIER),
    (nodes.Const, NodeKind.LITERAL),
    (nodes.JoinedStr, NodeKind.LITERAL),
    (nodes.List, NodeKind.LITERAL),
    (nodes.Dict, NodeKind.LITERAL),
    (nodes.Set, NodeKind.LITERAL),
    (nodes.ListComp, NodeKind.LITERAL),
    (nodes.SetComp, NodeKind.LITERAL),
    (nodes.DictComp, NodeKind.LITERAL),
    (nodes.Attribute, NodeKind.FIELD_ACCESS),
    (nodes.Subscript, NodeKind.ARRAY_ACCESS),
    (nodes.BinOp, NodeKind.BINARY),
    (nodes.BoolOp, NodeKind.BINARY),
    (nodes.Compare, NodeKind.BINARY),
    (nodes.IfExp, NodeKind.CONDITIONAL),
    (nodes.NamedExpr, NodeKind.ASSIGNMENT),
    (nodes.Lambda, NodeKind.LAMBDA),
    (nodes.UnaryOp, NodeKind.PREFIX_UNARY),
    (nodes.Await, NodeKind.PREFIX_UNARY),
)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, complex)) and not isinstance(value, bool)


class SourceIndex:
    """Maps astroid (lineno, UTF-8 byte column) positions to character offsets."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._line_starts = [0] + [m.end() for m in _LINE_BREAK.finditer(source)]

    @property
    def source(self) -> str:
        return self._source

    def offset(self, lineno: int, col_offset: int) -> int | None:
        if lineno < 1 or lineno > len(self._line_starts) or col_offset < 0:
            return None
        start = self._line_starts[lineno - 1]
        end = self._line_starts[lineno] if lineno < len(self._line_starts) else len(self._source)
        prefix = self._source[start:end].encode("utf-8")[:col_offset]
        return start + len(prefix.decode("utf-8", errors="ignore"))

    def span_of(self, node: nodes.NodeNG) -> Span | None:
        if node.lineno is None or node.end_lineno is None:
            return None
        start = self.offset(node.lineno, node.col_offset or 0)
        end = self.offset(node.end_lineno, node.end_col_offset or 0)
        if start is None or end is None or end < start:
            return None
        return Span(start, end)


class AstroidSymbolResolver(SymbolResolver):
    """Resolves ``package.module.Attr`` against the Python module graph seen from one file."""

    def __init__(self, context_file: Optional[str] = None) -> None:
        self._context_file = context_file

    def is_resolvable(self, qualified_name: str) -> bool:
        parts = qualified_name.split(".")
        for cut in range(len(parts), 0, -1):
            module_name = ".".join(parts[:cut])
            try:
                module = astroid.MANAGER.ast_from_module_name(
                    module_name, context_file=self._context_file
                )
            except astroid.AstroidBuildingError:
                continue
            return self._has_attributes(module, parts[cut:])
        return False

    def _has_attributes(self, node: nodes.NodeNG, attributes: list[str]) -> bool:
        current = node
        for attribute in attributes:
            try:
                current = next(current.igetattr(attribute))
            except (astroid.AttributeInferenceError, astroid.InferenceError, StopIteration):
                return False
            if current is astroid.Uninferable:
                return False
        return True


class AstroidEnvironment(Environment):
    """Environment for one astroid module. Symbol answers are relative to the module's file."""

    def __init__(self, module: nodes.Module, index: SourceIndex) -> None:
        self._module = module
        self._index = index
        self._resolver = AstroidSymbolResolver(getattr(module, "file", None))

    @property
    def module(self) -> nodes.Module:
        return self._module

    @property
    def index(self) -> SourceIndex:
        return self._index

    def type_of(self, node: SyntaxNode) -> TypeRef | None:
        return node.type_ref

    def resolves(self, qualified_name: str) -> bool:
        return resolves(self._resolver, qualified_name)

    def source_for(self, span: Span) -> str:
        return self._index.source[span.start:span.end]


class AstroidGateway:
    """Parsing, call-site discovery and node conversion using astroid."""

    def parse_source(
        self, source: str, module_name: str = "", path: Optional[str] = None
    ) -> Optional[nodes.Module]:
        try:
            return astroid.parse(source, module_name=module_name, path=path)
        except astroid.AstroidSyntaxError as exc:
            logging.warning("Skipping %s: %s", path or module_name or "<string>", exc)
            return None

    def parse_file(self, file_path: str) -> Optional[tuple[str, nodes.Module]]:
        """Read and parse a file. Returns (source, module) or None when unreadable."""
        try:
            source = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logging.warning("Skipping %s: %s", file_path, exc)
            return None
        module = self.parse_source(source, module_name=Path(file_path).stem, path=file_path)
        if module is None:
            return None
        return source, module

    def environment_for(self, module: nodes.Module, source: str) -> AstroidEnvironment:
        return AstroidEnvironment(module, SourceIndex(source))

    def call_sites(self, env: AstroidEnvironment) -> list[SyntaxNode]:
        """Every Call of the module that can be located in the source, in source order."""
        sites: list[SyntaxNode] = []
        for call in env.module.nodes_of_class(nodes.Call):
            node = self.to_syntax_node(call, env.index)
            if node is not None:
                sites.append(node)
        return sorted(sites, key=lambda n: n.span.start)

    def to_syntax_node(self, node: nodes.NodeNG, index: SourceIndex) -> SyntaxNode | None:
        span = index.span_of(node)
        if span is None:
            return None
        arguments: list[SyntaxNode] = []
        target = None
        if isinstance(node, nodes.Call):
            target = self.resolve_target(node)
            values = list(node.args) + [keyword.value for keyword in node.keywords or []]
            for value in values:
                argument = self.to_syntax_node(value, index)
                if argument is None:
                    return None
                arguments.append(argument)
        return SyntaxNode(
            kind=self.kind_of(node),
            span=span,
            type_ref=self.infer_type_ref(node),
            target=target,
            arguments=tuple(arguments),
            line=node.lineno or 0,
            column=node.col_offset or 0,
        )

    @staticmethod
    def kind_of(node: nodes.NodeNG) -> NodeKind:
        if isinstance(node, nodes.Const) and _is_number(node.value):
            return NodeKind.NUMERIC_LITERAL
        for node_class, kind in _KIND_BY_NODE:
            if isinstance(node, node_class):
                return kind
        return NodeKind.OTHER

    def resolve_target(self, call: nodes.Call) -> MethodRef | None:
        """Declaring owner (module or class qname) and name of the called function."""
        function = self._safe_infer(call.func)
        if not isinstance(function, (nodes.FunctionDef, bases.UnboundMethod)):
            return None
        parent = function.parent
        if parent is None:
            return None
        owner = parent.frame()
        is_static = isinstance(owner, nodes.Module) or getattr(function, "type", "") == "staticmethod"
        return MethodRef(owner=owner.qname(), name=function.name, is_static=is_static)

    def infer_type_ref(self, node: nodes.NodeNG) -> TypeRef | None:
        """TypeRef of the single type the expression can have, else None."""
        try:
            values = list(node.infer())
        except astroid.InferenceError:
            values = []
        pytypes: set[str] = set()
        for value in values:
            pytype = getattr(value, "pytype", None)
            if value is astroid.Uninferable or not callable(pytype):
                pytypes.clear()
                break
            pytypes.add(pytype())
        if len(pytypes) == 1:
            return TypeRef.of_class(pytypes.pop())
        if isinstance(node, nodes.Name):
            return self._parameter_annotation(node)
        return None

    def _parameter_annotation(self, name: nodes.Name) -> TypeRef | None:
        """Annotated type of a function parameter that is never reassigned."""
        try:
            _, assignments = name.lookup(name.name)
        except (AttributeError, astroid.AstroidError):
            return None
        if len(assignments) != 1 or not isinstance(assignments[0].parent, nodes.Arguments):
            return None
        arguments = assignments[0].parent
        annotation = None
        for group, annotations in (
            (arguments.posonlyargs, arguments.posonlyargs_annotations),
            (arguments.args, arguments.annotations),
            (arguments.kwonlyargs, arguments.kwonlyargs_annotations),
        ):
            for arg, arg_annotation in zip(group or [], annotations or []):
                if arg is assignments[0]:
                    annotation = arg_annotation
        if annotation is None:
            return None
        annotated = self._safe_infer(annotation)
        if isinstance(annotated, nodes.ClassDef):
            return TypeRef.of_class(annotated.qname())
        return None

    @staticmethod
    def _safe_infer(node: nodes.NodeNG) -> Optional[nodes.NodeNG]:
        try:
            values = list(node.infer())
        except astroid.InferenceError:
            return None
        if len(values) != 1 or values[0] is astroid.Uninferable:
            return None
        return values[0]

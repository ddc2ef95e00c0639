"""LibCST Transformers for rendering fix plan imports."""

import libcst as cst


class AddImportTransformer(cst.CSTTransformer):
    """
    Transformer to add ``from module import name`` (or ``import name``) to a module.

    Skipped when the name is already imported from that module. The new
    statement goes after the last top-level import.
    """

    def __init__(self, qualified_name: str) -> None:
        module, _, name = qualified_name.rpartition(".")
        self.module = module
        self.name = name
        self.already_imported = False

    def visit_ImportFrom(self, node: cst.ImportFrom) -> None:
        if node.module is None or node.relative:
            return
        if _dotted_name(node.module) != self.module:
            return
        if isinstance(node.names, cst.ImportStar):
            self.already_imported = True
            return
        for alias in node.names:
            if alias.asname is None and _dotted_name(alias.name) == self.name:
                self.already_imported = True

    def visit_Import(self, node: cst.Import) -> None:
        if self.module:
            return
        for alias in node.names:
            if alias.asname is None and _dotted_name(alias.name) == self.name:
                self.already_imported = True

    def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
        if self.already_imported:
            return updated_node
        new_body = list(updated_node.body)
        insert_idx: int = 1 if updated_node.get_docstring() is not None else 0
        for i, stmt in enumerate(new_body):
            if isinstance(stmt, cst.SimpleStatementLine) and any(
                isinstance(s, (cst.Import, cst.ImportFrom)) for s in stmt.body
            ):
                insert_idx = i + 1
        new_body.insert(insert_idx, cst.SimpleStatementLine(body=[self._import_statement()]))
        return updated_node.with_changes(body=new_body)

    def _import_statement(self) -> cst.BaseSmallStatement:
        alias = cst.ImportAlias(name=cst.Name(self.name))
        if not self.module:
            return cst.Import(names=[alias])
        # Support dotted module paths like "a.b.c"
        parts = self.module.split(".")
        module_expr: cst.Name | cst.Attribute = cst.Name(parts[0])
        for part in parts[1:]:
            module_expr = cst.Attribute(value=module_expr, attr=cst.Name(part))
        return cst.ImportFrom(
            module=module_expr,
            names=[alias],
            whitespace_after_import=cst.SimpleWhitespace(" "),
        )


def _dotted_name(node: cst.BaseExpression) -> str:
    if isinstance(node, cst.Name):
        return node.value
    if isinstance(node, cst.Attribute):
        return f"{_dotted_name(node.value)}.{node.attr.value}"
    return ""

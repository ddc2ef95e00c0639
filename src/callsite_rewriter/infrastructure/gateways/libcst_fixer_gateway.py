"""LibCST based Fixer Gateway."""

import logging
from functools import reduce
from pathlib import Path

import libcst as cst

from callsite_rewriter.domain.edits import FixPlan, apply_fix_plan
from callsite_rewriter.domain.protocols import FixerGatewayProtocol
from callsite_rewriter.infrastructure.gateways.transformers import AddImportTransformer


class LibCSTFixerGateway(FixerGatewayProtocol):
    """Gateway for applying fix plans to Python source: text edits first, then imports via LibCST."""

    def render(self, source: str, plans: list[FixPlan]) -> str:
        """
        Apply plans to source and return the new text.

        Plans are merged into one, so conflicting plans raise
        OverlappingEditsError. Imports are parsed into place only when some
        plan asks for one.
        """
        if not plans:
            return source
        merged = reduce(FixPlan.merge, plans, FixPlan())
        edited = apply_fix_plan(source, merged)
        if not merged.imports:
            return edited
        module = cst.parse_module(edited)
        for qualified_name in merged.imports:
            module = module.visit(AddImportTransformer(qualified_name))
        return module.code

    def apply_fixes(self, file_path: str, plans: list[FixPlan]) -> bool:
        """
        Apply a list of fix plans to a file.

        Returns:
            True if the file was modified, False otherwise
        """
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
            new_source = self.render(source, plans)
        except (OSError, UnicodeDecodeError, cst.ParserSyntaxError) as exc:
            logging.warning("Could not fix %s: %s", file_path, exc)
            return False
        if new_source == source:
            return False
        path.write_text(new_source, encoding="utf-8")
        return True

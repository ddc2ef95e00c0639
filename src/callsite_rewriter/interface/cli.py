"""CLI entry points - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from callsite_rewriter.domain.config import ConfigurationLoader
from callsite_rewriter.domain.diagnostics import Diagnostic
from callsite_rewriter.domain.protocols import (
    FileSystemProtocol,
    FixerGatewayProtocol,
    GuidanceServiceProtocol,
)
from callsite_rewriter.infrastructure.gateways.astroid_gateway import AstroidGateway
from callsite_rewriter.use_cases.apply_fixes import ApplyFixesUseCase
from callsite_rewriter.use_cases.check_file import CheckFileUseCase
from callsite_rewriter.use_cases.evaluate_call_site import RuleEngine


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    astroid_gateway: AstroidGateway
    fixer_gateway: FixerGatewayProtocol
    filesystem: FileSystemProtocol
    guidance_service: GuidanceServiceProtocol
    engine: RuleEngine


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def collect_files(deps: CLIDependencies, paths: Optional[List[Path]]) -> list[str]:
        """Python files under the given paths (default: current directory), minus excluded ones."""
        targets = [str(p) for p in paths] if paths else ["."]
        files: list[str] = []
        for target in targets:
            if not deps.filesystem.exists(target):
                typer.secho(f"No such path: {target}", fg=typer.colors.RED, err=True)
                raise typer.Exit(code=2)
            files.extend(deps.filesystem.glob_python_files(target))
        return [f for f in files if not deps.config_loader.is_excluded(f)]

    @staticmethod
    def format_diagnostic(path: str, diagnostic: Diagnostic, symbol: str) -> str:
        suffix = " (fixable)" if diagnostic.has_fix else " (manual review)"
        return (
            f"{path}:{diagnostic.location}: {diagnostic.code} [{symbol}] "
            f"{diagnostic.message}{suffix}"
        )

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s: %(message)s",
        )

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="callsite-rewriter",
            help="Find rounding calls on integral values and rewrite them. Run 'check' to report; 'fix' to apply fixes.",
            add_completion=False,
        )
        check_file = CheckFileUseCase(deps.astroid_gateway, deps.engine)

        def _symbol(code: str) -> str:
            entry = deps.guidance_service.get_entry(code)
            return str(entry.get("symbol", code)) if entry else code

        def _print_manual_instructions(codes: set[str]) -> None:
            for code in sorted(codes):
                instructions = deps.guidance_service.get_manual_instructions(code)
                if instructions:
                    typer.echo(f"\n{code}: {instructions}")

        @app.command()
        def check(
            paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories (default: .)"),  # noqa: B008
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            """Report diagnostics without touching any file."""
            CLIAppFactory.configure_logging(verbose)
            found = 0
            manual_codes: set[str] = set()
            for file_path in CLIAppFactory.collect_files(deps, paths):
                report = check_file.execute(file_path)
                for diagnostic in report.diagnostics:
                    found += 1
                    typer.echo(CLIAppFactory.format_diagnostic(file_path, diagnostic, _symbol(diagnostic.code)))
                    if not diagnostic.has_fix:
                        manual_codes.add(diagnostic.code)
            _print_manual_instructions(manual_codes)
            if found:
                typer.secho(f"\n{found} diagnostic(s) found.", fg=typer.colors.RED)
                raise typer.Exit(code=1)
            typer.secho("No diagnostics.", fg=typer.colors.GREEN)

        @app.command()
        def fix(
            paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories (default: .)"),  # noqa: B008
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            """Apply every safe fix, then report what still needs a human."""
            CLIAppFactory.configure_logging(verbose)
            use_case = ApplyFixesUseCase(
                check_file=check_file,
                fixer_gateway=deps.fixer_gateway,
                max_passes=deps.config_loader.max_fix_passes,
            )
            results = use_case.execute(CLIAppFactory.collect_files(deps, paths))
            applied = sum(r.fixes_applied for r in results)
            modified = sum(1 for r in results if r.modified)
            manual = 0
            unapplied = 0
            manual_codes: set[str] = set()
            for result in results:
                for diagnostic in result.remaining:
                    typer.echo(CLIAppFactory.format_diagnostic(result.path, diagnostic, _symbol(diagnostic.code)))
                    if diagnostic.has_fix:
                        unapplied += 1
                    else:
                        manual += 1
                        manual_codes.add(diagnostic.code)
            _print_manual_instructions(manual_codes)
            typer.secho(f"Applied {applied} fix(es) in {modified} file(s).", fg=typer.colors.GREEN)
            if unapplied:
                typer.secho(
                    f"{unapplied} fixable diagnostic(s) left after {use_case.max_passes} pass(es); run fix again.",
                    fg=typer.colors.YELLOW,
                )
            if manual:
                typer.secho(f"{manual} diagnostic(s) need manual review.", fg=typer.colors.YELLOW)
            if manual or unapplied:
                raise typer.Exit(code=1)

        return app

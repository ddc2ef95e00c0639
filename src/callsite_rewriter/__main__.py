"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from callsite_rewriter.infrastructure.di.container import RewriterContainer
from callsite_rewriter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = RewriterContainer()
    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        astroid_gateway=container.get_astroid_gateway(),
        fixer_gateway=container.get_fixer_gateway(),
        filesystem=container.get_filesystem_gateway(),
        guidance_service=container.get_guidance_service(),
        engine=container.get_rule_engine(),
    )
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()

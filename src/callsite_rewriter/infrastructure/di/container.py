from typing import TYPE_CHECKING, Any, Optional, cast

from callsite_rewriter.domain.config import ConfigurationLoader
from callsite_rewriter.domain.rules.math_round import MathRoundIntLongRule
from callsite_rewriter.infrastructure.config_file_loader import ConfigFileLoader
from callsite_rewriter.infrastructure.gateways.astroid_gateway import AstroidGateway
from callsite_rewriter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from callsite_rewriter.infrastructure.gateways.libcst_fixer_gateway import LibCSTFixerGateway
from callsite_rewriter.infrastructure.services.guidance_service import GuidanceService
from callsite_rewriter.use_cases.evaluate_call_site import RuleEngine

if TYPE_CHECKING:
    from callsite_rewriter.domain.protocols import (
        FileSystemProtocol,
        FixerGatewayProtocol,
        GuidanceServiceProtocol,
    )


class RewriterContainer:
    """Dependency Injection Container for the rewriter."""

    _instance: Optional["RewriterContainer"] = None

    def __init__(self, config_dict: Optional[dict[str, object]] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_dict)

    @classmethod
    def get_instance(cls) -> "RewriterContainer":
        """Process-wide container for entry points that cannot inject one (pylint plugin)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _register_defaults(self, config_dict: Optional[dict[str, object]]) -> None:
        """Register default implementations for protocols."""
        if config_dict is None:
            config_dict = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict)
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton("AstroidGateway", AstroidGateway())
        self.register_singleton("LibCSTFixerGateway", LibCSTFixerGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("GuidanceService", GuidanceService())

        rule = MathRoundIntLongRule(
            profile=config_loader.profile,
            parenthesize_kinds=config_loader.parenthesize_kinds,
        )
        self.register_singleton("RuleEngine", RuleEngine([rule]))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_astroid_gateway(self) -> AstroidGateway:
        return cast(AstroidGateway, self.get("AstroidGateway"))

    def get_fixer_gateway(self) -> "FixerGatewayProtocol":
        """Return the fixer gateway (protocol)."""
        return cast("FixerGatewayProtocol", self.get("LibCSTFixerGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        return cast("GuidanceServiceProtocol", self.get("GuidanceService"))

    def get_rule_engine(self) -> RuleEngine:
        return cast(RuleEngine, self.get("RuleEngine"))

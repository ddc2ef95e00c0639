"""GuidanceService: loads the rule registry and provides messages and manual instructions."""

from pathlib import Path
from typing import cast

import yaml

from callsite_rewriter.domain.protocols import GuidanceServiceProtocol
from callsite_rewriter.domain.registry_types import RuleRegistryEntry


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml and answers per-rule lookups."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_code: str) -> RuleRegistryEntry | None:
        """Return the registry entry for a rule code or symbol."""
        entry = self._registry.get(rule_code)
        if entry:
            return cast(RuleRegistryEntry, dict(entry))
        for e in self._registry.values():
            if e.get("symbol") == rule_code:
                return cast(RuleRegistryEntry, dict(e))
        return None

    def get_manual_instructions(self, rule_code: str) -> str:
        entry = self.get_entry(rule_code)
        if entry is None:
            return ""
        return str(entry.get("manual_instructions", "")).strip()

    def get_message_tuple(self, rule_code: str) -> tuple[str, str, str] | None:
        """Return (message_template, symbol, description) for pylint msgs, or None."""
        entry = self.get_entry(rule_code)
        if entry is None or "message_template" not in entry:
            return None
        return (
            str(entry["message_template"]),
            str(entry.get("symbol", rule_code)),
            str(entry.get("short_description", "")),
        )

    def build_msgs_for_codes(self, codes: list[str]) -> dict[str, tuple[str, str, str]]:
        """Build a pylint ``msgs`` dict for the given rule codes. Codes without a template are skipped."""
        result: dict[str, tuple[str, str, str]] = {}
        for code in codes:
            message = self.get_message_tuple(code)
            if message is not None:
                result[code] = message
        return result

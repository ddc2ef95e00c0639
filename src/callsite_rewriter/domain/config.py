"""Configuration for the rewriter. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from callsite_rewriter.domain.nodes import NodeKind
from callsite_rewriter.domain.parenthesization import DEFAULT_PARENTHESIZE_KINDS, parse_kinds
from callsite_rewriter.domain.rules.math_round import (
    PROFILES,
    PYTHON_BUILTIN_ROUND,
    RoundingProfile,
)

DEFAULT_MAX_FIX_PASSES = 3


class ConfigurationLoader:
    """
    Immutable configuration for the rewriter.

    Created by Infrastructure from the ``[tool.callsite-rewriter]`` table.
    Domain does not read the filesystem; ConfigFileLoader.load_config_from_fs()
    does, and the result is passed in at the composition root. Invalid values
    are logged and replaced by defaults.
    """

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        self._profile = self._resolve_profile()
        self._parenthesize_kinds = self._resolve_parenthesize_kinds()

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return dict(self._config)

    @property
    def profile(self) -> RoundingProfile:
        return self._profile

    @property
    def parenthesize_kinds(self) -> frozenset[NodeKind]:
        return self._parenthesize_kinds

    @property
    def max_fix_passes(self) -> int:
        raw = self._config.get("max_fix_passes", DEFAULT_MAX_FIX_PASSES)
        if isinstance(raw, int) and not isinstance(raw, bool) and raw > 0:
            return raw
        logging.warning(
            "Configuration Warning: 'max_fix_passes' must be a positive integer, got %r.", raw
        )
        return DEFAULT_MAX_FIX_PASSES

    @property
    def exclude_paths(self) -> list[str]:
        """Path fragments skipped by the CLI (e.g. generated code)."""
        raw = self._config.get("exclude_paths", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []

    def is_excluded(self, path: str) -> bool:
        return any(fragment in path for fragment in self.exclude_paths)

    def _resolve_profile(self) -> RoundingProfile:
        name = self._config.get("profile", PYTHON_BUILTIN_ROUND.name)
        profile = PROFILES.get(str(name))
        if profile is None:
            logging.warning(
                "Configuration Warning: unknown profile %r; using %r.",
                name,
                PYTHON_BUILTIN_ROUND.name,
            )
            profile = PYTHON_BUILTIN_ROUND
        if "helper_symbol" in self._config:
            helper = self._config["helper_symbol"]
            profile = profile.with_helper(str(helper) if helper else None)
        return profile

    def _resolve_parenthesize_kinds(self) -> frozenset[NodeKind]:
        raw = self._config.get("parenthesize_kinds")
        if raw is None:
            return DEFAULT_PARENTHESIZE_KINDS
        if not isinstance(raw, list):
            logging.warning("Configuration Warning: 'parenthesize_kinds' must be a list.")
            return DEFAULT_PARENTHESIZE_KINDS
        kinds, unknown = parse_kinds(raw)
        if unknown:
            logging.warning(
                "Configuration Warning: ignoring unknown node kinds %s in 'parenthesize_kinds'.",
                ", ".join(unknown),
            )
        return kinds

"""Load [tool.callsite-rewriter] from pyproject.toml. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path

TOOL_SECTION = "callsite-rewriter"


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml, walking up from a start directory."""

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the [tool.callsite-rewriter] table, or {} when none is found."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError):
                logging.warning("Could not read %s; ignoring it.", config_file)
                continue
            tool_section = data.get("tool", {}) or {}
            config_dict = tool_section.get(TOOL_SECTION)
            if isinstance(config_dict, dict):
                return config_dict
        return empty

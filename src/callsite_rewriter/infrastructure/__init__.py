"""Adapters for astroid, LibCST, config files and the rule registry."""

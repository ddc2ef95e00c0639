"""Driver-facing use cases."""

"""Call-site diagnostic and rewrite engine."""

__version__ = "0.1.0"

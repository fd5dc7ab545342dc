"""Session history and deterministic replay for interactive fiction."""

__version__ = "0.1.0"

"""Logging setup and narration transcript."""

"""Sink quoting service: cabinet matching, quote pricing and lifecycle."""

__version__ = "0.1.0"

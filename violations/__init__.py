"""Violations report service: per-build static-analysis report browser."""

__version__ = "0.1.0"

"""
REST API module for the violations report.

Provides FastAPI endpoints for:
- Per-build violations summary and health
- File-level violation browsing
- Violation trend graphs
"""

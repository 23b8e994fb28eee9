# txblocked/__init__.py - QUIC TX Blocked State analyzer
"""
Turns per-connection QUIC "blocked from sending" events into a flat,
classified, duration-weighted table.

This package provides:
- collector: Connection data model and snapshot loading
- analyzer: Reason classification, row building, weighting and breakdowns
- exporters: Console, JSON and Prometheus output
- utils: Configuration, logging and helpers
"""

__version__ = "0.1.0"

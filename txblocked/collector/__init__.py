# txblocked/collector/__init__.py - Input collection module
"""
Collector module for the connection state handed to the analyzer.

This module provides:
- events.py: Connection, BlockingEvent and blocked flag definitions
- loader.py: Loading connection snapshots from JSON or YAML files
"""

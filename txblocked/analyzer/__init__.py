# txblocked/analyzer/__init__.py - Analysis module
"""
Analyzer module for turning connection state into the TX blocked table.

This module provides:
- classifier.py: Blocked flags to reason classification
- row_builder.py: Connection x event expansion
- weights.py: Duration and percent weight computation
- table.py: Table assembly with field descriptors and views
- breakdown.py: Breakdown by reason and connection
- report_generator.py: CSV and Markdown reports
"""

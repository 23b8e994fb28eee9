# txblocked/exporters/__init__.py - Exporters module
"""
Exporters for outputting the TX blocked table in various formats.

This module provides:
- stdout.py: Console output exporter
- json_exporter.py: JSON format exporter
- prometheus.py: Prometheus metrics exporter
"""

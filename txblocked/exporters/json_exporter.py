# txblocked/exporters/json_exporter.py - JSON format exporter
"""
Exports the TX blocked table as JSON files.
"""

import json
from pathlib import Path
from datetime import datetime
from typing import Dict, Optional
import logging

from txblocked.analyzer.table import BlockedTable


class JSONExporter:
    """
    Exports the blocked table and its breakdowns to JSON format.

    The table document carries the field descriptors and view
    configurations alongside the rows, so any renderer can consume it.
    """

    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize the JSON exporter.

        Args:
            output_dir: Directory to save JSON files (default: current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path('.')
        self.logger = logging.getLogger(__name__)

        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _output_path(self, prefix: str, filename: Optional[str]) -> Path:
        if not filename:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filename = f'{prefix}_{timestamp}.json'
        return self.output_dir / filename

    def export_table(self, table: BlockedTable, filename: Optional[str] = None) -> str:
        """
        Export the blocked table to a JSON file.

        Args:
            table: Blocked table
            filename: Output filename (auto-generated if not provided)

        Returns:
            Path to output file
        """
        output_path = self._output_path('tx_blocked', filename)

        with open(output_path, 'w') as f:
            json.dump({
                'timestamp': datetime.now().isoformat(),
                'table': table.to_dict()
            }, f, indent=2)

        self.logger.info(f"Exported {len(table)} rows to {output_path}")
        return str(output_path)

    def export_breakdown(self, breakdown: Dict, filename: Optional[str] = None) -> str:
        """
        Export breakdown results to a JSON file.

        Args:
            breakdown: Breakdown dictionary
            filename: Output filename (auto-generated if not provided)

        Returns:
            Path to output file
        """
        output_path = self._output_path('breakdown', filename)

        with open(output_path, 'w') as f:
            json.dump({
                'timestamp': datetime.now().isoformat(),
                'breakdown': breakdown
            }, f, indent=2)

        self.logger.info(f"Exported breakdown to {output_path}")
        return str(output_path)

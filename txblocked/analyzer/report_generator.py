# txblocked/analyzer/report_generator.py - Report generation
"""
Generates human-readable and tabular reports from the blocked table.
"""

from typing import Dict
from datetime import datetime
import logging

from txblocked.analyzer.table import BlockedTable
from txblocked.utils.helpers import format_duration


class ReportGenerator:
    """
    Generates reports from the blocked table in various formats.
    """

    def __init__(self):
        """
        Initialize the report generator.
        """
        self.logger = logging.getLogger(__name__)

    def generate_csv(self, table: BlockedTable) -> str:
        """
        Generate CSV for the table rows, in field descriptor order.

        Args:
            table: Blocked table

        Returns:
            CSV string with a header line
        """
        keys = [f.key for f in table.fields]

        lines = [",".join(keys)]
        for record in table.to_records():
            lines.append(",".join(str(record[key]) for key in keys))

        return "\n".join(lines)

    def generate_markdown_report(self, summary: Dict, breakdown: Dict[str, Dict]) -> str:
        """
        Generate a Markdown report.

        Args:
            summary: Output of BreakdownAnalyzer.get_summary
            breakdown: Output of BreakdownAnalyzer.breakdown_by_reason

        Returns:
            Markdown formatted report
        """
        lines = []
        lines.append("# QUIC TX Blocked State Report")
        lines.append(f"\n**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

        lines.append("## Summary\n")
        lines.append(f"- **Rows:** {summary.get('total_rows', 0)}")
        lines.append(f"- **Connections:** {summary.get('connections', 0)}")
        lines.append(f"- **Total Blocked:** {format_duration(summary.get('total_blocked_ns', 0))}")
        if 'dominant_reason' in summary:
            lines.append(f"- **Dominant Reason:** {summary['dominant_reason']}")
        lines.append("")

        if breakdown:
            lines.append("## Blocked Time by Reason\n")
            lines.append("| Reason | Count | Blocked | Connections | Sum % Weight |")
            lines.append("|--------|-------|---------|-------------|--------------|")
            for reason, data in breakdown.items():
                lines.append(
                    f"| {reason} | {data['count']} | {format_duration(data['total_weight_ns'])} | "
                    f"{data['connections']} | {data['percent_weight']:.2f}% |"
                )
            lines.append("")

        return "\n".join(lines)

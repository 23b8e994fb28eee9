# txblocked/exporters/stdout.py - Console output exporter
"""
Exports the TX blocked table to stdout in human-readable format.
"""

from typing import Dict, Sequence
from colorama import Fore, Style, init
import logging

from txblocked.analyzer.weights import AnalysisRow
from txblocked.utils.helpers import convert_duration, format_duration


# Initialize colorama
init(autoreset=True)


class StdoutExporter:
    """
    Exports blocked rows and breakdowns to stdout with colored output.
    """

    def __init__(self, use_colors: bool = True, time_unit: str = 'us'):
        """
        Initialize the stdout exporter.

        Args:
            use_colors: Whether to use colored output
            time_unit: Unit for time and duration columns ('ns', 'us', 'ms')
        """
        self.use_colors = use_colors
        self.time_unit = time_unit
        self.logger = logging.getLogger(__name__)

    def _header(self, title: str):
        print(f"\n{self._color(Fore.CYAN)}{'='*96}{self._reset()}")
        print(f"{self._color(Fore.CYAN)}{title}{self._reset()}")
        print(f"{self._color(Fore.CYAN)}{'='*96}{self._reset()}\n")

    def print_rows(self, rows: Sequence[AnalysisRow], limit: int = 50):
        """
        Print analysis rows to stdout.

        Args:
            rows: Analysis rows
            limit: Maximum number of rows to print
        """
        self._header(f"TX Blocked State (showing {min(len(rows), limit)} of {len(rows)})")

        unit = self.time_unit
        print(f"{'Process':<10} {'Connection':<12} {'Reason':<26} "
              f"{'Time (' + unit + ')':<16} {'Duration (' + unit + ')':<16} {'% Weight':<8}")
        print(f"{'-'*96}")

        for row in rows[:limit]:
            color = self._get_color_for_percent(row.percent_weight)
            print(f"{row.process_id:<10} "
                  f"{row.connection_id:<12} "
                  f"{row.reason.value:<26} "
                  f"{convert_duration(row.timestamp, unit):<16.1f} "
                  f"{convert_duration(row.duration, unit):<16.1f} "
                  f"{color}{row.percent_weight:<8.2f}{self._reset()}")

        if len(rows) > limit:
            print(f"\n{self._color(Fore.YELLOW)}... and {len(rows) - limit} more rows{self._reset()}")

    def print_breakdown(self, breakdown: Dict[str, Dict]):
        """
        Print the per-reason breakdown.

        Args:
            breakdown: Output of BreakdownAnalyzer.breakdown_by_reason
        """
        if not breakdown:
            return

        self._header("Blocked Time by Reason")

        print(f"{'Reason':<26} {'Count':<8} {'Blocked':<12} {'Max':<12} {'Connections':<12} {'Sum % Weight':<12}")
        print(f"{'-'*96}")

        for reason, data in breakdown.items():
            print(f"{reason:<26} "
                  f"{data['count']:<8} "
                  f"{format_duration(data['total_weight_ns']):<12} "
                  f"{format_duration(data['max_duration_ns']):<12} "
                  f"{data['connections']:<12} "
                  f"{data['percent_weight']:<12.2f}")

    def print_summary(self, summary: Dict):
        """
        Print overall summary statistics.

        Args:
            summary: Output of BreakdownAnalyzer.get_summary
        """
        self._header("Summary")

        print(f"  Rows: {summary.get('total_rows', 0)}")
        print(f"  Connections: {summary.get('connections', 0)}")
        print(f"  Processes: {summary.get('processes', 0)}")
        print(f"  Total Blocked: {format_duration(summary.get('total_blocked_ns', 0))}")
        if 'dominant_reason' in summary:
            print(f"  Dominant Reason: {summary['dominant_reason']}")

        print()

    def _color(self, color: str) -> str:
        return color if self.use_colors else ""

    def _reset(self) -> str:
        return Style.RESET_ALL if self.use_colors else ""

    def _get_color_for_percent(self, percent: float) -> str:
        """
        Get color based on how much of the lifetime a row accounts for.

        Args:
            percent: Percent weight of the row

        Returns:
            Color code
        """
        if not self.use_colors:
            return ""

        if percent >= 50:
            return Fore.RED
        elif percent >= 10:
            return Fore.YELLOW
        else:
            return Fore.GREEN

# txblocked/analyzer/breakdown.py - Blocked time breakdown analysis
"""
Summarizes analysis rows by reason and by connection.
"""

from typing import Dict, Iterable, List, Tuple
from collections import defaultdict
import logging

from txblocked.analyzer.classifier import reason_rank
from txblocked.analyzer.weights import AnalysisRow


class BreakdownAnalyzer:
    """
    Analyzes blocked time breakdown along the table's grouping dimensions.

    Results are plain dictionaries with a deterministic key order so they
    can be exported or printed directly.
    """

    def __init__(self):
        """
        Initialize the breakdown analyzer.
        """
        self.logger = logging.getLogger(__name__)

    def breakdown_by_reason(self, rows: Iterable[AnalysisRow]) -> Dict[str, Dict]:
        """
        Break down rows by blocked reason.

        Args:
            rows: Analysis rows

        Returns:
            Per-reason statistics ordered by reason priority
        """
        breakdown = defaultdict(lambda: {
            'count': 0,
            'total_weight_ns': 0,
            'percent_weight': 0.0,
            'max_duration_ns': 0,
            'connections': set()
        })

        for row in rows:
            data = breakdown[row.reason]
            data['count'] += row.count
            data['total_weight_ns'] += row.weight
            data['percent_weight'] += row.percent_weight
            data['max_duration_ns'] = max(data['max_duration_ns'], row.duration)
            data['connections'].add(row.connection_id)

        result = {}
        for reason in sorted(breakdown, key=reason_rank):
            data = breakdown[reason]
            data['connections'] = len(data['connections'])
            data['avg_duration_ns'] = data['total_weight_ns'] / data['count']
            result[reason.value] = data

        return result

    def breakdown_by_connection(self, rows: Iterable[AnalysisRow]) -> Dict[int, Dict]:
        """
        Break down rows by connection.

        Args:
            rows: Analysis rows

        Returns:
            Per-connection statistics in first-seen order, each carrying a
            per-reason percent weight map
        """
        breakdown: Dict[int, Dict] = {}

        for row in rows:
            data = breakdown.setdefault(row.connection_id, {
                'process_id': row.process_id,
                'count': 0,
                'total_weight_ns': 0,
                'percent_weight': 0.0,
                'reasons': defaultdict(float)
            })
            data['count'] += row.count
            data['total_weight_ns'] += row.weight
            data['percent_weight'] += row.percent_weight
            data['reasons'][row.reason] += row.percent_weight

        for data in breakdown.values():
            reasons = data['reasons']
            data['reasons'] = {
                reason.value: reasons[reason] for reason in sorted(reasons, key=reason_rank)
            }

        return breakdown

    def top_connections(self, rows: Iterable[AnalysisRow], n: int = 10) -> List[Tuple[int, Dict]]:
        """
        Get the N connections that spent the largest share of their lifetime blocked.

        Args:
            rows: Analysis rows
            n: Number of connections to return

        Returns:
            List of (connection_id, stats) tuples
        """
        by_connection = self.breakdown_by_connection(rows)

        ranked = sorted(
            by_connection.items(),
            key=lambda x: x[1]['percent_weight'],
            reverse=True
        )

        return ranked[:n]

    def get_summary(self, rows: Iterable[AnalysisRow]) -> Dict:
        """
        Get overall summary statistics.

        Args:
            rows: Analysis rows

        Returns:
            Dictionary with summary statistics
        """
        rows = list(rows)

        summary = {
            'total_rows': len(rows),
            'connections': len({r.connection_id for r in rows}),
            'processes': len({r.process_id for r in rows}),
            'total_blocked_ns': sum(r.weight for r in rows)
        }

        if rows:
            top = max(self.breakdown_by_reason(rows).items(), key=lambda x: x[1]['total_weight_ns'])
            summary['dominant_reason'] = top[0]

        self.logger.debug(f"Summary: {summary}")
        return summary

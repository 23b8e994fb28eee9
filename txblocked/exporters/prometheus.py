# txblocked/exporters/prometheus.py - Prometheus metrics exporter
"""
Exports TX blocked metrics in Prometheus format.
Output is the text exposition format, ready for a textfile collector or pushgateway.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest
from typing import Iterable, Optional
import logging

from txblocked.analyzer.weights import AnalysisRow


LABELS = ['process', 'connection', 'reason']


class PrometheusExporter:
    """
    Exports blocked rows as Prometheus metrics.

    Each exporter owns its registry, so several exporters can coexist in
    one process.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize the Prometheus exporter.

        Args:
            registry: Registry to register metrics with (a new one by default)
        """
        self.registry = registry or CollectorRegistry()
        self.logger = logging.getLogger(__name__)

        self.blocked_time = Counter(
            'txblocked_blocked_time_nanoseconds_total',
            'Time connections spent unable to send, in nanoseconds',
            LABELS,
            registry=self.registry
        )

        self.blocked_events = Counter(
            'txblocked_blocked_events_total',
            'Number of blocked intervals',
            LABELS,
            registry=self.registry
        )

        self.percent_weight = Gauge(
            'txblocked_percent_weight',
            'Share of the connection lifetime spent blocked, in percent',
            LABELS,
            registry=self.registry
        )

    def record_row(self, row: AnalysisRow):
        """
        Record a single analysis row.

        Args:
            row: Analysis row
        """
        labels = {
            'process': str(row.process_id),
            'connection': str(row.connection_id),
            'reason': row.reason.value
        }

        self.blocked_time.labels(**labels).inc(row.weight)
        self.blocked_events.labels(**labels).inc(row.count)
        self.percent_weight.labels(**labels).inc(row.percent_weight)

    def record_rows(self, rows: Iterable[AnalysisRow]) -> int:
        """
        Record every row.

        Returns:
            Number of rows recorded
        """
        recorded = 0
        for row in rows:
            self.record_row(row)
            recorded += 1

        self.logger.debug(f"Recorded {recorded} rows")
        return recorded

    def get_metrics_text(self) -> str:
        """
        Get current metrics in Prometheus text format.

        Returns:
            Metrics as text
        """
        return generate_latest(self.registry).decode('utf-8')

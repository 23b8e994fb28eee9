# tests/test_breakdown.py - Tests for breakdown analysis
"""
Unit tests for the BreakdownAnalyzer class.
"""

import pytest
from txblocked.analyzer.breakdown import BreakdownAnalyzer
from txblocked.analyzer.weights import build_rows


class TestBreakdownAnalyzer:
    """Test cases for BreakdownAnalyzer"""

    def test_breakdown_by_reason(self, sample_connections):
        """Test per-reason totals in priority order"""
        analyzer = BreakdownAnalyzer()
        breakdown = analyzer.breakdown_by_reason(build_rows(sample_connections))

        assert list(breakdown) == [
            "Pacing", "Congestion Control", "Connection Flow Control", "App"
        ]

        pacing = breakdown["Pacing"]
        assert pacing['count'] == 2
        assert pacing['total_weight_ns'] == 350_000
        assert pacing['percent_weight'] == pytest.approx(35.0)
        assert pacing['max_duration_ns'] == 250_000
        assert pacing['connections'] == 1
        assert pacing['avg_duration_ns'] == pytest.approx(175_000)

    def test_breakdown_by_connection(self, sample_connections):
        """Test per-connection totals and reason shares"""
        analyzer = BreakdownAnalyzer()
        breakdown = analyzer.breakdown_by_connection(build_rows(sample_connections))

        assert list(breakdown) == [1, 2]
        assert breakdown[1]['process_id'] == 4242
        assert breakdown[1]['count'] == 3
        assert breakdown[1]['percent_weight'] == pytest.approx(55.0)
        assert breakdown[1]['reasons'] == pytest.approx({"Pacing": 35.0, "Congestion Control": 20.0})
        assert list(breakdown[2]['reasons']) == ["Connection Flow Control", "App"]

    def test_top_connections(self, sample_connections):
        """Test connections ranked by blocked share"""
        analyzer = BreakdownAnalyzer()
        top = analyzer.top_connections(build_rows(sample_connections), n=1)

        assert len(top) == 1
        assert top[0][0] == 1

    def test_get_summary(self, sample_connections):
        """Test overall summary"""
        analyzer = BreakdownAnalyzer()
        summary = analyzer.get_summary(build_rows(sample_connections))

        assert summary['total_rows'] == 5
        assert summary['connections'] == 2
        assert summary['processes'] == 2
        assert summary['total_blocked_ns'] == 1_750_000
        assert summary['dominant_reason'] == "Connection Flow Control"

    def test_empty(self):
        """Test empty input"""
        analyzer = BreakdownAnalyzer()

        assert analyzer.breakdown_by_reason([]) == {}
        assert analyzer.breakdown_by_connection([]) == {}
        summary = analyzer.get_summary([])
        assert summary['total_rows'] == 0
        assert 'dominant_reason' not in summary

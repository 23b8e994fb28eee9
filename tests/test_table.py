# tests/test_table.py - Tests for table assembly
"""
Unit tests for build_table, field descriptors and view configurations.
"""

import pytest
from txblocked.analyzer.table import (
    FIELDS, TIMELINE_VIEW, UTILIZATION_VIEW, Aggregation, BlockedTable, build_table
)
from txblocked.collector.events import Connection
from txblocked.errors import InconsistentDataError


class TestBuildTable:
    """Test cases for build_table"""

    def test_missing_state_gives_empty_table(self):
        """Test no connection state produces an empty table"""
        table = build_table(None)

        assert table.is_empty
        assert len(table) == 0
        assert table.fields == FIELDS

    def test_empty_snapshot_gives_empty_table(self):
        """Test an empty snapshot produces an empty table"""
        assert build_table([]).is_empty

    def test_rows(self, sample_connections):
        """Test rows are built for a populated snapshot"""
        table = build_table(sample_connections)

        assert len(table) == 5
        assert table.default_view is TIMELINE_VIEW

    def test_inconsistent_data_propagates(self):
        """Test corrupt upstream data is not turned into a table"""
        bad = Connection(id=1, process_id=1, initial_timestamp=5, final_timestamp=1)

        with pytest.raises(InconsistentDataError):
            build_table([bad])

    def test_column(self, sample_connections):
        """Test column extraction in row order"""
        table = build_table(sample_connections)

        assert table.column('connection_id') == [1, 1, 1, 2, 2]
        assert table.column('reason')[:2] == ['Pacing', 'Pacing']
        assert table.column('count') == [1] * 5

    def test_unknown_column(self, sample_connections):
        """Test unknown column keys raise KeyError"""
        with pytest.raises(KeyError):
            build_table(sample_connections).column('bogus')

    def test_to_dict(self, sample_connections):
        """Test the exported document shape"""
        document = build_table(sample_connections).to_dict()

        assert document['row_count'] == 5
        assert document['default_view'] == "Timeline by Process, Connection"
        assert [f['name'] for f in document['fields']] == [
            "Connection", "Process (ID)", "Reason", "Count", "Weight", "% Weight", "Time", "Duration"
        ]
        assert set(document['rows'][0]) == {f['key'] for f in document['fields']}


class TestDescriptors:
    """Test cases for field descriptors and views"""

    def test_only_percent_weight_is_percent(self):
        """Test the percent flag"""
        assert [f.key for f in FIELDS if f.is_percent] == ['percent_weight']

    def test_aggregations(self):
        """Test aggregation hints per column"""
        aggregations = {f.key: f.aggregation for f in FIELDS}

        assert aggregations['connection_id'] is Aggregation.UNIQUE_COUNT
        assert aggregations['reason'] is Aggregation.UNIQUE_COUNT
        assert aggregations['process_id'] is Aggregation.MAX
        assert aggregations['timestamp'] is Aggregation.MAX
        assert aggregations['weight'] is Aggregation.SUM
        assert aggregations['percent_weight'] is Aggregation.SUM

    def test_views_group_by_process_connection_reason(self):
        """Test both views share the same grouping"""
        for view in (TIMELINE_VIEW, UTILIZATION_VIEW):
            assert [f.key for f in view.group_by] == ['process_id', 'connection_id', 'reason']
            assert view.start_time.key == 'timestamp'
            assert view.duration.key == 'duration'

    def test_utilization_view_is_stacked(self):
        """Test the utilization view charts percent weight as a stack"""
        document = UTILIZATION_VIEW.to_dict()

        assert document['chart_type'] == 'stacked_line'
        assert document['columns'][-1] == 'percent_weight'
        assert document['select'] == ['Reason']

    def test_empty_table_defaults(self):
        """Test a default table carries both views"""
        table = BlockedTable()
        assert table.views == (TIMELINE_VIEW, UTILIZATION_VIEW)

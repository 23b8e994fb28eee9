# tests/conftest.py - Shared fixtures
"""
Shared fixtures for analyzer tests.
"""

import pytest
from txblocked.collector.events import BlockedFlags, BlockingEvent, Connection


@pytest.fixture
def sample_connections():
    """Two connections with a mix of single, multi and no-cause events"""
    return [
        Connection(
            id=1, process_id=4242, initial_timestamp=0, final_timestamp=1_000_000,
            blocked_events=[
                BlockingEvent(timestamp=10_000, duration=250_000, flags=BlockedFlags.PACING),
                BlockingEvent(timestamp=300_000, duration=100_000,
                              flags=BlockedFlags.PACING | BlockedFlags.CONGESTION_CONTROL),
                BlockingEvent(timestamp=500_000, duration=50_000, flags=BlockedFlags.NONE),
                BlockingEvent(timestamp=600_000, duration=200_000, flags=BlockedFlags.CONGESTION_CONTROL),
            ]
        ),
        Connection(
            id=2, process_id=5150, initial_timestamp=2_000_000, final_timestamp=6_000_000,
            blocked_events=[
                BlockingEvent(timestamp=2_100_000, duration=400_000, flags=BlockedFlags.APP),
                BlockingEvent(timestamp=3_000_000, duration=800_000,
                              flags=BlockedFlags.CONN_FLOW_CONTROL | BlockedFlags.STREAM_FLOW_CONTROL),
            ]
        ),
    ]


SNAPSHOT_YAML = """\
connections:
  - id: 1
    process_id: 4242
    initial_timestamp: 0
    final_timestamp: 1000000
    blocked_events:
      - {timestamp: 10000, duration: 250000, flags: [Pacing]}
      - {timestamp: 500000, duration: 50000, flags: 0}
      - {timestamp: 600000, duration: 200000, flags: 0x08}
  - id: 2
    process_id: 5150
    initial_timestamp: 100
    final_timestamp: 100
    blocked_events:
      - {timestamp: 100, duration: 0, flags: [App]}
"""


@pytest.fixture
def snapshot_file(tmp_path):
    """YAML snapshot file with three blocked rows"""
    path = tmp_path / "connections.yaml"
    path.write_text(SNAPSHOT_YAML)
    return path

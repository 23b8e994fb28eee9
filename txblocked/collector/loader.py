# txblocked/collector/loader.py - Connection snapshot loading
"""
Loads already-extracted connection state from JSON or YAML snapshot files
and converts it into Connection objects.
"""

from pathlib import Path
from typing import Any, Dict, List, Union
import json
import logging

import yaml

from txblocked.analyzer.classifier import parse_flags
from txblocked.collector.events import BlockingEvent, Connection
from txblocked.errors import InvalidInputError, SnapshotFormatError


class SnapshotLoader:
    """
    Converts snapshot documents into Connection objects.

    A snapshot is a mapping with a `connections` list, or the list itself.
    """

    def __init__(self):
        """
        Initialize the snapshot loader.
        """
        self.connection_count = 0
        self.event_count = 0

        self.logger = logging.getLogger(__name__)

    def load_file(self, snapshot_file: Union[str, Path]) -> List[Connection]:
        """
        Load connections from a snapshot file.

        Files ending in .json are parsed as JSON, anything else as YAML.

        Args:
            snapshot_file: Path to the snapshot

        Returns:
            Connections in file order

        Raises:
            InvalidInputError: If the file is missing, unreadable or cannot be parsed
        """
        snapshot_path = Path(snapshot_file)

        if not snapshot_path.exists():
            raise InvalidInputError(f"Snapshot file not found: {snapshot_file}")
        if not snapshot_path.is_file():
            raise InvalidInputError(f"Snapshot is not a regular file: {snapshot_file}")

        try:
            with open(snapshot_path, 'r') as f:
                if snapshot_path.suffix.lower() == '.json':
                    document = json.load(f)
                else:
                    document = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SnapshotFormatError(f"cannot parse snapshot: {e}", str(snapshot_path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInputError(f"cannot read snapshot {snapshot_file}: {e}") from e

        connections = self.load(document)
        self.logger.info(f"Loaded {len(connections)} connections from {snapshot_file}")
        return connections

    def load(self, document: Any) -> List[Connection]:
        """
        Convert a parsed snapshot document into connections.

        Args:
            document: Mapping with a `connections` key, or a list of connections

        Returns:
            Connections in document order

        Raises:
            InvalidInputError: If the document has no connection collection
            SnapshotFormatError: If an entry is malformed
        """
        if isinstance(document, dict):
            if 'connections' not in document:
                raise SnapshotFormatError("missing 'connections' key")
            document = document['connections']

        if document is None:
            raise InvalidInputError("snapshot has no connection collection")
        if not isinstance(document, list):
            raise SnapshotFormatError("'connections' must be a list", "connections")

        connections = [
            self.parse_connection(raw, f"connections[{i}]") for i, raw in enumerate(document)
        ]

        self.connection_count += len(connections)
        self.event_count += sum(len(c.blocked_events) for c in connections)
        return connections

    def parse_connection(self, raw: Dict, path: str = "connection") -> Connection:
        """
        Convert one raw connection mapping.

        Raises:
            SnapshotFormatError: If a field is missing or has the wrong type
        """
        if not isinstance(raw, dict):
            raise SnapshotFormatError("connection must be a mapping", path)

        events = raw.get('blocked_events') or []
        if not isinstance(events, list):
            raise SnapshotFormatError("'blocked_events' must be a list", path)

        return Connection(
            id=_require_int(raw, 'id', path),
            process_id=_require_int(raw, 'process_id', path),
            initial_timestamp=_require_int(raw, 'initial_timestamp', path),
            final_timestamp=_require_int(raw, 'final_timestamp', path),
            blocked_events=[
                self.parse_event(e, f"{path}.blocked_events[{i}]") for i, e in enumerate(events)
            ]
        )

    def parse_event(self, raw: Dict, path: str = "event") -> BlockingEvent:
        """
        Convert one raw blocked event mapping.

        Raises:
            SnapshotFormatError: If a field is missing or has the wrong type
        """
        if not isinstance(raw, dict):
            raise SnapshotFormatError("blocked event must be a mapping", path)

        try:
            flags = parse_flags(raw.get('flags', 0))
        except ValueError as e:
            raise SnapshotFormatError(str(e), f"{path}.flags") from e

        return BlockingEvent(
            timestamp=_require_int(raw, 'timestamp', path),
            duration=_require_int(raw, 'duration', path),
            flags=flags
        )

    def get_stats(self) -> Dict:
        """
        Get loader statistics.

        Returns:
            Dictionary with loading statistics
        """
        return {
            'connections': self.connection_count,
            'events': self.event_count
        }


def _require_int(raw: Dict, key: str, path: str) -> int:
    if key not in raw:
        raise SnapshotFormatError(f"missing '{key}'", path)

    value = raw[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise SnapshotFormatError(f"'{key}' must be an integer, got {value!r}", path)
    return value

# txblocked/analyzer/table.py - TX blocked table assembly
"""
Assembles analysis rows with the field descriptors and view configurations
a rendering backend needs to display them.

Two stock views are provided: a timeline view that places each row at its
timestamp with its duration as extent, and a utilization view that stacks
the percent weight per reason.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from txblocked.analyzer.weights import AnalysisRow, build_rows
from txblocked.collector.events import Connection


logger = logging.getLogger(__name__)


class Aggregation(str, Enum):
    """How a column collapses when rows are grouped"""
    UNIQUE_COUNT = "unique_count"
    MAX = "max"
    SUM = "sum"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Describes one column of the blocked table.
    """
    name: str
    key: str
    type: str
    aggregation: Aggregation
    is_percent: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'key': self.key,
            'type': self.type,
            'aggregation': self.aggregation.value,
            'is_percent': self.is_percent,
        }


CONNECTION = FieldDescriptor("Connection", "connection_id", "int", Aggregation.UNIQUE_COUNT)
PROCESS_ID = FieldDescriptor("Process (ID)", "process_id", "int", Aggregation.MAX)
REASON = FieldDescriptor("Reason", "reason", "str", Aggregation.UNIQUE_COUNT)
COUNT = FieldDescriptor("Count", "count", "int", Aggregation.SUM)
WEIGHT = FieldDescriptor("Weight", "weight", "duration_ns", Aggregation.SUM)
PERCENT_WEIGHT = FieldDescriptor("% Weight", "percent_weight", "float", Aggregation.SUM, is_percent=True)
TIME = FieldDescriptor("Time", "timestamp", "timestamp_ns", Aggregation.MAX)
DURATION = FieldDescriptor("Duration", "duration", "duration_ns", Aggregation.SUM)

FIELDS: Tuple[FieldDescriptor, ...] = (
    CONNECTION, PROCESS_ID, REASON, COUNT, WEIGHT, PERCENT_WEIGHT, TIME, DURATION
)


@dataclass(frozen=True)
class ViewConfiguration:
    """
    A suggested way to group and chart the blocked table.

    `expand` names the group levels shown expanded initially and `select`
    the series selected initially.
    """
    name: str
    group_by: Tuple[FieldDescriptor, ...]
    columns: Tuple[FieldDescriptor, ...]
    chart_type: str
    start_time: FieldDescriptor = TIME
    duration: FieldDescriptor = DURATION
    expand: Tuple[str, ...] = ()
    select: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'group_by': [f.key for f in self.group_by],
            'columns': [f.key for f in self.columns],
            'chart_type': self.chart_type,
            'start_time': self.start_time.key,
            'duration': self.duration.key,
            'expand': list(self.expand),
            'select': list(self.select),
        }


GROUPING = (PROCESS_ID, CONNECTION, REASON)

TIMELINE_VIEW = ViewConfiguration(
    name="Timeline by Process, Connection",
    group_by=GROUPING,
    columns=(COUNT, WEIGHT, PERCENT_WEIGHT, TIME, DURATION),
    chart_type="timeline",
    expand=(PROCESS_ID.name,),
    select=(CONNECTION.name, REASON.name)
)

UTILIZATION_VIEW = ViewConfiguration(
    name="Utilization by Process, Connection",
    group_by=GROUPING,
    columns=(COUNT, WEIGHT, TIME, DURATION, PERCENT_WEIGHT),
    chart_type="stacked_line",
    expand=(PROCESS_ID.name,),
    select=(REASON.name,)
)

VIEWS: Tuple[ViewConfiguration, ...] = (TIMELINE_VIEW, UTILIZATION_VIEW)


@dataclass(frozen=True)
class BlockedTable:
    """
    Analysis rows plus the metadata describing how to present them.
    """
    rows: Tuple[AnalysisRow, ...] = ()
    fields: Tuple[FieldDescriptor, ...] = FIELDS
    views: Tuple[ViewConfiguration, ...] = VIEWS
    default_view: ViewConfiguration = TIMELINE_VIEW

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def column(self, key: str) -> List[Any]:
        """
        Values of one column in row order.

        Raises:
            KeyError: If no field has this key
        """
        if key not in {f.key for f in self.fields}:
            raise KeyError(key)
        return [row.to_dict()[key] for row in self.rows]

    def to_records(self) -> List[Dict[str, Any]]:
        return [row.to_dict() for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fields': [f.to_dict() for f in self.fields],
            'views': [v.to_dict() for v in self.views],
            'default_view': self.default_view.name,
            'row_count': len(self.rows),
            'rows': self.to_records(),
        }


def build_table(connections: Optional[Iterable[Connection]]) -> BlockedTable:
    """
    Build the TX blocked table for a connection snapshot.

    A missing or empty snapshot produces an empty table rather than an
    error, matching a trace that carries no connection state.

    Args:
        connections: Ordered connection collection or None

    Returns:
        BlockedTable with rows, fields and views

    Raises:
        InconsistentDataError: If any connection fails validation
    """
    if connections is None:
        logger.info("No connection state available, skipping table")
        return BlockedTable()

    connections = list(connections)
    if not connections:
        logger.info("Snapshot has no connections, skipping table")
        return BlockedTable()

    rows = build_rows(connections)
    logger.info(f"Built TX blocked table: {len(rows)} rows from {len(connections)} connections")
    return BlockedTable(rows=rows)

# txblocked/analyzer/weights.py - Duration weight computation
"""
Computes the duration weight of each blocked event and its share of the
owning connection's lifetime.

A connection whose lifetime measures zero gets a percent weight of 0.0 for
all of its events instead of a division by zero.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple
import logging

from txblocked.analyzer.row_builder import BlockedPair, build_pairs
from txblocked.collector.events import BlockReason, Connection


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisRow:
    """
    One row of the TX blocked table.

    Times are in nanoseconds. `weight` always equals `duration`; it is kept
    as its own field so consumers can aggregate it separately.
    """
    connection_id: int
    process_id: int
    reason: BlockReason
    timestamp: int
    duration: int
    weight: int
    percent_weight: float
    count: int = 1

    def to_dict(self) -> Dict[str, Any]:
        """Row as a plain dictionary keyed by field descriptor key"""
        return {
            'connection_id': self.connection_id,
            'process_id': self.process_id,
            'reason': self.reason.value,
            'count': self.count,
            'weight': self.weight,
            'percent_weight': self.percent_weight,
            'timestamp': self.timestamp,
            'duration': self.duration,
        }


def percent_weight(duration: int, connection: Connection) -> float:
    """
    Share of a connection's lifetime spent blocked for `duration`.

    Args:
        duration: Blocked duration in nanoseconds
        connection: Owning connection

    Returns:
        Percentage (0.0 when the connection lifetime is zero)
    """
    lifetime = connection.lifetime
    if lifetime == 0:
        return 0.0
    return 100.0 * duration / lifetime


def weigh(pair: BlockedPair) -> AnalysisRow:
    """
    Turn a classified pair into an analysis row.
    """
    connection, event = pair.connection, pair.event

    return AnalysisRow(
        connection_id=connection.id,
        process_id=connection.process_id,
        reason=pair.reason,
        timestamp=event.timestamp,
        duration=event.duration,
        weight=event.duration,
        percent_weight=percent_weight(event.duration, connection)
    )


def build_rows(connections: Optional[Iterable[Connection]]) -> Tuple[AnalysisRow, ...]:
    """
    Run the full transform from connections to analysis rows.

    Args:
        connections: Ordered connection collection (may be empty)

    Returns:
        Immutable row sequence in connection order, then event order

    Raises:
        InvalidInputError: If no connection collection was supplied
        InconsistentDataError: If any connection fails validation
    """
    pairs = build_pairs(connections)

    degenerate = {p.connection.id for p in pairs if p.connection.lifetime == 0}
    if degenerate:
        logger.debug(f"Zero lifetime connections reported at 0% weight: {sorted(degenerate)}")

    return tuple(weigh(pair) for pair in pairs)

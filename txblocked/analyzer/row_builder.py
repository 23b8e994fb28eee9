# txblocked/analyzer/row_builder.py - Connection x event expansion
"""
Expands connections into (connection, event) pairs for the blocked table.

Pairs keep the source order of connections and of the events inside each
connection. Events without an active cause are dropped.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional
import logging

from txblocked.analyzer.classifier import classify
from txblocked.collector.events import BlockingEvent, BlockReason, Connection
from txblocked.errors import InconsistentDataError, InvalidInputError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockedPair:
    """
    A blocked event together with the connection that owns it.
    """
    connection: Connection
    event: BlockingEvent
    reason: BlockReason


def validate_connection(connection: Connection):
    """
    Reject connections carrying data that cannot come from a sane trace.

    Raises:
        InconsistentDataError: If the lifetime, an event duration or an
            event bitmask is negative
    """
    if connection.final_timestamp < connection.initial_timestamp:
        raise InconsistentDataError(
            f"final timestamp {connection.final_timestamp} precedes "
            f"initial timestamp {connection.initial_timestamp}",
            connection.id
        )

    for index, event in enumerate(connection.blocked_events):
        if event.duration < 0:
            raise InconsistentDataError(
                f"blocked event #{index} has negative duration {event.duration}",
                connection.id
            )
        if event.flags < 0:
            raise InconsistentDataError(
                f"blocked event #{index} has negative flags {event.flags}",
                connection.id
            )


def iter_pairs(connections: Iterable[Connection]) -> Iterator[BlockedPair]:
    """
    Lazily yield a BlockedPair for every event with an active cause.

    Connections are validated as they are reached, so callers that need
    all-or-nothing behavior should use build_pairs.
    """
    for connection in connections:
        validate_connection(connection)

        for event in connection.blocked_events:
            reason = classify(event.flags)
            if reason is BlockReason.NONE:
                continue
            yield BlockedPair(connection=connection, event=event, reason=reason)


def build_pairs(connections: Optional[Iterable[Connection]]) -> List[BlockedPair]:
    """
    Expand every connection into its classified blocked pairs.

    Args:
        connections: Ordered connection collection (may be empty)

    Returns:
        Pairs in connection order, then event order

    Raises:
        InvalidInputError: If no connection collection was supplied
        InconsistentDataError: If any connection fails validation
    """
    if connections is None:
        raise InvalidInputError("connection collection is required")

    pairs = list(iter_pairs(connections))
    logger.debug(f"Built {len(pairs)} blocked pairs")
    return pairs

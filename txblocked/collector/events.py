# txblocked/collector/events.py - Connection and blocking event data model
"""
Structured representation of QUIC connections and their TX blocked events.

Objects in this module are supplied by an upstream extraction component and
are treated as read-only snapshots by the analyzer.
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import List


class BlockedFlags(IntFlag):
    """
    Causes that can prevent a connection from sending.

    Bit values match the QUIC_FLOW_BLOCKED_* flags emitted by MsQuic.
    """
    NONE = 0x00
    SCHEDULING = 0x01
    PACING = 0x02
    AMPLIFICATION_PROTECTION = 0x04
    CONGESTION_CONTROL = 0x08
    CONN_FLOW_CONTROL = 0x10
    STREAM_ID_FLOW_CONTROL = 0x20
    STREAM_FLOW_CONTROL = 0x40
    APP = 0x80


class BlockReason(str, Enum):
    """
    Canonical reason labels, declared in classification priority order.
    """
    SCHEDULING = "Scheduling"
    PACING = "Pacing"
    AMPLIFICATION_PROTECTION = "Amplification Protection"
    CONGESTION_CONTROL = "Congestion Control"
    CONN_FLOW_CONTROL = "Connection Flow Control"
    STREAM_FLOW_CONTROL = "Stream Flow Control"
    APP = "App"
    STREAM_ID_FLOW_CONTROL = "Stream ID Flow Control"
    NONE = "None"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BlockingEvent:
    """
    A single interval during which a connection could not send.

    Timestamps and durations are in nanoseconds.
    """
    timestamp: int
    duration: int
    flags: int = BlockedFlags.NONE


@dataclass(frozen=True)
class Connection:
    """
    A QUIC connection and the ordered blocked events observed on it.
    """
    id: int
    process_id: int
    initial_timestamp: int
    final_timestamp: int
    blocked_events: List[BlockingEvent] = field(default_factory=list)

    @property
    def lifetime(self) -> int:
        """Observed lifetime in nanoseconds"""
        return self.final_timestamp - self.initial_timestamp
